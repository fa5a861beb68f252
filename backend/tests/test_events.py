# tests/test_events.py
"""
Tests for business event emission.

Tests cover:
- Payload validation against the registered schemas
- Sequencing and audit fields
- Events roll back with the store
"""

import pytest

from events.emitter import emit_event, events_for
from events.types import (
    EVENT_DATA_CLASSES,
    EventTypes,
    CompanyBlockedData,
    CompanyCreatedData,
    InvalidEventPayload,
    validate_event_payload,
)


class TestPayloadValidation:

    def test_every_event_type_has_a_schema(self):
        declared = {
            value for name, value in vars(EventTypes).items()
            if name.isupper() and isinstance(value, str)
        }
        assert declared == set(EVENT_DATA_CLASSES)

    def test_missing_required_field(self):
        with pytest.raises(InvalidEventPayload) as exc_info:
            validate_event_payload(EventTypes.COMPANY_CREATED, {"company_id": "acme"})

        assert exc_info.value.event_type == EventTypes.COMPANY_CREATED
        assert any("name" in error for error in exc_info.value.errors)

    def test_unexpected_field(self):
        with pytest.raises(InvalidEventPayload, match="Unexpected fields"):
            validate_event_payload(
                EventTypes.COMPANY_UNBLOCKED, {"company_id": "acme", "password": "x"},
            )

    def test_optional_fields_may_be_omitted(self):
        validate_event_payload(EventTypes.COMPANY_BLOCKED, {"company_id": "acme"})

    def test_unknown_event_type(self):
        with pytest.raises(ValueError):
            validate_event_payload("company.renamed", {})

    def test_dataclass_payload_to_dict(self):
        data = CompanyBlockedData(company_id="acme", blocked_admin_ids=["a1"])
        assert data.to_dict() == {
            "company_id": "acme",
            "blocked_admin_ids": ["a1"],
            "deactivated_vacancy_ids": [],
        }


class TestEmitEvent:

    def _emit(self, store, actor=None, **overrides):
        kwargs = dict(
            actor=actor,
            event_type=EventTypes.COMPANY_CREATED,
            aggregate_type="Company",
            aggregate_id="acme",
            company_id="acme",
            data=CompanyCreatedData(company_id="acme", name="Acme", status="Active"),
        )
        kwargs.update(overrides)
        return emit_event(store, **kwargs)

    def test_appends_sequenced_events(self, store):
        first = self._emit(store)
        second = self._emit(store)

        assert store.events == [first, second]
        assert (first.sequence, second.sequence) == (1, 2)
        assert first.id != second.id

    def test_records_actor_and_cause(self, store, super_actor):
        parent = self._emit(store, actor=super_actor)
        child = self._emit(store, caused_by_event=parent)

        assert parent.caused_by_admin_id == super_actor.admin_id
        assert child.caused_by_admin_id is None
        assert child.caused_by_event_id == parent.id

    def test_invalid_payload_not_appended(self, store):
        with pytest.raises(InvalidEventPayload):
            self._emit(store, data={"company_id": "acme"})
        assert store.events == []

    def test_validation_can_be_disabled(self, store, settings):
        settings.DISABLE_EVENT_VALIDATION = True
        event = self._emit(store, data={"anything": 1})
        assert event.data == {"anything": 1}

    def test_events_for_aggregate(self, store):
        self._emit(store)
        self._emit(store, aggregate_id="globex", company_id="globex",
                   data={"company_id": "globex", "name": "Globex", "status": "Active"})
        self._emit(
            store,
            event_type=EventTypes.COMPANY_UNBLOCKED,
            data={"company_id": "acme"},
        )

        assert len(events_for(store, "acme")) == 2
        assert len(events_for(store, "acme", EventTypes.COMPANY_UNBLOCKED)) == 1

    def test_rolled_back_with_store(self, store):
        with pytest.raises(RuntimeError):
            with store.atomic():
                self._emit(store)
                raise RuntimeError("boom")
        assert store.events == []
