# events/emitter.py
"""
Event emission functions.

All events MUST be emitted through emit_event to ensure:
1. Payload validation against the schemas in events/types.py
2. Sequencing within the store's event log
3. Audit trail (caused_by_admin_id, caused_by_event_id)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional, Union

from django.conf import settings
from django.utils import timezone

from events.models import BusinessEvent
from events.types import BaseEventData, validate_event_payload


logger = logging.getLogger(__name__)


def emit_event(
    store,
    *,
    actor=None,
    event_type: str,
    aggregate_type: str,
    aggregate_id: Any,
    data: Union[Dict[str, Any], BaseEventData],
    company_id: Optional[str] = None,
    caused_by_event: Optional[BusinessEvent] = None,
) -> BusinessEvent:
    """
    Validate and append a business event to the store's event log.

    Args:
        store: The EntityStore owning the event log
        actor: ActorContext that caused the event (None for public/system actions)
        event_type: One of EventTypes
        aggregate_type: e.g. "Company", "Vacancy"
        aggregate_id: Id of the aggregate instance
        data: Event payload (dict or BaseEventData instance)
        company_id: Tenant the event belongs to, if any
        caused_by_event: Parent event for cascaded changes

    Returns:
        The appended BusinessEvent

    Raises:
        InvalidEventPayload: If data doesn't match the schema
    """
    if isinstance(data, BaseEventData):
        data = data.to_dict()

    if not getattr(settings, "DISABLE_EVENT_VALIDATION", False):
        validate_event_payload(event_type, data)

    event = BusinessEvent(
        id=str(uuid.uuid4()),
        sequence=len(store.events) + 1,
        event_type=event_type,
        aggregate_type=aggregate_type,
        aggregate_id=str(aggregate_id),
        occurred_at=timezone.now(),
        data=data,
        company_id=company_id,
        caused_by_admin_id=getattr(actor, "admin_id", None),
        caused_by_event_id=caused_by_event.id if caused_by_event else None,
    )
    store.events.append(event)

    logger.debug(
        "Event emitted",
        extra={
            "event_type": event_type,
            "aggregate_type": aggregate_type,
            "aggregate_id": event.aggregate_id,
            "sequence": event.sequence,
        },
    )
    return event


def events_for(store, aggregate_id: Any, event_type: Optional[str] = None) -> list:
    """Events of one aggregate in emission order, optionally narrowed by type."""
    aggregate_id = str(aggregate_id)
    return [
        event for event in store.events
        if event.aggregate_id == aggregate_id
        and (event_type is None or event.event_type == event_type)
    ]
