# events/types.py
"""
Event type definitions for the job board.

This module defines the schema of every event payload. All event emission
goes through events.emitter.emit_event, which validates the payload against
the dataclass registered for its type.

Naming Convention: {aggregate}.{past_tense_verb}
Examples:
- company.blocked
- vacancy.deleted
- candidate.applied
"""

from dataclasses import MISSING, asdict, dataclass, field, fields as dataclass_fields
from datetime import date, datetime
from typing import Any, Dict, List, Optional


# =============================================================================
# Event Validation
# =============================================================================

class InvalidEventPayload(Exception):
    """
    Raised when an event payload fails validation.

    This exception is raised at event emission time when the provided
    data does not match the expected schema for the event type.
    """
    def __init__(self, event_type: str, errors: List[str]):
        self.event_type = event_type
        self.errors = errors
        error_list = "\n  - ".join(errors)
        super().__init__(
            f"Invalid payload for event '{event_type}':\n  - {error_list}"
        )


def validate_event_payload(event_type: str, data: Dict[str, Any]) -> None:
    """
    Validate that a data dict matches the schema registered for an event type.

    Checks that required fields are present and that no unexpected
    fields are provided.

    Raises:
        InvalidEventPayload: If validation fails
        ValueError: If event_type has no registered schema
    """
    data_class = EVENT_DATA_CLASSES.get(event_type)
    if data_class is None:
        raise ValueError(
            f"No schema registered for event type '{event_type}'. "
            f"Add a dataclass to EVENT_DATA_CLASSES."
        )

    errors = []
    dc_fields = {f.name: f for f in dataclass_fields(data_class)}

    for field_name, field_info in dc_fields.items():
        required = (
            field_info.default is MISSING and
            field_info.default_factory is MISSING
        )
        if required and field_name not in data:
            errors.append(f"Missing required field: '{field_name}'")

    unexpected = set(data.keys()) - set(dc_fields.keys())
    if unexpected:
        errors.append(
            f"Unexpected fields: {sorted(unexpected)}. "
            f"Expected: {sorted(dc_fields.keys())}"
        )

    if errors:
        raise InvalidEventPayload(event_type, errors)


class BaseEventData:
    """Base class for all event data."""

    def to_dict(self) -> dict:
        result = {}
        for key, value in asdict(self).items():
            if isinstance(value, (date, datetime)):
                result[key] = value.isoformat()
            else:
                result[key] = value
        return result


# =============================================================================
# Company Events
# =============================================================================

@dataclass
class CompanyCreatedData(BaseEventData):
    company_id: str
    name: str
    status: str
    via_registration: bool = False


@dataclass
class CompanyUpdatedData(BaseEventData):
    company_id: str
    changes: Dict[str, Any]


@dataclass
class CompanyBlockedData(BaseEventData):
    """
    Data for company.blocked.

    Lists the dependents that the block cascade changed in the same
    operation (already-blocked admins / already-inactive vacancies are
    not listed).
    """
    company_id: str
    blocked_admin_ids: List[str] = field(default_factory=list)
    deactivated_vacancy_ids: List[str] = field(default_factory=list)


@dataclass
class CompanyUnblockedData(BaseEventData):
    company_id: str


@dataclass
class CompanyDeletedData(BaseEventData):
    company_id: str
    name: str


# =============================================================================
# Admin Events
# =============================================================================

@dataclass
class AdminRegisteredData(BaseEventData):
    admin_id: str
    email: str
    company_id: str
    company_created: bool


@dataclass
class AdminCreatedData(BaseEventData):
    admin_id: str
    email: str
    company_id: str
    role: str


@dataclass
class AdminUpdatedData(BaseEventData):
    """Changes never include password values, only the fact of a change."""
    admin_id: str
    email: str
    changes: Dict[str, Any]
    password_changed: bool = False


@dataclass
class AdminDeletedData(BaseEventData):
    admin_id: str
    email: str


@dataclass
class AdminPasswordResetData(BaseEventData):
    admin_id: str
    email: str


@dataclass
class AdminPasswordResetRequestedData(BaseEventData):
    admin_id: str
    email: str


# =============================================================================
# Vacancy / Candidate Events
# =============================================================================

@dataclass
class VacancyCreatedData(BaseEventData):
    vacancy_id: str
    company_id: str
    title: str
    status: str


@dataclass
class VacancyUpdatedData(BaseEventData):
    vacancy_id: str
    company_id: str
    changes: Dict[str, Any]


@dataclass
class VacancyDeletedData(BaseEventData):
    vacancy_id: str
    company_id: str
    candidates_removed: int = 0
    candidate_ids: List[str] = field(default_factory=list)


@dataclass
class CandidateAppliedData(BaseEventData):
    candidate_id: str
    job_id: str
    email: str
    cv_file_name: str
    application_date: Optional[str] = None


# =============================================================================
# Event Type Registry
# =============================================================================

class EventTypes:
    """
    Registry of all event types.

    Naming convention: {aggregate}.{past_tense_verb}
    """

    # Company events
    COMPANY_CREATED = "company.created"
    COMPANY_UPDATED = "company.updated"
    COMPANY_BLOCKED = "company.blocked"
    COMPANY_UNBLOCKED = "company.unblocked"
    COMPANY_DELETED = "company.deleted"

    # Admin events
    ADMIN_REGISTERED = "admin.registered"
    ADMIN_CREATED = "admin.created"
    ADMIN_UPDATED = "admin.updated"
    ADMIN_DELETED = "admin.deleted"
    ADMIN_PASSWORD_RESET = "admin.password_reset"
    ADMIN_PASSWORD_RESET_REQUESTED = "admin.password_reset_requested"

    # Vacancy events
    VACANCY_CREATED = "vacancy.created"
    VACANCY_UPDATED = "vacancy.updated"
    VACANCY_DELETED = "vacancy.deleted"

    # Candidate events
    CANDIDATE_APPLIED = "candidate.applied"


EVENT_DATA_CLASSES = {
    EventTypes.COMPANY_CREATED: CompanyCreatedData,
    EventTypes.COMPANY_UPDATED: CompanyUpdatedData,
    EventTypes.COMPANY_BLOCKED: CompanyBlockedData,
    EventTypes.COMPANY_UNBLOCKED: CompanyUnblockedData,
    EventTypes.COMPANY_DELETED: CompanyDeletedData,
    EventTypes.ADMIN_REGISTERED: AdminRegisteredData,
    EventTypes.ADMIN_CREATED: AdminCreatedData,
    EventTypes.ADMIN_UPDATED: AdminUpdatedData,
    EventTypes.ADMIN_DELETED: AdminDeletedData,
    EventTypes.ADMIN_PASSWORD_RESET: AdminPasswordResetData,
    EventTypes.ADMIN_PASSWORD_RESET_REQUESTED: AdminPasswordResetRequestedData,
    EventTypes.VACANCY_CREATED: VacancyCreatedData,
    EventTypes.VACANCY_UPDATED: VacancyUpdatedData,
    EventTypes.VACANCY_DELETED: VacancyDeletedData,
    EventTypes.CANDIDATE_APPLIED: CandidateAppliedData,
}
