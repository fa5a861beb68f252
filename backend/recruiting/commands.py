# recruiting/commands.py
"""
Command layer for vacancies and applications.

Visibility and tenant boundaries come from recruiting.policies; every
mutation is checked before it reaches the store. Deleting a vacancy goes
through the tenant lifecycle cascade so its candidates go with it.
"""

import logging

from django.utils import timezone

from accounts.authz import ActorContext, require_authenticated
from accounts.commands import CommandResult, ErrorCode
from events.emitter import emit_event
from events.types import (
    EventTypes,
    CandidateAppliedData,
    VacancyCreatedData,
    VacancyUpdatedData,
)
from recruiting.models import Candidate, Vacancy
from recruiting.policies import (
    assert_can_assign_company,
    assert_can_mutate_vacancy,
    can_view_vacancy,
    is_publicly_visible,
)
from recruiting.serializers import ApplicationSerializer, VacancyInputSerializer
from recruiting.uploads import (
    AttachmentTooLarge,
    MissingAttachment,
    UnsupportedFileType,
    cv_file_reference,
    validate_cv_file,
)
from tenant import lifecycle


logger = logging.getLogger(__name__)


def _public_vacancies(store):
    return store.vacancies.filter(
        lambda v: is_publicly_visible(v, store.companies.get(v.company_id))
    )


# =============================================================================
# Public reads
# =============================================================================

def list_public_vacancies(store, search: str = "", category: str = None) -> CommandResult:
    """
    Vacancies a public visitor may see: Active, in an Active company.

    Args:
        search: Case-insensitive text matched against title and description
        category: Exact category filter (None or "All" for every category)
    """
    vacancies = _public_vacancies(store)

    term = (search or "").strip().lower()
    if term:
        vacancies = [
            v for v in vacancies
            if term in v.title.lower() or term in v.description.lower()
        ]
    if category and category != "All":
        vacancies = [v for v in vacancies if v.category == category]

    return CommandResult.ok({"vacancies": vacancies})


def list_public_categories(store) -> CommandResult:
    categories = sorted({v.category for v in _public_vacancies(store)})
    return CommandResult.ok({"categories": categories})


def get_vacancy(store, actor: ActorContext, vacancy_id: str) -> CommandResult:
    """A vacancy the actor may see; hidden vacancies read as NOT_FOUND."""
    vacancy = store.vacancies.get(vacancy_id)
    if vacancy is None or not can_view_vacancy(actor, vacancy, store.companies.get(vacancy.company_id)):
        return CommandResult.fail("Vacancy not found.", code=ErrorCode.NOT_FOUND)
    return CommandResult.ok({"vacancy": vacancy})


def list_vacancies(store, actor: ActorContext) -> CommandResult:
    """
    Vacancies visible to the actor.

    Super admin: all. Admin: every vacancy of its company, active or not.
    Anonymous: the public set.
    """
    vacancies = store.vacancies.filter(
        lambda v: can_view_vacancy(actor, v, store.companies.get(v.company_id))
    )
    return CommandResult.ok({"vacancies": vacancies})


# =============================================================================
# Vacancy management
# =============================================================================

def create_vacancy(store, actor: ActorContext, data: dict) -> CommandResult:
    """
    Create a vacancy.

    An admin creates vacancies for its own company only (company_id may be
    omitted). A super admin must name an existing company.
    """
    require_authenticated(actor)

    serializer = VacancyInputSerializer(data=data)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = dict(serializer.validated_data)

    requested = values.pop("company_id", "")
    if actor.is_super_admin:
        if not requested:
            return CommandResult.invalid_field("company_id", "This field is required.")
        company_id = requested
    else:
        company_id = requested or actor.company_id
    assert_can_assign_company(actor, company_id)

    if store.companies.get(company_id) is None:
        return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)

    with store.atomic():
        vacancy = store.vacancies.insert(Vacancy(id=None, company_id=company_id, **values))
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.VACANCY_CREATED,
            aggregate_type="Vacancy",
            aggregate_id=vacancy.id,
            company_id=company_id,
            data=VacancyCreatedData(
                vacancy_id=vacancy.id,
                company_id=company_id,
                title=vacancy.title,
                status=str(vacancy.status),
            ),
        )

    logger.info("Vacancy created", extra={"vacancy_id": vacancy.id, "company_id": company_id})
    return CommandResult.ok({"vacancy": vacancy}, event=event)


def update_vacancy(store, actor: ActorContext, vacancy_id: str, data: dict) -> CommandResult:
    """
    Update a vacancy (partial), including toggling its status.

    Moving a vacancy to another company requires rights on both companies,
    which only a super admin has.
    """
    require_authenticated(actor)

    vacancy = store.vacancies.get(vacancy_id)
    if vacancy is None:
        return CommandResult.fail("Vacancy not found.", code=ErrorCode.NOT_FOUND)
    assert_can_mutate_vacancy(actor, vacancy)

    serializer = VacancyInputSerializer(data=data, partial=True)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = dict(serializer.validated_data)

    if not values.get("company_id"):
        values.pop("company_id", None)
    if "company_id" in values and values["company_id"] != vacancy.company_id:
        assert_can_assign_company(actor, values["company_id"])
        if store.companies.get(values["company_id"]) is None:
            return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)

    changes = {}
    for field, value in values.items():
        old_value = getattr(vacancy, field)
        if old_value != value:
            changes[field] = {"old": _plain(old_value), "new": _plain(value)}

    if not changes:
        return CommandResult.ok({"vacancy": vacancy})

    with store.atomic():
        vacancy = store.vacancies.update(vacancy_id, **{field: values[field] for field in changes})
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.VACANCY_UPDATED,
            aggregate_type="Vacancy",
            aggregate_id=vacancy_id,
            company_id=vacancy.company_id,
            data=VacancyUpdatedData(
                vacancy_id=vacancy_id,
                company_id=vacancy.company_id,
                changes=changes,
            ),
        )

    logger.info("Vacancy updated", extra={"vacancy_id": vacancy_id, "fields": sorted(changes)})
    return CommandResult.ok({"vacancy": vacancy}, event=event)


def delete_vacancy(store, actor: ActorContext, vacancy_id: str) -> CommandResult:
    """Delete a vacancy and, with it, every candidate who applied to it."""
    require_authenticated(actor)

    vacancy = store.vacancies.get(vacancy_id)
    if vacancy is None:
        return CommandResult.fail("Vacancy not found.", code=ErrorCode.NOT_FOUND)
    assert_can_mutate_vacancy(actor, vacancy)

    removed = lifecycle.delete_vacancy(store, vacancy_id, actor=actor)
    return CommandResult.ok(
        {"deleted": True, "candidates_removed": removed},
        event=store.events[-1],
    )


def _plain(value):
    if isinstance(value, tuple):
        return list(value)
    return str(value) if value is not None else None


# =============================================================================
# Applicants
# =============================================================================

def list_candidates(store, actor: ActorContext, job_id: str) -> CommandResult:
    """
    Applicants of a vacancy, newest first.

    Only an admin of the vacancy's company or a super admin may see them.
    """
    require_authenticated(actor)

    vacancy = store.vacancies.get(job_id)
    if vacancy is None:
        return CommandResult.fail("Vacancy not found.", code=ErrorCode.NOT_FOUND)
    assert_can_mutate_vacancy(actor, vacancy)

    candidates = sorted(
        store.candidates.filter(job_id=job_id),
        key=lambda c: c.application_date,
        reverse=True,
    )
    return CommandResult.ok({"candidates": candidates})


def submit_application(store, job_id: str, data: dict, cv_file) -> CommandResult:
    """
    Public application to a vacancy.

    Order of checks:
    1. NOT_FOUND: vacancy missing or not publicly visible
    2. MISSING_ATTACHMENT: no CV file, or an empty one
    3. UNSUPPORTED_FILE_TYPE: declared type not pdf/doc/docx/plain text
    4. VALIDATION_ERROR: invalid applicant fields or oversized file

    Returns:
        CommandResult with {"candidate": Candidate}
    """
    vacancy = store.vacancies.get(job_id)
    if vacancy is None or not is_publicly_visible(vacancy, store.companies.get(vacancy.company_id)):
        return CommandResult.fail("Vacancy not found.", code=ErrorCode.NOT_FOUND)

    try:
        validate_cv_file(cv_file)
    except MissingAttachment as exc:
        return CommandResult.fail(str(exc), code=ErrorCode.MISSING_ATTACHMENT)
    except UnsupportedFileType as exc:
        return CommandResult.fail(str(exc), code=ErrorCode.UNSUPPORTED_FILE_TYPE)
    except AttachmentTooLarge as exc:
        return CommandResult.invalid_field("cv_file", str(exc))

    serializer = ApplicationSerializer(data=data)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = serializer.validated_data

    with store.atomic():
        candidate = store.candidates.insert(Candidate(
            id=None,
            job_id=job_id,
            cv_file_name=cv_file.name,
            cv_file_reference=cv_file_reference(job_id, cv_file.name),
            cv_content_type=cv_file.content_type,
            application_date=timezone.now(),
            **values,
        ))
        event = emit_event(
            store,
            event_type=EventTypes.CANDIDATE_APPLIED,
            aggregate_type="Candidate",
            aggregate_id=candidate.id,
            company_id=vacancy.company_id,
            data=CandidateAppliedData(
                candidate_id=candidate.id,
                job_id=job_id,
                email=candidate.email,
                cv_file_name=candidate.cv_file_name,
                application_date=candidate.application_date.isoformat(),
            ),
        )

    logger.info("Application submitted", extra={"candidate_id": candidate.id, "job_id": job_id})
    return CommandResult.ok({"candidate": candidate}, event=event)
