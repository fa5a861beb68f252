# tenant/lifecycle.py
"""
Tenant lifecycle cascades.

Rules:
- Blocking a company blocks every admin of that company and deactivates
  every vacancy of that company, in one all-or-nothing store block.
- Unblocking a company changes ONLY the company. Dependents stay
  blocked/inactive until changed individually.
- A company that still has admins or vacancies cannot be deleted.
- Deleting a vacancy deletes all of its candidates with it.

Super admins belong to the global sentinel company and are never touched
by a company cascade.

These functions do not check permissions. Callers (the command layer)
enforce policies first.
"""

import logging
from typing import Optional, Tuple

from accounts.models import AccountStatus, AdminRole
from events.emitter import emit_event
from events.types import (
    EventTypes,
    CompanyBlockedData,
    CompanyUnblockedData,
    CompanyDeletedData,
    VacancyDeletedData,
)
from recruiting.models import VacancyStatus


logger = logging.getLogger(__name__)


class DependentsExistError(Exception):
    """Raised when deleting a company that still owns admins or vacancies."""

    def __init__(self, company_id: str, admin_count: int, vacancy_count: int):
        self.company_id = company_id
        self.admin_count = admin_count
        self.vacancy_count = vacancy_count
        super().__init__(
            f"Company {company_id} still has {admin_count} admin(s) and "
            f"{vacancy_count} vacancy(ies). Remove them first."
        )


def company_dependents(store, company_id: str) -> Tuple[int, int]:
    """Return (admin_count, vacancy_count) referencing the company."""
    return (
        store.admins.count(company_id=company_id),
        store.vacancies.count(company_id=company_id),
    )


def set_company_status(store, company_id: str, status: str, actor=None):
    """
    Change a company's status, cascading a block to its dependents.

    Args:
        store: The EntityStore
        company_id: Company to change
        status: AccountStatus.ACTIVE or AccountStatus.BLOCKED
        actor: ActorContext recorded on the emitted event

    Returns:
        The updated Company, or None if it does not exist
    """
    company = store.companies.get(company_id)
    if company is None:
        return None

    if status not in AccountStatus.values:
        raise ValueError(f"Invalid company status: {status!r}")

    with store.atomic():
        company = store.companies.update(company_id, status=status)

        if status == AccountStatus.BLOCKED:
            blocked_admin_ids = []
            for admin in store.admins.filter(company_id=company_id):
                if admin.role == AdminRole.SUPER_ADMIN:
                    continue
                if admin.status != AccountStatus.BLOCKED:
                    store.admins.update(admin.id, status=AccountStatus.BLOCKED)
                    blocked_admin_ids.append(admin.id)

            deactivated_vacancy_ids = []
            for vacancy in store.vacancies.filter(company_id=company_id):
                if vacancy.status != VacancyStatus.INACTIVE:
                    store.vacancies.update(vacancy.id, status=VacancyStatus.INACTIVE)
                    deactivated_vacancy_ids.append(vacancy.id)

            emit_event(
                store,
                actor=actor,
                event_type=EventTypes.COMPANY_BLOCKED,
                aggregate_type="Company",
                aggregate_id=company_id,
                company_id=company_id,
                data=CompanyBlockedData(
                    company_id=company_id,
                    blocked_admin_ids=blocked_admin_ids,
                    deactivated_vacancy_ids=deactivated_vacancy_ids,
                ),
            )
            logger.info(
                "Company blocked",
                extra={
                    "company_id": company_id,
                    "admins_blocked": len(blocked_admin_ids),
                    "vacancies_deactivated": len(deactivated_vacancy_ids),
                },
            )
        else:
            emit_event(
                store,
                actor=actor,
                event_type=EventTypes.COMPANY_UNBLOCKED,
                aggregate_type="Company",
                aggregate_id=company_id,
                company_id=company_id,
                data=CompanyUnblockedData(company_id=company_id),
            )
            logger.info("Company unblocked", extra={"company_id": company_id})

    return company


def delete_company(store, company_id: str, actor=None) -> bool:
    """
    Delete a company that has no dependents.

    Returns:
        True if deleted, False if the company does not exist

    Raises:
        DependentsExistError: If any admin or vacancy references the company
    """
    company = store.companies.get(company_id)
    if company is None:
        return False

    admin_count, vacancy_count = company_dependents(store, company_id)
    if admin_count or vacancy_count:
        raise DependentsExistError(company_id, admin_count, vacancy_count)

    with store.atomic():
        store.companies.delete(company_id)
        emit_event(
            store,
            actor=actor,
            event_type=EventTypes.COMPANY_DELETED,
            aggregate_type="Company",
            aggregate_id=company_id,
            company_id=company_id,
            data=CompanyDeletedData(company_id=company_id, name=company.name),
        )

    logger.info("Company deleted", extra={"company_id": company_id})
    return True


def delete_vacancy(store, vacancy_id: str, actor=None) -> Optional[int]:
    """
    Delete a vacancy together with all of its candidates.

    Returns:
        Number of candidates removed, or None if the vacancy does not exist
    """
    vacancy = store.vacancies.get(vacancy_id)
    if vacancy is None:
        return None

    with store.atomic():
        candidate_ids = [c.id for c in store.candidates.filter(job_id=vacancy_id)]
        for candidate_id in candidate_ids:
            store.candidates.delete(candidate_id)
        store.vacancies.delete(vacancy_id)

        emit_event(
            store,
            actor=actor,
            event_type=EventTypes.VACANCY_DELETED,
            aggregate_type="Vacancy",
            aggregate_id=vacancy_id,
            company_id=vacancy.company_id,
            data=VacancyDeletedData(
                vacancy_id=vacancy_id,
                company_id=vacancy.company_id,
                candidates_removed=len(candidate_ids),
                candidate_ids=candidate_ids,
            ),
        )

    logger.info(
        "Vacancy deleted",
        extra={"vacancy_id": vacancy_id, "candidates_removed": len(candidate_ids)},
    )
    return len(candidate_ids)
