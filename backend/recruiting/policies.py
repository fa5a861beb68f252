# recruiting/policies.py
"""
Policy functions for vacancies and applicants.

Visibility rules:
- Public (anonymous): vacancy Active AND owning company Active
- Super admin: every vacancy
- Admin: vacancies of its own company, whatever their status

Mutation rules (create/edit/delete vacancy, view applicants):
- Super admin: any company
- Admin: own company only
- Anonymous: never
"""

from django.core.exceptions import PermissionDenied

from accounts.models import AccountStatus
from recruiting.models import VacancyStatus


def is_publicly_visible(vacancy, company) -> bool:
    """A vacancy is public when it is Active and its company is Active."""
    if company is None:
        return False
    return vacancy.status == VacancyStatus.ACTIVE and company.status == AccountStatus.ACTIVE


def can_view_vacancy(actor, vacancy, company) -> bool:
    if actor is None or actor.is_anonymous:
        return is_publicly_visible(vacancy, company)
    if actor.is_super_admin:
        return True
    return vacancy.company_id == actor.company_id


def can_mutate_vacancy(actor, vacancy) -> bool:
    if actor is None or actor.is_anonymous:
        return False
    if actor.is_super_admin:
        return True
    return vacancy.company_id == actor.company_id


def can_assign_company(actor, company_id) -> bool:
    """Check if actor may place a vacancy under company_id."""
    if actor is None or actor.is_anonymous:
        return False
    if actor.is_super_admin:
        return True
    return company_id == actor.company_id


def assert_can_mutate_vacancy(actor, vacancy) -> None:
    if not can_mutate_vacancy(actor, vacancy):
        raise PermissionDenied("Cross-company action denied.")


def assert_can_assign_company(actor, company_id) -> None:
    if not can_assign_company(actor, company_id):
        raise PermissionDenied("Cross-company action denied.")
