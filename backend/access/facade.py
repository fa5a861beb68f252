# access/facade.py
"""
Access façade: the only surface the presentation layer talks to.

JobBoardAPI binds one EntityStore and exposes every job board operation.
Each call runs the matching command (policies, store writes, cascades,
events) and returns a CommandResult whose ``data`` holds plain records
rendered by the DRF serializers: dicts and lists, never store entities.
Admin records never include the password hash.

Usage:
    api = JobBoardAPI(build_store())

    result = api.login("alice@techsolutions.com", "password123")
    if not result.success:
        show_error(result.code, result.error)
    actor = api.resolve_actor(result.data["admin"]["id"])

    api.create_vacancy(actor, {...})

Every actor passed in is re-read from the store first, so a blocked or
deleted admin loses access on its next call.

Authorization failures raise django.core.exceptions.PermissionDenied
(or rest_framework.exceptions.NotAuthenticated for anonymous or unknown
actors).
"""

import logging
from typing import Optional

from accounts import commands as account_commands
from accounts.authz import ActorContext, resolve_actor
from accounts.serializers import AdminSerializer, CompanySerializer
from recruiting import commands as recruiting_commands
from recruiting.serializers import CandidateSerializer, VacancySerializer
from store.memory import EntityStore
from store.seed import build_store


logger = logging.getLogger(__name__)


class JobBoardAPI:
    def __init__(self, store: Optional[EntityStore] = None):
        self.store = store if store is not None else build_store()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render(self, result, key: str, serializer_class, many: bool = False, **context):
        if result.success and result.data and key in result.data:
            serializer = serializer_class(
                result.data[key],
                many=many,
                context={"store": self.store, **context},
            )
            rendered = serializer.data
            result.data[key] = [dict(row) for row in rendered] if many else dict(rendered)
        return result

    # -------------------------------------------------------------------------
    # Session / authentication
    # -------------------------------------------------------------------------

    def resolve_actor(self, admin_id: Optional[str]) -> ActorContext:
        return resolve_actor(self.store, admin_id)

    def _current(self, actor: Optional[ActorContext]) -> ActorContext:
        """
        Re-read a caller-held actor from the store.

        An actor resolved before its account or company was blocked, or
        before it was deleted, gets no further access.
        """
        if actor is None or actor.is_anonymous:
            return ActorContext.anonymous()
        return resolve_actor(self.store, actor.admin_id)

    def login(self, email: str, password: str):
        result = account_commands.login(self.store, email, password)
        return self._render(result, "admin", AdminSerializer)

    def register_admin(self, data: dict):
        result = account_commands.register_admin(self.store, data)
        self._render(result, "company", CompanySerializer)
        return self._render(result, "admin", AdminSerializer)

    def request_password_reset(self, email: str):
        return account_commands.request_password_reset(self.store, email)

    # -------------------------------------------------------------------------
    # Admin management
    # -------------------------------------------------------------------------

    def list_admins(self, actor: ActorContext):
        result = account_commands.list_admins(self.store, self._current(actor))
        return self._render(result, "admins", AdminSerializer, many=True)

    def create_admin(self, actor: ActorContext, data: dict):
        result = account_commands.create_admin(self.store, self._current(actor), data)
        return self._render(result, "admin", AdminSerializer)

    def update_admin(self, actor: ActorContext, admin_id: str, data: dict):
        result = account_commands.update_admin(self.store, self._current(actor), admin_id, data)
        return self._render(result, "admin", AdminSerializer)

    def delete_admin(self, actor: ActorContext, admin_id: str):
        return account_commands.delete_admin(self.store, self._current(actor), admin_id)

    def reset_admin_password(self, actor: ActorContext, admin_id: str):
        return account_commands.reset_admin_password(self.store, self._current(actor), admin_id)

    # -------------------------------------------------------------------------
    # Company management
    # -------------------------------------------------------------------------

    def list_companies(self, actor: ActorContext):
        result = account_commands.list_companies(self.store, self._current(actor))
        return self._render(result, "companies", CompanySerializer, many=True)

    def get_company(self, actor: ActorContext, company_id: str):
        result = account_commands.get_company(self.store, self._current(actor), company_id)
        return self._render(result, "company", CompanySerializer)

    def create_company(self, actor: ActorContext, data: dict):
        result = account_commands.create_company(self.store, self._current(actor), data)
        return self._render(result, "company", CompanySerializer)

    def update_company(self, actor: ActorContext, company_id: str, data: dict):
        result = account_commands.update_company(self.store, self._current(actor), company_id, data)
        return self._render(result, "company", CompanySerializer)

    def delete_company(self, actor: ActorContext, company_id: str):
        return account_commands.delete_company(self.store, self._current(actor), company_id)

    # -------------------------------------------------------------------------
    # Vacancies
    # -------------------------------------------------------------------------

    def list_public_vacancies(self, search: str = "", category: Optional[str] = None):
        result = recruiting_commands.list_public_vacancies(self.store, search=search, category=category)
        return self._render(result, "vacancies", VacancySerializer, many=True)

    def list_public_categories(self):
        return recruiting_commands.list_public_categories(self.store)

    def get_vacancy(self, actor: Optional[ActorContext], vacancy_id: str):
        result = recruiting_commands.get_vacancy(self.store, self._current(actor), vacancy_id)
        return self._render(result, "vacancy", VacancySerializer)

    def list_vacancies(self, actor: Optional[ActorContext]):
        actor = self._current(actor)
        result = recruiting_commands.list_vacancies(self.store, actor)
        return self._render(
            result, "vacancies", VacancySerializer, many=True,
            include_counts=actor.is_authenticated,
        )

    def create_vacancy(self, actor: ActorContext, data: dict):
        result = recruiting_commands.create_vacancy(self.store, self._current(actor), data)
        return self._render(result, "vacancy", VacancySerializer)

    def update_vacancy(self, actor: ActorContext, vacancy_id: str, data: dict):
        result = recruiting_commands.update_vacancy(self.store, self._current(actor), vacancy_id, data)
        return self._render(result, "vacancy", VacancySerializer)

    def delete_vacancy(self, actor: ActorContext, vacancy_id: str):
        return recruiting_commands.delete_vacancy(self.store, self._current(actor), vacancy_id)

    # -------------------------------------------------------------------------
    # Candidates
    # -------------------------------------------------------------------------

    def list_candidates(self, actor: ActorContext, job_id: str):
        result = recruiting_commands.list_candidates(self.store, self._current(actor), job_id)
        return self._render(result, "candidates", CandidateSerializer, many=True)

    def submit_application(self, job_id: str, data: dict, cv_file):
        result = recruiting_commands.submit_application(self.store, job_id, data, cv_file)
        return self._render(result, "candidate", CandidateSerializer)
