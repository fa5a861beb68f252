# tests/test_accounts.py
"""
Tests for the accounts command layer.

Tests cover:
- Login check order
- Self-registration with company match-or-create
- Admin management by the super admin (self-exclusion, self-edit refusal)
- Password resets and their emails
- Company management, including the block cascade and delete refusal
"""

import pytest
from django.contrib.auth.hashers import check_password
from django.core.exceptions import PermissionDenied

from accounts import commands
from accounts.commands import ErrorCode
from accounts.models import AccountStatus, AdminRole
from events.types import EventTypes
from recruiting.models import VacancyStatus


# Set on every fixture admin in conftest.py
PASSWORD = "testpass123"


class TestLogin:

    def test_success(self, store, admin):
        result = commands.login(store, "admin@acme.test", PASSWORD)
        assert result.success
        assert result.data["admin"].id == admin.id

    def test_email_is_case_insensitive(self, store, admin):
        assert commands.login(store, "  Admin@ACME.test ", PASSWORD).success

    def test_wrong_password(self, store, admin):
        result = commands.login(store, admin.email, "wrong-password")
        assert not result.success
        assert result.code == ErrorCode.INVALID_CREDENTIALS

    def test_unknown_email(self, store):
        result = commands.login(store, "nobody@acme.test", PASSWORD)
        assert result.code == ErrorCode.INVALID_CREDENTIALS

    def test_credentials_checked_before_status(self, store, admin):
        store.admins.update(admin.id, status=AccountStatus.BLOCKED)
        result = commands.login(store, admin.email, "wrong-password")
        assert result.code == ErrorCode.INVALID_CREDENTIALS

    def test_blocked_account(self, store, admin):
        store.admins.update(admin.id, status=AccountStatus.BLOCKED)
        result = commands.login(store, admin.email, PASSWORD)
        assert result.code == ErrorCode.ACCOUNT_BLOCKED

    def test_account_block_reported_before_company_block(self, store, company, admin):
        store.companies.update(company.id, status=AccountStatus.BLOCKED)
        store.admins.update(admin.id, status=AccountStatus.BLOCKED)

        result = commands.login(store, admin.email, PASSWORD)
        assert result.code == ErrorCode.ACCOUNT_BLOCKED

    def test_blocked_company(self, store, company, admin):
        # Company blocked directly, without the cascade
        store.companies.update(company.id, status=AccountStatus.BLOCKED)

        result = commands.login(store, admin.email, PASSWORD)
        assert result.code == ErrorCode.COMPANY_BLOCKED

    def test_super_admin_skips_company_check(self, store, super_admin):
        result = commands.login(store, super_admin.email, PASSWORD)
        assert result.success
        assert result.data["admin"].role == AdminRole.SUPER_ADMIN


class TestRegistration:

    def _data(self, **overrides):
        data = {
            "name": "New Admin",
            "company": "Initech",
            "phone": "555-0199",
            "email": "new@initech.test",
            "password": "longenough1",
        }
        data.update(overrides)
        return data

    def test_creates_active_company(self, store):
        result = commands.register_admin(store, self._data())

        assert result.success
        assert result.data["company_created"] is True
        company = result.data["company"]
        assert company.name == "Initech"
        assert company.status == AccountStatus.ACTIVE

        admin = result.data["admin"]
        assert admin.company_id == company.id
        assert admin.role == AdminRole.ADMIN
        assert admin.status == AccountStatus.ACTIVE
        assert check_password("longenough1", admin.password)

    def test_matches_existing_company_case_insensitively(self, store, company):
        result = commands.register_admin(store, self._data(company="  aCmE "))

        assert result.success
        assert result.data["company_created"] is False
        assert result.data["admin"].company_id == company.id
        assert len(store.companies) == 1

    def test_registered_admin_can_log_in(self, store):
        commands.register_admin(store, self._data())
        assert commands.login(store, "new@initech.test", "longenough1").success

    def test_duplicate_email(self, store, admin):
        result = commands.register_admin(store, self._data(email="ADMIN@acme.test"))

        assert result.code == ErrorCode.DUPLICATE_EMAIL
        assert len(store.companies) == 1

    def test_short_password(self, store):
        result = commands.register_admin(store, self._data(password="short"))

        assert result.code == ErrorCode.VALIDATION_ERROR
        assert "password" in result.data["errors"]
        assert len(store.admins) == 0

    def test_emits_company_and_admin_events(self, store):
        result = commands.register_admin(store, self._data())

        assert [e.event_type for e in result.events] == [
            EventTypes.COMPANY_CREATED,
            EventTypes.ADMIN_REGISTERED,
        ]
        assert result.events[0].data["via_registration"] is True
        assert result.events[1].caused_by_event_id == result.events[0].id

    def test_joining_existing_company_has_no_parent_event(self, store, company):
        result = commands.register_admin(store, self._data(company="Acme"))

        assert [e.event_type for e in result.events] == [EventTypes.ADMIN_REGISTERED]
        assert result.event.caused_by_event_id is None


class TestAdminManagement:

    def _new_admin(self, company_id, **overrides):
        data = {
            "name": "Dana",
            "email": "dana@acme.test",
            "phone": "555-0123",
            "company_id": company_id,
            "password": "longenough1",
        }
        data.update(overrides)
        return data

    def test_list_excludes_acting_super_admin(self, store, super_actor, super_admin, admin, other_admin):
        result = commands.list_admins(store, super_actor)
        ids = {a.id for a in result.data["admins"]}

        assert ids == {admin.id, other_admin.id}

    def test_tenant_admin_cannot_manage(self, store, admin_actor, company):
        with pytest.raises(PermissionDenied):
            commands.list_admins(store, admin_actor)
        with pytest.raises(PermissionDenied):
            commands.create_admin(store, admin_actor, self._new_admin(company.id))

    def test_anonymous_cannot_manage(self, store, anonymous):
        with pytest.raises(PermissionDenied):
            commands.list_admins(store, anonymous)

    def test_create_admin(self, store, super_actor, company):
        result = commands.create_admin(store, super_actor, self._new_admin(company.id))

        assert result.success
        admin = result.data["admin"]
        assert admin.company_id == company.id
        assert admin.status == AccountStatus.ACTIVE
        assert result.event.event_type == EventTypes.ADMIN_CREATED

    def test_create_admin_requires_existing_company(self, store, super_actor):
        result = commands.create_admin(store, super_actor, self._new_admin("missing"))
        assert result.code == ErrorCode.NOT_FOUND

    def test_create_admin_requires_company(self, store, super_actor):
        result = commands.create_admin(store, super_actor, self._new_admin(""))
        assert result.code == ErrorCode.VALIDATION_ERROR
        assert "company_id" in result.data["errors"]

    def test_create_super_admin_goes_to_global_company(self, store, super_actor, settings):
        result = commands.create_admin(
            store, super_actor, self._new_admin("", role=AdminRole.SUPER_ADMIN),
        )
        assert result.success
        assert result.data["admin"].company_id == settings.GLOBAL_COMPANY_ID

    def test_create_duplicate_email(self, store, super_actor, company, admin):
        result = commands.create_admin(
            store, super_actor, self._new_admin(company.id, email=admin.email),
        )
        assert result.code == ErrorCode.DUPLICATE_EMAIL

    def test_update_admin(self, store, super_actor, admin, second_company):
        result = commands.update_admin(
            store, super_actor, admin.id, {"name": "Renamed", "company_id": second_company.id},
        )

        assert result.success
        updated = store.admins.get(admin.id)
        assert updated.name == "Renamed"
        assert updated.company_id == second_company.id
        assert set(result.event.data["changes"]) == {"name", "company_id"}
        assert result.event.data["password_changed"] is False

    def test_blank_password_keeps_current(self, store, super_actor, admin):
        commands.update_admin(store, super_actor, admin.id, {"password": "", "phone": "555-9999"})
        assert check_password(PASSWORD, store.admins.get(admin.id).password)

    def test_new_password(self, store, super_actor, admin):
        result = commands.update_admin(store, super_actor, admin.id, {"password": "brandnew99"})

        assert result.event.data["password_changed"] is True
        assert check_password("brandnew99", store.admins.get(admin.id).password)

    def test_blocking_admin_leaves_company_alone(self, store, super_actor, admin, company):
        commands.update_admin(store, super_actor, admin.id, {"status": AccountStatus.BLOCKED})

        assert store.admins.get(admin.id).status == AccountStatus.BLOCKED
        assert store.companies.get(company.id).status == AccountStatus.ACTIVE

    def test_no_changes_emits_nothing(self, store, super_actor, admin):
        result = commands.update_admin(store, super_actor, admin.id, {"name": admin.name})
        assert result.success
        assert result.event is None

    def test_super_admin_cannot_edit_itself(self, store, super_actor, super_admin):
        with pytest.raises(PermissionDenied):
            commands.update_admin(store, super_actor, super_admin.id, {"name": "Me"})
        with pytest.raises(PermissionDenied):
            commands.delete_admin(store, super_actor, super_admin.id)
        with pytest.raises(PermissionDenied):
            commands.reset_admin_password(store, super_actor, super_admin.id)

    def test_unknown_admin(self, store, super_actor):
        assert commands.update_admin(store, super_actor, "ghost", {}).code == ErrorCode.NOT_FOUND
        assert commands.delete_admin(store, super_actor, "ghost").code == ErrorCode.NOT_FOUND

    def test_delete_admin(self, store, super_actor, admin):
        result = commands.delete_admin(store, super_actor, admin.id)
        assert result.success
        assert admin.id not in store.admins


class TestPasswordReset:

    def test_reset_to_default(self, store, super_actor, admin, settings, mailoutbox):
        result = commands.reset_admin_password(store, super_actor, admin.id)

        assert result.success
        assert commands.login(store, admin.email, settings.DEFAULT_RESET_PASSWORD).success
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == [admin.email]
        assert settings.DEFAULT_RESET_PASSWORD not in mailoutbox[0].body
        assert "password" not in result.event.data

    def test_request_for_known_email(self, store, admin, mailoutbox):
        result = commands.request_password_reset(store, admin.email)

        assert result.success
        assert len(mailoutbox) == 1
        assert result.event.event_type == EventTypes.ADMIN_PASSWORD_RESET_REQUESTED

    def test_request_for_unknown_email_looks_the_same(self, store, mailoutbox):
        result = commands.request_password_reset(store, "nobody@acme.test")

        assert result.success
        assert result.data == {"success": True}
        assert mailoutbox == []


class TestCompanyManagement:

    def test_list_companies(self, store, super_actor, company, second_company):
        result = commands.list_companies(store, super_actor)
        assert {c.id for c in result.data["companies"]} == {company.id, second_company.id}

    def test_tenant_admin_cannot_manage_companies(self, store, admin_actor, company):
        with pytest.raises(PermissionDenied):
            commands.list_companies(store, admin_actor)
        with pytest.raises(PermissionDenied):
            commands.update_company(store, admin_actor, company.id, {"status": AccountStatus.BLOCKED})

    def test_get_company_scoped_to_tenant(self, store, admin_actor, company, second_company):
        assert commands.get_company(store, admin_actor, company.id).success
        result = commands.get_company(store, admin_actor, second_company.id)
        assert result.code == ErrorCode.NOT_FOUND

    def test_create_company(self, store, super_actor):
        result = commands.create_company(store, super_actor, {"name": "Initech"})

        assert result.success
        assert result.data["company"].status == AccountStatus.ACTIVE

    def test_create_duplicate_company(self, store, super_actor, company):
        result = commands.create_company(store, super_actor, {"name": "ACME"})
        assert result.code == ErrorCode.DUPLICATE_COMPANY

    def test_rename_company(self, store, super_actor, company):
        result = commands.update_company(store, super_actor, company.id, {"name": "Acme Corp"})

        assert result.data["company"].name == "Acme Corp"
        assert result.event.event_type == EventTypes.COMPANY_UPDATED

    def test_rename_to_existing_name(self, store, super_actor, company, second_company):
        result = commands.update_company(store, super_actor, company.id, {"name": "globex"})
        assert result.code == ErrorCode.DUPLICATE_COMPANY

    def test_block_cascades(self, store, super_actor, company, admin, vacancy):
        result = commands.update_company(
            store, super_actor, company.id, {"status": AccountStatus.BLOCKED},
        )

        assert result.success
        assert result.event.event_type == EventTypes.COMPANY_BLOCKED
        assert store.admins.get(admin.id).status == AccountStatus.BLOCKED
        assert store.vacancies.get(vacancy.id).status == VacancyStatus.INACTIVE
        assert commands.login(store, admin.email, PASSWORD).code == ErrorCode.ACCOUNT_BLOCKED

    def test_rename_and_block_in_one_update(self, store, super_actor, company):
        result = commands.update_company(
            store, super_actor, company.id, {"name": "Acme Corp", "status": AccountStatus.BLOCKED},
        )

        assert [e.event_type for e in result.events] == [
            EventTypes.COMPANY_UPDATED,
            EventTypes.COMPANY_BLOCKED,
        ]

    def test_invalid_status(self, store, super_actor, company):
        result = commands.update_company(store, super_actor, company.id, {"status": "Suspended"})
        assert result.code == ErrorCode.VALIDATION_ERROR

    def test_delete_refused_with_dependents(self, store, super_actor, company, admin, vacancy):
        result = commands.delete_company(store, super_actor, company.id)

        assert result.code == ErrorCode.DEPENDENTS_EXIST
        assert result.data == {"admins": 1, "vacancies": 1}
        assert company.id in store.companies

    def test_delete_company(self, store, super_actor, company):
        result = commands.delete_company(store, super_actor, company.id)

        assert result.success
        assert company.id not in store.companies

    def test_delete_unknown_company(self, store, super_actor):
        assert commands.delete_company(store, super_actor, "missing").code == ErrorCode.NOT_FOUND
