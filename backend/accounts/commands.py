# accounts/commands.py
"""
Command layer for accounts/authorization operations.

ALL admin and company mutations MUST go through these commands:
- Login and self-registration
- Admin creation/updates/deletion and password resets
- Company creation/updates (status cascades)/deletion

This ensures:
1. Consistent validation
2. Policy checks before any store write
3. Audit trail via events

Authorization failures raise PermissionDenied / NotAuthenticated.
Every other outcome is a CommandResult; failures carry an ErrorCode.
"""

import hashlib
import json
import logging

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password
from django.db import models

from accounts.authz import ActorContext
from accounts.email_service import (
    send_password_reset_request_email,
    send_password_was_reset_email,
)
from accounts.models import AccountStatus, Admin, AdminRole, Company
from accounts.policies import (
    assert_can_edit_admin_record,
    assert_can_manage_admins,
    assert_can_manage_companies,
    can_view_company,
)
from accounts.serializers import (
    AdminCreateSerializer,
    AdminUpdateSerializer,
    CompanyInputSerializer,
    RegistrationSerializer,
)
from events.emitter import emit_event
from events.types import (
    EventTypes,
    AdminCreatedData,
    AdminDeletedData,
    AdminPasswordResetData,
    AdminPasswordResetRequestedData,
    AdminRegisteredData,
    AdminUpdatedData,
    CompanyCreatedData,
    CompanyUpdatedData,
)
from tenant import lifecycle
from tenant.lifecycle import DependentsExistError


logger = logging.getLogger(__name__)


class ErrorCode(models.TextChoices):
    NOT_FOUND = "not_found", "Not found"
    INVALID_CREDENTIALS = "invalid_credentials", "Invalid credentials"
    ACCOUNT_BLOCKED = "account_blocked", "Account blocked"
    COMPANY_BLOCKED = "company_blocked", "Company blocked"
    DEPENDENTS_EXIST = "dependents_exist", "Dependents exist"
    MISSING_ATTACHMENT = "missing_attachment", "Missing attachment"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type", "Unsupported file type"
    VALIDATION_ERROR = "validation_error", "Validation error"
    DUPLICATE_EMAIL = "duplicate_email", "Duplicate email"
    DUPLICATE_COMPANY = "duplicate_company", "Duplicate company"


class CommandResult:
    def __init__(self, success: bool, data=None, error: str = None, code: str = None,
                 event=None, events=None):
        self.success = success
        self.data = data
        self.error = error
        self.code = code

        # Primary event (optional)
        self.event = event

        # Always a list
        if events is None:
            self.events = ([] if event is None else [event])
        else:
            self.events = list(events)

    def __repr__(self):
        if self.success:
            return f"<CommandResult ok events={len(self.events)}>"
        return f"<CommandResult fail code={self.code} error={self.error!r}>"

    @classmethod
    def ok(cls, data=None, event=None, events=None):
        return cls(success=True, data=data, event=event, events=events)

    @classmethod
    def fail(cls, error: str, code: str = None, data=None):
        return cls(success=False, error=error, code=code, data=data)

    @classmethod
    def invalid(cls, serializer):
        """Failure carrying the DRF validation errors of a serializer."""
        return cls.fail(
            "Invalid input.",
            code=ErrorCode.VALIDATION_ERROR,
            data={"errors": serializer.errors},
        )

    @classmethod
    def invalid_field(cls, field: str, message: str):
        return cls.fail(
            "Invalid input.",
            code=ErrorCode.VALIDATION_ERROR,
            data={"errors": {field: [message]}},
        )


def _changes_hash(changes: dict) -> str:
    payload = json.dumps(changes, sort_keys=True, separators=(",", ":"), default=str).encode()
    return hashlib.sha256(payload).hexdigest()[:12]


def _normalize(value: str) -> str:
    return (value or "").strip().lower()


def _email_taken(store, email: str, exclude_id: str = None) -> bool:
    if not settings.ENFORCE_UNIQUE_ADMIN_EMAIL:
        return False
    wanted = _normalize(email)
    return store.admins.exists(
        lambda a: _normalize(a.email) == wanted and a.id != exclude_id
    )


def find_company_by_name(store, name: str):
    """Case-insensitive company lookup by (trimmed) name."""
    wanted = _normalize(name)
    return store.companies.first(lambda c: _normalize(c.name) == wanted)


# =============================================================================
# Authentication
# =============================================================================

def login(store, email: str, password: str) -> CommandResult:
    """
    Authenticate an admin by email and password.

    Checks, in this order (first failure wins):
    1. INVALID_CREDENTIALS: no admin matches email + password
    2. ACCOUNT_BLOCKED: the matched admin is blocked
    3. COMPANY_BLOCKED: the admin's company is blocked

    Returns:
        CommandResult with {"admin": Admin}
    """
    wanted = _normalize(email)
    admin = None
    for candidate in store.admins.filter(lambda a: _normalize(a.email) == wanted):
        if password and check_password(password, candidate.password):
            admin = candidate
            break

    if admin is None:
        logger.warning("Login failed: invalid credentials", extra={"email": wanted})
        return CommandResult.fail("Invalid credentials.", code=ErrorCode.INVALID_CREDENTIALS)

    if admin.status == AccountStatus.BLOCKED:
        logger.warning("Login refused: account blocked", extra={"admin_id": admin.id})
        return CommandResult.fail("Your account has been blocked.", code=ErrorCode.ACCOUNT_BLOCKED)

    if not admin.is_super_admin:
        company = store.companies.get(admin.company_id)
        if company is not None and company.status == AccountStatus.BLOCKED:
            logger.warning(
                "Login refused: company blocked",
                extra={"admin_id": admin.id, "company_id": company.id},
            )
            return CommandResult.fail(
                "The company associated with your account has been blocked.",
                code=ErrorCode.COMPANY_BLOCKED,
            )

    logger.info("Admin logged in", extra={"admin_id": admin.id, "role": str(admin.role)})
    return CommandResult.ok({"admin": admin})


# =============================================================================
# Registration (Company match-or-create + Admin)
# =============================================================================

def register_admin(store, data: dict) -> CommandResult:
    """
    Register a new tenant admin.

    The company is matched by name, case-insensitively; when no company
    matches, a new Active company is created. The admin is always created
    with role=Admin and status=Active.

    Args:
        store: The EntityStore
        data: name, company, phone, email, password

    Returns:
        CommandResult with {"admin": Admin, "company": Company, "company_created": bool}
    """
    serializer = RegistrationSerializer(data=data)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = serializer.validated_data

    if _email_taken(store, values["email"]):
        return CommandResult.fail(
            f"An admin with email '{values['email']}' already exists.",
            code=ErrorCode.DUPLICATE_EMAIL,
        )

    events = []
    company_event = None
    with store.atomic():
        company = find_company_by_name(store, values["company"])
        company_created = company is None
        if company_created:
            company = store.companies.insert(Company(id=None, name=values["company"]))
            company_event = emit_event(
                store,
                event_type=EventTypes.COMPANY_CREATED,
                aggregate_type="Company",
                aggregate_id=company.id,
                company_id=company.id,
                data=CompanyCreatedData(
                    company_id=company.id,
                    name=company.name,
                    status=str(company.status),
                    via_registration=True,
                ),
            )
            events.append(company_event)

        admin = store.admins.insert(Admin(
            id=None,
            name=values["name"],
            email=values["email"],
            phone=values["phone"],
            company_id=company.id,
            role=AdminRole.ADMIN,
            status=AccountStatus.ACTIVE,
            password=make_password(values["password"]),
        ))
        event = emit_event(
            store,
            event_type=EventTypes.ADMIN_REGISTERED,
            aggregate_type="Admin",
            aggregate_id=admin.id,
            company_id=company.id,
            caused_by_event=company_event,
            data=AdminRegisteredData(
                admin_id=admin.id,
                email=admin.email,
                company_id=company.id,
                company_created=company_created,
            ),
        )
        events.append(event)

    logger.info(
        "Admin registered",
        extra={"admin_id": admin.id, "company_id": company.id, "company_created": company_created},
    )
    return CommandResult.ok(
        {"admin": admin, "company": company, "company_created": company_created},
        event=event,
        events=events,
    )


# =============================================================================
# Admin Management (super admin only)
# =============================================================================

def list_admins(store, actor: ActorContext) -> CommandResult:
    """
    List admin accounts for the super admin's management screen.

    The acting super admin's own record is excluded: it can never edit
    or delete itself.
    """
    assert_can_manage_admins(actor)
    admins = store.admins.filter(lambda a: a.id != actor.admin_id)
    return CommandResult.ok({"admins": admins})


def create_admin(store, actor: ActorContext, data: dict) -> CommandResult:
    """
    Create an admin account.

    Role Admin requires an existing company; role Super Admin is placed in
    the global company. New accounts are Active.
    """
    assert_can_manage_admins(actor)

    serializer = AdminCreateSerializer(data=data)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = serializer.validated_data

    if values["role"] == AdminRole.ADMIN and store.companies.get(values["company_id"]) is None:
        return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)

    if _email_taken(store, values["email"]):
        return CommandResult.fail(
            f"An admin with email '{values['email']}' already exists.",
            code=ErrorCode.DUPLICATE_EMAIL,
        )

    with store.atomic():
        admin = store.admins.insert(Admin(
            id=None,
            name=values["name"],
            email=values["email"],
            phone=values["phone"],
            company_id=values["company_id"],
            role=values["role"],
            status=AccountStatus.ACTIVE,
            password=make_password(values["password"]),
        ))
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.ADMIN_CREATED,
            aggregate_type="Admin",
            aggregate_id=admin.id,
            company_id=admin.company_id,
            data=AdminCreatedData(
                admin_id=admin.id,
                email=admin.email,
                company_id=admin.company_id,
                role=str(admin.role),
            ),
        )

    logger.info("Admin created", extra={"admin_id": admin.id, "created_by": actor.admin_id})
    return CommandResult.ok({"admin": admin}, event=event)


def update_admin(store, actor: ActorContext, admin_id: str, data: dict) -> CommandResult:
    """
    Update an admin account (partial).

    Allowed fields: name, email, phone, company_id, role, status and an
    optional new password (blank keeps the current one). Changing the
    status of an admin never touches its company.
    """
    assert_can_manage_admins(actor)

    target = store.admins.get(admin_id)
    if target is None:
        return CommandResult.fail("Admin not found.", code=ErrorCode.NOT_FOUND)
    assert_can_edit_admin_record(actor, target)

    serializer = AdminUpdateSerializer(data=data, partial=True)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = dict(serializer.validated_data)
    new_password = values.pop("password", "")

    role = values.get("role", target.role)
    if role == AdminRole.SUPER_ADMIN:
        values["company_id"] = settings.GLOBAL_COMPANY_ID
    else:
        company_id = values.get("company_id", target.company_id)
        if store.companies.get(company_id) is None:
            return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)
        values["company_id"] = company_id

    if "email" in values and _email_taken(store, values["email"], exclude_id=admin_id):
        return CommandResult.fail("Email already in use.", code=ErrorCode.DUPLICATE_EMAIL)

    changes = {}
    for field, value in values.items():
        old_value = getattr(target, field)
        if old_value != value:
            changes[field] = {"old": str(old_value), "new": str(value)}

    updates = {field: values[field] for field in changes}
    if new_password:
        updates["password"] = make_password(new_password)

    if not updates:
        return CommandResult.ok({"admin": target})

    with store.atomic():
        admin = store.admins.update(admin_id, **updates)
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.ADMIN_UPDATED,
            aggregate_type="Admin",
            aggregate_id=admin_id,
            company_id=admin.company_id,
            data=AdminUpdatedData(
                admin_id=admin_id,
                email=admin.email,
                changes=changes,
                password_changed=bool(new_password),
            ),
        )

    logger.info(
        "Admin updated",
        extra={"admin_id": admin_id, "changes_hash": _changes_hash(changes)},
    )
    return CommandResult.ok({"admin": admin}, event=event)


def delete_admin(store, actor: ActorContext, admin_id: str) -> CommandResult:
    assert_can_manage_admins(actor)

    target = store.admins.get(admin_id)
    if target is None:
        return CommandResult.fail("Admin not found.", code=ErrorCode.NOT_FOUND)
    assert_can_edit_admin_record(actor, target)

    with store.atomic():
        store.admins.delete(admin_id)
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.ADMIN_DELETED,
            aggregate_type="Admin",
            aggregate_id=admin_id,
            company_id=target.company_id,
            data=AdminDeletedData(admin_id=admin_id, email=target.email),
        )

    logger.info("Admin deleted", extra={"admin_id": admin_id, "deleted_by": actor.admin_id})
    return CommandResult.ok({"deleted": True}, event=event)


def reset_admin_password(store, actor: ActorContext, admin_id: str) -> CommandResult:
    """
    Reset an admin's password to settings.DEFAULT_RESET_PASSWORD.

    The admin is notified by email (without the password).
    """
    assert_can_manage_admins(actor)

    target = store.admins.get(admin_id)
    if target is None:
        return CommandResult.fail("Admin not found.", code=ErrorCode.NOT_FOUND)
    assert_can_edit_admin_record(actor, target)

    with store.atomic():
        admin = store.admins.update(admin_id, password=make_password(settings.DEFAULT_RESET_PASSWORD))
        # No password in event data
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.ADMIN_PASSWORD_RESET,
            aggregate_type="Admin",
            aggregate_id=admin_id,
            company_id=admin.company_id,
            data=AdminPasswordResetData(admin_id=admin_id, email=admin.email),
        )

    send_password_was_reset_email(admin)
    logger.info("Admin password reset", extra={"admin_id": admin_id, "reset_by": actor.admin_id})
    return CommandResult.ok({"success": True}, event=event)


def request_password_reset(store, email: str) -> CommandResult:
    """
    Public "forgot password" request.

    Always succeeds so the response never reveals whether an account
    exists. A known admin receives a notice by email.
    """
    wanted = _normalize(email)
    admin = store.admins.first(lambda a: _normalize(a.email) == wanted)
    if admin is None:
        logger.info("Password reset requested for unknown email", extra={"email": wanted})
        return CommandResult.ok({"success": True})

    event = emit_event(
        store,
        event_type=EventTypes.ADMIN_PASSWORD_RESET_REQUESTED,
        aggregate_type="Admin",
        aggregate_id=admin.id,
        company_id=admin.company_id,
        data=AdminPasswordResetRequestedData(admin_id=admin.id, email=admin.email),
    )
    send_password_reset_request_email(admin)
    logger.info("Password reset requested", extra={"admin_id": admin.id})
    return CommandResult.ok({"success": True}, event=event)


# =============================================================================
# Company Management (super admin only)
# =============================================================================

def list_companies(store, actor: ActorContext) -> CommandResult:
    assert_can_manage_companies(actor)
    return CommandResult.ok({"companies": store.companies.all()})


def get_company(store, actor: ActorContext, company_id: str) -> CommandResult:
    company = store.companies.get(company_id)
    if company is None or not can_view_company(actor, company):
        return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)
    return CommandResult.ok({"company": company})


def create_company(store, actor: ActorContext, data: dict) -> CommandResult:
    """Create an Active company. Names are unique, case-insensitively."""
    assert_can_manage_companies(actor)

    serializer = CompanyInputSerializer(data=data)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    name = serializer.validated_data["name"]

    if find_company_by_name(store, name) is not None:
        return CommandResult.fail(
            f"A company named '{name}' already exists.", code=ErrorCode.DUPLICATE_COMPANY,
        )

    with store.atomic():
        company = store.companies.insert(Company(id=None, name=name))
        event = emit_event(
            store,
            actor=actor,
            event_type=EventTypes.COMPANY_CREATED,
            aggregate_type="Company",
            aggregate_id=company.id,
            company_id=company.id,
            data=CompanyCreatedData(
                company_id=company.id,
                name=company.name,
                status=str(company.status),
            ),
        )

    logger.info("Company created", extra={"company_id": company.id})
    return CommandResult.ok({"company": company}, event=event)


def update_company(store, actor: ActorContext, company_id: str, data: dict) -> CommandResult:
    """
    Rename a company and/or change its status.

    A status change goes through the lifecycle cascade: blocking blocks
    all the company's admins and deactivates its vacancies; unblocking
    changes only the company.
    """
    assert_can_manage_companies(actor)

    company = store.companies.get(company_id)
    if company is None:
        return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)

    serializer = CompanyInputSerializer(data=data, partial=True)
    if not serializer.is_valid():
        return CommandResult.invalid(serializer)
    values = serializer.validated_data

    new_name = values.get("name")
    if new_name is not None and new_name != company.name:
        other = find_company_by_name(store, new_name)
        if other is not None and other.id != company_id:
            return CommandResult.fail(
                f"A company named '{new_name}' already exists.", code=ErrorCode.DUPLICATE_COMPANY,
            )

    events_before = len(store.events)
    with store.atomic():
        if new_name is not None and new_name != company.name:
            store.companies.update(company_id, name=new_name)
            emit_event(
                store,
                actor=actor,
                event_type=EventTypes.COMPANY_UPDATED,
                aggregate_type="Company",
                aggregate_id=company_id,
                company_id=company_id,
                data=CompanyUpdatedData(
                    company_id=company_id,
                    changes={"name": {"old": company.name, "new": new_name}},
                ),
            )

        new_status = values.get("status")
        if new_status is not None and new_status != company.status:
            lifecycle.set_company_status(store, company_id, new_status, actor=actor)

    events = store.events[events_before:]
    return CommandResult.ok(
        {"company": store.companies.get(company_id)},
        event=events[-1] if events else None,
        events=events,
    )


def delete_company(store, actor: ActorContext, company_id: str) -> CommandResult:
    assert_can_manage_companies(actor)

    try:
        deleted = lifecycle.delete_company(store, company_id, actor=actor)
    except DependentsExistError as exc:
        return CommandResult.fail(
            str(exc),
            code=ErrorCode.DEPENDENTS_EXIST,
            data={"admins": exc.admin_count, "vacancies": exc.vacancy_count},
        )

    if not deleted:
        return CommandResult.fail("Company not found.", code=ErrorCode.NOT_FOUND)
    return CommandResult.ok({"deleted": True}, event=store.events[-1])
