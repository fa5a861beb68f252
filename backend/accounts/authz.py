# accounts/authz.py
"""
Authorization utilities for the job board.

Provides:
- ActorContext: Immutable context for the acting principal
- resolve_actor: Load the actor fresh from the store
- require: Check a policy decision and raise if not granted

A principal is one of:
1. Anonymous (public visitor): no admin record
2. Admin: scoped to its own company
3. Super Admin: global, belongs to the sentinel company

Session state (which admin is logged in) lives in the presentation layer.
It hands the admin id back on every call and resolve_actor reloads the
record, so blocking an admin or its company takes effect immediately.
"""

from dataclasses import dataclass
from typing import Optional

from django.core.exceptions import PermissionDenied
from rest_framework.exceptions import NotAuthenticated

from accounts.models import AccountStatus, Admin


@dataclass(frozen=True)
class ActorContext:
    """
    Immutable context for the current actor.

    This is passed to commands and policies to tell them who is
    performing an action.

    Attributes:
        admin: The acting admin record, or None for anonymous visitors
    """
    admin: Optional[Admin] = None

    @classmethod
    def anonymous(cls) -> "ActorContext":
        return cls(admin=None)

    @classmethod
    def for_admin(cls, admin: Admin) -> "ActorContext":
        return cls(admin=admin)

    @property
    def is_anonymous(self) -> bool:
        return self.admin is None

    @property
    def is_authenticated(self) -> bool:
        return self.admin is not None

    @property
    def is_super_admin(self) -> bool:
        return self.admin is not None and self.admin.is_super_admin

    @property
    def is_admin(self) -> bool:
        """Tenant-scoped admin (not a super admin)."""
        return self.admin is not None and not self.admin.is_super_admin

    @property
    def admin_id(self) -> Optional[str]:
        return self.admin.id if self.admin else None

    @property
    def company_id(self) -> Optional[str]:
        return self.admin.company_id if self.admin else None


def resolve_actor(store, admin_id: Optional[str]) -> ActorContext:
    """
    Build the ActorContext for an admin id held by the presentation layer.

    The admin is loaded FRESH from the store on every call.

    Args:
        store: The EntityStore
        admin_id: Logged-in admin id, or None for a public visitor

    Returns:
        ActorContext (anonymous when admin_id is None)

    Raises:
        NotAuthenticated: If the id does not match any admin
        PermissionDenied: If the admin or its company is blocked
    """
    if admin_id is None:
        return ActorContext.anonymous()

    admin = store.admins.get(admin_id)
    if admin is None:
        raise NotAuthenticated("Authentication required.")

    if admin.status == AccountStatus.BLOCKED:
        raise PermissionDenied("Your account has been blocked.")

    if not admin.is_super_admin:
        company = store.companies.get(admin.company_id)
        if company is not None and company.status == AccountStatus.BLOCKED:
            raise PermissionDenied("The company associated with your account has been blocked.")

    return ActorContext.for_admin(admin)


def require(allowed: bool, message: str = "Permission denied.") -> None:
    """
    Raise PermissionDenied unless a policy decision allowed the action.

    Example:
        require(can_manage_companies(actor), "Only a super admin can manage companies.")
        # If we get here, permission is granted
    """
    if not allowed:
        raise PermissionDenied(message)


def require_authenticated(actor: ActorContext) -> None:
    """Raise NotAuthenticated for anonymous actors."""
    if actor is None or actor.is_anonymous:
        raise NotAuthenticated("Authentication required.")
