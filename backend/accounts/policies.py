# accounts/policies.py
"""
Policy functions for admin and company management.

Policies answer: "Is this action allowed for this actor?"
They do NOT perform the action; that's the command's job.

Design Principles:
1. Policies are pure functions (no side effects, no store access)
2. can_* return bool; assert_* raise PermissionDenied
3. Commands compose policies as needed, before any store mutation
"""

from django.core.exceptions import PermissionDenied


def can_manage_admins(actor) -> bool:
    """Only a super admin lists, creates, edits or deletes admin accounts."""
    return actor is not None and actor.is_super_admin


def can_manage_companies(actor) -> bool:
    """Only a super admin lists, creates, edits or deletes companies."""
    return actor is not None and actor.is_super_admin


def can_edit_admin_record(actor, admin) -> bool:
    """
    Check if actor may edit, delete or reset the password of an admin record.

    A super admin can manage every admin record except its own.
    """
    if not can_manage_admins(actor):
        return False
    return admin.id != actor.admin_id


def can_view_company(actor, company) -> bool:
    """Super admin sees every company; an admin sees its own."""
    if actor is None or actor.is_anonymous:
        return False
    if actor.is_super_admin:
        return True
    return company.id == actor.company_id


def assert_can_manage_admins(actor) -> None:
    if not can_manage_admins(actor):
        raise PermissionDenied("Only a super admin can manage admin accounts.")


def assert_can_manage_companies(actor) -> None:
    if not can_manage_companies(actor):
        raise PermissionDenied("Only a super admin can manage companies.")


def assert_can_edit_admin_record(actor, admin) -> None:
    assert_can_manage_admins(actor)
    if not can_edit_admin_record(actor, admin):
        raise PermissionDenied("A super admin cannot modify its own account.")
