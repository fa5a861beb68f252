# accounts/models.py
"""
Tenant and account records.

Company is the tenant. Admin accounts belong to exactly one company; super
admins belong to the global sentinel company (settings.GLOBAL_COMPANY_ID),
which is never stored as a Company row.

These are plain frozen dataclasses held by the in-memory EntityStore.
Status/role choices are Django TextChoices so that str(choice) is the
display value used in output records.
"""

from dataclasses import dataclass
from typing import Optional

from django.db import models


class AccountStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    BLOCKED = "Blocked", "Blocked"


class AdminRole(models.TextChoices):
    ADMIN = "Admin", "Admin"
    SUPER_ADMIN = "Super Admin", "Super Admin"


@dataclass(frozen=True)
class Company:
    id: Optional[str]
    name: str
    status: str = AccountStatus.ACTIVE

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Admin:
    """
    An admin account.

    ``password`` holds a Django password hash (see django.contrib.auth.hashers)
    and must never leave the command layer.
    """
    id: Optional[str]
    name: str
    email: str
    phone: str
    company_id: str
    role: str = AdminRole.ADMIN
    status: str = AccountStatus.ACTIVE
    password: str = ""

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.SUPER_ADMIN

    def __str__(self):
        return self.email
