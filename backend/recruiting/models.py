# recruiting/models.py
"""
Vacancy and candidate records.

A Vacancy belongs to exactly one Company (company_id). A Candidate is an
application to exactly one Vacancy (job_id); candidates are written once on
submission and only ever removed together with their vacancy.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from django.db import models


class VacancyStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    INACTIVE = "Inactive", "Inactive"


class EmploymentType(models.TextChoices):
    FULL_TIME = "Full-time", "Full-time"
    PART_TIME = "Part-time", "Part-time"
    CONTRACT = "Contract", "Contract"


@dataclass(frozen=True)
class Vacancy:
    id: Optional[str]
    title: str
    category: str
    description: str
    location: str
    company_id: str
    requirements: Tuple[str, ...] = field(default_factory=tuple)
    type: str = EmploymentType.FULL_TIME
    status: str = VacancyStatus.ACTIVE

    def __str__(self):
        return self.title


@dataclass(frozen=True)
class Candidate:
    id: Optional[str]
    job_id: str
    full_name: str
    professional_title: str
    years_of_experience: int
    location: str
    email: str
    phone: str
    cv_file_name: str
    cv_file_reference: str
    application_date: datetime
    cv_content_type: str = ""

    def __str__(self):
        return f"{self.full_name} ({self.email})"
