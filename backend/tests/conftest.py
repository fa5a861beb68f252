# tests/conftest.py
"""
Pytest fixtures for the job board tests.

Every test gets its own EntityStore; nothing is shared between tests.
Tenants:
- company ("Acme"): admin + second_admin, two vacancies
- second_company ("Globex"): other_admin, one vacancy
- super_admin in the global company
"""

from datetime import timedelta

import pytest
from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from access.facade import JobBoardAPI
from accounts.authz import ActorContext
from accounts.models import AccountStatus, Admin, AdminRole, Company
from recruiting.models import Candidate, Vacancy, VacancyStatus
from store.memory import EntityStore


PASSWORD = "testpass123"


@pytest.fixture
def store():
    """An empty store."""
    return EntityStore()


@pytest.fixture
def api(store):
    return JobBoardAPI(store)


# =============================================================================
# Company & Admin Fixtures
# =============================================================================

@pytest.fixture
def company(store):
    return store.companies.insert(Company(id="acme", name="Acme"))


@pytest.fixture
def second_company(store):
    """A second tenant for cross-company tests."""
    return store.companies.insert(Company(id="globex", name="Globex"))


def _admin(store, admin_id, email, company_id, role=AdminRole.ADMIN, status=AccountStatus.ACTIVE):
    return store.admins.insert(Admin(
        id=admin_id,
        name=admin_id.replace("_", " ").title(),
        email=email,
        phone="555-0100",
        company_id=company_id,
        role=role,
        status=status,
        password=make_password(PASSWORD),
    ))


@pytest.fixture
def admin(store, company):
    return _admin(store, "acme_admin", "admin@acme.test", company.id)


@pytest.fixture
def second_admin(store, company):
    return _admin(store, "acme_admin_2", "admin2@acme.test", company.id)


@pytest.fixture
def other_admin(store, second_company):
    return _admin(store, "globex_admin", "admin@globex.test", second_company.id)


@pytest.fixture
def super_admin(store):
    return _admin(
        store, "root", "super@admin.test", settings.GLOBAL_COMPANY_ID, role=AdminRole.SUPER_ADMIN,
    )


# =============================================================================
# Actor Context Fixtures
# =============================================================================

@pytest.fixture
def anonymous():
    return ActorContext.anonymous()


@pytest.fixture
def admin_actor(admin):
    return ActorContext.for_admin(admin)


@pytest.fixture
def other_admin_actor(other_admin):
    return ActorContext.for_admin(other_admin)


@pytest.fixture
def super_actor(super_admin):
    return ActorContext.for_admin(super_admin)


# =============================================================================
# Vacancy & Candidate Fixtures
# =============================================================================

def _vacancy(store, vacancy_id, company_id, title, status=VacancyStatus.ACTIVE, category="Technology"):
    return store.vacancies.insert(Vacancy(
        id=vacancy_id,
        title=title,
        category=category,
        description=f"{title} wanted.",
        requirements=("Python", "Teamwork"),
        location="Remote",
        company_id=company_id,
        status=status,
    ))


@pytest.fixture
def vacancy(store, company):
    return _vacancy(store, "acme_dev", company.id, "Backend Developer")


@pytest.fixture
def inactive_vacancy(store, company):
    return _vacancy(store, "acme_pm", company.id, "Product Manager", status=VacancyStatus.INACTIVE)


@pytest.fixture
def other_vacancy(store, second_company):
    return _vacancy(store, "globex_design", second_company.id, "UI Designer", category="Design")


@pytest.fixture
def candidates(store, vacancy):
    """Two applicants for the Acme vacancy."""
    now = timezone.now()
    rows = []
    for idx, name in enumerate(["Ana Garcia", "Carlos Rodriguez"]):
        rows.append(store.candidates.insert(Candidate(
            id=f"cand_{idx}",
            job_id=vacancy.id,
            full_name=name,
            professional_title="Engineer",
            years_of_experience=5 + idx,
            location="Madrid, Spain",
            email=f"applicant{idx}@mail.test",
            phone="+34 600 000 000",
            cv_file_name=f"cv_{idx}.pdf",
            cv_file_reference=f"cv/{vacancy.id}/x/cv_{idx}.pdf",
            cv_content_type="application/pdf",
            application_date=now - timedelta(days=2 - idx),
        )))
    return rows


# =============================================================================
# Form data helpers
# =============================================================================

@pytest.fixture
def application_data():
    return {
        "full_name": "Sofia Martinez",
        "professional_title": "UX Designer",
        "years_of_experience": 4,
        "location": "Buenos Aires, Argentina",
        "email": "sofia@mail.test",
        "phone": "+54 9 11 1234 5678",
    }


@pytest.fixture
def pdf_file():
    return SimpleUploadedFile("resume.pdf", b"%PDF-1.4 resume", content_type="application/pdf")


@pytest.fixture
def vacancy_data():
    return {
        "title": "Data Engineer",
        "category": "Technology",
        "description": "Build pipelines.",
        "requirements": "Python\nSQL\n\nAirflow",
        "location": "Remote",
        "type": "Full-time",
    }
