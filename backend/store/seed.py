# store/seed.py
"""
Demo data set for a fresh store.

Three tenant companies, three tenant admins (one of them blocked), one
super admin, four vacancies (one inactive) and three applicants.
Passwords are hashed on load; the demo credentials are:

    alice@techsolutions.com / password123
    bob@innovate.com        / password123
    super@admin.com         / superadmin
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.utils import timezone

from accounts.models import AccountStatus, Admin, AdminRole, Company
from recruiting.models import Candidate, EmploymentType, Vacancy, VacancyStatus
from store.memory import EntityStore


logger = logging.getLogger(__name__)


DEMO_COMPANIES = [
    {"id": "comp1", "name": "Tech Solutions Inc."},
    {"id": "comp2", "name": "Innovate Creations"},
    {"id": "comp3", "name": "Marketing Masters"},
]

DEMO_ADMINS = [
    {
        "id": "admin1", "name": "Alice Johnson", "email": "alice@techsolutions.com",
        "phone": "111-222-3333", "company_id": "comp1", "password": "password123",
    },
    {
        "id": "admin2", "name": "Bob Williams", "email": "bob@innovate.com",
        "phone": "444-555-6666", "company_id": "comp2", "password": "password123",
    },
    {
        "id": "admin3", "name": "Charlie Brown", "email": "charlie@techsolutions.com",
        "phone": "111-222-4444", "company_id": "comp1", "password": "password123",
        "status": AccountStatus.BLOCKED,
    },
]

DEMO_SUPER_ADMIN = {
    "id": "super1", "name": "Super Admin", "email": "super@admin.com",
    "phone": "777-888-9999", "password": "superadmin",
}

DEMO_VACANCIES = [
    {
        "id": "1",
        "title": "Senior Software Engineer (React)",
        "category": "Technology",
        "description": (
            "We are looking for an experienced React developer to join our frontend team. "
            "You will build complex, high-performance user interfaces."
        ),
        "requirements": (
            "5+ years of experience with React",
            "TypeScript",
            "State management (Redux/Zustand)",
            "Unit testing",
        ),
        "location": "Remote",
        "type": EmploymentType.FULL_TIME,
        "status": VacancyStatus.ACTIVE,
        "company_id": "comp1",
    },
    {
        "id": "2",
        "title": "UI/UX Designer",
        "category": "Design",
        "description": (
            "We are looking for a creative UI/UX designer to design intuitive, "
            "attractive interfaces for our web and mobile applications."
        ),
        "requirements": (
            "Solid portfolio of design projects",
            "Experience with Figma/Sketch",
            "Understanding of user-centered design principles",
        ),
        "location": "Mexico City",
        "type": EmploymentType.FULL_TIME,
        "status": VacancyStatus.ACTIVE,
        "company_id": "comp2",
    },
    {
        "id": "3",
        "title": "Product Manager",
        "category": "Product",
        "description": (
            "We are hiring a Product Manager to lead the strategy and roadmap "
            "of one of our core products."
        ),
        "requirements": (
            "Previous experience as a Product Manager",
            "Strong communication skills",
            "Experience with agile methodologies",
        ),
        "location": "Remote",
        "type": EmploymentType.CONTRACT,
        "status": VacancyStatus.INACTIVE,
        "company_id": "comp1",
    },
    {
        "id": "4",
        "title": "Digital Marketing Specialist",
        "category": "Marketing",
        "description": "We are looking for a marketing specialist for our new campaign.",
        "requirements": ("SEO", "SEM", "Social media"),
        "location": "Remote",
        "type": EmploymentType.FULL_TIME,
        "status": VacancyStatus.ACTIVE,
        "company_id": "comp3",
    },
]

# (id, job_id, full_name, title, years, location, email, phone, cv name, days ago)
DEMO_CANDIDATES = [
    ("c1", "1", "Ana Garcia", "Frontend Developer", 6, "Madrid, Spain",
     "ana.garcia@email.com", "+34 123 456 789", "Ana_Garcia_CV.pdf", 2),
    ("c2", "1", "Carlos Rodriguez", "Software Engineer", 8, "Bogota, Colombia",
     "carlos.r@email.com", "+57 310 123 4567", "Carlos_Rodriguez_Resume.docx", 1),
    ("c3", "2", "Sofia Martinez", "User Experience Designer", 4, "Buenos Aires, Argentina",
     "sofia.m@email.com", "+54 9 11 1234 5678", "SofiaMartinez_Portfolio_CV.pdf", 0),
]

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def seed_demo_data(store: EntityStore) -> EntityStore:
    """Load the demo data set into an empty store."""
    now = timezone.now()

    for row in DEMO_COMPANIES:
        store.companies.insert(Company(**row))

    for row in DEMO_ADMINS:
        row = dict(row)
        password = row.pop("password")
        store.admins.insert(Admin(role=AdminRole.ADMIN, password=make_password(password), **row))

    row = dict(DEMO_SUPER_ADMIN)
    password = row.pop("password")
    store.admins.insert(Admin(
        company_id=settings.GLOBAL_COMPANY_ID,
        role=AdminRole.SUPER_ADMIN,
        password=make_password(password),
        **row,
    ))

    for row in DEMO_VACANCIES:
        store.vacancies.insert(Vacancy(**row))

    for (cid, job_id, full_name, title, years, location, email, phone, cv_name, days_ago) in DEMO_CANDIDATES:
        extension = cv_name[cv_name.rfind("."):].lower()
        store.candidates.insert(Candidate(
            id=cid,
            job_id=job_id,
            full_name=full_name,
            professional_title=title,
            years_of_experience=years,
            location=location,
            email=email,
            phone=phone,
            cv_file_name=cv_name,
            cv_file_reference=f"cv/{job_id}/seed/{cv_name}",
            cv_content_type=_CONTENT_TYPES.get(extension, ""),
            application_date=now - timedelta(days=days_ago),
        ))

    logger.info("Demo data loaded", extra=store.stats())
    return store


def build_store(seed=None) -> EntityStore:
    """
    Create a new EntityStore.

    Args:
        seed: Load the demo data set. Defaults to settings.SEED_DEMO_DATA.
    """
    if seed is None:
        seed = settings.SEED_DEMO_DATA
    store = EntityStore()
    if seed:
        seed_demo_data(store)
    return store
