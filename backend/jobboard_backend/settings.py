import os
import sys
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.environ.get("SECRET_KEY", os.environ.get("DJANGO_SECRET_KEY", "changeme"))
DEBUG = os.getenv("DEBUG", os.getenv("DJANGO_DEBUG", "True")) == "True"

# Include Django's manage.py test invocation.
TESTING = (
    "PYTEST_CURRENT_TEST" in os.environ
    or "pytest" in sys.modules
    or "test" in sys.argv
)

INSTALLED_APPS = [
    "rest_framework",
    "ops.apps.OpsConfig",
    "store.apps.StoreConfig",  # In-memory entity store + seed command
    "tenant.apps.TenantConfig",
    "accounts.apps.AccountsConfig",
    "recruiting.apps.RecruitingConfig",
    "events.apps.EventsConfig",
    "access.apps.AccessConfig",
]

# The job board core keeps its state in an in-process EntityStore.
# No database is configured.
DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# =============================================================================
# Credentials
# =============================================================================
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher",
]
if TESTING:
    # Fast hashing for the test suite only
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 8},
    },
]

# Password applied by the super admin "reset password" action
DEFAULT_RESET_PASSWORD = os.getenv("DEFAULT_RESET_PASSWORD", "password123")

# Reject a second admin account with the same (case-insensitive) email
ENFORCE_UNIQUE_ADMIN_EMAIL = os.getenv("ENFORCE_UNIQUE_ADMIN_EMAIL", "True") == "True"

# Sentinel company id for super admins; never stored as a Company
GLOBAL_COMPANY_ID = os.getenv("GLOBAL_COMPANY_ID", "corp0")
# Shown as the company of super admin records
GLOBAL_COMPANY_NAME = os.getenv("GLOBAL_COMPANY_NAME", "Global Corp")

# =============================================================================
# Applications (CV uploads)
# =============================================================================
CV_ALLOWED_CONTENT_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
)
CV_MAX_UPLOAD_SIZE = int(os.getenv("CV_MAX_UPLOAD_SIZE", str(10 * 1024 * 1024)))

# Load the demo tenants/vacancies into a freshly built store
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "True") == "True"

# =============================================================================
# Email Configuration
# =============================================================================
EMAIL_BACKEND = os.getenv(
    "EMAIL_BACKEND",
    "django.core.mail.backends.console.EmailBackend"  # Console output for dev
)
EMAIL_HOST = os.getenv("EMAIL_HOST", "")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "True") == "True"
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")

DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "Job Board <no-reply@jobboard.local>")

# Frontend URL for email links
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# =============================================================================
# Structured Logging Configuration
# =============================================================================
from ops.logging_config import get_logging_config
LOGGING = get_logging_config(DEBUG)
