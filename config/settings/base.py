# config/settings/base.py
from pathlib import Path
import os
from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parent.parent.parent  # repo root
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "unsafe-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    # Django
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",

    # Third-party
    "corsheaders",
    "rest_framework",
    "drf_spectacular",

    # Domain apps (modular monolith)
    "dental_core.common.apps.CommonConfig",
    "dental_core.store.apps.StoreConfig",
    "dental_core.iam.apps.IamConfig",
    "dental_core.patients.apps.PatientsConfig",
    "dental_core.procedures.apps.ProceduresConfig",
    "dental_core.treatments.apps.TreatmentsConfig",
    "dental_core.billing.apps.BillingConfig",
    "dental_core.reports.apps.ReportsConfig",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",

    # Attaches request.clinic_state for API requests
    "dental_core.store.middleware.ClinicStateMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    }
]

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DB_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

LANGUAGE_CODE = "pt-br"
TIME_ZONE = "America/Sao_Paulo"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    # The demo login marker is the only "authentication" (see dental_core.iam.auth)
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "dental_core.iam.auth.DemoSessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "dental_core.iam.permissions.HasDemoSession",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",

    # Standard error envelope
    "EXCEPTION_HANDLER": "dental_core.common.api.exceptions.api_exception_handler",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "DentalTrack API",
    "DESCRIPTION": "Clinic state layer: patients, procedure templates, treatments, staff, billing",
    "VERSION": "0.1.0",
    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATIONS": True,
}

# CORS: the SPA is served from another origin during development
CORS_ALLOW_ALL_ORIGINS = True
CORS_ALLOW_CREDENTIALS = True

# -------------------------------------------------------------------
# DentalTrack state layer
# -------------------------------------------------------------------

# "db" -> common_storage_slot table, "memory" -> process-local dict
DENTALTRACK_STORAGE_BACKEND = os.getenv("DENTALTRACK_STORAGE_BACKEND", "db")
DENTALTRACK_STORAGE_KEY_PREFIX = "dentaltrack_"

# Slot (under the prefix) that holds the logged-in user marker
DENTALTRACK_SESSION_SLOT = "user"

# Demo gate only. Not a security boundary.
DENTALTRACK_DEMO_CREDENTIALS = {
    "email": os.getenv("DENTALTRACK_DEMO_EMAIL", "admin@dentaltrack.com"),
    "password": os.getenv("DENTALTRACK_DEMO_PASSWORD", "admin"),
    "name": "Dr. Carlos Silva",
    "role": "admin",
}

DENTALTRACK_CURRENCY = "R$"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "dental_core": {
            "handlers": ["console"],
            "level": "DEBUG" if DEBUG else LOG_LEVEL,
            "propagate": False,
        },
    },
}
