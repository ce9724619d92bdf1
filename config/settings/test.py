# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Tests opt into the DB backend explicitly (see dental_core/common/tests)
DENTALTRACK_STORAGE_BACKEND = "memory"

LOGGING["loggers"]["dental_core"]["level"] = "WARNING"  # noqa: F405
# Let pytest's caplog (root handler) see application records
LOGGING["loggers"]["dental_core"]["propagate"] = True  # noqa: F405
LOGGING["loggers"]["dental_core"]["handlers"] = []  # noqa: F405
