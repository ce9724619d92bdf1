# config/settings/prod.py
import os

from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "dentaltrack"),
        "USER": os.getenv("DB_USER", "dentaltrack"),
        "PASSWORD": os.getenv("DB_PASSWORD", "dentaltrack"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "https://app.dentaltrack.com").split(",")
    if origin.strip()
]
CORS_ALLOW_CREDENTIALS = True
