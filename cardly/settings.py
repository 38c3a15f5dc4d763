"""
Django settings for the Cardly API.

Values that differ between deployments come from ``CARDLY_*`` environment
variables; the defaults are meant for local development.
"""

import os
from pathlib import Path

from .logconfig import configure_logging

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    return os.environ.get(name, str(default)).lower() in ("1", "true", "yes", "on")


ENVIRONMENT = os.environ.get("CARDLY_ENVIRONMENT", "development")

SECRET_KEY = os.environ.get("CARDLY_SECRET_KEY", "django-insecure-cardly-dev-only")

DEBUG = env_bool("CARDLY_DEBUG", ENVIRONMENT == "development")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("CARDLY_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "accounts",
    "scheduler",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "accounts.middleware.MockLoginUserMiddleware",
]

ROOT_URLCONF = "cardly.urls"

WSGI_APPLICATION = "cardly.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("CARDLY_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

AUTH_USER_MODEL = "accounts.User"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"

# Everything is stored and compared in UTC
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "accounts.authentication.MockLoginAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "UNAUTHENTICATED_USER": "django.contrib.auth.models.AnonymousUser",
}

configure_logging(ENVIRONMENT)
