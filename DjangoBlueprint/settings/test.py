"""
Test settings for DjangoBlueprint.
"""

import os

from .base import *  # noqa: F403, F401

ENVIRONMENT = EnvironmentConfig.ENV_TEST  # noqa: F405

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
if os.environ.get("DATABASE_URL", "").startswith(("postgres://", "postgresql://")):
    DATABASES = {"default": EnvironmentConfig.get_database_config()}  # noqa: F405
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Run Celery tasks inline
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Disable logging during tests
LOGGING_CONFIG = None
