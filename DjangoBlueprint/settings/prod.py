"""
Production settings for DjangoBlueprint.

Loading this module means production, whatever DJANGO_ENV says.
Run ``manage.py audit_settings`` against this module before deploying.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

ENVIRONMENT = EnvironmentConfig.ENV_PRODUCTION  # noqa: F405

# Required from the environment; raises ImproperlyConfigured when missing
SECRET_KEY = EnvironmentConfig.get_secret_key({**os.environ, "DJANGO_ENV": ENVIRONMENT})  # noqa: F405

DEBUG = False

ALLOWED_HOSTS = EnvironmentConfig.get_list("ALLOWED_HOSTS", [])  # noqa: F405

# Security settings
SECURE_SSL_REDIRECT = EnvironmentConfig.get_bool("SECURE_SSL_REDIRECT", True)  # noqa: F405
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_HSTS_SECONDS = EnvironmentConfig.get_int("SECURE_HSTS_SECONDS", 31536000)  # noqa: F405
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Logging in production: stdout plus an optional rotating file
LOGGING = get_logging_config(
    ENVIRONMENT,
    log_file=EnvironmentConfig.get_env("LOG_FILE"),  # noqa: F405
)
