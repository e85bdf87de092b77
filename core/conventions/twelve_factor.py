"""
Settings audit against the Twelve-Factor and deployment checklist.

Every check reads the settings object through ``getattr`` so it works on
``django.conf.settings`` as well as on any plain object (handy in tests).
A check returns ``(severity, message)`` or ``None`` when it does not
apply to the environment being audited.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from core.domain.exceptions import SettingsAuditError
from core.domain.value_objects import AuditSeverity

logger = logging.getLogger(__name__)

PRODUCTION = "production"
DEVELOPMENT = "development"
TEST = "test"

_ENVIRONMENT_ALIASES = {
    "production": PRODUCTION,
    "prod": PRODUCTION,
    "development": DEVELOPMENT,
    "dev": DEVELOPMENT,
    "test": TEST,
}

MIN_SECRET_KEY_LENGTH = 50


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one audit check."""

    check_id: str
    factor: str
    severity: AuditSeverity
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "check_id": self.check_id,
            "factor": self.factor,
            "severity": str(self.severity),
            "message": self.message,
        }


@dataclass
class AuditReport:
    """All check results for one environment."""

    environment: str
    results: List[CheckResult] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        counts = {str(severity): 0 for severity in AuditSeverity}
        for result in self.results:
            counts[str(result.severity)] += 1
        return counts

    def failures(self, fail_level: AuditSeverity = AuditSeverity.FAIL) -> List[CheckResult]:
        """Results at or above ``fail_level``."""
        return [r for r in self.results if r.severity.rank >= fail_level.rank]

    def passed(self, fail_level: AuditSeverity = AuditSeverity.FAIL) -> bool:
        return not self.failures(fail_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "counts": self.counts(),
            "results": [r.to_dict() for r in self.results],
        }


@dataclass(frozen=True)
class AuditContext:
    environment: str
    environ: Mapping[str, str]

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION


CheckFunc = Callable[[Any, AuditContext], Optional[Tuple[AuditSeverity, str]]]

_CHECKS: List[Tuple[str, str, CheckFunc]] = []


def check(check_id: str, factor: str):
    """Register a check function."""

    def decorator(func: CheckFunc) -> CheckFunc:
        _CHECKS.append((check_id, factor, func))
        return func

    return decorator


def registered_checks() -> List[str]:
    return [check_id for check_id, _, _ in _CHECKS]


def _setting(settings_obj, name: str, default=None):
    return getattr(settings_obj, name, default)


# III. Config


@check("config.secret_key", "III. Config")
def check_secret_key(settings_obj, ctx: AuditContext):
    key = _setting(settings_obj, "SECRET_KEY", "") or ""
    if not key:
        return AuditSeverity.FAIL, "SECRET_KEY is empty"
    if key.startswith("django-insecure"):
        severity = AuditSeverity.FAIL if ctx.is_production else AuditSeverity.WARN
        return severity, "SECRET_KEY is a generated development key"
    if len(key) < MIN_SECRET_KEY_LENGTH:
        return AuditSeverity.WARN, f"SECRET_KEY is shorter than {MIN_SECRET_KEY_LENGTH} characters"
    return AuditSeverity.PASS, "SECRET_KEY looks strong"


@check("config.secret_from_env", "III. Config")
def check_secret_from_env(settings_obj, ctx: AuditContext):
    key = _setting(settings_obj, "SECRET_KEY", "")
    env_values = {ctx.environ.get("DJANGO_SECRET_KEY"), ctx.environ.get("SECRET_KEY")}
    if key and key in env_values:
        return AuditSeverity.PASS, "SECRET_KEY is supplied by the environment"
    return AuditSeverity.WARN, "SECRET_KEY is not read from DJANGO_SECRET_KEY / SECRET_KEY"


@check("config.debug", "III. Config")
def check_debug(settings_obj, ctx: AuditContext):
    if not ctx.is_production:
        return None
    if _setting(settings_obj, "DEBUG", False):
        return AuditSeverity.FAIL, "DEBUG is enabled"
    return AuditSeverity.PASS, "DEBUG is disabled"


@check("config.allowed_hosts", "III. Config")
def check_allowed_hosts(settings_obj, ctx: AuditContext):
    if not ctx.is_production:
        return None
    hosts = [h for h in (_setting(settings_obj, "ALLOWED_HOSTS", []) or []) if h]
    if not hosts:
        return AuditSeverity.FAIL, "ALLOWED_HOSTS is empty"
    if "*" in hosts:
        return AuditSeverity.FAIL, "ALLOWED_HOSTS accepts any host"
    return AuditSeverity.PASS, f"ALLOWED_HOSTS restricted to {len(hosts)} host(s)"


# IV. Backing services


@check("backing.database", "IV. Backing services")
def check_database(settings_obj, ctx: AuditContext):
    databases = _setting(settings_obj, "DATABASES", {}) or {}
    default = databases.get("default")
    if not default:
        return AuditSeverity.FAIL, "No default database configured"
    engine = default.get("ENGINE", "")
    if engine.endswith("sqlite3"):
        if ctx.is_production:
            return AuditSeverity.FAIL, "SQLite is not a backing service"
        return AuditSeverity.PASS, "SQLite is fine outside production"
    if not default.get("HOST"):
        return AuditSeverity.WARN, "Database HOST is empty; connection falls back to local socket"
    return AuditSeverity.PASS, f"Database attached at {default.get('HOST')}"


@check("backing.cache", "IV. Backing services")
def check_cache(settings_obj, ctx: AuditContext):
    caches = _setting(settings_obj, "CACHES", {}) or {}
    backend = (caches.get("default") or {}).get("BACKEND", "django.core.cache.backends.locmem.LocMemCache")
    if ctx.is_production and ("locmem" in backend or "dummy" in backend):
        return AuditSeverity.WARN, "Cache is process-local; use a shared backend"
    return AuditSeverity.PASS, f"Cache backend {backend.rsplit('.', 1)[-1]}"


@check("backing.broker", "IV. Backing services")
def check_broker(settings_obj, ctx: AuditContext):
    broker = _setting(settings_obj, "CELERY_BROKER_URL", "")
    if not broker:
        return AuditSeverity.WARN, "CELERY_BROKER_URL is not set"
    return AuditSeverity.PASS, "Celery broker configured"


# V. Build, release, run


@check("build.static_root", "V. Build, release, run")
def check_static_root(settings_obj, ctx: AuditContext):
    if not _setting(settings_obj, "STATIC_ROOT", None):
        return AuditSeverity.WARN, "STATIC_ROOT is not set; collectstatic has nowhere to write"
    return AuditSeverity.PASS, "STATIC_ROOT is set"


# XI. Logs


@check("logs.stream", "XI. Logs")
def check_log_stream(settings_obj, ctx: AuditContext):
    if _setting(settings_obj, "LOGGING_CONFIG", "logging.config.dictConfig") is None:
        return AuditSeverity.WARN, "Logging configuration is disabled"
    logging_config = _setting(settings_obj, "LOGGING", {}) or {}
    root = logging_config.get("root") or (logging_config.get("loggers") or {}).get("", {})
    handlers = logging_config.get("handlers") or {}
    for name in root.get("handlers", []):
        handler_class = (handlers.get(name) or {}).get("class", "")
        if handler_class.endswith("StreamHandler"):
            return AuditSeverity.PASS, "Root logger writes to a stream"
    return AuditSeverity.WARN, "Root logger has no stream handler; treat logs as event streams"


# Security


@check("security.ssl_redirect", "Security")
def check_ssl_redirect(settings_obj, ctx: AuditContext):
    if not ctx.is_production:
        return None
    if _setting(settings_obj, "SECURE_SSL_REDIRECT", False):
        return AuditSeverity.PASS, "HTTP is redirected to HTTPS"
    return AuditSeverity.FAIL, "SECURE_SSL_REDIRECT is off"


@check("security.session_cookie", "Security")
def check_session_cookie(settings_obj, ctx: AuditContext):
    if not ctx.is_production:
        return None
    if _setting(settings_obj, "SESSION_COOKIE_SECURE", False):
        return AuditSeverity.PASS, "Session cookie is HTTPS-only"
    return AuditSeverity.FAIL, "SESSION_COOKIE_SECURE is off"


@check("security.csrf_cookie", "Security")
def check_csrf_cookie(settings_obj, ctx: AuditContext):
    if not ctx.is_production:
        return None
    if _setting(settings_obj, "CSRF_COOKIE_SECURE", False):
        return AuditSeverity.PASS, "CSRF cookie is HTTPS-only"
    return AuditSeverity.FAIL, "CSRF_COOKIE_SECURE is off"


@check("security.hsts", "Security")
def check_hsts(settings_obj, ctx: AuditContext):
    if not ctx.is_production:
        return None
    seconds = _setting(settings_obj, "SECURE_HSTS_SECONDS", 0) or 0
    if seconds > 0:
        return AuditSeverity.PASS, f"HSTS enabled for {seconds}s"
    return AuditSeverity.WARN, "SECURE_HSTS_SECONDS is 0"


def normalize_environment(environment: str) -> str:
    try:
        return _ENVIRONMENT_ALIASES[environment.strip().lower()]
    except (KeyError, AttributeError) as exc:
        raise SettingsAuditError(
            f"Unknown environment {environment!r}; expected one of "
            + ", ".join(sorted(set(_ENVIRONMENT_ALIASES.values())))
        ) from exc


def audit_settings(
    settings_obj,
    environment: str = PRODUCTION,
    environ: Optional[Mapping[str, str]] = None,
) -> AuditReport:
    """
    Run every registered check against ``settings_obj``.

    Args:
        settings_obj: django.conf.settings or any attribute bag
        environment: production, development or test (aliases prod/dev accepted)
        environ: Environment variables to consult (defaults to os.environ)

    Returns:
        AuditReport with one result per applicable check
    """
    ctx = AuditContext(
        environment=normalize_environment(environment),
        environ=os.environ if environ is None else environ,
    )
    report = AuditReport(environment=ctx.environment)

    for check_id, factor, func in _CHECKS:
        outcome = func(settings_obj, ctx)
        if outcome is None:
            continue
        severity, message = outcome
        report.results.append(CheckResult(check_id, factor, severity, message))

    logger.info(
        "Settings audit finished",
        extra={"environment": ctx.environment, **{f"audit_{k}": v for k, v in report.counts().items()}},
    )
    return report
