"""
Celery tasks for project-wide housekeeping.
"""
import logging

from django.conf import settings

from DjangoBlueprint.celery import app

from core.conventions import audit_settings
from core.metrics import settings_audit_results_total

logger = logging.getLogger(__name__)


@app.task
def audit_settings_task(environment: str = None) -> dict:
    """
    Audit the running settings and log every warning or failure.

    Args:
        environment: Environment to audit against (defaults to settings.ENVIRONMENT)

    Returns:
        Report as a dict
    """
    report = audit_settings(settings, environment or settings.ENVIRONMENT)

    for result in report.results:
        settings_audit_results_total.labels(severity=str(result.severity)).inc()
        if result.severity.rank > 0:
            logger.warning(
                "Settings audit: %s - %s",
                result.check_id,
                result.message,
                extra={"check_id": result.check_id, "severity": str(result.severity)},
            )

    return report.to_dict()
