"""
Core views for health checks and system status.
"""

import logging

from django.core.cache import cache
from django.db import connection
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

logger = logging.getLogger(__name__)

SERVICE_NAME = "django-blueprint"


def check_database() -> bool:
    """Return True if a trivial query succeeds."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return True
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.warning("Database health check failed: %s", e)
        return False


def check_cache() -> bool:
    """Return True if the cache round-trips a value."""
    try:
        cache.set("health_check", "ok", 10)
        return cache.get("health_check") == "ok"
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.warning("Cache health check failed: %s", e)
        return False


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness endpoint; never touches backing services."""

    def get(self, _request):
        return JsonResponse({"status": "healthy", "service": SERVICE_NAME})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        if check_database():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class HealthCacheView(View):
    """Cache health check endpoint."""

    def get(self, _request):
        if check_cache():
            return JsonResponse({"status": "healthy", "cache": "connected"})
        return JsonResponse({"status": "unhealthy", "cache": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {
            "database": check_database(),
            "cache": check_cache(),
        }

        all_healthy = all(checks.values())
        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
            },
            status=200 if all_healthy else 503,
        )


class MetricsView(View):
    """Prometheus scrape endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
