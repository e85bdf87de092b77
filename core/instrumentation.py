"""
OpenTelemetry instrumentation setup.

Configures distributed tracing.
Until ``setup_opentelemetry`` runs, the OpenTelemetry API hands out
no-op tracers, so ``get_tracer`` is always safe to call.
"""

import logging

from django.conf import settings
from opentelemetry import trace

from core.config import EnvironmentConfig

logger = logging.getLogger(__name__)

_configured = False


def setup_opentelemetry():
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing (exported via OTLP)
    - Auto-instrumentation for Django, PostgreSQL, Redis

    Does nothing unless ``OTEL_ENABLED`` is true.
    """
    global _configured  # pylint: disable=global-statement

    if _configured:
        return
    if not EnvironmentConfig.get_bool("OTEL_ENABLED", False):
        logger.info("OpenTelemetry disabled (set OTEL_ENABLED=true to enable)")
        return

    # pylint: disable=import-outside-toplevel
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.django import DjangoInstrumentor
    from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
    from opentelemetry.instrumentation.redis import RedisInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    resource = Resource.create(
        {
            "service.name": EnvironmentConfig.get_env("OTEL_SERVICE_NAME", "django-blueprint"),
            "service.version": EnvironmentConfig.get_env("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": settings.ENVIRONMENT,
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_endpoint = EnvironmentConfig.get_env("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
    otlp_exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint,
        insecure=EnvironmentConfig.get_bool("OTEL_EXPORTER_OTLP_INSECURE", True),
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()
    RedisInstrumentor().instrument()

    _configured = True
    logger.info("OpenTelemetry instrumentation configured", extra={"endpoint": otlp_endpoint})


def get_tracer(name: str):
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
