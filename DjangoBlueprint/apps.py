"""
App configuration for the Django Blueprint project.
"""

import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Commands that never serve requests or run handlers
_SKIP_COMMANDS = ("migrate", "makemigrations", "collectstatic", "check", "scaffold_app")


class DjangoBlueprintConfig(AppConfig):
    """App configuration for DjangoBlueprint."""

    name = "DjangoBlueprint"
    verbose_name = "Django Blueprint"

    def ready(self):
        """Set up tracing and event handlers once apps are loaded."""
        if len(sys.argv) > 1 and sys.argv[1] in _SKIP_COMMANDS:
            return

        # pylint: disable=import-outside-toplevel
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
        logger.debug("Observability and event handlers ready")
