"""
Django management command to register event handlers.

Handlers are registered in AppConfig.ready(); this command lists the
resulting subscriptions.
"""
from django.core.management.base import BaseCommand

from core.infrastructure.event_handlers import register_event_handlers
from core.infrastructure.events import event_bus


class Command(BaseCommand):
    """Command to register event handlers."""

    help = "Register event handlers with the event bus and list subscriptions"

    def handle(self, *args, **options):
        """Execute the command."""
        register_event_handlers()
        for event_type in sorted(event_bus.event_types(), key=lambda t: t.__name__):
            handlers = ", ".join(type(h).__name__ for h in event_bus.handlers_for(event_type))
            self.stdout.write(f"  {event_type.__name__}: {handlers}")
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Event handlers registered successfully"))
