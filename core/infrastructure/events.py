"""
In-memory event bus implementation.

Suitable for a modular monolith: handlers run in-process when an event
is published. Cross-process fan-out goes through Celery tasks instead.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Handlers for one event run concurrently; a failing handler is logged
    and does not prevent the others from running.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Subscribing the same handler instance twice is a no-op.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def event_types(self) -> List[Type[DomainEvent]]:
        return list(self._handlers)

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            logger.debug("No handlers registered for %s", event_type.__name__)
            return

        logger.info("Publishing %s to %d handler(s)", event_type.__name__, len(handlers))

        tasks = [self._handle_event(handler, event) for handler in handlers]
        await asyncio.gather(*tasks)

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
            logger.debug(
                "Handled %s with %s", event.event_type, handler.__class__.__name__
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )


# Global event bus instance
event_bus = InMemoryEventBus()
