"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and cache invalidation.
"""

import logging

from core.domain.events import DomainEvent, EventHandler

logger = logging.getLogger(__name__)

_registered = False


class AuditLogEventHandler(EventHandler):
    """Writes one structured log line per domain event."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class ArticleCacheInvalidationHandler(EventHandler):
    """
    Event handler for cache invalidation.

    Drops the cached public representation of an article whenever its
    publication state changes.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for cache invalidation.

        Args:
            event: Domain event carrying a ``slug`` attribute
        """
        from articles.application.services.article_cache_service import ArticleCacheService

        slug = getattr(event, "slug", None)
        if not slug:
            logger.warning(
                "Event %s has no slug, cannot invalidate cache (aggregate_id: %s)",
                event.event_type,
                event.aggregate_id,
            )
            return

        await ArticleCacheService.invalidate(slug)
        logger.info("Cache invalidated for article %s (event: %s)", slug, event.event_type)


def register_event_handlers(bus=None):
    """
    Register all event handlers with the event bus.

    Safe to call more than once; only the first call against the global
    bus subscribes anything.
    """
    global _registered  # pylint: disable=global-statement

    from articles.domain.events import (
        ArticleArchived,
        ArticleCreated,
        ArticlePublished,
        ArticleScheduled,
    )

    if bus is None:
        from core.infrastructure.events import event_bus

        if _registered:
            return
        bus = event_bus
        _registered = True

    audit_handler = AuditLogEventHandler()
    cache_handler = ArticleCacheInvalidationHandler()

    for event_type in (ArticleCreated, ArticleScheduled, ArticlePublished, ArticleArchived):
        bus.subscribe(event_type, audit_handler)

    for event_type in (ArticlePublished, ArticleArchived):
        bus.subscribe(event_type, cache_handler)

    logger.info("Event handlers registered")
