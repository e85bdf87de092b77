"""
Unit tests for the in-memory event bus and event handlers.
"""
import uuid

import pytest

from articles.application.dto.article_dto import ArticleDTO
from articles.application.services.article_cache_service import ArticleCacheService
from articles.domain.article import Article
from articles.domain.events import ArticleArchived, ArticleCreated, ArticlePublished
from core.infrastructure.event_handlers import (
    ArticleCacheInvalidationHandler,
    AuditLogEventHandler,
    register_event_handlers,
)


class FailingHandler:
    async def handle(self, event):
        raise RuntimeError("boom")


class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_reaches_subscribers(self, event_bus, recorder):
        event_bus.subscribe(ArticlePublished, recorder)
        event = ArticlePublished(article_id=uuid.uuid4(), slug="hello")

        await event_bus.publish(event)

        assert recorder.events == [event]

    async def test_publish_only_matching_type(self, event_bus, recorder):
        event_bus.subscribe(ArticleArchived, recorder)

        await event_bus.publish(ArticlePublished(article_id=uuid.uuid4(), slug="hello"))

        assert recorder.events == []

    async def test_duplicate_subscription_ignored(self, event_bus, recorder):
        event_bus.subscribe(ArticlePublished, recorder)
        event_bus.subscribe(ArticlePublished, recorder)

        await event_bus.publish(ArticlePublished(article_id=uuid.uuid4(), slug="hello"))

        assert len(recorder.events) == 1

    async def test_failing_handler_does_not_block_others(self, event_bus, recorder):
        event_bus.subscribe(ArticlePublished, FailingHandler())
        event_bus.subscribe(ArticlePublished, recorder)

        await event_bus.publish(ArticlePublished(article_id=uuid.uuid4(), slug="hello"))

        assert len(recorder.events) == 1

    async def test_publish_without_subscribers(self, event_bus):
        await event_bus.publish(ArticlePublished(article_id=uuid.uuid4(), slug="hello"))


class TestRegisterEventHandlers:
    """Tests for handler registration."""

    def test_subscriptions(self, event_bus):
        register_event_handlers(event_bus)

        assert [type(h) for h in event_bus.handlers_for(ArticleCreated)] == [AuditLogEventHandler]
        assert [type(h) for h in event_bus.handlers_for(ArticlePublished)] == [
            AuditLogEventHandler,
            ArticleCacheInvalidationHandler,
        ]
        assert ArticleCacheInvalidationHandler in [
            type(h) for h in event_bus.handlers_for(ArticleArchived)
        ]

    def test_event_to_dict(self):
        article_id = uuid.uuid4()
        data = ArticleCreated(article_id=article_id, slug="hello", author_id=7).to_dict()

        assert data["event_type"] == "ArticleCreated"
        assert data["aggregate_id"] == str(article_id)
        assert data["slug"] == "hello"


@pytest.mark.asyncio
class TestArticleCacheInvalidationHandler:
    """Tests for cache invalidation on publication changes."""

    async def test_invalidates_cached_article(self):
        article = Article.create(title="Cached").publish()
        await ArticleCacheService.set(ArticleDTO.from_entity(article))
        assert await ArticleCacheService.get("cached") is not None

        await ArticleCacheInvalidationHandler().handle(
            ArticleArchived(article_id=article.id, slug="cached")
        )

        assert await ArticleCacheService.get("cached") is None
