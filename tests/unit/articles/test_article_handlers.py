"""
Unit tests for article application handlers.

Handlers run against an in-memory repository and an isolated event bus.
"""
import dataclasses
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from articles.application.commands.archive_article import ArchiveArticleCommand
from articles.application.commands.create_article import CreateArticleCommand
from articles.application.commands.publish_article import PublishArticleCommand
from articles.application.commands.publish_due_articles import PublishDueArticlesCommand
from articles.application.commands.schedule_article import ScheduleArticleCommand
from articles.application.handlers.article_lifecycle_handlers import (
    ArchiveArticleHandler,
    PublishArticleHandler,
    ScheduleArticleHandler,
)
from articles.application.handlers.create_article_handler import CreateArticleHandler
from articles.application.handlers.get_published_article_handler import (
    GetPublishedArticleHandler,
)
from articles.application.handlers.publish_due_articles_handler import PublishDueArticlesHandler
from articles.application.queries.get_published_article import GetPublishedArticleQuery
from articles.application.services.article_cache_service import ArticleCacheService
from articles.domain.article import Article
from articles.domain.events import (
    ArticleArchived,
    ArticleCreated,
    ArticlePublished,
    ArticleScheduled,
)
from core.domain.exceptions import (
    ArticleNotFoundError,
    DuplicateSlugError,
    InvalidArticleError,
    InvalidArticleTransitionError,
)
from core.domain.value_objects import ArticleStatus


def make_due(article: Article, overdue: timedelta = timedelta(minutes=10)) -> Article:
    """A scheduled copy of ``article`` whose publish_at has already passed."""
    publish_at = datetime.now(timezone.utc) - overdue
    return dataclasses.replace(article, status=ArticleStatus.SCHEDULED, publish_at=publish_at)


@pytest.mark.asyncio
class TestCreateArticleHandler:
    """Tests for CreateArticleHandler."""

    async def test_create_article(self, memory_repository, event_bus, recorder):
        event_bus.subscribe(ArticleCreated, recorder)
        handler = CreateArticleHandler(memory_repository, event_bus=event_bus)

        article = await handler.handle(
            CreateArticleCommand(title="Hello World", body="Hi", author_id=1, tags=["News"])
        )

        assert article.status == ArticleStatus.DRAFT
        assert str(article.slug) == "hello-world"
        assert article.tags == ("news",)
        assert await memory_repository.find_by_id(article.id) == article
        assert len(recorder.events) == 1
        assert recorder.events[0].slug == "hello-world"
        assert recorder.events[0].author_id == 1

    async def test_duplicate_slug(self, memory_repository, event_bus):
        handler = CreateArticleHandler(memory_repository, event_bus=event_bus)
        await handler.handle(CreateArticleCommand(title="Hello World"))

        with pytest.raises(DuplicateSlugError):
            await handler.handle(CreateArticleCommand(title="Another", slug="hello-world"))

    async def test_invalid_title(self, memory_repository, event_bus):
        handler = CreateArticleHandler(memory_repository, event_bus=event_bus)

        with pytest.raises(InvalidArticleError):
            await handler.handle(CreateArticleCommand(title=""))

    async def test_invalid_slug(self, memory_repository, event_bus):
        handler = CreateArticleHandler(memory_repository, event_bus=event_bus)

        with pytest.raises(InvalidArticleError, match="Invalid slug format"):
            await handler.handle(CreateArticleCommand(title="Hello", slug="Not A Slug"))


@pytest.mark.asyncio
class TestLifecycleHandlers:
    """Tests for schedule / publish / archive handlers."""

    async def test_schedule(self, memory_repository, event_bus, recorder, sample_article):
        await memory_repository.save(sample_article)
        event_bus.subscribe(ArticleScheduled, recorder)
        publish_at = datetime.now(timezone.utc) + timedelta(days=1)

        result = await ScheduleArticleHandler(memory_repository, event_bus=event_bus).handle(
            ScheduleArticleCommand(article_id=sample_article.id, publish_at=publish_at)
        )

        assert result.status == ArticleStatus.SCHEDULED
        assert (await memory_repository.find_by_id(sample_article.id)).publish_at == publish_at
        assert recorder.events[0].publish_at == publish_at

    async def test_publish(self, memory_repository, event_bus, recorder, sample_article):
        await memory_repository.save(sample_article)
        event_bus.subscribe(ArticlePublished, recorder)

        result = await PublishArticleHandler(memory_repository, event_bus=event_bus).handle(
            PublishArticleCommand(article_id=sample_article.id)
        )

        assert result.status == ArticleStatus.PUBLISHED
        assert result.published_at is not None
        assert [e.slug for e in recorder.events] == ["hello-world"]

    async def test_archive(self, memory_repository, event_bus, recorder, sample_article):
        await memory_repository.save(sample_article.publish())
        event_bus.subscribe(ArticleArchived, recorder)

        result = await ArchiveArticleHandler(memory_repository, event_bus=event_bus).handle(
            ArchiveArticleCommand(article_id=sample_article.id)
        )

        assert result.status == ArticleStatus.ARCHIVED
        assert len(recorder.events) == 1

    async def test_archive_draft_rejected(self, memory_repository, event_bus, recorder, sample_article):
        await memory_repository.save(sample_article)
        event_bus.subscribe(ArticleArchived, recorder)

        with pytest.raises(InvalidArticleTransitionError):
            await ArchiveArticleHandler(memory_repository, event_bus=event_bus).handle(
                ArchiveArticleCommand(article_id=sample_article.id)
            )

        assert (await memory_repository.find_by_id(sample_article.id)).status == ArticleStatus.DRAFT
        assert recorder.events == []

    async def test_article_not_found(self, memory_repository, event_bus):
        with pytest.raises(ArticleNotFoundError):
            await PublishArticleHandler(memory_repository, event_bus=event_bus).handle(
                PublishArticleCommand(article_id=uuid.uuid4())
            )


@pytest.mark.asyncio
class TestPublishDueArticlesHandler:
    """Tests for PublishDueArticlesHandler."""

    async def test_publishes_due_articles(self, memory_repository, event_bus, recorder):
        due = make_due(Article.create(title="Due"))
        later = Article.create(title="Later").schedule(datetime.now(timezone.utc) + timedelta(days=1))
        draft = Article.create(title="Draft")
        for article in (due, later, draft):
            await memory_repository.save(article)
        event_bus.subscribe(ArticlePublished, recorder)

        result = await PublishDueArticlesHandler(memory_repository, event_bus=event_bus).handle(
            PublishDueArticlesCommand()
        )

        assert (result.due, result.published, result.failed) == (1, 1, 0)
        assert result.slugs == ["due"]
        published = await memory_repository.find_by_id(due.id)
        assert published.status == ArticleStatus.PUBLISHED
        assert published.published_at == due.publish_at
        assert (await memory_repository.find_by_id(later.id)).status == ArticleStatus.SCHEDULED
        assert [e.slug for e in recorder.events] == ["due"]

    async def test_dry_run(self, memory_repository, event_bus):
        due = make_due(Article.create(title="Due"))
        await memory_repository.save(due)

        result = await PublishDueArticlesHandler(memory_repository, event_bus=event_bus).handle(
            PublishDueArticlesCommand(dry_run=True)
        )

        assert (result.due, result.published) == (1, 0)
        assert result.slugs == ["due"]
        assert (await memory_repository.find_by_id(due.id)).status == ArticleStatus.SCHEDULED

    async def test_failure_does_not_stop_run(self, memory_repository, event_bus):
        first = make_due(Article.create(title="First"), overdue=timedelta(hours=2))
        second = make_due(Article.create(title="Second"), overdue=timedelta(hours=1))
        await memory_repository.save(first)
        await memory_repository.save(second)

        original_save = memory_repository.save

        async def flaky_save(article):
            if article.id == first.id:
                raise RuntimeError("database unavailable")
            return await original_save(article)

        memory_repository.save = flaky_save

        result = await PublishDueArticlesHandler(memory_repository, event_bus=event_bus).handle(
            PublishDueArticlesCommand()
        )

        assert (result.due, result.published, result.failed) == (2, 1, 1)
        assert result.slugs == ["second"]

    async def test_nothing_due(self, memory_repository, event_bus):
        result = await PublishDueArticlesHandler(memory_repository, event_bus=event_bus).handle(
            PublishDueArticlesCommand()
        )
        assert (result.due, result.published, result.failed) == (0, 0, 0)


@pytest.mark.asyncio
class TestGetPublishedArticleHandler:
    """Tests for the read-through cached query."""

    async def test_reads_and_caches(self, memory_repository, sample_article):
        published = await memory_repository.save(sample_article.publish())
        handler = GetPublishedArticleHandler(memory_repository)

        dto = await handler.handle(GetPublishedArticleQuery(slug="hello-world"))

        assert dto.id == published.id
        assert dto.status == "published"
        assert dto.tags == ["django", "python"]
        assert await ArticleCacheService.get("hello-world") == dto

    async def test_served_from_cache(self, memory_repository, sample_article):
        await memory_repository.save(sample_article.publish())
        handler = GetPublishedArticleHandler(memory_repository)
        await handler.handle(GetPublishedArticleQuery(slug="hello-world"))

        await memory_repository.delete(sample_article.id)
        dto = await handler.handle(GetPublishedArticleQuery(slug="hello-world"))

        assert dto.slug == "hello-world"

    async def test_draft_is_not_found(self, memory_repository, sample_article):
        await memory_repository.save(sample_article)

        with pytest.raises(ArticleNotFoundError):
            await GetPublishedArticleHandler(memory_repository).handle(
                GetPublishedArticleQuery(slug="hello-world")
            )

    async def test_missing_is_not_found(self, memory_repository):
        with pytest.raises(ArticleNotFoundError):
            await GetPublishedArticleHandler(memory_repository).handle(
                GetPublishedArticleQuery(slug="nope")
            )
