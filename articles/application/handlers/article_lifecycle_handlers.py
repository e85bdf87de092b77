"""
Article lifecycle handlers.

Handlers for schedule, publish, and archive commands.
"""
import logging
import uuid

from articles.application.commands.archive_article import ArchiveArticleCommand
from articles.application.commands.publish_article import PublishArticleCommand
from articles.application.commands.schedule_article import ScheduleArticleCommand
from articles.domain.article import Article
from articles.domain.events import ArticleArchived, ArticlePublished, ArticleScheduled
from articles.ports.article_repository import ArticleRepository
from core.domain.exceptions import ArticleNotFoundError
from core.infrastructure.events import event_bus as default_event_bus
from core.instrumentation import get_tracer
from core.metrics import article_transitions_total

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class _ArticleLifecycleHandler:
    """Shared load / save plumbing for lifecycle handlers."""

    def __init__(self, article_repository: ArticleRepository, event_bus=None):
        """Initialize handler with repository."""
        self.article_repository = article_repository
        self.event_bus = event_bus or default_event_bus

    async def _load(self, article_id: uuid.UUID) -> Article:
        article = await self.article_repository.find_by_id(article_id)
        if not article:
            raise ArticleNotFoundError(f"Article {article_id} not found")
        return article

    async def _commit(self, article: Article) -> Article:
        saved = await self.article_repository.save(article)
        article_transitions_total.labels(to_status=str(saved.status)).inc()
        logger.info(
            "Article moved to %s",
            saved.status,
            extra={"article_id": str(saved.id), "slug": str(saved.slug), "status": str(saved.status)},
        )
        return saved


class ScheduleArticleHandler(_ArticleLifecycleHandler):
    """Handler for ScheduleArticleCommand."""

    async def handle(self, command: ScheduleArticleCommand) -> Article:
        """
        Handle schedule article command.

        Args:
            command: ScheduleArticleCommand

        Returns:
            Scheduled Article entity

        Raises:
            ArticleNotFoundError: If article not found
            InvalidArticleTransitionError: If the article is not a draft
        """
        with tracer.start_as_current_span("schedule_article") as span:
            span.set_attribute("article.id", str(command.article_id))
            article = await self._load(command.article_id)
            scheduled = await self._commit(article.schedule(command.publish_at))

        await self.event_bus.publish(
            ArticleScheduled(
                article_id=scheduled.id,
                slug=str(scheduled.slug),
                publish_at=scheduled.publish_at,
            )
        )
        return scheduled


class PublishArticleHandler(_ArticleLifecycleHandler):
    """Handler for PublishArticleCommand."""

    async def handle(self, command: PublishArticleCommand) -> Article:
        """
        Handle publish article command.

        Args:
            command: PublishArticleCommand

        Returns:
            Published Article entity

        Raises:
            ArticleNotFoundError: If article not found
            InvalidArticleTransitionError: If already published or archived
        """
        with tracer.start_as_current_span("publish_article") as span:
            span.set_attribute("article.id", str(command.article_id))
            article = await self._load(command.article_id)
            published = await self._commit(article.publish())

        await self.event_bus.publish(
            ArticlePublished(article_id=published.id, slug=str(published.slug))
        )
        return published


class ArchiveArticleHandler(_ArticleLifecycleHandler):
    """Handler for ArchiveArticleCommand."""

    async def handle(self, command: ArchiveArticleCommand) -> Article:
        """
        Handle archive article command.

        Args:
            command: ArchiveArticleCommand

        Returns:
            Archived Article entity

        Raises:
            ArticleNotFoundError: If article not found
            InvalidArticleTransitionError: If the article is not published
        """
        with tracer.start_as_current_span("archive_article") as span:
            span.set_attribute("article.id", str(command.article_id))
            article = await self._load(command.article_id)
            archived = await self._commit(article.archive())

        await self.event_bus.publish(
            ArticleArchived(article_id=archived.id, slug=str(archived.slug))
        )
        return archived
