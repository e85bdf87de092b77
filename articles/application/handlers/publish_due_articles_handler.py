"""
Publish due articles handler.

Driven periodically by Celery beat and by the
``publish_due_articles`` management command.
"""
import logging
from datetime import datetime, timezone

from articles.application.commands.publish_due_articles import PublishDueArticlesCommand
from articles.application.dto.article_dto import PublishDueArticlesResultDTO
from articles.domain.events import ArticlePublished
from articles.ports.article_repository import ArticleRepository
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import article_transitions_total, articles_auto_published_total

logger = logging.getLogger(__name__)


class PublishDueArticlesHandler:
    """Handler for PublishDueArticlesCommand."""

    def __init__(self, article_repository: ArticleRepository, event_bus=None):
        """Initialize handler with repository."""
        self.article_repository = article_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: PublishDueArticlesCommand) -> PublishDueArticlesResultDTO:
        """
        Publish every scheduled article whose publish_at has passed.

        A failure on one article is logged and does not stop the run.

        Args:
            command: PublishDueArticlesCommand

        Returns:
            PublishDueArticlesResultDTO
        """
        now = command.now or datetime.now(timezone.utc)
        due = await self.article_repository.list_due_for_publication(now)
        result = PublishDueArticlesResultDTO(due=len(due), published=0, failed=0)

        if command.dry_run:
            result.slugs = [str(article.slug) for article in due]
            return result

        for article in due:
            try:
                # Publication time is the scheduled time, not the time the job ran.
                published = await self.article_repository.save(article.publish(now=article.publish_at))
            except Exception as e:  # pylint: disable=broad-exception-caught
                result.failed += 1
                logger.error(
                    "Error publishing scheduled article %s: %s",
                    article.id,
                    e,
                    exc_info=True,
                )
                continue

            result.published += 1
            result.slugs.append(str(published.slug))
            article_transitions_total.labels(to_status=str(published.status)).inc()
            articles_auto_published_total.inc()
            logger.info("Published scheduled article %s", published.slug)
            await self.event_bus.publish(
                ArticlePublished(article_id=published.id, slug=str(published.slug))
            )

        return result
