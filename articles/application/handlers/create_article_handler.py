"""
Create article handler.
"""
import logging

from articles.application.commands.create_article import CreateArticleCommand
from articles.domain.article import Article
from articles.domain.events import ArticleCreated
from articles.ports.article_repository import ArticleRepository
from core.domain.exceptions import DuplicateSlugError, InvalidArticleError
from core.infrastructure.events import event_bus as default_event_bus

logger = logging.getLogger(__name__)


class CreateArticleHandler:
    """Handler for CreateArticleCommand."""

    def __init__(self, article_repository: ArticleRepository, event_bus=None):
        """Initialize handler with repository."""
        self.article_repository = article_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: CreateArticleCommand) -> Article:
        """
        Handle create article command.

        Args:
            command: CreateArticleCommand

        Returns:
            Saved draft Article entity

        Raises:
            InvalidArticleError: If the title or slug is invalid
            DuplicateSlugError: If the slug is already taken
        """
        try:
            article = Article.create(
                title=command.title,
                body=command.body,
                slug=command.slug,
                author_id=command.author_id,
                tags=command.tags,
            )
        except ValueError as e:
            raise InvalidArticleError(str(e)) from e

        if await self.article_repository.exists_with_slug(str(article.slug)):
            raise DuplicateSlugError(f"Slug '{article.slug}' is already used by another article")

        saved = await self.article_repository.save(article)
        logger.info("Article created", extra={"article_id": str(saved.id), "slug": str(saved.slug)})

        await self.event_bus.publish(
            ArticleCreated(article_id=saved.id, slug=str(saved.slug), author_id=saved.author_id)
        )
        return saved
