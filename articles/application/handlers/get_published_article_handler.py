"""
Get published article handler.

Read-through cache in front of the repository.
"""
from articles.application.dto.article_dto import ArticleDTO
from articles.application.queries.get_published_article import GetPublishedArticleQuery
from articles.application.services.article_cache_service import ArticleCacheService
from articles.ports.article_repository import ArticleRepository
from core.domain.exceptions import ArticleNotFoundError


class GetPublishedArticleHandler:
    """Handler for GetPublishedArticleQuery."""

    def __init__(self, article_repository: ArticleRepository):
        """Initialize handler with repository."""
        self.article_repository = article_repository

    async def handle(self, query: GetPublishedArticleQuery) -> ArticleDTO:
        """
        Handle get published article query.

        Args:
            query: GetPublishedArticleQuery

        Returns:
            ArticleDTO

        Raises:
            ArticleNotFoundError: If no published article has the slug
        """
        cached = await ArticleCacheService.get(query.slug)
        if cached:
            return cached

        article = await self.article_repository.find_by_slug(query.slug)
        if not article or not article.is_public:
            raise ArticleNotFoundError(f"Article '{query.slug}' not found")

        dto = ArticleDTO.from_entity(article)
        await ArticleCacheService.set(dto)
        return dto
