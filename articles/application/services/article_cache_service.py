"""
Article cache service.

Caches the public representation of published articles.
"""
import dataclasses
import logging
from typing import Optional

from articles.application.dto.article_dto import ArticleDTO
from core.infrastructure.cache_adapters import cache_adapter
from core.metrics import cache_requests_total

logger = logging.getLogger(__name__)

# Cache TTL (in seconds)
CACHE_TTL_PUBLISHED_ARTICLE = 300  # 5 minutes


class ArticleCacheService:
    """Service for caching article reads."""

    @staticmethod
    def _published_key(slug: str) -> str:
        """Generate cache key for a published article."""
        return f"article:published:{slug}"

    @staticmethod
    async def get(slug: str) -> Optional[ArticleDTO]:
        """
        Get cached published article.

        Args:
            slug: Article slug

        Returns:
            Cached ArticleDTO or None
        """
        cached = await cache_adapter.get(ArticleCacheService._published_key(slug))
        if cached is None:
            cache_requests_total.labels(cache="published_article", result="miss").inc()
            return None
        try:
            dto = ArticleDTO(**cached)
        except TypeError as e:
            logger.warning("Error deserializing cached article %s: %s", slug, e)
            return None
        cache_requests_total.labels(cache="published_article", result="hit").inc()
        return dto

    @staticmethod
    async def set(dto: ArticleDTO, ttl: int = None) -> None:
        """
        Cache a published article.

        Args:
            dto: ArticleDTO to cache
            ttl: Time to live in seconds
        """
        await cache_adapter.set(
            ArticleCacheService._published_key(dto.slug),
            dataclasses.asdict(dto),
            timeout=ttl or CACHE_TTL_PUBLISHED_ARTICLE,
        )

    @staticmethod
    async def invalidate(slug: str) -> None:
        """
        Drop the cached article.

        Args:
            slug: Article slug
        """
        await cache_adapter.delete(ArticleCacheService._published_key(slug))
