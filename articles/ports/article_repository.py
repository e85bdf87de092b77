"""
Article repository port (interface).

This defines the contract for article persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from articles.domain.article import Article


class ArticleRepository(ABC):
    """
    Abstract repository for Article entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """
        Insert or update an article.

        Args:
            article: Article entity to save

        Returns:
            Saved article entity

        Raises:
            DuplicateSlugError: If another article already uses the slug
        """
        pass

    @abstractmethod
    async def find_by_id(self, article_id: uuid.UUID) -> Optional[Article]:
        """
        Find an article by ID.

        Args:
            article_id: Article UUID

        Returns:
            Article entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Article]:
        """
        Find an article by slug.

        Args:
            slug: Article slug

        Returns:
            Article entity or None if not found
        """
        pass

    @abstractmethod
    async def list_due_for_publication(self, now: datetime) -> List[Article]:
        """
        List scheduled articles whose publish_at is at or before ``now``.

        Args:
            now: Reference time

        Returns:
            Due articles, oldest publish_at first
        """
        pass

    @abstractmethod
    async def exists_with_slug(self, slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        """
        Check whether a slug is taken.

        Args:
            slug: Slug to look up
            exclude_id: Article to ignore (the one being saved)

        Returns:
            True if another article uses the slug
        """
        pass

    @abstractmethod
    async def delete(self, article_id: uuid.UUID) -> bool:
        """
        Delete an article.

        Args:
            article_id: Article UUID

        Returns:
            True if something was deleted
        """
        pass
