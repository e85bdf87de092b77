"""
Article DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from articles.domain.article import Article


@dataclass
class ArticleDTO:
    """DTO for article information."""

    id: uuid.UUID
    title: str
    slug: str
    body: str
    status: str
    author_id: Optional[int]
    publish_at: Optional[datetime]
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleDTO":
        return cls(
            id=article.id,
            title=article.title,
            slug=str(article.slug),
            body=article.body,
            status=str(article.status),
            author_id=article.author_id,
            publish_at=article.publish_at,
            published_at=article.published_at,
            created_at=article.created_at,
            updated_at=article.updated_at,
            tags=list(article.tags),
        )


@dataclass
class PublishDueArticlesResultDTO:
    """DTO for a scheduled-publication run."""

    due: int
    published: int
    failed: int
    slugs: List[str] = field(default_factory=list)
