"""
Article domain events.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class ArticleEvent(DomainEvent):
    """Base for events about one article; carries its slug."""

    def __init__(self, article_id: uuid.UUID, slug: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(article_id), occurred_at=occurred_at)
        self.article_id = article_id
        self.slug = slug

    def to_dict(self):
        data = super().to_dict()
        data["slug"] = self.slug
        return data


class ArticleCreated(ArticleEvent):
    """Event raised when a draft is created."""

    def __init__(
        self,
        article_id: uuid.UUID,
        slug: str,
        author_id: Optional[int] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(article_id, slug, occurred_at)
        self.author_id = author_id


class ArticleScheduled(ArticleEvent):
    """Event raised when an article is scheduled for publication."""

    def __init__(
        self,
        article_id: uuid.UUID,
        slug: str,
        publish_at: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(article_id, slug, occurred_at)
        self.publish_at = publish_at

    def to_dict(self):
        data = super().to_dict()
        data["publish_at"] = self.publish_at.isoformat()
        return data


class ArticlePublished(ArticleEvent):
    """Event raised when an article becomes public."""


class ArticleArchived(ArticleEvent):
    """Event raised when an article is withdrawn."""
