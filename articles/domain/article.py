"""
Article domain entity.

This is the core domain entity of the articles app.
It contains the publication workflow and is independent of infrastructure:

    draft --schedule--> scheduled --publish--> published --archive--> archived
      |                     |
      +------publish--------+ (revert_to_draft: scheduled -> draft)
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from django.utils.text import slugify

from core.domain.exceptions import InvalidArticleTransitionError
from core.domain.value_objects import SLUG_MAX_LENGTH, ArticleStatus, Slug

TITLE_MAX_LENGTH = 200


def _now() -> datetime:
    return datetime.now(timezone.utc)


def slug_from_title(title: str) -> str:
    """Slugify a title, cut to the maximum slug length."""
    return slugify(title)[:SLUG_MAX_LENGTH].rstrip("-_")


def normalize_tags(tags: Iterable[str]) -> Tuple[str, ...]:
    """Strip, lowercase and de-duplicate tag names, keeping first-seen order."""
    seen = []
    for tag in tags or ():
        name = tag.strip().lower()
        if name and name not in seen:
            seen.append(name)
    return tuple(seen)


@dataclass(frozen=True)
class Article:
    """
    Article domain entity.

    Immutable: every transition returns a new instance.
    """

    id: uuid.UUID
    title: str
    slug: Slug
    body: str
    status: ArticleStatus
    author_id: Optional[int]
    publish_at: Optional[datetime]
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate article entity."""
        if not self.title or len(self.title.strip()) == 0:
            raise ValueError("Article title cannot be empty")
        if len(self.title) > TITLE_MAX_LENGTH:
            raise ValueError("Article title too long")
        if self.status == ArticleStatus.SCHEDULED and self.publish_at is None:
            raise ValueError("Scheduled article requires publish_at")

    @classmethod
    def create(
        cls,
        title: str,
        body: str = "",
        slug: Optional[str] = None,
        author_id: Optional[int] = None,
        tags: Iterable[str] = (),
        article_id: Optional[uuid.UUID] = None,
    ) -> "Article":
        """
        Create a new draft Article.

        Args:
            title: Article title
            body: Article body
            slug: URL slug (derived from the title when omitted)
            author_id: Primary key of the authoring user
            tags: Tag names
            article_id: Optional UUID (generated if not provided)

        Returns:
            Article entity instance
        """
        now = _now()
        title = (title or "").strip()
        return cls(
            id=article_id or uuid.uuid4(),
            title=title,
            slug=Slug(slug or slug_from_title(title)),
            body=body or "",
            status=ArticleStatus.DRAFT,
            author_id=author_id,
            publish_at=None,
            published_at=None,
            created_at=now,
            updated_at=now,
            tags=normalize_tags(tags),
        )

    def _transition_error(self, action: str) -> InvalidArticleTransitionError:
        return InvalidArticleTransitionError(
            f"Cannot {action} article '{self.slug}' in status '{self.status}'"
        )

    def schedule(self, publish_at: datetime, now: Optional[datetime] = None) -> "Article":
        """
        Schedule a draft for automatic publication.

        Raises:
            InvalidArticleTransitionError: If not a draft or publish_at is not in the future
        """
        if self.status != ArticleStatus.DRAFT:
            raise self._transition_error("schedule")
        if publish_at <= (now or _now()):
            raise InvalidArticleTransitionError("publish_at must be in the future")
        return replace(
            self, status=ArticleStatus.SCHEDULED, publish_at=publish_at, updated_at=_now()
        )

    def publish(self, now: Optional[datetime] = None) -> "Article":
        """
        Publish a draft or scheduled article.

        Raises:
            InvalidArticleTransitionError: If already published or archived
        """
        if self.status not in (ArticleStatus.DRAFT, ArticleStatus.SCHEDULED):
            raise self._transition_error("publish")
        published_at = now or _now()
        return replace(
            self,
            status=ArticleStatus.PUBLISHED,
            published_at=published_at,
            updated_at=_now(),
        )

    def archive(self) -> "Article":
        """
        Archive a published article. Archived is terminal.

        Raises:
            InvalidArticleTransitionError: If not published
        """
        if self.status != ArticleStatus.PUBLISHED:
            raise self._transition_error("archive")
        return replace(self, status=ArticleStatus.ARCHIVED, updated_at=_now())

    def revert_to_draft(self) -> "Article":
        """
        Cancel a pending schedule.

        Raises:
            InvalidArticleTransitionError: If not scheduled
        """
        if self.status != ArticleStatus.SCHEDULED:
            raise self._transition_error("unschedule")
        return replace(self, status=ArticleStatus.DRAFT, publish_at=None, updated_at=_now())

    def is_due(self, now: Optional[datetime] = None) -> bool:
        """True if scheduled and the publication time has passed."""
        return (
            self.status == ArticleStatus.SCHEDULED
            and self.publish_at is not None
            and self.publish_at <= (now or _now())
        )

    @property
    def is_public(self) -> bool:
        return self.status == ArticleStatus.PUBLISHED
