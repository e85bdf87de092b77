"""
Pytest configuration and shared fixtures.
"""

import dataclasses
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache

from articles.domain.article import Article
from articles.infrastructure.repositories.django_article_repository import (
    DjangoArticleRepository,
)
from articles.ports.article_repository import ArticleRepository
from core.domain.exceptions import DuplicateSlugError
from core.infrastructure.events import InMemoryEventBus


class InMemoryArticleRepository(ArticleRepository):
    """Dict-backed ArticleRepository for handler tests."""

    def __init__(self):
        self.articles: Dict[uuid.UUID, Article] = {}

    async def save(self, article: Article) -> Article:
        for other in self.articles.values():
            if other.slug == article.slug and other.id != article.id:
                raise DuplicateSlugError(f"Slug '{article.slug}' is already used by another article")
        self.articles[article.id] = article
        return article

    async def find_by_id(self, article_id: uuid.UUID) -> Optional[Article]:
        return self.articles.get(article_id)

    async def find_by_slug(self, slug: str) -> Optional[Article]:
        for article in self.articles.values():
            if str(article.slug) == slug:
                return article
        return None

    async def list_due_for_publication(self, now: datetime) -> List[Article]:
        due = [a for a in self.articles.values() if a.is_due(now)]
        return sorted(due, key=lambda a: a.publish_at)

    async def exists_with_slug(self, slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        return any(
            str(a.slug) == slug and a.id != exclude_id for a in self.articles.values()
        )

    async def delete(self, article_id: uuid.UUID) -> bool:
        return self.articles.pop(article_id, None) is not None


class RecordingEventHandler:
    """Collects every event it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event) -> None:
        self.events.append(event)


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def article_repository():
    """Fixture for the Django ArticleRepository."""
    return DjangoArticleRepository()


@pytest.fixture
def memory_repository():
    """Fixture for an in-memory ArticleRepository."""
    return InMemoryArticleRepository()


@pytest.fixture
def event_bus():
    """Fixture for an isolated event bus."""
    return InMemoryEventBus()


@pytest.fixture
def recorder():
    """Fixture for an event handler that records what it sees."""
    return RecordingEventHandler()


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def sample_article():
    """Fixture for a sample draft Article entity."""
    return Article.create(
        title="Hello World",
        body="First post",
        tags=["Django", "python"],
    )


@pytest.fixture
def user(db, django_user_model):
    """Fixture for a regular user."""
    return django_user_model.objects.create_user(username="author", password="password")


@pytest.fixture
def other_user(db, django_user_model):
    """Fixture for a second regular user."""
    return django_user_model.objects.create_user(username="reader", password="password")


@pytest.fixture
def staff_user(db, django_user_model):
    """Fixture for a staff user."""
    return django_user_model.objects.create_user(
        username="editor", password="password", is_staff=True
    )


@pytest.fixture
def db_article(db, user, article_repository):
    """Fixture for a draft Article saved in database."""
    article = Article.create(
        title="Draft Article",
        body="Work in progress",
        author_id=user.pk,
        tags=["drafts"],
    )
    return async_to_sync(article_repository.save)(article)


@pytest.fixture
def db_published_article(db, user, article_repository):
    """Fixture for a published Article saved in database."""
    article = Article.create(
        title="Published Article",
        body="Out in the world",
        author_id=user.pk,
        tags=["news"],
    ).publish()
    return async_to_sync(article_repository.save)(article)


@pytest.fixture
def db_due_article(db, user, article_repository):
    """Fixture for a scheduled Article whose publish_at has passed."""
    publish_at = datetime.now(timezone.utc) + timedelta(minutes=5)
    article = Article.create(title="Due Article", author_id=user.pk).schedule(publish_at)
    # Move the schedule into the past the way time would.
    article = dataclasses.replace(article, publish_at=publish_at - timedelta(hours=1))
    return async_to_sync(article_repository.save)(article)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def author_client(api_client, user):
    """API client authenticated as the article author."""
    api_client.force_authenticate(user=user)
    return api_client
