"""
Django implementation of ArticleRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.utils.text import slugify

from articles.domain.article import Article
from articles.infrastructure.models import Article as ArticleModel
from articles.infrastructure.models import Tag as TagModel
from articles.ports.article_repository import ArticleRepository
from core.domain.exceptions import DuplicateSlugError
from core.domain.value_objects import ArticleStatus, Slug


class DjangoArticleRepository(ArticleRepository):
    """
    Django ORM implementation of ArticleRepository.

    Each operation runs its ORM work in one synchronous function wrapped
    with ``sync_to_async`` so a save and its tag updates share a transaction.
    """

    def _to_domain(self, model: ArticleModel) -> Article:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Article model

        Returns:
            Article domain entity
        """
        return Article(
            id=model.id,
            title=model.title,
            slug=Slug(model.slug),
            body=model.body,
            status=ArticleStatus(model.status),
            author_id=model.author_id,
            publish_at=model.publish_at,
            published_at=model.published_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            tags=tuple(tag.name for tag in model.tags.all()),
        )

    def _base_queryset(self):
        # pylint: disable=no-member
        return ArticleModel.objects.prefetch_related("tags")

    def _save_sync(self, article: Article) -> Article:
        slug = str(article.slug)
        with transaction.atomic():
            # pylint: disable=no-member
            if ArticleModel.objects.filter(slug=slug).exclude(id=article.id).exists():
                raise DuplicateSlugError(f"Slug '{slug}' is already used by another article")

            try:
                model, _ = ArticleModel.objects.update_or_create(
                    id=article.id,
                    defaults={
                        "title": article.title,
                        "slug": slug,
                        "body": article.body,
                        "status": article.status.value,
                        "author_id": article.author_id,
                        "publish_at": article.publish_at,
                        "published_at": article.published_at,
                    },
                )
            except IntegrityError as e:
                # Lost a race with a concurrent save of the same slug
                raise DuplicateSlugError(f"Slug '{slug}' is already used by another article") from e

            tags = [
                TagModel.objects.get_or_create(name=name, defaults={"slug": slugify(name)})[0]
                for name in article.tags
            ]
            model.tags.set(tags)

        return self._to_domain(self._base_queryset().get(id=model.id))

    async def save(self, article: Article) -> Article:
        """
        Save an article entity.

        Args:
            article: Article entity to save

        Returns:
            Saved article entity

        Raises:
            DuplicateSlugError: If another article already uses the slug
        """
        return await sync_to_async(self._save_sync)(article)

    def _find_sync(self, **lookup) -> Optional[Article]:
        try:
            return self._to_domain(self._base_queryset().get(**lookup))
        except ArticleModel.DoesNotExist:  # pylint: disable=no-member
            return None

    async def find_by_id(self, article_id: uuid.UUID) -> Optional[Article]:
        return await sync_to_async(self._find_sync)(id=article_id)

    async def find_by_slug(self, slug: str) -> Optional[Article]:
        return await sync_to_async(self._find_sync)(slug=slug)

    def _list_due_sync(self, now: datetime) -> List[Article]:
        # pylint: disable=no-member
        qs = ArticleModel.objects.due_for_publication(now).prefetch_related("tags")
        return [self._to_domain(model) for model in qs]

    async def list_due_for_publication(self, now: datetime) -> List[Article]:
        return await sync_to_async(self._list_due_sync)(now)

    async def exists_with_slug(self, slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        # pylint: disable=no-member
        qs = ArticleModel.objects.filter(slug=slug)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return await sync_to_async(qs.exists)()

    async def delete(self, article_id: uuid.UUID) -> bool:
        # pylint: disable=no-member
        qs = ArticleModel.objects.filter(id=article_id)
        deleted, _ = await sync_to_async(qs.delete)()
        return deleted > 0
