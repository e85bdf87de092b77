"""
Integration tests for DjangoArticleRepository.

The repository is async; tests drive it with async_to_sync so the ORM
work stays on the test's database connection.
"""
import dataclasses
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync
from django.db.models.query import QuerySet

from articles.domain.article import Article
from articles.infrastructure.models import Article as ArticleModel
from articles.infrastructure.models import Tag as TagModel
from core.domain.exceptions import DuplicateSlugError
from core.domain.value_objects import ArticleStatus


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoArticleRepository:
    """Integration tests for the Django article repository."""

    def test_save_and_find(self, article_repository, sample_article):
        """Test saving and finding an article."""
        saved = async_to_sync(article_repository.save)(sample_article)

        assert saved.id == sample_article.id
        found = async_to_sync(article_repository.find_by_id)(sample_article.id)
        assert found is not None
        assert found.title == "Hello World"
        assert str(found.slug) == "hello-world"
        assert found.status == ArticleStatus.DRAFT
        assert found.tags == ("django", "python")

    def test_find_by_slug(self, article_repository, db_article):
        found = async_to_sync(article_repository.find_by_slug)("draft-article")
        assert found.id == db_article.id
        assert async_to_sync(article_repository.find_by_slug)("missing") is None

    def test_find_missing(self, article_repository):
        assert async_to_sync(article_repository.find_by_id)(uuid.uuid4()) is None

    def test_save_updates_existing(self, article_repository, db_article):
        published = async_to_sync(article_repository.save)(db_article.publish())

        assert published.status == ArticleStatus.PUBLISHED
        assert ArticleModel.objects.count() == 1
        model = ArticleModel.objects.get(id=db_article.id)
        assert model.status == "published"
        assert model.published_at is not None

    def test_tags_are_replaced(self, article_repository, db_article):
        retagged = dataclasses.replace(db_article, tags=("python", "async"))
        saved = async_to_sync(article_repository.save)(retagged)

        assert saved.tags == ("async", "python")
        assert TagModel.objects.filter(name="drafts").exists()
        assert list(ArticleModel.objects.get(id=db_article.id).tags.values_list("slug", flat=True)) == [
            "async",
            "python",
        ]

    def test_duplicate_slug_rejected(self, article_repository, db_article):
        clash = Article.create(title="Other", slug="draft-article")

        with pytest.raises(DuplicateSlugError):
            async_to_sync(article_repository.save)(clash)

        assert ArticleModel.objects.count() == 1

    def test_unique_constraint_race_reported_as_duplicate(
        self, article_repository, db_article, monkeypatch
    ):
        # The pre-check misses a row committed by a concurrent save
        monkeypatch.setattr(QuerySet, "exists", lambda self: False)
        clash = Article.create(title="Other", slug="draft-article")

        with pytest.raises(DuplicateSlugError):
            async_to_sync(article_repository.save)(clash)

        monkeypatch.undo()
        assert ArticleModel.objects.count() == 1

    def test_exists_with_slug(self, article_repository, db_article):
        exists = async_to_sync(article_repository.exists_with_slug)
        assert exists("draft-article")
        assert not exists("draft-article", exclude_id=db_article.id)
        assert not exists("nothing-here")

    def test_list_due_for_publication(self, article_repository, db_due_article, db_article):
        later = Article.create(title="Later").schedule(datetime.now(timezone.utc) + timedelta(days=1))
        async_to_sync(article_repository.save)(later)

        due = async_to_sync(article_repository.list_due_for_publication)(datetime.now(timezone.utc))

        assert [a.id for a in due] == [db_due_article.id]

    def test_delete(self, article_repository, db_article):
        assert async_to_sync(article_repository.delete)(db_article.id) is True
        assert async_to_sync(article_repository.delete)(db_article.id) is False
        assert not ArticleModel.objects.exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestArticleQuerySet:
    """Tests for visibility rules on the queryset."""

    def test_visible_to(self, db_article, db_published_article, user, other_user, staff_user):
        from django.contrib.auth.models import AnonymousUser

        assert set(ArticleModel.objects.visible_to(AnonymousUser())) == {
            ArticleModel.objects.get(id=db_published_article.id)
        }
        assert ArticleModel.objects.visible_to(other_user).count() == 1
        assert ArticleModel.objects.visible_to(user).count() == 2
        assert ArticleModel.objects.visible_to(staff_user).count() == 2
