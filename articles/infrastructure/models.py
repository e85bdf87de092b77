"""
Article and Tag models.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.infrastructure.models import TimeStampedModel, UUIDModel


class Tag(models.Model):
    """Free-form label attached to articles."""

    name = models.CharField(max_length=50, unique=True)
    slug = models.SlugField(max_length=60, unique=True)

    class Meta:
        db_table = "tags"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ArticleQuerySet(models.QuerySet):
    """Query helpers for the publication workflow."""

    def published(self):
        return self.filter(status=Article.Status.PUBLISHED)

    def with_status(self, status):
        return self.filter(status=status)

    def due_for_publication(self, now=None):
        return self.filter(
            status=Article.Status.SCHEDULED,
            publish_at__lte=now or timezone.now(),
        ).order_by("publish_at")

    def visible_to(self, user):
        """Published articles, plus the user's own, plus everything for staff."""
        if user is None or not user.is_authenticated:
            return self.published()
        if user.is_staff:
            return self
        return self.filter(models.Q(status=Article.Status.PUBLISHED) | models.Q(author=user))


class Article(UUIDModel, TimeStampedModel):
    """
    A piece of written content going through draft -> published -> archived.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SCHEDULED = "scheduled", "Scheduled"
        PUBLISHED = "published", "Published"
        ARCHIVED = "archived", "Archived"

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True, help_text="URL-safe identifier")
    body = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="articles",
    )
    publish_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)
    tags = models.ManyToManyField(Tag, blank=True, related_name="articles")

    objects = ArticleQuerySet.as_manager()

    class Meta:
        db_table = "articles"
        ordering = ["-published_at", "-created_at"]
        indexes = [
            models.Index(fields=["status"], name="articles_status_idx"),
            models.Index(fields=["status", "publish_at"], name="articles_status_publish_idx"),
        ]

    def __str__(self):
        return self.title
