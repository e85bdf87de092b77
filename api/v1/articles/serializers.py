"""
Serializers for Article API endpoints.
"""

from django.db import transaction
from django.utils.text import slugify
from rest_framework import serializers

from articles.domain.article import TITLE_MAX_LENGTH, normalize_tags
from articles.infrastructure.models import Article as ArticleModel
from articles.infrastructure.models import Tag as TagModel
from core.domain.value_objects import SLUG_MAX_LENGTH


class TagListField(serializers.ListField):
    """Tags as a flat list of names, read from the M2M manager."""

    child = serializers.CharField(max_length=50)

    def to_representation(self, data):
        if hasattr(data, "all"):
            return [tag.name for tag in data.all()]
        return super().to_representation(data)


class ArticleSerializer(serializers.ModelSerializer):
    """Serializer for reading and editing articles."""

    author = serializers.SerializerMethodField()
    tags = TagListField(required=False)

    class Meta:
        model = ArticleModel
        fields = [
            "id",
            "title",
            "slug",
            "body",
            "status",
            "author",
            "tags",
            "publish_at",
            "published_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "slug",
            "status",
            "publish_at",
            "published_at",
            "created_at",
            "updated_at",
        ]

    def get_author(self, obj):
        return obj.author.get_username() if obj.author else None

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title cannot be blank")
        return value.strip()

    def update(self, instance, validated_data):
        tags = validated_data.pop("tags", None)
        with transaction.atomic():
            instance = super().update(instance, validated_data)
            if tags is not None:
                instance.tags.set(
                    [
                        # pylint: disable=no-member
                        TagModel.objects.get_or_create(name=name, defaults={"slug": slugify(name)})[0]
                        for name in normalize_tags(tags)
                    ]
                )
        return instance


class ArticleCreateSerializer(serializers.Serializer):
    """Serializer for create article request."""

    title = serializers.CharField(required=True, max_length=TITLE_MAX_LENGTH)
    slug = serializers.CharField(required=False, allow_blank=True, max_length=SLUG_MAX_LENGTH)
    body = serializers.CharField(required=False, allow_blank=True, default="")
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False, default=list
    )


class ScheduleArticleSerializer(serializers.Serializer):
    """Serializer for schedule article request."""

    publish_at = serializers.DateTimeField(required=True)


class PublishedArticleSerializer(serializers.Serializer):
    """Serializer for ArticleDTO (public, cached representation)."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    slug = serializers.CharField()
    body = serializers.CharField()
    status = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    published_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField()


class ArticleStatsSerializer(serializers.Serializer):
    """Serializer for article counts per status."""

    total = serializers.IntegerField()
    draft = serializers.IntegerField()
    scheduled = serializers.IntegerField()
    published = serializers.IntegerField()
    archived = serializers.IntegerField()
