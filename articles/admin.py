"""
Django admin configuration for articles app.
"""

from django.contrib import admin

from articles.infrastructure.models import Article, Tag


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    """Admin interface for Tag model."""

    list_display = ["name", "slug"]
    search_fields = ["name"]
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    """Admin interface for Article model."""

    list_display = ["title", "slug", "status", "author", "publish_at", "published_at", "created_at"]
    list_filter = ["status", "created_at", "published_at", "tags"]
    search_fields = ["title", "slug", "body", "author__username"]
    readonly_fields = ["id", "published_at", "created_at", "updated_at"]
    prepopulated_fields = {"slug": ("title",)}
    filter_horizontal = ["tags"]
    date_hierarchy = "created_at"
    fieldsets = (
        (
            "Content",
            {
                "fields": ("id", "title", "slug", "body", "tags"),
            },
        ),
        (
            "Publication",
            {
                "fields": ("status", "author", "publish_at", "published_at"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("author").prefetch_related("tags")
