"""
URL configuration for article API endpoints.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from api.v1.articles import views

router = DefaultRouter()
router.register("articles", views.ArticleViewSet, basename="article")

urlpatterns = [
    path(
        "published/<slug:slug>/",
        views.PublishedArticleView.as_view(),
        name="published-article",
    ),
    path("articles-stats/", views.article_stats, name="article-stats"),
    path("", include(router.urls)),
]
