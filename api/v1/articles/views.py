"""
Article API views.

- ArticleViewSet: CRUD plus publish / archive / schedule actions
- PublishedArticleView: cached public read of a published article
- article_stats: counts per publication status
"""

from asgiref.sync import async_to_sync
from django.db.models import Count
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.pagination import StandardResultsSetPagination
from api.permissions import IsAuthorOrReadOnly
from api.v1.articles.serializers import (
    ArticleCreateSerializer,
    ArticleSerializer,
    ArticleStatsSerializer,
    PublishedArticleSerializer,
    ScheduleArticleSerializer,
)
from articles.application.commands.archive_article import ArchiveArticleCommand
from articles.application.commands.create_article import CreateArticleCommand
from articles.application.commands.publish_article import PublishArticleCommand
from articles.application.commands.schedule_article import ScheduleArticleCommand
from articles.application.handlers.article_lifecycle_handlers import (
    ArchiveArticleHandler,
    PublishArticleHandler,
    ScheduleArticleHandler,
)
from articles.application.handlers.create_article_handler import CreateArticleHandler
from articles.application.handlers.get_published_article_handler import (
    GetPublishedArticleHandler,
)
from articles.application.queries.get_published_article import GetPublishedArticleQuery
from articles.application.services.article_cache_service import ArticleCacheService
from articles.infrastructure.models import Article as ArticleModel
from articles.infrastructure.repositories.django_article_repository import (
    DjangoArticleRepository,
)
from core.instrumentation import get_tracer

# Initialize repositories (in production, use DI container)
_article_repo = DjangoArticleRepository()

tracer = get_tracer(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List articles",
        tags=["Articles"],
        parameters=[
            OpenApiParameter("status", str, description="Filter by publication status"),
            OpenApiParameter("tag", str, description="Filter by tag name"),
            OpenApiParameter("q", str, description="Search in titles"),
        ],
    ),
    retrieve=extend_schema(summary="Retrieve article", tags=["Articles"]),
    update=extend_schema(summary="Update article", tags=["Articles"]),
    partial_update=extend_schema(summary="Partially update article", tags=["Articles"]),
    destroy=extend_schema(summary="Delete article", tags=["Articles"]),
)
class ArticleViewSet(viewsets.ModelViewSet):
    """
    Articles, looked up by slug.

    Anonymous users only see published articles; authenticated users also
    see their own drafts; staff see everything.
    """

    serializer_class = ArticleSerializer
    permission_classes = [IsAuthorOrReadOnly]
    pagination_class = StandardResultsSetPagination
    lookup_field = "slug"

    def get_queryset(self):
        # pylint: disable=no-member
        qs = (
            ArticleModel.objects.visible_to(self.request.user)
            .select_related("author")
            .prefetch_related("tags")
        )
        params = self.request.query_params
        if params.get("status"):
            qs = qs.with_status(params["status"])
        if params.get("tag"):
            qs = qs.filter(tags__name=params["tag"].strip().lower())
        if params.get("q"):
            qs = qs.filter(title__icontains=params["q"])
        return qs.distinct()

    def get_serializer_class(self):
        if self.action == "create":
            return ArticleCreateSerializer
        if self.action == "schedule":
            return ScheduleArticleSerializer
        return ArticleSerializer

    def _article_response(self, article_id, status_code=status.HTTP_200_OK) -> Response:
        # pylint: disable=no-member
        instance = (
            ArticleModel.objects.select_related("author").prefetch_related("tags").get(id=article_id)
        )
        return Response(ArticleSerializer(instance).data, status=status_code)

    @extend_schema(
        summary="Create article",
        tags=["Articles"],
        request=ArticleCreateSerializer,
        responses={
            201: ArticleSerializer,
            400: {"description": "Bad Request"},
            409: {"description": "Slug already in use"},
        },
    )
    def create(self, request: Request, *args, **kwargs) -> Response:
        """Create a draft article authored by the requesting user."""
        serializer = ArticleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        command = CreateArticleCommand(
            title=data["title"],
            body=data.get("body", ""),
            slug=data.get("slug") or None,
            author_id=request.user.pk,
            tags=data.get("tags", []),
        )
        with tracer.start_as_current_span("create_article") as span:
            span.set_attribute("article.title", command.title)
            article = async_to_sync(CreateArticleHandler(_article_repo).handle)(command)

        return self._article_response(article.id, status.HTTP_201_CREATED)

    def perform_update(self, serializer):
        instance = serializer.save()
        if instance.status == ArticleModel.Status.PUBLISHED:
            async_to_sync(ArticleCacheService.invalidate)(instance.slug)

    def perform_destroy(self, instance):
        slug = instance.slug
        instance.delete()
        async_to_sync(ArticleCacheService.invalidate)(slug)

    @extend_schema(
        summary="Publish article",
        tags=["Articles"],
        request=None,
        responses={200: ArticleSerializer, 400: {"description": "Invalid transition"}},
    )
    @action(detail=True, methods=["post"])
    def publish(self, request: Request, slug=None) -> Response:
        """Publish a draft or scheduled article now."""
        article = self.get_object()
        result = async_to_sync(PublishArticleHandler(_article_repo).handle)(
            PublishArticleCommand(article_id=article.id)
        )
        return self._article_response(result.id)

    @extend_schema(
        summary="Archive article",
        tags=["Articles"],
        request=None,
        responses={200: ArticleSerializer, 400: {"description": "Invalid transition"}},
    )
    @action(detail=True, methods=["post"])
    def archive(self, request: Request, slug=None) -> Response:
        """Archive a published article."""
        article = self.get_object()
        result = async_to_sync(ArchiveArticleHandler(_article_repo).handle)(
            ArchiveArticleCommand(article_id=article.id)
        )
        return self._article_response(result.id)

    @extend_schema(
        summary="Schedule article",
        tags=["Articles"],
        request=ScheduleArticleSerializer,
        responses={200: ArticleSerializer, 400: {"description": "Invalid transition"}},
    )
    @action(detail=True, methods=["post"])
    def schedule(self, request: Request, slug=None) -> Response:
        """Schedule a draft for automatic publication."""
        article = self.get_object()
        serializer = ScheduleArticleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = async_to_sync(ScheduleArticleHandler(_article_repo).handle)(
            ScheduleArticleCommand(
                article_id=article.id,
                publish_at=serializer.validated_data["publish_at"],
            )
        )
        return self._article_response(result.id)


class PublishedArticleView(APIView):
    """Public, cached read of a single published article."""

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="get_published_article",
        summary="Get Published Article",
        description="Read a published article by slug. Responses are served from cache when warm.",
        tags=["Articles"],
        responses={200: PublishedArticleSerializer, 404: {"description": "Not Found"}},
    )
    def get(self, request: Request, slug: str) -> Response:
        """Get a published article by slug."""
        return async_to_sync(self._handle_get)(slug)

    async def _handle_get(self, slug: str) -> Response:
        with tracer.start_as_current_span("get_published_article") as span:
            span.set_attribute("article.slug", slug)
            dto = await GetPublishedArticleHandler(_article_repo).handle(
                GetPublishedArticleQuery(slug=slug)
            )
        return Response(PublishedArticleSerializer(dto).data)


@extend_schema(
    summary="Article statistics",
    tags=["Articles"],
    responses={200: ArticleStatsSerializer},
)
@api_view(["GET"])
@permission_classes([AllowAny])
def article_stats(request: Request) -> Response:
    """Count the articles visible to the caller, per status."""
    # pylint: disable=no-member
    rows = (
        ArticleModel.objects.visible_to(request.user)
        .order_by()
        .values("status")
        .annotate(count=Count("id"))
    )
    counts = {choice: 0 for choice in ArticleModel.Status.values}
    for row in rows:
        counts[row["status"]] = row["count"]
    counts["total"] = sum(counts.values())
    return Response(ArticleStatsSerializer(counts).data)
