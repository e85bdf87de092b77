"""
Celery tasks for the articles app.

Scheduled publication runs every minute from Celery beat.
"""
import logging

from asgiref.sync import async_to_sync

from DjangoBlueprint.celery import app

from articles.application.commands.publish_due_articles import PublishDueArticlesCommand
from articles.application.handlers.publish_due_articles_handler import PublishDueArticlesHandler
from articles.infrastructure.repositories.django_article_repository import (
    DjangoArticleRepository,
)

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def publish_due_articles_task(self):
    """
    Publish every scheduled article that has reached its publish_at.

    Returns:
        Dict with due / published / failed counts
    """
    handler = PublishDueArticlesHandler(DjangoArticleRepository())
    try:
        result = async_to_sync(handler.handle)(PublishDueArticlesCommand())
    except Exception as exc:
        logger.error("Scheduled publication run failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    if result.due:
        logger.info(
            "Scheduled publication run: %s due, %s published, %s failed",
            result.due,
            result.published,
            result.failed,
        )
    return {"due": result.due, "published": result.published, "failed": result.failed}
