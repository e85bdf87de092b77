"""
Django management command to publish scheduled articles that are due.

Celery beat runs the same logic every minute; this command is for cron
deployments and manual catch-up.
"""
import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from articles.application.commands.publish_due_articles import PublishDueArticlesCommand
from articles.application.handlers.publish_due_articles_handler import PublishDueArticlesHandler
from articles.infrastructure.repositories.django_article_repository import (
    DjangoArticleRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to publish due articles."""

    help = "Publish scheduled articles whose publish_at has passed"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - list due articles without publishing them",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        handler = PublishDueArticlesHandler(DjangoArticleRepository())
        result = async_to_sync(handler.handle)(PublishDueArticlesCommand(dry_run=dry_run))

        self.stdout.write(f"Found {result.due} due article(s)")

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for slug in result.slugs:
                self.stdout.write(f"  - {slug}")
            return

        if result.failed:
            # pylint: disable=no-member
            self.stdout.write(self.style.ERROR(f"Failed to publish {result.failed} article(s)"))

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully published {result.published} article(s)")
        )
