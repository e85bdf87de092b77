"""
Django management command to generate an app with the project's layout.

Unlike ``startapp``, the generated app already follows the layered
structure (domain, ports, application, infrastructure) and can come with
a REST endpoint and a Celery task.
"""
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import ScaffoldConflictError, ScaffoldError
from core.scaffold import AppBlueprint, ScaffoldGenerator


class Command(BaseCommand):
    """Command to scaffold a new app."""

    help = "Generate a new app following the project conventions"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("name", help="App package name (lowercase, underscores allowed)")
        parser.add_argument(
            "--flat",
            action="store_true",
            help="Generate a plain Django app without the layered packages",
        )
        parser.add_argument(
            "--no-api",
            action="store_true",
            help="Do not generate api/v1/<name> endpoints",
        )
        parser.add_argument(
            "--with-tasks",
            action="store_true",
            help="Add a tasks.py with a Celery task",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - list files without writing them",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite files that already exist",
        )
        parser.add_argument(
            "--target",
            default=None,
            help="Directory to generate into (defaults to BASE_DIR)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        blueprint = AppBlueprint(
            name=options["name"],
            layered=not options["flat"],
            with_api=not options["no_api"],
            with_tasks=options["with_tasks"],
        )
        base_dir = Path(options["target"] or settings.BASE_DIR)
        generator = ScaffoldGenerator(base_dir)

        try:
            result = generator.generate(
                blueprint, dry_run=options["dry_run"], force=options["force"]
            )
        except ScaffoldConflictError as e:
            for path in e.conflicts:
                self.stderr.write(f"  exists: {path}")
            raise CommandError(
                f"{len(e.conflicts)} file(s) already exist. Use --force to overwrite."
            ) from e
        except ScaffoldError as e:
            raise CommandError(e.message) from e

        if result.dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No files will be written"))

        for path in result.created:
            self.stdout.write(f"  create    {path}")
        for path in result.overwritten:
            self.stdout.write(f"  overwrite {path}")
        for path in result.skipped:
            self.stdout.write(f"  skip      {path}")

        if result.dry_run:
            return

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"App '{blueprint.name}' generated in {base_dir}"))
        self.stdout.write("Next steps:")
        self.stdout.write(f'  1. Add "{blueprint.name}" to INSTALLED_APPS')
        if blueprint.with_api:
            self.stdout.write(
                f'  2. Add path("api/v1/", include("api.v1.{blueprint.name}.urls")) to the root urls'
            )
        self.stdout.write(f"  3. python manage.py makemigrations {blueprint.name}")
