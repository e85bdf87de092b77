"""
Django management command to audit settings before a deploy.

Exits non-zero (CommandError) when any check reaches the fail level, so it
can gate a CI pipeline.
"""
import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.conventions import audit_settings
from core.domain.exceptions import SettingsAuditError
from core.domain.value_objects import AuditSeverity

_STYLES = {
    AuditSeverity.PASS: "SUCCESS",
    AuditSeverity.WARN: "WARNING",
    AuditSeverity.FAIL: "ERROR",
}


class Command(BaseCommand):
    """Command to audit settings."""

    help = "Audit settings against the Twelve-Factor and deployment checklist"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--environment",
            default=None,
            help="Environment to audit for (production, development, test). Defaults to settings.ENVIRONMENT",
        )
        parser.add_argument(
            "--fail-level",
            choices=["warn", "fail"],
            default="fail",
            help="Lowest severity that makes the command fail",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the report as JSON",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        environment = options["environment"] or settings.ENVIRONMENT
        fail_level = AuditSeverity(options["fail_level"])

        try:
            report = audit_settings(settings, environment)
        except SettingsAuditError as e:
            raise CommandError(e.message) from e

        if options["json"]:
            self.stdout.write(json.dumps(report.to_dict(), indent=2))
        else:
            self.stdout.write(f"Settings audit for {report.environment}")
            for result in report.results:
                style = getattr(self.style, _STYLES[result.severity])
                self.stdout.write(
                    style(f"  [{str(result.severity).upper():4}] {result.check_id}: {result.message}")
                )
            counts = report.counts()
            self.stdout.write(
                f"{counts['pass']} passed, {counts['warn']} warning(s), {counts['fail']} failure(s)"
            )

        failures = report.failures(fail_level)
        if failures:
            raise CommandError(
                f"Settings audit failed: {len(failures)} check(s) at or above '{fail_level}'"
            )
