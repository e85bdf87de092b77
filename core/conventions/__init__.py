"""
Executable versions of the project's deployment conventions.

- twelve_factor: audit a settings module against the Twelve-Factor and
  deployment checklist.
"""

from core.conventions.twelve_factor import AuditReport, CheckResult, audit_settings

__all__ = ("AuditReport", "CheckResult", "audit_settings")
