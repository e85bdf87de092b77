"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum

SLUG_MAX_LENGTH = 100
_SLUG_RE = re.compile(r"^[a-z0-9](?:[a-z0-9_-]*[a-z0-9])?$")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Slug(ValueObject):
    """URL-safe identifier used in article routes."""

    value: str

    def __post_init__(self):
        """Validate slug format."""
        if not self.value:
            raise ValueError("Slug cannot be empty")
        if len(self.value) > SLUG_MAX_LENGTH:
            raise ValueError(f"Slug too long (max {SLUG_MAX_LENGTH} characters)")
        if not _SLUG_RE.match(self.value):
            raise ValueError(f"Invalid slug format: {self.value}")

    def __str__(self) -> str:
        """Return slug as string."""
        return self.value


class ArticleStatus(Enum):
    """Article publication status."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class AuditSeverity(Enum):
    """Outcome of a single settings audit check, ordered by gravity."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return {"pass": 0, "warn": 1, "fail": 2}[self.value]
