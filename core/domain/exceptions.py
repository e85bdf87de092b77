"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ArticleException(DomainException):
    """Base exception for article-related errors."""

    pass


class ArticleNotFoundError(ArticleException):
    """Raised when an article is not found."""

    def __init__(self, message: str = "Article not found"):
        super().__init__(message, code="ARTICLE_NOT_FOUND")


class InvalidArticleTransitionError(ArticleException):
    """Raised when an article status change is not allowed."""

    def __init__(self, message: str = "Invalid article status transition"):
        super().__init__(message, code="INVALID_ARTICLE_TRANSITION")


class InvalidArticleError(ArticleException):
    """Raised when article data breaks an entity rule."""

    def __init__(self, message: str = "Invalid article"):
        super().__init__(message, code="INVALID_ARTICLE")


class DuplicateSlugError(ArticleException):
    """Raised when another article already uses the slug."""

    def __init__(self, message: str = "Slug already in use"):
        super().__init__(message, code="DUPLICATE_SLUG")


class ScaffoldError(DomainException):
    """Base exception for app scaffolding errors."""

    pass


class InvalidAppNameError(ScaffoldError):
    """Raised when an app name cannot be used as a Django app package."""

    def __init__(self, message: str = "Invalid app name"):
        super().__init__(message, code="INVALID_APP_NAME")


class ScaffoldConflictError(ScaffoldError):
    """Raised when generated files would overwrite existing ones."""

    def __init__(self, conflicts, message: str = None):
        self.conflicts = list(conflicts)
        super().__init__(
            message or "Refusing to overwrite existing files: " + ", ".join(self.conflicts),
            code="SCAFFOLD_CONFLICT",
        )


class SettingsAuditError(DomainException):
    """Raised when a settings audit cannot be performed."""

    def __init__(self, message: str = "Settings audit failed"):
        super().__init__(message, code="SETTINGS_AUDIT_ERROR")
