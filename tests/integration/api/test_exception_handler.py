"""
Tests for the API exception handler.
"""
from types import SimpleNamespace

import pytest
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework.exceptions import NotFound, Throttled, ValidationError

from api.exceptions import custom_exception_handler
from core.domain.exceptions import (
    ArticleNotFoundError,
    DomainException,
    DuplicateSlugError,
    InvalidArticleTransitionError,
)


def context(correlation_id=None):
    return {"request": SimpleNamespace(correlation_id=correlation_id)}


@pytest.mark.integration
class TestCustomExceptionHandler:
    """Tests for custom_exception_handler."""

    @pytest.mark.parametrize(
        "exc,status_code,code",
        [
            (ArticleNotFoundError(), 404, "ARTICLE_NOT_FOUND"),
            (DuplicateSlugError(), 409, "DUPLICATE_SLUG"),
            (InvalidArticleTransitionError(), 400, "INVALID_ARTICLE_TRANSITION"),
            (DomainException("Something broke", code="CUSTOM"), 400, "CUSTOM"),
        ],
    )
    def test_domain_exceptions(self, exc, status_code, code):
        response = custom_exception_handler(exc, context())

        assert response.status_code == status_code
        assert response.data == {"error": {"code": code, "message": exc.message}}

    def test_validation_error_has_details(self):
        response = custom_exception_handler(
            ValidationError({"title": ["This field is required."]}), context()
        )

        assert response.status_code == 400
        assert response.data["error"]["code"] == "VALIDATION_ERROR"
        assert response.data["error"]["details"] == {"title": ["This field is required."]}

    def test_drf_exception_keeps_status(self):
        response = custom_exception_handler(NotFound("No such thing"), context())

        assert response.status_code == 404
        assert response.data == {"error": {"code": "NOT_FOUND", "message": "No such thing"}}

    def test_drf_exception_keeps_status(self):
        response = custom_exception_handler(Throttled(), context())

        assert response.status_code == 429
        assert response.data["error"] == {"code": "THROTTLED", "message": "Request was throttled."}

    def test_django_http404(self):
        response = custom_exception_handler(Http404(), context())

        assert response.status_code == 404
        assert response.data["error"]["code"] == "NOT_FOUND"

    def test_django_permission_denied(self):
        response = custom_exception_handler(DjangoPermissionDenied(), context())

        assert response.status_code == 403
        assert response.data["error"]["code"] == "PERMISSION_DENIED"

    def test_unexpected_exception(self):
        response = custom_exception_handler(RuntimeError("secret detail"), context())

        assert response.status_code == 500
        assert response.data == {
            "error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}
        }

    def test_correlation_id_header(self):
        response = custom_exception_handler(ArticleNotFoundError(), context("abc-123"))

        assert response["X-Correlation-ID"] == "abc-123"

    def test_no_request_in_context(self):
        response = custom_exception_handler(ArticleNotFoundError(), {})

        assert response.status_code == 404
        assert not response.has_header("X-Correlation-ID")
