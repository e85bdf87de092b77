"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error is rendered as ``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ArticleNotFoundError,
    DomainException,
    DuplicateSlugError,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)
    if isinstance(exc, DjangoPermissionDenied):
        exc = PermissionDenied()

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, correlation_id)
    elif isinstance(exc, ValidationError):
        response = exception_handler(exc, context)
        response.data = {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid input",
                "details": response.data,
            }
        }
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        response.data = {
            "error": {"code": _api_error_code(exc), "message": _api_error_message(exc)}
        }
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, correlation_id)

    if correlation_id:
        response[CORRELATION_HEADER] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _api_error_code(exc: APIException) -> str:
    codes = exc.get_codes()
    if isinstance(codes, str):
        return codes.upper().replace("-", "_")
    return exc.default_code.upper().replace("-", "_")


def _api_error_message(exc: APIException) -> str:
    detail = exc.detail
    if isinstance(detail, (list, dict)):
        return str(exc.default_detail)
    return str(detail)


def _handle_domain_exception(exc: DomainException, correlation_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ArticleNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, DuplicateSlugError):
        status_code = status.HTTP_409_CONFLICT

    logger.warning(
        "Domain exception: %s - %s",
        exc.code,
        exc.message,
        extra={"correlation_id": correlation_id},
    )
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(exc: Exception, correlation_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
