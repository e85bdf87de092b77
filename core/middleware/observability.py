"""
Observability middleware.

Adds correlation IDs, structured request logging and timing headers.
"""

import logging
import re
import time
import uuid
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
_CORRELATION_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Reuses an inbound X-Correlation-ID or generates a new one
    2. Logs request/response information
    3. Tracks request duration
    4. Adds correlation ID to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = self._get_correlation_id(request)
        request.correlation_id = correlation_id  # type: ignore

        trace_id, span_id = self._current_trace_context()

        start_time = time.monotonic()
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
            "user_agent": request.META.get("HTTP_USER_AGENT", ""),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = span_id

        logger.info("Request started", extra=log_extra)

        try:
            response = self.get_response(request)
        except Exception as e:
            self._log_exception(request, e, start_time, correlation_id)
            raise

        duration = time.monotonic() - start_time
        request_status = self._get_request_status(response)
        self._log_response(request, response, correlation_id, request_status, duration, trace_id)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    def _get_correlation_id(self, request: HttpRequest) -> str:
        inbound = request.headers.get(CORRELATION_HEADER, "")
        if inbound and _CORRELATION_ID_RE.match(inbound):
            return inbound
        return str(uuid.uuid4())

    def _current_trace_context(self):
        span = trace.get_current_span()
        context = span.get_span_context()
        if not context.is_valid:
            return None, None
        return format_trace_id(context.trace_id), format_span_id(context.span_id)

    def _get_request_status(self, response: HttpResponse) -> str:
        """Determine request status based on status code."""
        if response.status_code >= 500:
            return "server_error"
        if response.status_code >= 400:
            return "client_error"
        return "success"

    def _log_response(
        self,
        request: HttpRequest,
        response: HttpResponse,
        correlation_id: str,
        status: str,
        duration: float,
        trace_id: Optional[str],
    ):
        """Log structured response information."""
        log_extra = {
            "correlation_id": correlation_id,
            "request_status": status,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id

        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            log_extra["user_id"] = user.pk

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed successfully", extra=log_extra)

    def _log_exception(self, request, e, start_time, correlation_id):
        duration = time.monotonic() - start_time
        logger.error(
            "Request failed",
            extra={
                "correlation_id": correlation_id,
                "request_status": "exception",
                "method": request.method,
                "path": request.path,
                "error": str(e),
                "error_type": type(e).__name__,
                "duration_ms": round(duration * 1000, 2),
            },
            exc_info=True,
        )
