"""
Correlation ID middleware for request tracing.

This middleware generates or extracts a correlation ID for every request and
keeps it available to loggers, including the exception handler, for the
whole request lifecycle.
"""

from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from api_envelope.core.logging import (
    clear_correlation_id,
    generate_correlation_id,
    get_logger,
    set_correlation_id,
)

logger = get_logger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Manages correlation IDs for request tracking.

    Starlette runs the catch-all `Exception` handler outside of every user
    middleware, after the correlation ID has been cleared and without the
    response header. When `error_renderer` is given, unhandled exceptions are
    rendered here instead, so the error response and its log entry both carry
    the correlation ID.

    Attributes:
        header_name: The name of the request header for the correlation ID.
        response_header_name: The name of the response header for the
            correlation ID.
        error_renderer: Optional callable turning `(request, exc)` into an
            error response.
    """

    def __init__(
        self,
        app,
        header_name: str = "X-Correlation-ID",
        response_header_name: str = "X-Correlation-ID",
        error_renderer: Optional[Callable[[Request, Exception], Response]] = None,
    ):
        super().__init__(app)
        self.header_name = header_name
        self.response_header_name = response_header_name
        self.error_renderer = error_renderer

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Sets the correlation ID for the request and echoes it in the response.

        Args:
            request: The incoming `Request` object.
            call_next: A function to call to pass the request to the next
                middleware or the application.

        Returns:
            The `Response` from the application, with the correlation ID header
            added.
        """
        correlation_id = request.headers.get(self.header_name)
        if not correlation_id:
            correlation_id = generate_correlation_id()
            logger.debug("Generated new correlation ID", correlation_id=correlation_id, path=request.url.path)

        set_correlation_id(correlation_id)
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                if self.error_renderer is None:
                    raise
                response = self.error_renderer(request, exc)
            response.headers[self.response_header_name] = correlation_id
            return response
        finally:
            clear_correlation_id()
