"""
Application entrypoint for the API envelope service.

This module is the application factory: it creates the FastAPI app, installs
the correlation ID middleware and registers the error envelope exception
handlers so that every failure reaches clients in the same shape.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from api_envelope.api.middleware import CorrelationIdMiddleware
from api_envelope.core.config import Settings, get_settings
from api_envelope.core.logging import get_logger, setup_structured_logging
from api_envelope.handlers import ExceptionHandlerHelper, register_exception_handlers

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Creates and configures a FastAPI application instance.

    Args:
        settings: Settings to build the app with. When omitted, the cached
            application settings are used and re-read on every error.

    Returns:
        The configured FastAPI application instance.
    """
    setup_structured_logging()
    current = settings or get_settings()

    # Starlette's debug mode replaces the catch-all handler with its HTML
    # traceback page, so it stays off; use debug_trace_enabled instead.
    app = FastAPI(
        title=current.server.app_name,
        version=current.server.app_version,
        docs_url="/docs" if current.server.debug else None,
        redoc_url="/redoc" if current.server.debug else None,
        default_response_class=ORJSONResponse,
    )

    helper = register_exception_handlers(app, ExceptionHandlerHelper(settings=settings))
    app.state.exception_handler = helper

    app.add_middleware(CorrelationIdMiddleware, error_renderer=helper.render)

    logger.info(
        "Error envelope handlers registered",
        debug_trace_enabled=current.exception_handler.debug_trace_enabled,
    )
    return app
