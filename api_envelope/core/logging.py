"""
Structured logging configuration for the API envelope service.

This module provides a centralized setup for structured logging using
`structlog`. Log entries are rendered as JSON and enriched with the service
name, version, and the correlation ID of the current request.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

from api_envelope.core.config import get_settings

# Context variable to hold the correlation ID for the current request context.
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def setup_structured_logging() -> None:
    """Configures structured, JSON-formatted logging for the application.

    Sets up the standard library root logger at the configured level and a
    chain of `structlog` processors that add timestamps, log levels, logger
    names and request context to every entry.
    """
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.monitoring.log_level.upper(), logging.INFO),
    )

    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _add_request_context,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=shared_processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_request_context(
    logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Adds service and request context to log entries.

    Args:
        logger: The standard library logger instance (unused in this processor).
        method_name: The name of the logging method (e.g., 'info', 'error').
        event_dict: The dictionary representing the log entry to be enriched.

    Returns:
        The enriched log entry dictionary.
    """
    settings = get_settings()
    event_dict.setdefault("service", settings.monitoring.service_name)
    event_dict.setdefault("version", settings.server.app_version)

    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id

    return event_dict


def set_correlation_id(correlation_id: str) -> None:
    """Sets the correlation ID for the current asynchronous context."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Retrieves the correlation ID from the current asynchronous context.

    Returns:
        The current correlation ID, or `None` if it has not been set.
    """
    return correlation_id_var.get()


def generate_correlation_id() -> str:
    """Generates a new, unique correlation ID using UUID version 4."""
    return str(uuid.uuid4())


def clear_correlation_id() -> None:
    """Clears the correlation ID from the current context."""
    correlation_id_var.set(None)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Retrieves a `structlog` logger instance.

    Args:
        name: The name of the logger, typically the module's `__name__`.

    Returns:
        A configured `structlog` logger instance.
    """
    return structlog.get_logger(name)
