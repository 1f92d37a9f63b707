"""
Application code and HTTP status resolution.

The application code comes from the per-type configuration when set and from
the built-in table otherwise. The HTTP status walks a three step chain where
the first valid (>= 400) candidate wins:

1. the per-type configured ``http_code``;
2. the status carried by the exception itself;
3. the caller supplied fallback, used verbatim without validation.
"""

from typing import NamedTuple, Optional

from api_envelope.core.config.exception_handler import ExceptionHandlerConfig
from api_envelope.core.logging import get_logger
from api_envelope.utils.error_codes import (
    DEFAULT_API_CODES,
    FailureType,
    is_valid_error_http_code,
)

logger = get_logger(__name__)


class ResolvedCodes(NamedTuple):
    """Application code and HTTP status chosen for a failure."""

    api_code: int
    http_code: int


def resolve_api_code(failure_type: FailureType, config: ExceptionHandlerConfig) -> int:
    code = config.for_type(failure_type).code
    return int(DEFAULT_API_CODES[failure_type]) if code is None else code


def resolve_http_code(
    failure_type: FailureType,
    config: ExceptionHandlerConfig,
    fallback_http_code: int,
    carried_http_code: Optional[int] = None,
) -> int:
    entry = config.for_type(failure_type)

    http_code = entry.valid_http_code()
    if http_code is not None:
        return http_code
    if entry.http_code is not None:
        logger.debug(
            "Ignoring invalid configured HTTP code",
            failure_type=failure_type.value,
            http_code=entry.http_code,
        )

    if is_valid_error_http_code(carried_http_code):
        return carried_http_code

    return fallback_http_code


def resolve(
    failure_type: FailureType,
    config: ExceptionHandlerConfig,
    fallback_http_code: int,
    carried_http_code: Optional[int] = None,
) -> ResolvedCodes:
    """Resolves the application code and HTTP status for a failure type.

    Args:
        failure_type: The classified failure type.
        config: Exception handler configuration snapshot.
        fallback_http_code: Last-resort HTTP status. It is returned as-is when
            neither the configuration nor the exception provides a valid
            status, even if it is itself below 400.
        carried_http_code: HTTP status carried by the exception, if any.

    Returns:
        The resolved application code and HTTP status.
    """
    return ResolvedCodes(
        api_code=resolve_api_code(failure_type, config),
        http_code=resolve_http_code(failure_type, config, fallback_http_code, carried_http_code),
    )
