"""
Exception classification.

Maps any exception onto exactly one canonical `FailureType`. Matching walks
an ordered chain of predicates and the first match wins, so the order of
`_CHAIN` is significant: authentication failures are checked before
validation failures, which are checked before HTTP-carrying failures.
Everything else is `UNCAUGHT`.
"""

from typing import Callable, Optional, Tuple

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_envelope.utils.error_codes import FailureType
from api_envelope.utils.exceptions import AuthenticationError, ValidationFailedError

_VALIDATION_TYPES = (ValidationFailedError, RequestValidationError, PydanticValidationError)

# Carried HTTP status -> failure type. Other statuses are HTTP_GENERIC.
_HTTP_STATUS_TYPES = {
    404: FailureType.HTTP_NOT_FOUND,
    503: FailureType.HTTP_SERVICE_UNAVAILABLE,
    401: FailureType.HTTP_UNAUTHORIZED,
}


def is_authentication_failure(error: BaseException) -> bool:
    return isinstance(error, AuthenticationError)


def is_validation_failure(error: BaseException) -> bool:
    return isinstance(error, _VALIDATION_TYPES)


def is_http_failure(error: BaseException) -> bool:
    """Returns True for failures that carry an explicit HTTP status code."""
    return isinstance(error, StarletteHTTPException)


def carried_http_code(error: BaseException) -> Optional[int]:
    """Returns the HTTP status carried by an HTTP failure, or None."""
    if not is_http_failure(error):
        return None
    status_code = getattr(error, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def _classify_http(error: BaseException) -> FailureType:
    return _HTTP_STATUS_TYPES.get(carried_http_code(error), FailureType.HTTP_GENERIC)


_CHAIN: Tuple[Tuple[Callable[[BaseException], bool], Callable[[BaseException], FailureType]], ...] = (
    (is_authentication_failure, lambda _error: FailureType.AUTHENTICATION),
    (is_validation_failure, lambda _error: FailureType.VALIDATION),
    (is_http_failure, _classify_http),
)


def classify(error: BaseException) -> FailureType:
    """Classify an exception into a canonical :class:`FailureType`.

    Precedence:
        1. Authentication failures.
        2. Validation failures.
        3. HTTP failures, by carried status (404, 503, 401, anything else).
        4. ``UNCAUGHT`` fallback.

    The function is pure and total: it never raises and always returns one
    of the seven failure types.
    """
    for matches, to_type in _CHAIN:
        if matches(error):
            return to_type(error)
    return FailureType.UNCAUGHT
