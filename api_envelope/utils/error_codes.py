"""
Application codes used in API error envelopes.

Application codes are integers independent from HTTP status codes. Codes in
the reserved range belong to this package (one per canonical failure type plus
a couple of generic ones); every other code is assigned by the application and
must be mapped to a message key in configuration.

Code Ranges:
- 0-63: Reserved for built-in codes
- code_range_min..code_range_max: User codes (default 100-1024)
"""

from enum import Enum, IntEnum
from typing import Dict, Mapping, Optional

from api_envelope.interfaces.registry_interface import ICodeRegistry
from api_envelope.utils.exceptions import ApiCodeRangeError, UnknownApiCodeError

RESERVED_MIN_API_CODE = 0
RESERVED_MAX_API_CODE = 63

# HTTP statuses below this value are not error responses.
ERROR_HTTP_CODE_MIN = 400
DEFAULT_HTTP_CODE_ERROR = 400


class FailureType(str, Enum):
    """Canonical failure types the exception handler distinguishes.

    Values double as the keys of the per-type exception handler
    configuration.
    """

    AUTHENTICATION = "authentication_exception"
    VALIDATION = "validation_exception"
    HTTP_NOT_FOUND = "http_not_found"
    HTTP_SERVICE_UNAVAILABLE = "http_service_unavailable"
    HTTP_UNAUTHORIZED = "http_unauthorized"
    HTTP_GENERIC = "http_exception"
    UNCAUGHT = "uncaught_exception"


class ApiCode(IntEnum):
    """Built-in application codes."""

    OK = 0
    NO_ERROR_MESSAGE = 1

    # Exception handler codes
    EX_HTTP_NOT_FOUND = 10
    EX_HTTP_SERVICE_UNAVAILABLE = 11
    EX_HTTP_EXCEPTION = 12
    EX_UNCAUGHT_EXCEPTION = 13
    EX_AUTHENTICATION_EXCEPTION = 14
    EX_VALIDATION_EXCEPTION = 15


class MessageKeys:
    """Maps each built-in `ApiCode` to its translation key."""

    KEYS = {
        ApiCode.OK: "api.ok",
        ApiCode.NO_ERROR_MESSAGE: "api.no_error_message",
        ApiCode.EX_HTTP_NOT_FOUND: "api.http_not_found",
        ApiCode.EX_HTTP_SERVICE_UNAVAILABLE: "api.http_service_unavailable",
        ApiCode.EX_HTTP_EXCEPTION: "api.http_exception",
        ApiCode.EX_UNCAUGHT_EXCEPTION: "api.uncaught_exception",
        ApiCode.EX_AUTHENTICATION_EXCEPTION: "api.authentication_exception",
        ApiCode.EX_VALIDATION_EXCEPTION: "api.validation_exception",
    }

    @classmethod
    def get_key(cls, code: int) -> Optional[str]:
        """Returns the translation key of a built-in code, or None."""
        try:
            return cls.KEYS.get(ApiCode(code))
        except ValueError:
            return None


# Code used for each failure type when configuration does not override it.
DEFAULT_API_CODES: Dict[FailureType, ApiCode] = {
    FailureType.AUTHENTICATION: ApiCode.EX_AUTHENTICATION_EXCEPTION,
    FailureType.VALIDATION: ApiCode.EX_VALIDATION_EXCEPTION,
    FailureType.HTTP_NOT_FOUND: ApiCode.EX_HTTP_NOT_FOUND,
    FailureType.HTTP_SERVICE_UNAVAILABLE: ApiCode.EX_HTTP_SERVICE_UNAVAILABLE,
    FailureType.HTTP_UNAUTHORIZED: ApiCode.EX_AUTHENTICATION_EXCEPTION,
    FailureType.HTTP_GENERIC: ApiCode.EX_HTTP_EXCEPTION,
    FailureType.UNCAUGHT: ApiCode.EX_UNCAUGHT_EXCEPTION,
}

# Last-resort HTTP status for each failure type.
DEFAULT_HTTP_CODES: Dict[FailureType, int] = {
    FailureType.AUTHENTICATION: 401,
    FailureType.VALIDATION: DEFAULT_HTTP_CODE_ERROR,
    FailureType.HTTP_NOT_FOUND: 404,
    FailureType.HTTP_SERVICE_UNAVAILABLE: 503,
    FailureType.HTTP_UNAUTHORIZED: 401,
    FailureType.HTTP_GENERIC: DEFAULT_HTTP_CODE_ERROR,
    FailureType.UNCAUGHT: 500,
}

# Failure types without a dedicated status; they fall back to the generic
# error status, which is configurable.
GENERIC_ERROR_TYPES = frozenset({FailureType.VALIDATION, FailureType.HTTP_GENERIC})


def default_http_code(failure_type: FailureType, default_error: int = DEFAULT_HTTP_CODE_ERROR) -> int:
    """Returns the last-resort HTTP status for a failure type.

    Args:
        failure_type: The failure type.
        default_error: Status used for types without a dedicated one.
    """
    if failure_type in GENERIC_ERROR_TYPES:
        return default_error
    return DEFAULT_HTTP_CODES[failure_type]


def is_valid_error_http_code(http_code: Optional[int]) -> bool:
    """Returns True if `http_code` is usable as an error response status."""
    return isinstance(http_code, int) and http_code >= ERROR_HTTP_CODE_MIN


class CodeRegistry(ICodeRegistry):
    """Resolves application codes to message keys.

    Built-in codes resolve through `MessageKeys`. User codes resolve through
    the configured code map, which is validated against the user range when
    the registry is built so that a bad table fails at startup rather than
    on the first error response.

    Attributes:
        code_range_min: The lowest code available to the application.
        code_range_max: The highest code available to the application.
    """

    def __init__(
        self,
        code_map: Optional[Mapping[int, str]] = None,
        code_range_min: int = 100,
        code_range_max: int = 1024,
    ):
        """Initializes the registry and validates the user code map.

        Args:
            code_map: Mapping of user code to message key.
            code_range_min: Lower bound of the user code range.
            code_range_max: Upper bound of the user code range.

        Raises:
            ApiCodeRangeError: If a mapped code is reserved or out of range.
        """
        self.code_range_min = code_range_min
        self.code_range_max = code_range_max
        self._map: Dict[int, str] = {}
        for code, key in (code_map or {}).items():
            code = int(code)
            if self.is_reserved_code(code) or not code_range_min <= code <= code_range_max:
                raise ApiCodeRangeError(code, code_range_min, code_range_max)
            self._map[code] = key

    @classmethod
    def from_settings(cls, settings) -> "CodeRegistry":
        """Builds a registry from the `codes` section of the settings."""
        return cls(
            code_map=settings.codes.code_map,
            code_range_min=settings.codes.code_range_min,
            code_range_max=settings.codes.code_range_max,
        )

    def is_reserved_code(self, code: int) -> bool:
        return RESERVED_MIN_API_CODE <= code <= RESERVED_MAX_API_CODE

    def message_key_for(self, code: int) -> str:
        """Returns the message key for an application code.

        Args:
            code: The application code to resolve.

        Returns:
            The translation key associated with the code.

        Raises:
            UnknownApiCodeError: If the code has no message key.
        """
        if self.is_reserved_code(code):
            key = MessageKeys.get_key(code)
        else:
            key = self._map.get(code)
        if key is None:
            raise UnknownApiCodeError(code)
        return key
