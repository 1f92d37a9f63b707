"""
Exception hierarchy for the API error envelope service.

This module defines two families of exceptions. The first family is raised by
applications that mount the exception handler (authentication and validation
failures); the handler recognizes these and maps them onto the matching
canonical failure types. The second family describes misconfiguration of the
envelope package itself, such as an application code without a message key or
a missing translation. Those are programmer errors and are never masked by
the handler.
"""

from typing import Any, Dict, List, Mapping, Optional


class EnvelopeError(Exception):
    """The base exception class for all errors raised by this package.

    Attributes:
        context: Optional additional information about the error.
    """

    def __init__(self, message: str, context: Optional[Any] = None):
        """Initializes the EnvelopeError.

        Args:
            message: A human-readable message describing the error.
            context: An optional dictionary for providing extra context.
        """
        super().__init__(message)
        self.context = context


# --- Failures raised by applications and recognized by the handler ---


class AuthenticationError(Exception):
    """Raised when a request could not be authenticated.

    Applications raise this from dependencies or endpoints when credentials
    are missing or invalid. The exception handler classifies it as an
    authentication failure and responds with the built-in authentication
    code and a 401 status unless configured otherwise.
    """

    def __init__(self, message: str = "", guards: Optional[List[str]] = None):
        """Initializes the AuthenticationError.

        Args:
            message: An optional human-readable message.
            guards: Names of the authentication guards that rejected the request.
        """
        super().__init__(message)
        self.guards = list(guards or [])


class ValidationFailedError(Exception):
    """Raised when request data fails validation rules.

    The field-error map is passed through to the response `data` node
    unmodified, so the order of messages for each field is preserved.

    Attributes:
        errors: Mapping of field name to an ordered list of messages.
    """

    def __init__(self, errors: Mapping[str, List[str]], message: str = "The given data was invalid."):
        super().__init__(message)
        self.errors: Dict[str, List[str]] = {field: list(messages) for field, messages in errors.items()}


# --- Package misconfiguration (fatal) ---


class UnknownApiCodeError(EnvelopeError):
    """Raised when an application code has no associated message key.

    This indicates the code table was built incorrectly and is not a runtime
    condition the handler should recover from.
    """

    def __init__(self, code: int, context: Optional[Any] = None):
        super().__init__(f"No message key is mapped for API code {code}", context=context)
        self.code = code


class ApiCodeRangeError(EnvelopeError):
    """Raised when a user code falls inside the reserved range or outside the user range."""

    def __init__(self, code: int, minimum: int, maximum: int, context: Optional[Any] = None):
        super().__init__(
            f"API code {code} is outside the user code range {minimum}..{maximum}",
            context=context,
        )
        self.code = code
        self.minimum = minimum
        self.maximum = maximum


class TranslationMissingError(EnvelopeError):
    """Raised when no catalog provides a translation for a message key."""

    def __init__(self, key: str, locale: str, context: Optional[Any] = None):
        super().__init__(f"Missing translation for '{key}' in locale '{locale}'", context=context)
        self.key = key
        self.locale = locale


class TranslationFormatError(EnvelopeError):
    """Raised when a catalog template cannot be rendered.

    Unbalanced braces and format specs that do not apply to text make a
    template unusable.
    """

    def __init__(self, key: str, locale: str, reason: str, context: Optional[Any] = None):
        super().__init__(
            f"Malformed translation for '{key}' in locale '{locale}': {reason}",
            context=context,
        )
        self.key = key
        self.locale = locale


class SettingsValidationError(EnvelopeError):
    """Raised when application settings fail cross-field validation."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, context=context)
