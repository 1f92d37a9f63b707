"""Utility package with lazy exports to avoid heavy import side effects."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

_LAZY_IMPORTS: Dict[str, Tuple[str, str]] = {
    # Exceptions
    "EnvelopeError": ("api_envelope.utils.exceptions", "EnvelopeError"),
    "AuthenticationError": ("api_envelope.utils.exceptions", "AuthenticationError"),
    "ValidationFailedError": ("api_envelope.utils.exceptions", "ValidationFailedError"),
    "UnknownApiCodeError": ("api_envelope.utils.exceptions", "UnknownApiCodeError"),
    "ApiCodeRangeError": ("api_envelope.utils.exceptions", "ApiCodeRangeError"),
    "TranslationMissingError": ("api_envelope.utils.exceptions", "TranslationMissingError"),
    "TranslationFormatError": ("api_envelope.utils.exceptions", "TranslationFormatError"),
    "SettingsValidationError": ("api_envelope.utils.exceptions", "SettingsValidationError"),
    # Application codes and failure types
    "FailureType": ("api_envelope.utils.error_codes", "FailureType"),
    "ApiCode": ("api_envelope.utils.error_codes", "ApiCode"),
    "DEFAULT_API_CODES": ("api_envelope.utils.error_codes", "DEFAULT_API_CODES"),
    "DEFAULT_HTTP_CODES": ("api_envelope.utils.error_codes", "DEFAULT_HTTP_CODES"),
    "default_http_code": ("api_envelope.utils.error_codes", "default_http_code"),
    "MessageKeys": ("api_envelope.utils.error_codes", "MessageKeys"),
    "CodeRegistry": ("api_envelope.utils.error_codes", "CodeRegistry"),
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> Any:
    """Dynamically import requested attributes on first access."""

    try:
        module_name, attr_name = _LAZY_IMPORTS[name]
    except KeyError as exc:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc

    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    """Return sorted attributes for IDE support."""

    return sorted(__all__)
