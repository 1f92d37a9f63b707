"""
Exception handling package.

Classifies exceptions, resolves application codes and HTTP statuses, renders
messages and assembles the error envelopes returned to API clients.
"""

from api_envelope.handlers.classifier import carried_http_code, classify
from api_envelope.handlers.envelope import ErrorEnvelope, assemble
from api_envelope.handlers.exception_handler import (
    ExceptionHandlerHelper,
    build_debug_trace,
    field_errors,
    register_exception_handlers,
)
from api_envelope.handlers.fallback import ResolvedCodes, resolve
from api_envelope.handlers.messages import MessageResolver, exception_placeholders

__all__ = [
    "classify",
    "carried_http_code",
    "resolve",
    "ResolvedCodes",
    "MessageResolver",
    "exception_placeholders",
    "ErrorEnvelope",
    "assemble",
    "ExceptionHandlerHelper",
    "build_debug_trace",
    "field_errors",
    "register_exception_handlers",
]
