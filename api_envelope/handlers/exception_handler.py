"""
Exception handler turning any exception into an error envelope response.

`ExceptionHandlerHelper` runs the whole pipeline for a single exception:
classification, code and HTTP status resolution, message rendering, payload
and debug data collection, and envelope assembly. `register_exception_handlers`
installs it on a FastAPI application so every error leaves the service in the
same shape.

Misconfiguration of the code table or the translations (an application code
without a message key, a key without a translation) is not handled here and
propagates to the caller.
"""

import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_envelope.core.config import Settings, get_settings
from api_envelope.core.logging import get_logger
from api_envelope.handlers.classifier import carried_http_code, classify
from api_envelope.handlers.envelope import ErrorEnvelope, assemble
from api_envelope.handlers.fallback import resolve
from api_envelope.handlers.messages import MessageResolver, qualified_class_name
from api_envelope.i18n import Translator
from api_envelope.interfaces import ICodeRegistry, ITranslator
from api_envelope.utils.error_codes import CodeRegistry, FailureType, default_http_code
from api_envelope.utils.exceptions import AuthenticationError, ValidationFailedError

logger = get_logger(__name__)

# Leading `loc` segments naming where a FastAPI parameter came from.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def field_errors(error: BaseException) -> Dict[str, List[str]]:
    """Returns the per-field messages of a validation failure.

    `ValidationFailedError` maps are returned as they are. FastAPI and
    pydantic error lists are grouped by dotted field location, keeping the
    order in which the errors were reported.
    """
    if isinstance(error, ValidationFailedError):
        return error.errors
    if not isinstance(error, (RequestValidationError, PydanticValidationError)):
        return {}

    grouped: Dict[str, List[str]] = {}
    for item in error.errors():
        loc = [str(part) for part in item.get("loc", ())]
        if len(loc) > 1 and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) or "__root__"
        grouped.setdefault(field, []).append(item.get("msg", ""))
    return grouped


def build_debug_trace(error: BaseException) -> Dict[str, Any]:
    """Returns diagnostic data about where an exception was raised.

    The content is informational only and may change at any time.
    """
    frames = traceback.extract_tb(error.__traceback__) if error.__traceback__ else []
    innermost = frames[-1] if frames else None
    return {
        "class": qualified_class_name(error),
        "file": innermost.filename if innermost else None,
        "line": innermost.lineno if innermost else None,
    }


class ExceptionHandlerHelper:
    """Builds error envelope responses for exceptions.

    The exception handler configuration is read from the settings on every
    call, so each response is built from one consistent snapshot of the
    settings current at that time.

    Attributes:
        registry: Code registry used to resolve message keys.
        translator: Translator used to render messages.
        messages: Message resolver combining both.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[ICodeRegistry] = None,
        translator: Optional[ITranslator] = None,
    ):
        """Initializes the helper.

        Args:
            settings: Settings to use. When omitted, `get_settings()` is
                consulted for every response.
            registry: Code registry. Built from the settings when omitted.
            translator: Translator. Built from the settings when omitted.
        """
        self._settings = settings
        current = self.settings
        self.registry = registry or CodeRegistry.from_settings(current)
        self.translator = translator or Translator.from_settings(current)
        self.messages = MessageResolver(self.registry, self.translator)

    @property
    def settings(self) -> Settings:
        return self._settings if self._settings is not None else get_settings()

    def render(self, request: Optional[Request], error: BaseException) -> ORJSONResponse:
        """Renders any exception as an error envelope response.

        Args:
            request: The request being handled, if any.
            error: The exception to render.

        Returns:
            An `ORJSONResponse` carrying the envelope and the resolved status.
        """
        failure_type = classify(error)
        return self.error(error, failure_type, self._fallback_http_code(failure_type), request=request)

    def unauthenticated(self, request: Optional[Request], error: AuthenticationError) -> ORJSONResponse:
        """Renders an authentication failure."""
        return self.error(
            error,
            FailureType.AUTHENTICATION,
            self._fallback_http_code(FailureType.AUTHENTICATION),
            request=request,
        )

    def error(
        self,
        error: BaseException,
        failure_type: FailureType,
        fallback_http_code: int,
        request: Optional[Request] = None,
    ) -> ORJSONResponse:
        """Renders an exception as a failure of the given type.

        Args:
            error: The exception to render.
            failure_type: The failure type to render it as.
            fallback_http_code: Last-resort HTTP status.
            request: The request being handled, if any.
        """
        envelope = self.build_envelope(error, failure_type, fallback_http_code)
        self._log(error, failure_type, envelope, request)
        return envelope.to_response()

    def build_envelope(
        self,
        error: BaseException,
        failure_type: FailureType,
        fallback_http_code: int,
    ) -> ErrorEnvelope:
        """Resolves codes and message and assembles the envelope."""
        config = self.settings.exception_handler

        resolved = resolve(failure_type, config, fallback_http_code, carried_http_code(error))
        message = self.messages.render_exception(resolved.api_code, error)

        debug_payload = None
        if config.debug_trace_enabled:
            debug_payload = {config.debug_trace_key: build_debug_trace(error)}

        errors = field_errors(error) if failure_type is FailureType.VALIDATION else None

        return assemble(
            failure_type,
            resolved.api_code,
            message,
            resolved.http_code,
            debug_enabled=config.debug_trace_enabled,
            debug_payload=debug_payload,
            field_errors=errors,
        )

    def _fallback_http_code(self, failure_type: FailureType) -> int:
        return default_http_code(failure_type, self.settings.exception_handler.default_http_code_error)

    def _log(
        self,
        error: BaseException,
        failure_type: FailureType,
        envelope: ErrorEnvelope,
        request: Optional[Request],
    ) -> None:
        log_data = {
            "failure_type": failure_type.value,
            "api_code": envelope.code,
            "status_code": envelope.http_code,
            "error_class": qualified_class_name(error),
        }
        if request is not None:
            log_data["path"] = request.url.path
        if isinstance(error, AuthenticationError) and error.guards:
            log_data["guards"] = error.guards

        if failure_type is FailureType.UNCAUGHT:
            logger.error("Unhandled exception", exc_info=error, **log_data)
        else:
            logger.warning("Request failed", **log_data)


def register_exception_handlers(
    app: FastAPI, helper: Optional[ExceptionHandlerHelper] = None
) -> ExceptionHandlerHelper:
    """Registers error envelope handlers on a FastAPI application.

    Args:
        app: The FastAPI application instance.
        helper: The helper to use. A default one is built when omitted.

    Returns:
        The helper used by the registered handlers.
    """
    helper = helper or ExceptionHandlerHelper()

    @app.exception_handler(AuthenticationError)
    async def handle_unauthenticated(request: Request, exc: AuthenticationError) -> ORJSONResponse:
        """Handle authentication failures."""
        return helper.unauthenticated(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> ORJSONResponse:
        """Handle FastAPI request validation failures."""
        return helper.render(request, exc)

    @app.exception_handler(ValidationFailedError)
    async def handle_validation_failed(request: Request, exc: ValidationFailedError) -> ORJSONResponse:
        """Handle application validation failures."""
        return helper.render(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
        """Handle HTTP exceptions, including unknown routes."""
        return helper.render(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> ORJSONResponse:
        """Catch-all for everything else."""
        return helper.render(request, exc)

    return helper
