"""
Error response envelope.

Every error response has the same shape::

    {
        "success": false,
        "code": 15,
        "message": "Invalid data",
        "data": {"messages": {"title": ["...", "..."]}},
        "debug": {"trace": {"class": "...", "file": "...", "line": 42}}
    }

`data` is null for every failure type except validation. The `debug` key is
only present when debug tracing is enabled, and its content is passed through
without any normalization.
"""

from typing import Any, Dict, List, Mapping, Optional

from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field, PrivateAttr

from api_envelope.utils.error_codes import DEFAULT_HTTP_CODE_ERROR, FailureType

KEY_SUCCESS = "success"
KEY_CODE = "code"
KEY_MESSAGE = "message"
KEY_DATA = "data"
KEY_DEBUG = "debug"
KEY_MESSAGES = "messages"


class ErrorEnvelope(BaseModel):
    """Defines the schema of an API error response.

    Attributes:
        success: Always false for error responses.
        code: The application code identifying the error condition.
        message: Localized, human-readable message.
        data: Structured payload, only for validation failures.
        debug: Opaque diagnostic data, only when debug tracing is enabled.

    Example:
        ```json
        {
            "success": false,
            "code": 10,
            "message": "Unknown method",
            "data": null
        }
        ```
    """

    success: bool = Field(default=False, description="Always false for error responses")
    code: int = Field(..., description="Application code", ge=0)
    message: str = Field(..., description="Localized error message")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Structured error payload")
    debug: Optional[Dict[str, Any]] = Field(default=None, description="Diagnostic data")

    _http_code: int = PrivateAttr(default=DEFAULT_HTTP_CODE_ERROR)

    @property
    def http_code(self) -> int:
        """HTTP status the envelope is sent with."""
        return self._http_code

    def to_content(self) -> Dict[str, Any]:
        """Returns the JSON-ready body, with `debug` only when it was set."""
        exclude = None if KEY_DEBUG in self.model_fields_set else {KEY_DEBUG}
        return self.model_dump(exclude=exclude)

    def to_response(self) -> ORJSONResponse:
        return ORJSONResponse(status_code=self.http_code, content=self.to_content())


def assemble(
    failure_type: FailureType,
    api_code: int,
    message: str,
    http_code: int,
    debug_enabled: bool = False,
    debug_payload: Optional[Mapping[str, Any]] = None,
    field_errors: Optional[Mapping[str, List[str]]] = None,
) -> ErrorEnvelope:
    """Builds the error envelope for a resolved failure.

    Args:
        failure_type: The classified failure type.
        api_code: Resolved application code.
        message: Rendered message.
        http_code: Resolved HTTP status. It is kept alongside the envelope
            for the response, not serialized into the body.
        debug_enabled: Whether to attach the debug node.
        debug_payload: Diagnostic data attached verbatim when enabled.
        field_errors: Per-field messages of a validation failure.

    Returns:
        The assembled envelope.
    """
    data = None
    if failure_type is FailureType.VALIDATION:
        data = {KEY_MESSAGES: dict(field_errors or {})}

    fields: Dict[str, Any] = {KEY_CODE: api_code, KEY_MESSAGE: message, KEY_DATA: data}
    if debug_enabled:
        fields[KEY_DEBUG] = dict(debug_payload) if debug_payload is not None else None

    envelope = ErrorEnvelope(**fields)
    envelope._http_code = http_code
    return envelope
