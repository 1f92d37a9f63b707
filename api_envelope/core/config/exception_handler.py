"""Exception handler configuration settings."""

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from api_envelope.utils.error_codes import (
    DEFAULT_HTTP_CODE_ERROR,
    FailureType,
    is_valid_error_http_code,
)


class ExceptionTypeConfig(BaseModel):
    """Per failure type overrides.

    Both fields are optional. An HTTP code of 0 or any value below 400 is
    treated as absent rather than rejected, so a malformed entry never breaks
    error responses.

    Attributes:
        http_code: HTTP status to respond with.
        code: Application code to respond with.
    """

    http_code: Optional[int] = Field(default=None, description="HTTP status override")
    code: Optional[int] = Field(default=None, description="Application code override", ge=0)

    model_config = {"frozen": True}

    def valid_http_code(self) -> Optional[int]:
        """Returns the configured HTTP code, or None if it is absent or invalid."""
        if is_valid_error_http_code(self.http_code):
            return self.http_code
        return None


class ExceptionHandlerConfig(BaseSettings):
    """Exception handler configuration.

    Attributes:
        exception: Overrides keyed by failure type.
        debug_trace_enabled: Attach a debug node with trace data to error responses.
        debug_trace_key: Key of the trace entry inside the debug node.
        default_http_code_error: Last-resort HTTP status for validation and
            generic HTTP failures.
    """

    exception: Dict[FailureType, ExceptionTypeConfig] = Field(
        default_factory=dict,
        description="Per failure type code and HTTP status overrides",
    )
    debug_trace_enabled: bool = Field(
        default=False,
        description="Attach debug trace data to error responses",
    )
    debug_trace_key: str = Field(
        default="trace",
        description="Key of the trace entry in the debug node",
        min_length=1,
    )
    default_http_code_error: int = Field(
        default=DEFAULT_HTTP_CODE_ERROR,
        description="Last-resort HTTP status for validation and generic HTTP failures",
        ge=400,
        le=599,
    )

    @field_validator("exception", mode="before")
    @classmethod
    def drop_empty_entries(cls, value):
        """Treats a null entry the same as a missing one."""
        if isinstance(value, dict):
            return {key: entry for key, entry in value.items() if entry is not None}
        return value

    def for_type(self, failure_type: FailureType) -> ExceptionTypeConfig:
        """Returns the overrides for a failure type, empty if none are configured."""
        return self.exception.get(failure_type) or ExceptionTypeConfig()

    class Config:
        """Pydantic configuration."""

        env_prefix = "ENVELOPE_EXCEPTION_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
        frozen = True
