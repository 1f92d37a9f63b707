"""
Root Settings class composing all domain-specific configurations.

This module provides the main Settings class that brings together all
domain-specific configuration classes into a single, cohesive settings object.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from api_envelope.core.config.codes import CodeRangeConfig
from api_envelope.core.config.exception_handler import ExceptionHandlerConfig
from api_envelope.core.config.locale import LocaleConfig
from api_envelope.core.config.monitoring import MonitoringConfig
from api_envelope.core.config.server import ServerConfig
from api_envelope.utils.error_codes import RESERVED_MAX_API_CODE
from api_envelope.utils.exceptions import SettingsValidationError


class Settings(BaseSettings):
    """Main settings class composing all domain-specific configurations.

    All settings are accessed through their domain-specific structure
    (e.g., settings.exception_handler.debug_trace_enabled,
    settings.codes.code_map).

    Attributes:
        server: Server and application configuration.
        exception_handler: Per failure type overrides and debug trace settings.
        codes: User application code range and message key mapping.
        locale: Localization configuration.
        monitoring: Logging configuration.
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    exception_handler: ExceptionHandlerConfig = Field(default_factory=ExceptionHandlerConfig)
    codes: CodeRangeConfig = Field(default_factory=CodeRangeConfig)
    locale: LocaleConfig = Field(default_factory=LocaleConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    def _validate_configured_codes(self) -> None:
        """Ensures every configured user code override lies in the user range.

        Built-in codes may be reused for any failure type, but a user code
        outside the configured range could never be given a message key.

        Raises:
            SettingsValidationError: If an override uses an unusable code.
        """
        for failure_type, entry in self.exception_handler.exception.items():
            code = entry.code
            if code is None or code <= RESERVED_MAX_API_CODE:
                continue
            if not self.codes.code_range_min <= code <= self.codes.code_range_max:
                raise SettingsValidationError(
                    f"Code {code} configured for '{failure_type.value}' is outside the "
                    f"user range {self.codes.code_range_min}..{self.codes.code_range_max}"
                )

    @model_validator(mode="after")
    def validate_configuration_consistency(self):
        """Performs cross-field validation to ensure configuration consistency.

        Returns:
            The validated Settings instance.
        """
        self._validate_configured_codes()
        return self

    class Config:
        """Pydantic configuration options for the Settings class.

        Attributes:
            env_prefix: The prefix for environment variables (e.g., ENVELOPE_DEBUG).
            env_file: The name of the environment file to load (e.g., .env).
            case_sensitive: Whether environment variables are case-sensitive.
            extra: Setting to ignore extra fields provided.
        """

        env_prefix = "ENVELOPE_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Provides a cached instance of the application settings.

    This function is used by FastAPI's dependency injection system to make the
    Settings object available to route handlers and the exception handler.
    Call `get_settings.cache_clear()` after changing the environment.

    Returns:
        The singleton instance of the application settings.
    """
    return Settings()
