"""Application code range configuration."""

from typing import Dict

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from api_envelope.utils.error_codes import RESERVED_MAX_API_CODE
from api_envelope.utils.exceptions import SettingsValidationError


class CodeRangeConfig(BaseSettings):
    """User application code configuration.

    Attributes:
        code_range_min: Lowest application code available to the application.
        code_range_max: Highest application code available to the application.
        code_map: Mapping of user application code to message key.
    """

    code_range_min: int = Field(
        default=100,
        description="Lowest user application code",
        ge=0,
    )
    code_range_max: int = Field(
        default=1024,
        description="Highest user application code",
        ge=0,
    )
    code_map: Dict[int, str] = Field(
        default_factory=dict,
        description="User application code to message key mapping",
    )

    @model_validator(mode="after")
    def validate_range(self):
        """Ensures the user range is ordered and clear of the reserved range.

        Raises:
            SettingsValidationError: If the range is inverted or overlaps
                reserved codes.
        """
        if self.code_range_min > self.code_range_max:
            raise SettingsValidationError(
                f"code_range_min ({self.code_range_min}) must not exceed "
                f"code_range_max ({self.code_range_max})"
            )
        if self.code_range_min <= RESERVED_MAX_API_CODE:
            raise SettingsValidationError(
                f"code_range_min must be above the reserved range (> {RESERVED_MAX_API_CODE})"
            )
        return self

    class Config:
        """Pydantic configuration."""

        env_prefix = "ENVELOPE_CODES_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
