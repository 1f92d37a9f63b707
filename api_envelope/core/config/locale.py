"""Localization configuration."""

from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings


class LocaleConfig(BaseSettings):
    """Localization configuration.

    Attributes:
        locale: Locale used to render messages.
        fallback_locale: Locale consulted when a key is missing in `locale`.
        translations: Extra catalogs keyed by locale, merged over the built-in ones.
    """

    locale: str = Field(default="en", description="Default locale", min_length=2)
    fallback_locale: str = Field(default="en", description="Fallback locale", min_length=2)
    translations: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="Additional message catalogs keyed by locale",
    )

    class Config:
        """Pydantic configuration."""

        env_prefix = "ENVELOPE_LOCALE_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
