"""
Catalog-backed translator.

Looks message keys up in per-locale catalogs and substitutes named
placeholders. Placeholders a template references but the caller does not
supply are left in the text as-is.
"""

from typing import Any, Dict, Mapping, Optional

from api_envelope.core.logging import get_logger
from api_envelope.i18n.catalogs import BUILTIN_CATALOGS
from api_envelope.interfaces.translator_interface import ITranslator
from api_envelope.utils.exceptions import TranslationFormatError, TranslationMissingError

logger = get_logger(__name__)


class _Placeholders(dict):
    """Placeholder mapping that leaves unknown names untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class Translator(ITranslator):
    """Resolves translation keys against in-memory catalogs.

    Attributes:
        locale: Locale used when `lookup` is not given one.
        fallback_locale: Locale consulted when a key is missing in the
            requested locale.
    """

    def __init__(
        self,
        catalogs: Optional[Mapping[str, Mapping[str, str]]] = None,
        locale: str = "en",
        fallback_locale: str = "en",
    ):
        """Initializes the translator.

        Args:
            catalogs: Extra catalogs keyed by locale. Their entries override
                the built-in ones.
            locale: Default locale.
            fallback_locale: Locale used when a key is missing.
        """
        self.locale = locale
        self.fallback_locale = fallback_locale
        self._catalogs: Dict[str, Dict[str, str]] = {
            name: dict(entries) for name, entries in BUILTIN_CATALOGS.items()
        }
        for name, entries in (catalogs or {}).items():
            self._catalogs.setdefault(name, {}).update(entries)

    @classmethod
    def from_settings(cls, settings) -> "Translator":
        """Builds a translator from the `locale` section of the settings."""
        return cls(
            catalogs=settings.locale.translations,
            locale=settings.locale.locale,
            fallback_locale=settings.locale.fallback_locale,
        )

    def get_template(self, key: str, locale: Optional[str] = None) -> str:
        """Returns the raw template for a key.

        Raises:
            TranslationMissingError: If neither the locale nor the fallback
                locale provides the key.
        """
        locale = locale or self.locale
        for candidate in (locale, self.fallback_locale):
            template = self._catalogs.get(candidate, {}).get(key)
            if template is not None:
                if candidate != locale:
                    logger.debug("Translation fell back", key=key, locale=locale, fallback=candidate)
                return template
        raise TranslationMissingError(key, locale)

    def lookup(
        self,
        key: str,
        placeholders: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Renders the template for a key.

        Raises:
            TranslationMissingError: If no catalog provides the key.
            TranslationFormatError: If the template is malformed.
        """
        template = self.get_template(key, locale)
        values = _Placeholders({name: str(value) for name, value in (placeholders or {}).items()})
        try:
            return template.format_map(values)
        except (ValueError, TypeError, IndexError, AttributeError) as exc:
            raise TranslationFormatError(key, locale or self.locale, str(exc)) from exc
