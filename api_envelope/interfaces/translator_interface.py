"""
Interface for the Translator

Defines the contract for localized message lookup.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class ITranslator(ABC):
    """
    Interface for localization services.

    Resolves a translation key to a localized template and substitutes named
    placeholders into it.
    """

    @abstractmethod
    def lookup(
        self,
        key: str,
        placeholders: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        """
        Return the localized message for a key.

        Args:
            key: Translation key
            placeholders: Named values substituted into the template
            locale: Locale to use (None for the configured default)

        Returns:
            Localized message with placeholders substituted

        Raises:
            TranslationMissingError: If no catalog provides the key
        """
        pass
