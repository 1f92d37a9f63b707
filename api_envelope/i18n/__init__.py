"""
Localization for envelope messages.

Provides the built-in message catalogs and a catalog-backed translator
implementing `ITranslator`.
"""

from api_envelope.i18n.catalogs import BUILTIN_CATALOGS
from api_envelope.i18n.translator import Translator

__all__ = ["BUILTIN_CATALOGS", "Translator"]
