"""
Collaborator Interfaces for api-envelope

This module defines abstract base classes for the collaborators consumed by
the exception handler. The handler depends only on these contracts, so an
application can plug in its own code table or localization backend.

Usage:
    from api_envelope.interfaces import ICodeRegistry, ITranslator

    def my_function(registry: ICodeRegistry):
        key = registry.message_key_for(10)
"""

from api_envelope.interfaces.registry_interface import ICodeRegistry
from api_envelope.interfaces.translator_interface import ITranslator

__all__ = [
    "ICodeRegistry",
    "ITranslator",
]
