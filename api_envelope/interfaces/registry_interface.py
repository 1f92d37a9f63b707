"""
Interface for the Code Registry

Defines the contract for resolving application codes to message keys.
"""

from abc import ABC, abstractmethod


class ICodeRegistry(ABC):
    """
    Interface for application code registries.

    Maps numeric application codes to translation keys and knows which codes
    are reserved for built-in failure types.
    """

    @abstractmethod
    def message_key_for(self, code: int) -> str:
        """
        Resolve an application code to its message key.

        Args:
            code: Application code

        Returns:
            Translation key for the code

        Raises:
            UnknownApiCodeError: If the code is not mapped
        """
        pass

    @abstractmethod
    def is_reserved_code(self, code: int) -> bool:
        """
        Check whether a code belongs to the reserved built-in range.

        Args:
            code: Application code

        Returns:
            True if the code is reserved, False if it is a user code
        """
        pass
