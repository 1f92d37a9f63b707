"""
Core application components.

This module contains fundamental application components: configuration and
structured logging.
"""

from .config import Settings, get_settings
from .logging import get_logger, setup_structured_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_structured_logging",
    "get_logger",
]
