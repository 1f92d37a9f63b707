"""
Configuration management package for api-envelope.

This package provides domain-specific configuration classes that are composed
into a root Settings class.
"""

from api_envelope.core.config.codes import CodeRangeConfig
from api_envelope.core.config.exception_handler import (
    ExceptionHandlerConfig,
    ExceptionTypeConfig,
)
from api_envelope.core.config.locale import LocaleConfig
from api_envelope.core.config.monitoring import MonitoringConfig
from api_envelope.core.config.server import ServerConfig
from api_envelope.core.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "ServerConfig",
    "ExceptionHandlerConfig",
    "ExceptionTypeConfig",
    "CodeRangeConfig",
    "LocaleConfig",
    "MonitoringConfig",
]
