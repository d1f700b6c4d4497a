"""Configuration management."""

from .defaults import DEFAULT_CONFIG, ConfigurationManager, LogDestination, LogLevel
from .schemas import AppConfig, AWSConfig, HandlerConfig, LogFileConfig, LoggingConfig

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigurationManager",
    "LogDestination",
    "LogLevel",
    "AppConfig",
    "AWSConfig",
    "HandlerConfig",
    "LogFileConfig",
    "LoggingConfig",
]
