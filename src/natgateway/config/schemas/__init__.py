"""Configuration schemas."""

from .app_schema import AppConfig, AWSConfig, HandlerConfig, LogFileConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "AWSConfig",
    "HandlerConfig",
    "LogFileConfig",
    "LoggingConfig",
]
