"""Configuration management for cueline."""

from cueline.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from cueline.core.config.models import (
    AppConfig,
    DestinationPolicy,
    LoggingConfig,
    OrderingConfig,
)

__all__ = [
    "AppConfig",
    "DestinationPolicy",
    "LoggingConfig",
    "OrderingConfig",
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
]
