"""Configuration models for cueline."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from cueline.core.utils.logging import DEFAULT_LOG_FORMAT


class DestinationPolicy(str, Enum):
    """How out-of-range destination group indices are handled."""

    CLAMP = "clamp"  # Pull into the nearest valid index
    STRICT = "strict"  # Raise IndexError


class OrderingConfig(BaseModel):
    """Ordering engine behavior."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    destination_policy: DestinationPolicy = Field(
        default=DestinationPolicy.CLAMP,
        description="Handling of move/insert destinations outside the group range",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = DEFAULT_LOG_FORMAT
    structured: bool = Field(default=False, description="Emit JSON log records")


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    ordering: OrderingConfig = OrderingConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("config.json")


__all__ = [
    "AppConfig",
    "DestinationPolicy",
    "LoggingConfig",
    "OrderingConfig",
]
