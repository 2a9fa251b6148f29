"""Configuration loading and validation."""

from toolgate.config.loader import load_config
from toolgate.config.schema import (
    CapabilitiesConfig,
    LoggingConfig,
    ServerConfig,
    ToolgateConfig,
)

__all__ = [
    "CapabilitiesConfig",
    "LoggingConfig",
    "ServerConfig",
    "ToolgateConfig",
    "load_config",
]
