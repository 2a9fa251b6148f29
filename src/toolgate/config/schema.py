"""Pydantic models for toolgate configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

from toolgate.tools.extensions import EXTENSIONS_CONDITION


class ServerConfig(BaseModel):
    """MCP server settings."""

    name: str = "toolgate"


class CapabilitiesConfig(BaseModel):
    """Capability flags that gate conditional tools."""

    experimental_extension_support: bool = False
    enabled: list[str] = Field(default_factory=list)

    def active(self) -> frozenset[str]:
        """Condition names currently switched on."""
        names = set(self.enabled)
        if self.experimental_extension_support:
            names.add(EXTENSIONS_CONDITION)
        return frozenset(names)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""


class ToolgateConfig(BaseModel):
    """Top-level configuration for toolgate."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    capabilities: CapabilitiesConfig = Field(default_factory=CapabilitiesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
