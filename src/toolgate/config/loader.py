"""Configuration loading: TOML files, env var overrides, merge logic.

Discovery order (later overrides earlier):
    1. Built-in defaults (Pydantic model defaults)
    2. User config: ``~/.config/toolgate/config.toml``
    3. Project-local config: ``./toolgate.toml``
    4. ``$TOOLGATE_CONFIG`` environment variable (explicit path)
    5. Explicit ``path`` argument
    6. Programmatic overrides (passed to ``load_config``)

``TOOLGATE_EXPERIMENTAL_EXTENSIONS`` switches on extension support
regardless of the files, when set to a truthy value.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from toolgate.core.errors import ConfigError

from .schema import ToolgateConfig

_TRUTHY = {"1", "true", "yes", "on"}


def _user_config_path() -> Path:
    """Return XDG-compliant user config path."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "toolgate" / "config.toml"


def _project_config_path() -> Path:
    """Return project-local config path."""
    return Path.cwd() / "toolgate.toml"


def _discover_config_files() -> list[Path]:
    """Return config files in merge order (first = lowest priority)."""
    paths: list[Path] = []

    user = _user_config_path()
    if user.is_file():
        paths.append(user)

    project = _project_config_path()
    if project.is_file():
        paths.append(project)

    env_path = os.environ.get("TOOLGATE_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.is_file():
            msg = f"TOOLGATE_CONFIG points to non-existent file: {env_path}"
            raise ConfigError(msg)
        paths.append(p)

    return paths


def _read_toml(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file."""
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env(config: ToolgateConfig) -> None:
    """Apply environment variable switches (in-place)."""
    flag = os.environ.get("TOOLGATE_EXPERIMENTAL_EXTENSIONS", "")
    if flag.strip().lower() in _TRUTHY:
        config.capabilities.experimental_extension_support = True


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ToolgateConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file path (highest file priority).
        overrides: Dict of overrides merged last (highest overall priority).

    Returns:
        Validated ToolgateConfig instance.

    Raises:
        ConfigError: On invalid TOML, missing files, or validation failure.
    """
    merged: dict[str, Any] = {}

    # Discover and merge config files
    files = _discover_config_files()

    # Explicit path overrides TOOLGATE_CONFIG
    if path is not None:
        p = Path(path)
        if not p.is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        files.append(p)

    for config_file in files:
        data = _read_toml(config_file)
        merged = _deep_merge(merged, data)

    # Apply programmatic overrides
    if overrides:
        merged = _deep_merge(merged, overrides)

    # Validate with Pydantic
    try:
        config = ToolgateConfig.model_validate(merged)
    except Exception as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    # Environment switches win over every file
    _apply_env(config)

    return config
