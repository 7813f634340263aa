"""Configuration loader for devpaint

Configurable values come from config/config.yaml, or from the file named
by the DEVPAINT_CONFIG environment variable.

Configuration is validated at load time using Pydantic.
Typos and invalid values fail fast with clear error messages.

Usage:
    from devpaint.config import load_config, get, get_validated_config

    # Load and validate (call once at startup)
    load_config("config/config.yaml")

    # Get values by dot-path
    label = get("dashboard.badge_label")

    # Or use the typed config object (preferred)
    config = get_validated_config()
    label = config.dashboard.badge_label
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from .config_schema import AppConfig, load_validated_config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DEVPAINT_CONFIG"

# Default config path
DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "config.yaml"

# Global config instance
_validated_config: AppConfig | None = None


def resolve_config_path(config_path: str | Path | None = None) -> Path:
    """Pick the config file: explicit path, then $DEVPAINT_CONFIG, then default."""
    if config_path:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    A missing default config file means built-in defaults; a missing file
    that was asked for explicitly is an error.

    Args:
        config_path: Path to config file. Defaults to $DEVPAINT_CONFIG, then
            config/config.yaml.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    global _validated_config

    path = resolve_config_path(config_path)
    if path == DEFAULT_CONFIG_PATH and not path.exists():
        logger.debug("No config at %s, using defaults", path)
        _validated_config = AppConfig()
    else:
        _validated_config = load_validated_config(path)

    return _validated_config


def get_validated_config() -> AppConfig:
    """Get the validated configuration object.

    Loads the default config if not already loaded.
    """
    global _validated_config
    if _validated_config is None:
        load_config()
    if _validated_config is None:
        raise RuntimeError("Validated config failed to load. Call load_config() first.")
    return _validated_config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-separated key path.

    Examples:
        get("dashboard.badge_label")
        get("logging.level")
        get("dashboard.display_names.tsc")
    """
    value: Any = get_validated_config().model_dump()
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def reset_config() -> None:
    """Forget the loaded config so the next access reloads it."""
    global _validated_config
    _validated_config = None
