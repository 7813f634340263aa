"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from devpaint.config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# DASHBOARD
# =============================================================================

class DashboardConfig(StrictModel):
    """Terminal dashboard presentation."""

    badge_label: str = Field(
        default="DEVPAINT",
        min_length=1,
        description="Text of the brand badge in the status bar"
    )
    install_label: str = Field(
        default="install",
        description="Header of the install phase section"
    )
    color: bool = Field(
        default=True,
        description="Emit ANSI color and style codes"
    )
    display_names: dict[str, str] = Field(
        default_factory=lambda: {"tsc": "TypeScript"},
        description="Worker id -> human label"
    )
    suppress_patterns: dict[str, list[str]] = Field(
        default_factory=lambda: {
            "tsc": ["Found 0 errors."],
            "svelte-check": ["found no errors"],
        },
        description="Worker id -> output substrings that hide its section"
    )
    workers: list[str] = Field(
        default_factory=list,
        description="Worker ids registered up front, in display order"
    )

    @field_validator("workers")
    @classmethod
    def workers_unique(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("worker ids must be unique")
        return v


# =============================================================================
# LOGGING
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration.

    The dashboard owns the terminal, so log records go to a file.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum level written to the log file"
    )
    file: str | None = Field(
        default="devpaint.log",
        description="Log file path; null disables logging output"
    )


# =============================================================================
# SERVER
# =============================================================================

class ServerConfig(StrictModel):
    """Dev server settings used by the pre-run port check."""

    default_port: int = Field(
        default=8080,
        gt=0,
        le=65535,
        description="Port tried first"
    )
    host: str = Field(
        default="127.0.0.1",
        description="Interface the port check binds"
    )


# =============================================================================
# ROOT CONFIG
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model.

    All fields have sensible defaults, so an empty config file is valid.
    """

    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


__all__ = [
    "AppConfig",
    "DashboardConfig",
    "LoggingConfig",
    "ServerConfig",
    "StrictModel",
    "load_validated_config",
    "validate_config_dict",
]
