"""Pytest fixtures for devpaint tests.

Common fixtures for driving the dashboard without a real terminal.
"""

from __future__ import annotations

import io
from typing import Iterator

import pytest
from dotenv import load_dotenv

from devpaint import config as config_module
from devpaint.core.controller import DashboardController
from devpaint.core.renderer import RenderSettings, TerminalRenderer, pattern_suppressor

# Load environment variables from .env before any tests run
load_dotenv()


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from a developer's DEVPAINT_CONFIG and cached config."""
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def plain_settings() -> RenderSettings:
    """Render settings with colors off and the default suppression rules."""
    return RenderSettings(
        display_names={"tsc": "TypeScript"},
        suppress=pattern_suppressor({
            "tsc": ["Found 0 errors."],
            "svelte-check": ["found no errors"],
        }),
        color=False,
        platform="linux",
    )


@pytest.fixture
def screen() -> io.StringIO:
    """In-memory terminal."""
    return io.StringIO()


@pytest.fixture
def renderer(screen: io.StringIO, plain_settings: RenderSettings) -> TerminalRenderer:
    return TerminalRenderer(screen, plain_settings)


@pytest.fixture
def controller(renderer: TerminalRenderer) -> DashboardController:
    """Controller rooted at /project for build path relativization."""
    return DashboardController(renderer, base_path="/project")
