"""Wiring for a live dashboard: config → renderer, controller, bus, mailbox."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .config_schema import AppConfig, DashboardConfig, LoggingConfig
from .core.controller import DashboardController
from .core.renderer import RenderSettings, TerminalRenderer, pattern_suppressor
from .event_bus import EventBus, Mailbox

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Dashboard:
    """A subscribed controller plus the event source feeding it."""

    bus: EventBus
    mailbox: Mailbox
    controller: DashboardController
    renderer: TerminalRenderer


def render_settings(config: DashboardConfig, color: bool | None = None) -> RenderSettings:
    """Build render settings from the dashboard config section."""
    return RenderSettings(
        badge_label=config.badge_label,
        install_label=config.install_label,
        display_names=dict(config.display_names),
        suppress=pattern_suppressor(config.suppress_patterns),
        color=config.color if color is None else color,
    )


def configure_logging(config: LoggingConfig, log_file: str | None = None) -> None:
    """Send log records to a file so they never interleave with frames.

    With no file configured, records are discarded.
    """
    root = logging.getLogger()
    root.setLevel(config.level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    path = log_file or config.file
    handler: logging.Handler
    if path:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)


def create_dashboard(
    stream: TextIO,
    config: AppConfig | None = None,
    base_path: str | Path | None = None,
    color: bool | None = None,
) -> Dashboard:
    """Create a dashboard that paints to ``stream``.

    The initial empty frame is painted immediately.
    """
    config = config or AppConfig()
    renderer = TerminalRenderer(stream, render_settings(config.dashboard, color))
    controller = DashboardController(
        renderer,
        base_path=base_path,
        workers=config.dashboard.workers,
    )
    bus = EventBus()
    controller.subscribe(bus)
    return Dashboard(bus=bus, mailbox=Mailbox(bus), controller=controller, renderer=renderer)
