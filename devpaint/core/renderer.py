"""Renderer: display model → terminal text.

Responsible for:
- Producing one full frame from a model snapshot (pure, deterministic)
- Writing frames to the terminal stream

The renderer never mutates the model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence, TextIO

from ..ansi import Palette, clear_sequence
from ..models.state import DisplayModel, WorkerStatus

logger = logging.getLogger(__name__)

# (worker_id, output) -> hide the worker's section?
SuppressRule = Callable[[str, str], bool]

INDENT = "  "


def never_suppress(worker_id: str, output: str) -> bool:
    return False


def pattern_suppressor(patterns: Mapping[str, Sequence[str]]) -> SuppressRule:
    """Hide a worker whose output contains one of its "no issues" markers.

    Args:
        patterns: Worker id → substrings meaning the output is not worth showing.
    """
    table = {worker_id: tuple(markers) for worker_id, markers in patterns.items()}

    def suppress(worker_id: str, output: str) -> bool:
        return any(marker in output for marker in table.get(worker_id, ()))

    return suppress


@dataclass(frozen=True)
class RenderSettings:
    """Presentation choices that stay fixed for a dashboard's lifetime."""

    badge_label: str = "DEVPAINT"
    install_label: str = "install"
    display_names: Mapping[str, str] = field(default_factory=dict)
    suppress: SuppressRule = never_suppress
    color: bool = True
    platform: str | None = None

    def display_name(self, worker_id: str) -> str:
        return self.display_names.get(worker_id) or worker_id


def _indent(text: str) -> str:
    return text.strip().replace("\n", "\n" + INDENT)


def _header(palette: Palette, title: str) -> str:
    return palette.underline(palette.bold("▼ " + title))


def _worker_section(palette: Palette, settings: RenderSettings, worker: WorkerStatus) -> str:
    title = _header(palette, settings.display_name(worker.id))
    title = palette.red(title) if worker.has_error else palette.reset(title)
    return f"{title}\n\n{_indent(worker.output)}\n\n"


def _status_bar(palette: Palette, settings: RenderSettings, model: DisplayModel) -> str:
    badge = palette.bg_blue(palette.white(f" {settings.badge_label} "))
    server = model.server
    if server is None:
        return badge + palette.bg_yellow(palette.black(" LOADING "))

    parts: list[str] = []
    if model.is_building:
        parts.append(palette.dim(" Building…"))
    parts.append(badge + palette.bg_green(palette.black(" READY ")))
    address = f" {server.hostname}:{server.port}"
    if server.primary_ip:
        address += f" › {server.primary_ip}"
    parts.append(address)
    return "".join(parts)


def render_frame(model: DisplayModel, settings: RenderSettings | None = None) -> str:
    """Render one full dashboard frame, starting with a screen clear."""
    settings = settings or RenderSettings()
    palette = Palette(enabled=settings.color)
    out: list[str] = [clear_sequence(settings.platform)]

    # Console
    if model.console:
        out.append(f"{_header(palette, 'Console')}\n\n")
        out.append(("\n" + INDENT).join(model.console))
        out.append("\n\n")

    # Workers
    for worker_id, worker in model.workers.items():
        if not worker.output or settings.suppress(worker_id, worker.output):
            continue
        out.append(_worker_section(palette, settings, worker))

    out.append(_status_bar(palette, settings, model))

    # Install phase, always last
    if model.installing:
        out.append(f"\n\n{_header(palette, settings.install_label)}\n\n")
        out.append(INDENT + _indent(model.install_output))
        out.append("\n\n")

    return "".join(out)


class TerminalRenderer:
    """Write frames to a text stream.

    Usage:
        renderer = TerminalRenderer(sys.stdout, RenderSettings(color=False))
        renderer.paint(model)
    """

    def __init__(self, stream: TextIO, settings: RenderSettings | None = None) -> None:
        self.stream = stream
        self.settings = settings or RenderSettings()
        self._frames: int = 0

    @property
    def frames(self) -> int:
        """Total frames written."""
        return self._frames

    def render(self, model: DisplayModel) -> str:
        """Render a frame without writing it."""
        return render_frame(model, self.settings)

    def paint(self, model: DisplayModel) -> None:
        """Render and write a frame. Write errors propagate."""
        frame = self.render(model)
        self.stream.write(frame)
        self.stream.flush()
        self._frames += 1
        logger.debug("Painted frame %d (%d chars)", self._frames, len(frame))
