"""Dashboard core business logic.

Structured into:
- event_parser.py: Parse JSONL → typed events
- reducer.py: Events → display model
- renderer.py: Display model → terminal frame
- controller.py: Reduce-then-render on every event
"""

from .event_parser import EventParser
from .reducer import apply_event, make_reducers
from .renderer import RenderSettings, TerminalRenderer, pattern_suppressor, render_frame
from .controller import ControllerState, DashboardController

__all__ = [
    "EventParser",
    "apply_event",
    "make_reducers",
    "RenderSettings",
    "TerminalRenderer",
    "pattern_suppressor",
    "render_frame",
    "ControllerState",
    "DashboardController",
]
