"""Dashboard controller: events → model → frame.

Responsible for:
- Owning the single display model
- Subscribing to every dashboard channel
- Running one reduce-then-render cycle per event
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from ..models.events import PaintEvent, Payload, to_event
from ..models.state import DisplayModel
from .reducer import apply_event, make_reducers
from .renderer import TerminalRenderer

if TYPE_CHECKING:
    from ..event_bus import EventBus, EventHandler

logger = logging.getLogger(__name__)


class ControllerState(str, Enum):
    """Lifecycle of a dashboard controller."""

    UNINITIALIZED = "uninitialized"  # Only the initial empty frame drawn
    LIVE = "live"  # At least one event handled


class DashboardController:
    """Keep the display model current and repaint it on every event.

    Not thread-safe: events must reach ``handle`` one at a time, from one
    thread. Use a Mailbox in front of the bus for multi-threaded producers.

    Usage:
        controller = DashboardController(TerminalRenderer(sys.stdout))
        controller.subscribe(bus)
        bus.emit("WORKER_MSG", {"id": "tsc", "msg": "..."})
    """

    def __init__(
        self,
        renderer: TerminalRenderer,
        base_path: str | Path | None = None,
        workers: Iterable[str] = (),
    ) -> None:
        """Initialize and paint the empty dashboard.

        Args:
            renderer: Where frames are drawn.
            base_path: Directory absolute build paths are shown relative to.
            workers: Worker ids to register up front, in display order.
        """
        self._renderer = renderer
        self._reducers = make_reducers(base_path)
        self._model = DisplayModel()
        self._state = ControllerState.UNINITIALIZED
        self._events_processed: int = 0
        self._renders: int = 0

        for worker_id in workers:
            self._model.get_or_create_worker(worker_id)

        self._paint()

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def events_processed(self) -> int:
        """Total events processed."""
        return self._events_processed

    @property
    def renders(self) -> int:
        """Frames this controller has painted, the initial one included."""
        return self._renders

    @property
    def model(self) -> DisplayModel:
        """Current display model. Callers must treat it as read-only."""
        return self._model

    def handle(self, event: str | PaintEvent, payload: Payload | dict[str, Any] | None = None) -> None:
        """Apply one event and repaint.

        Raises:
            UnknownEventError: If the event has no reducer.
            pydantic.ValidationError: If the payload is malformed.
        """
        event = to_event(event)
        logger.debug("Handling %s", event.value)
        apply_event(self._model, event, payload, self._reducers)
        self._events_processed += 1
        self._state = ControllerState.LIVE
        self._paint()

    def subscribe(self, bus: "EventBus", events: Iterable[PaintEvent] = PaintEvent) -> None:
        """Register a handler on the bus for each channel."""
        for event in events:
            bus.on(event, self._handler_for(event))

    def _paint(self) -> None:
        self._renderer.paint(self._model)
        self._renders += 1

    def _handler_for(self, event: PaintEvent) -> "EventHandler":
        def handler(payload: Payload | dict[str, Any] | None) -> None:
            self.handle(event, payload)

        return handler
