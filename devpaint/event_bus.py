"""Event source for the dashboard.

Two pieces:
- EventBus: subscribe by channel name, receive payloads. Dispatch is
  synchronous, in the emitting thread, in registration order.
- Mailbox: thread-safe fan-in. Any number of producer threads post events;
  a single consumer drains them, in FIFO order, onto an EventBus.

The dashboard controller is not thread-safe, so producers on other threads
(file watcher, worker output readers, server startup) post to the mailbox and
the UI thread drains it.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable

from .models.events import PaintEvent, to_event

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


class EventBus:
    """In-process publish/subscribe keyed by event name.

    Usage:
        bus = EventBus()
        bus.on(PaintEvent.INFO, lambda payload: print(payload["args"]))
        bus.emit(PaintEvent.INFO, {"args": "hello"})
    """

    def __init__(self) -> None:
        self._handlers: dict[PaintEvent, list[EventHandler]] = {}

    def on(self, event: str | PaintEvent, handler: EventHandler) -> None:
        """Subscribe a handler to an event."""
        self._handlers.setdefault(to_event(event), []).append(handler)

    def off(self, event: str | PaintEvent, handler: EventHandler) -> bool:
        """Unsubscribe a handler. Returns False if it was not subscribed."""
        handlers = self._handlers.get(to_event(event), [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event: str | PaintEvent, payload: Any = None) -> int:
        """Deliver a payload to every handler of an event.

        Handler exceptions propagate to the emitter.

        Returns:
            Number of handlers called.
        """
        handlers = list(self._handlers.get(to_event(event), []))
        if not handlers:
            logger.debug("No handlers for %s", event)
        for handler in handlers:
            handler(payload)
        return len(handlers)

    def handler_count(self, event: str | PaintEvent) -> int:
        """Number of handlers subscribed to an event."""
        return len(self._handlers.get(to_event(event), []))


# Queued when the mailbox is closed; wakes a blocked consumer
_CLOSED = object()


class Mailbox:
    """Serialize events from many threads into one consumer.

    Usage:
        mailbox = Mailbox(bus)
        threading.Thread(target=producer, args=(mailbox,)).start()
        mailbox.run_forever()  # on the UI thread, returns after close()
    """

    def __init__(self, bus: EventBus, maxsize: int = 0) -> None:
        """Initialize the mailbox.

        Args:
            bus: Where drained events are emitted.
            maxsize: Queue bound; 0 is unbounded. Producers block when full,
                events are never dropped.
        """
        self._bus = bus
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self._consumer = threading.Lock()
        # Held across the closed check and the put, so no event lands behind _CLOSED
        self._producer = threading.Lock()
        self._closed = False
        self._finished = False  # _CLOSED taken off the queue
        self._delivered: int = 0

    @property
    def delivered(self) -> int:
        """Total events emitted onto the bus."""
        return self._delivered

    @property
    def closed(self) -> bool:
        return self._closed

    def post(self, event: str | PaintEvent, payload: Any = None) -> None:
        """Queue an event. Safe from any thread.

        Raises:
            RuntimeError: If the mailbox is closed.
            UnknownEventError: If the event name is not a dashboard channel.
        """
        item = (to_event(event), payload)
        with self._producer:
            if self._closed:
                raise RuntimeError("Mailbox is closed")
            self._queue.put(item)

    def close(self) -> None:
        """Stop accepting events. Already queued events are still delivered."""
        with self._producer:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def drain(self) -> int:
        """Deliver every queued event without blocking.

        Returns:
            Number of events delivered.
        """
        with self._exclusive():
            count = 0
            while not self._finished:
                try:
                    item = self._queue.get_nowait()
                except queue.Empty:
                    break
                if item is _CLOSED:
                    self._finished = True
                    break
                self._deliver(item)
                count += 1
            return count

    def run_forever(self) -> int:
        """Block delivering events until the mailbox is closed and empty.

        Returns:
            Number of events delivered.
        """
        with self._exclusive():
            count = 0
            while not self._finished:
                item = self._queue.get()
                if item is _CLOSED:
                    self._finished = True
                    break
                self._deliver(item)
                count += 1
            return count

    def _deliver(self, item: tuple[PaintEvent, Any]) -> None:
        event, payload = item
        self._bus.emit(event, payload)
        self._delivered += 1

    def _exclusive(self) -> "_ConsumerGuard":
        return _ConsumerGuard(self._consumer)


class _ConsumerGuard:
    """Hold the single-consumer lock, failing instead of waiting."""

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock

    def __enter__(self) -> None:
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("Mailbox already has an active consumer")

    def __exit__(self, *exc: object) -> None:
        self._lock.release()
