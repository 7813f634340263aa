"""Display model built from dashboard events.

These dataclasses are the single snapshot the renderer draws. They carry
mutation helpers only; all event semantics live in the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Worker state label used when a worker signals completion
DONE_STATE: tuple[str, str] = ("DONE", "green")


@dataclass
class WorkerStatus:
    """Current status of a named background worker."""

    id: str
    done: bool = False
    state: tuple[str, str] | None = None  # (label, color)
    error: Any = None  # Falsy means no error
    output: str = ""

    @property
    def has_error(self) -> bool:
        """Whether the worker has reported an error."""
        return bool(self.error)

    def append_output(self, msg: str) -> None:
        """Append a chunk of worker output."""
        self.output += msg

    def set_error(self, error: Any) -> None:
        """Record an error. The first truthy error wins."""
        if not self.error:
            self.error = error


@dataclass(frozen=True)
class ServerInfo:
    """Dev server connection info, replaced as a whole on each server start."""

    start_time_ms: float
    hostname: str
    port: int
    protocol: str
    ips: tuple[str, ...] = ()

    @property
    def primary_ip(self) -> str | None:
        """First advertised address, if any."""
        return self.ips[0] if self.ips else None


@dataclass
class DisplayModel:
    """Aggregate snapshot of everything the dashboard shows."""

    # Console lines, oldest first
    console: list[str] = field(default_factory=list)

    # Worker id -> status, in first-seen order
    workers: dict[str, WorkerStatus] = field(default_factory=dict)

    # Relative paths currently being built
    building: set[str] = field(default_factory=set)

    server: ServerInfo | None = None

    # One-off install phase
    installing: bool = False
    install_output: str = ""

    def get_worker(self, worker_id: str) -> WorkerStatus | None:
        """Get worker status by ID."""
        return self.workers.get(worker_id)

    def get_or_create_worker(self, worker_id: str) -> WorkerStatus:
        """Get or create worker status."""
        if worker_id not in self.workers:
            self.workers[worker_id] = WorkerStatus(id=worker_id)
        return self.workers[worker_id]

    def reset_worker(self, worker_id: str) -> WorkerStatus:
        """Replace a worker's status with a fresh record, keeping its slot."""
        worker = WorkerStatus(id=worker_id)
        self.workers[worker_id] = worker
        return worker

    @property
    def is_building(self) -> bool:
        """Whether any file build is in progress."""
        return bool(self.building)
