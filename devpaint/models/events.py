"""Event names and payload models for the dashboard channels.

Producers emit a channel name plus a payload dict. Field names on the wire
follow the producer's convention (``isBuilding``, ``startTimeMs``); the models
below expose snake_case attributes and accept either spelling.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PaintEvent(str, Enum):
    """Channels the dashboard subscribes to."""

    BUILD_FILE = "BUILD_FILE"
    WORKER_MSG = "WORKER_MSG"
    WORKER_UPDATE = "WORKER_UPDATE"
    WORKER_COMPLETE = "WORKER_COMPLETE"
    WORKER_RESET = "WORKER_RESET"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    SERVER_START = "SERVER_START"
    INSTALL_START = "INSTALL_START"
    INSTALL_MSG = "INSTALL_MSG"
    INSTALL_COMPLETE = "INSTALL_COMPLETE"


class UnknownEventError(KeyError):
    """Raised for an event name with no payload model or reducer."""


class Payload(BaseModel):
    """Base for all channel payloads."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# File builds


class BuildFilePayload(Payload):
    """A file started or stopped building."""

    # The file watcher historically sends the path as ``id``
    path: str = Field(validation_alias=AliasChoices("path", "id"))
    is_building: bool = Field(alias="isBuilding")


# Workers


class WorkerMsgPayload(Payload):
    """A chunk of worker output."""

    id: str
    msg: str


class WorkerUpdatePayload(Payload):
    """A worker status change. ``state`` is only applied when provided."""

    id: str
    state: tuple[str, str] | None = None  # (label, color)


class WorkerCompletePayload(Payload):
    """A worker finished, possibly with an error."""

    id: str
    error: Any | None = None


class WorkerResetPayload(Payload):
    """A worker restarted; its record starts over."""

    id: str


# Console


class LogPayload(Payload):
    """A console line for INFO, WARN and ERROR."""

    args: str


# Server


class ServerStartPayload(Payload):
    """Dev server is listening."""

    start_time_ms: float = Field(alias="startTimeMs")
    hostname: str
    port: int
    protocol: str
    ips: list[str] = Field(default_factory=list)


# Install phase


class InstallStartPayload(Payload):
    """Install phase began."""


class InstallMsgPayload(Payload):
    """A chunk of install output."""

    msg: str


class InstallCompletePayload(Payload):
    """Install phase ended."""


PAYLOAD_MODELS: dict[PaintEvent, type[Payload]] = {
    PaintEvent.BUILD_FILE: BuildFilePayload,
    PaintEvent.WORKER_MSG: WorkerMsgPayload,
    PaintEvent.WORKER_UPDATE: WorkerUpdatePayload,
    PaintEvent.WORKER_COMPLETE: WorkerCompletePayload,
    PaintEvent.WORKER_RESET: WorkerResetPayload,
    PaintEvent.INFO: LogPayload,
    PaintEvent.WARN: LogPayload,
    PaintEvent.ERROR: LogPayload,
    PaintEvent.SERVER_START: ServerStartPayload,
    PaintEvent.INSTALL_START: InstallStartPayload,
    PaintEvent.INSTALL_MSG: InstallMsgPayload,
    PaintEvent.INSTALL_COMPLETE: InstallCompletePayload,
}


def to_event(name: str | PaintEvent) -> PaintEvent:
    """Resolve a channel name to a PaintEvent.

    Raises:
        UnknownEventError: If the name is not a known channel.
    """
    if isinstance(name, PaintEvent):
        return name
    try:
        return PaintEvent(name)
    except ValueError:
        raise UnknownEventError(name) from None


def parse_payload(event: str | PaintEvent, data: Payload | dict[str, Any] | None) -> Payload:
    """Build the typed payload for an event.

    Already-typed payloads of the right class pass through. Missing required
    fields raise ``pydantic.ValidationError``; the producer owns payload shape.
    """
    model = PAYLOAD_MODELS[to_event(event)]
    if isinstance(data, model):
        return data
    if isinstance(data, Payload):
        data = data.model_dump(by_alias=True)
    return model.model_validate(data or {})
