"""Event reducer: (model, event, payload) → model.

Responsible for:
- Applying exactly one event's effect to the display model
- Lazily creating worker records on first reference
- Keeping sticky and append-only fields intact

Reducers mutate the model in place and return it. They assume sequential
application; callers serialize events before they get here.
"""

from __future__ import annotations

import logging
import os
from functools import partial
from pathlib import Path
from typing import Any, Callable

from ..models.events import (
    BuildFilePayload,
    InstallMsgPayload,
    LogPayload,
    PaintEvent,
    Payload,
    ServerStartPayload,
    UnknownEventError,
    WorkerCompletePayload,
    WorkerMsgPayload,
    WorkerResetPayload,
    WorkerUpdatePayload,
    parse_payload,
    to_event,
)
from ..models.state import DONE_STATE, DisplayModel, ServerInfo

logger = logging.getLogger(__name__)

Reducer = Callable[[DisplayModel, Any], DisplayModel]


def relative_build_path(path: str, base_path: str | Path | None = None) -> str:
    """Path shown for a build, relative to ``base_path`` when absolute."""
    if base_path is not None and os.path.isabs(path):
        return os.path.relpath(path, base_path)
    return os.path.normpath(path)


def reduce_build_file(
    model: DisplayModel,
    payload: BuildFilePayload,
    base_path: str | Path | None = None,
) -> DisplayModel:
    """Add or remove a path from the in-progress builds."""
    path = relative_build_path(payload.path, base_path)
    if payload.is_building:
        model.building.add(path)
    else:
        # Stopping a build we never saw start is a no-op
        model.building.discard(path)
    return model


def reduce_worker_msg(model: DisplayModel, payload: WorkerMsgPayload) -> DisplayModel:
    """Append output to a worker."""
    model.get_or_create_worker(payload.id).append_output(payload.msg)
    return model


def reduce_worker_update(model: DisplayModel, payload: WorkerUpdatePayload) -> DisplayModel:
    """Set a worker's status label when one is provided."""
    worker = model.get_or_create_worker(payload.id)
    if payload.state is not None:
        worker.state = payload.state
    return model


def reduce_worker_complete(model: DisplayModel, payload: WorkerCompletePayload) -> DisplayModel:
    """Mark a worker done, keeping the first error it reported."""
    if payload.id not in model.workers:
        logger.debug("WORKER_COMPLETE for unseen worker %s", payload.id)
    worker = model.get_or_create_worker(payload.id)
    worker.state = DONE_STATE
    worker.done = True
    worker.set_error(payload.error)
    return model


def reduce_worker_reset(model: DisplayModel, payload: WorkerResetPayload) -> DisplayModel:
    """Start a worker over with an empty record."""
    model.reset_worker(payload.id)
    return model


def reduce_log(model: DisplayModel, payload: LogPayload) -> DisplayModel:
    """Append a console line (INFO, WARN and ERROR alike)."""
    model.console.append(payload.args)
    return model


def reduce_server_start(model: DisplayModel, payload: ServerStartPayload) -> DisplayModel:
    """Replace the server info snapshot."""
    model.server = ServerInfo(
        start_time_ms=payload.start_time_ms,
        hostname=payload.hostname,
        port=payload.port,
        protocol=payload.protocol,
        ips=tuple(payload.ips),
    )
    return model


def reduce_install_start(model: DisplayModel, payload: Payload) -> DisplayModel:
    """Enter the install phase with empty output."""
    model.installing = True
    model.install_output = ""
    return model


def reduce_install_msg(model: DisplayModel, payload: InstallMsgPayload) -> DisplayModel:
    """Append install output while the install phase is active."""
    if not model.installing:
        logger.debug("Dropping install output outside install phase")
        return model
    model.install_output += payload.msg
    return model


def reduce_install_complete(model: DisplayModel, payload: Payload) -> DisplayModel:
    """Leave the install phase."""
    model.installing = False
    return model


def make_reducers(base_path: str | Path | None = None) -> dict[PaintEvent, Reducer]:
    """Build the event → reducer table.

    Args:
        base_path: Directory absolute build paths are shown relative to.
    """
    return {
        PaintEvent.BUILD_FILE: partial(reduce_build_file, base_path=base_path),
        PaintEvent.WORKER_MSG: reduce_worker_msg,
        PaintEvent.WORKER_UPDATE: reduce_worker_update,
        PaintEvent.WORKER_COMPLETE: reduce_worker_complete,
        PaintEvent.WORKER_RESET: reduce_worker_reset,
        PaintEvent.INFO: reduce_log,
        PaintEvent.WARN: reduce_log,
        PaintEvent.ERROR: reduce_log,
        PaintEvent.SERVER_START: reduce_server_start,
        PaintEvent.INSTALL_START: reduce_install_start,
        PaintEvent.INSTALL_MSG: reduce_install_msg,
        PaintEvent.INSTALL_COMPLETE: reduce_install_complete,
    }


def apply_event(
    model: DisplayModel,
    event: str | PaintEvent,
    payload: Payload | dict[str, Any] | None,
    reducers: dict[PaintEvent, Reducer] | None = None,
) -> DisplayModel:
    """Apply a single event to the model.

    Raises:
        UnknownEventError: If no reducer handles the event.
        pydantic.ValidationError: If the payload is missing required fields.
    """
    if reducers is None:
        reducers = make_reducers()
    event = to_event(event)
    reducer = reducers.get(event)
    if reducer is None:
        raise UnknownEventError(event.value)
    return reducer(model, parse_payload(event, payload))
