"""Dashboard data models.

Structured into:
- events.py: Channel names and payload models (Pydantic)
- state.py: Display model built from events
"""

from .events import (
    PaintEvent,
    Payload,
    BuildFilePayload,
    WorkerMsgPayload,
    WorkerUpdatePayload,
    WorkerCompletePayload,
    WorkerResetPayload,
    LogPayload,
    ServerStartPayload,
    InstallStartPayload,
    InstallMsgPayload,
    InstallCompletePayload,
    UnknownEventError,
    parse_payload,
    to_event,
)
from .state import (
    DONE_STATE,
    DisplayModel,
    ServerInfo,
    WorkerStatus,
)

__all__ = [
    # Events
    "PaintEvent",
    "Payload",
    "BuildFilePayload",
    "WorkerMsgPayload",
    "WorkerUpdatePayload",
    "WorkerCompletePayload",
    "WorkerResetPayload",
    "LogPayload",
    "ServerStartPayload",
    "InstallStartPayload",
    "InstallMsgPayload",
    "InstallCompletePayload",
    "UnknownEventError",
    "parse_payload",
    "to_event",
    # State
    "DONE_STATE",
    "DisplayModel",
    "ServerInfo",
    "WorkerStatus",
]
