"""Event parser: JSONL → (event, payload) pairs.

Responsible for:
- Reading JSONL streams line by line
- Resolving channel names and typing payloads
- Handling malformed or unknown events gracefully

Each line is one record: ``{"event": "WORKER_MSG", "payload": {...}}``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from pydantic import ValidationError

from ..models.events import PaintEvent, Payload, UnknownEventError, parse_payload, to_event

logger = logging.getLogger(__name__)

ParsedEvent = tuple[PaintEvent, Payload]


class EventParser:
    """Parse JSONL event streams into typed events.

    Usage:
        parser = EventParser()
        for event, payload in parser.parse_file("events.jsonl"):
            controller.handle(event, payload)
    """

    def __init__(self) -> None:
        self._events_parsed: int = 0
        self._parse_errors: int = 0

    @property
    def events_parsed(self) -> int:
        """Total events successfully parsed."""
        return self._events_parsed

    @property
    def parse_errors(self) -> int:
        """Total parse errors encountered."""
        return self._parse_errors

    def parse_line(self, line: str) -> ParsedEvent | None:
        """Parse a single JSONL line into a typed event.

        Returns None if the line is blank or cannot be parsed.
        """
        line = line.strip()
        if not line:
            return None

        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("JSON decode error: %s", e)
            self._parse_errors += 1
            return None

        if not isinstance(data, dict):
            logger.warning("Event is not a dict: %s", type(data))
            self._parse_errors += 1
            return None

        return self._parse_record(data)

    def parse_lines(self, lines: Iterable[str]) -> Iterator[ParsedEvent]:
        """Parse multiple lines, yielding typed events."""
        for line in lines:
            parsed = self.parse_line(line)
            if parsed is not None:
                yield parsed

    def parse_file(self, file_path: str | Path) -> Iterator[ParsedEvent]:
        """Parse a JSONL file.

        Yields:
            (event, payload) pairs in file order
        """
        path = Path(file_path)
        if not path.exists():
            logger.warning("File not found: %s", path)
            return

        with open(path, "r", encoding="utf-8") as f:
            yield from self.parse_lines(f)

    def parse_dict(self, data: dict[str, Any]) -> ParsedEvent:
        """Parse a record dict directly.

        Raises:
            UnknownEventError: If the event name is not a known channel.
            pydantic.ValidationError: If the payload is malformed.
        """
        event = to_event(data.get("event", ""))
        payload = parse_payload(event, data.get("payload"))
        self._events_parsed += 1
        return event, payload

    def reset_stats(self) -> None:
        """Reset parsing statistics."""
        self._events_parsed = 0
        self._parse_errors = 0

    def _parse_record(self, data: dict[str, Any]) -> ParsedEvent | None:
        try:
            return self.parse_dict(data)
        except UnknownEventError as e:
            logger.warning("Unknown event: %s", e)
        except ValidationError as e:
            logger.warning("Invalid payload for %s: %s", data.get("event"), e)
        self._parse_errors += 1
        return None
