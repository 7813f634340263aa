"""Command-line entry point: replay a JSONL event stream into a live dashboard.

Usage:
    python run.py events.jsonl              # Replay a recorded stream
    some-dev-server | python run.py -       # Paint events piped on stdin
    python run.py events.jsonl --delay 0.2  # Slow replay
    python run.py - --port 8080             # Negotiate a port first
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
import time
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv

from .config import load_config
from .config_schema import AppConfig
from .core.event_parser import EventParser
from .dashboard import configure_logging, create_dashboard
from .event_bus import Mailbox
from .models.events import PaintEvent
from .ports import get_port

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devpaint",
        description="Live terminal dashboard for a dev server and its build workers",
    )
    parser.add_argument(
        "events",
        nargs="?",
        default="-",
        help="JSONL event stream to replay ('-' for stdin, the default)",
    )
    parser.add_argument("--config", help="Config file (default: $DEVPAINT_CONFIG or config/config.yaml)")
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds to wait between events")
    parser.add_argument("--base-path", default=None, help="Directory build paths are shown relative to")
    parser.add_argument("--log-file", default=None, help="Override logging.file from config")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Negotiate this port before starting and announce it as the server",
    )
    return parser


def server_start_payload(port: int, host: str) -> dict[str, object]:
    return {
        "startTimeMs": time.time() * 1000,
        "hostname": "localhost",
        "port": port,
        "protocol": "http://",
        "ips": [host],
    }


def feed_mailbox(lines: TextIO, mailbox: Mailbox, parser: EventParser, delay: float = 0.0) -> None:
    """Producer: parse lines and post them, then close the mailbox."""
    try:
        for event, payload in parser.parse_lines(lines):
            mailbox.post(event, payload)
            if delay:
                time.sleep(delay)
    finally:
        mailbox.close()
        logger.info(
            "Replay finished: %d events, %d parse errors",
            parser.events_parsed,
            parser.parse_errors,
        )


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.logging, args.log_file)

    # Before anything touches the screen, so a bad path reports cleanly
    source: TextIO = sys.stdin if args.events == "-" else open(args.events, encoding="utf-8")
    try:
        return _run(args, config, source)
    finally:
        if source is not sys.stdin:
            source.close()


def _run(args: argparse.Namespace, config: AppConfig, source: TextIO) -> int:
    port = None
    if args.port is not None:
        # Before the dashboard takes over the screen, so the prompt is visible
        port = get_port(args.port, host=config.server.host)

    base_path = Path(args.base_path) if args.base_path else Path(os.getcwd())
    dashboard = create_dashboard(
        sys.stdout,
        config,
        base_path=base_path,
        color=False if args.no_color else None,
    )
    if port is not None:
        dashboard.mailbox.post(PaintEvent.SERVER_START, server_start_payload(port, config.server.host))

    failures: list[Exception] = []

    def produce() -> None:
        try:
            feed_mailbox(source, dashboard.mailbox, EventParser(), args.delay)
        except Exception as e:
            failures.append(e)

    producer = threading.Thread(target=produce, name="devpaint-replay", daemon=True)
    producer.start()
    try:
        dashboard.mailbox.run_forever()
    except KeyboardInterrupt:
        return 130
    producer.join()

    sys.stdout.write("\n")
    if failures:
        logger.error("Replay aborted: %s", failures[0])
        raise failures[0]
    return 0


if __name__ == "__main__":
    sys.exit(main())
