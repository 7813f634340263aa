"""Pre-run port negotiation for the dev server.

Runs once before the dashboard starts and is never called by the dashboard
core. If the requested port is taken, offers the next free one on an
interactive terminal; declining ends the process with exit status 1.
"""

from __future__ import annotations

import logging
import re
import socket
import sys
from typing import TextIO

from .ansi import Palette

logger = logging.getLogger(__name__)

MAX_PORT = 65535

# "n" or "no", any case, declines
_DECLINE = re.compile(r"^no?$", re.IGNORECASE)


def is_port_free(port: int, host: str = "127.0.0.1") -> bool:
    """Whether a TCP socket can bind ``host:port`` right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def find_available_port(port: int, host: str = "127.0.0.1") -> int:
    """First bindable port at or above ``port``.

    Raises:
        OSError: If no port up to 65535 is free.
    """
    for candidate in range(port, MAX_PORT + 1):
        if is_port_free(candidate, host):
            return candidate
    raise OSError(f"No available port at or above {port}")


def confirm_port(
    default_port: int,
    next_port: int,
    stdin: TextIO,
    stdout: TextIO,
    palette: Palette,
) -> bool:
    """Ask whether to run on ``next_port`` instead. Empty answer means yes."""
    prompt = palette.yellow(
        f"! Port {palette.bold(str(default_port))} not available. "
        f"Run on port {palette.bold(str(next_port))} instead? (Y/n) "
    )
    stdout.write(prompt)
    stdout.flush()
    answer = stdin.readline().strip()
    return not _DECLINE.match(answer)


def get_port(
    default_port: int,
    host: str = "127.0.0.1",
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Get the port to serve on, starting from ``default_port``.

    Returns ``default_port`` when it is free. Otherwise the next free port,
    if the user accepts it on an interactive terminal.

    Raises:
        SystemExit: With status 1 when the user declines, or when stdout is
            not a terminal and the default port is taken.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    palette = Palette()

    best_port = find_available_port(default_port, host)
    if best_port == default_port:
        return best_port

    logger.info("Port %d taken, next available is %d", default_port, best_port)
    use_next = False
    if stdout.isatty():
        use_next = confirm_port(default_port, best_port, stdin, stdout, palette)

    if not use_next:
        stderr.write(
            palette.red(
                f"✘ Port {palette.bold(str(default_port))} not available. "
                f"Use {palette.bold('--port')} to specify a different port."
            )
            + "\n\n"
        )
        stderr.flush()
        raise SystemExit(1)

    return best_port
