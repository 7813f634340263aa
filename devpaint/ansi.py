"""ANSI escape sequences for the terminal dashboard.

Only SGR styling and the full-screen clear are used; no cursor positioning
and no alternate screen buffer.
"""

from __future__ import annotations

import sys

CSI = "\x1b["

# Clear screen and scrollback, then home the cursor
CLEAR_SCREEN = f"{CSI}2J{CSI}3J{CSI}H"
# Windows consoles do not understand the scrollback clear
CLEAR_SCREEN_WIN32 = f"{CSI}2J{CSI}0f"


def clear_sequence(platform: str | None = None) -> str:
    """Full-screen clear for the given (or current) platform."""
    platform = platform or sys.platform
    return CLEAR_SCREEN_WIN32 if platform == "win32" else CLEAR_SCREEN


class Palette:
    """SGR styling helpers that can be switched off for plain output."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def _wrap(self, text: str, start: int, end: int) -> str:
        if not self.enabled:
            return text
        return f"{CSI}{start}m{text}{CSI}{end}m"

    # Modifiers
    def reset(self, text: str) -> str:
        return self._wrap(text, 0, 0)

    def bold(self, text: str) -> str:
        return self._wrap(text, 1, 22)

    def dim(self, text: str) -> str:
        return self._wrap(text, 2, 22)

    def underline(self, text: str) -> str:
        return self._wrap(text, 4, 24)

    # Foreground
    def black(self, text: str) -> str:
        return self._wrap(text, 30, 39)

    def red(self, text: str) -> str:
        return self._wrap(text, 31, 39)

    def yellow(self, text: str) -> str:
        return self._wrap(text, 33, 39)

    def white(self, text: str) -> str:
        return self._wrap(text, 37, 39)

    # Background
    def bg_green(self, text: str) -> str:
        return self._wrap(text, 42, 49)

    def bg_yellow(self, text: str) -> str:
        return self._wrap(text, 43, 49)

    def bg_blue(self, text: str) -> str:
        return self._wrap(text, 44, 49)
