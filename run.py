#!/usr/bin/env python3
"""
devpaint - Main runner script

Usage:
    python run.py events.jsonl          # Replay a recorded event stream
    python run.py - < events.jsonl      # Read events from stdin
    python run.py --port 8080 -         # Negotiate the dev server port first
"""

from __future__ import annotations

import sys

from devpaint.cli import main

if __name__ == "__main__":
    sys.exit(main())
