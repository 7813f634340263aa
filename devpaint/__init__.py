"""devpaint source package.

This package contains the live terminal dashboard for a development server:
- models: Event payloads and the display model built from them
- core: Reducer, renderer, and the controller tying them together
- event_bus: In-process event source and single-consumer mailbox
- config: Configuration loading and management
- ports: Pre-run port negotiation
"""

from __future__ import annotations

__all__: list[str] = []
