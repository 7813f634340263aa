"""Tests for the dashboard renderer.

Frames are rendered with colors off unless a test is about styling.
"""

import io

import pytest

from devpaint.ansi import CLEAR_SCREEN, CLEAR_SCREEN_WIN32
from devpaint.core.reducer import apply_event
from devpaint.core.renderer import (
    RenderSettings,
    TerminalRenderer,
    pattern_suppressor,
    render_frame,
)
from devpaint.models.state import DisplayModel

SERVER = {
    "startTimeMs": 1700000000000,
    "hostname": "localhost",
    "port": 8080,
    "protocol": "http://",
    "ips": ["192.168.1.5"],
}


def build_model(*events: tuple[str, dict]) -> DisplayModel:
    model = DisplayModel()
    for event, payload in events:
        apply_event(model, event, payload)
    return model


class TestFrameLayout:
    """Tests for section order and content."""

    def test_empty_model_shows_loading(self, plain_settings: RenderSettings) -> None:
        """Before the server starts only the loading badge is drawn."""
        frame = render_frame(DisplayModel(), plain_settings)

        assert frame == CLEAR_SCREEN + " DEVPAINT  LOADING "

    def test_frame_starts_with_clear(self, plain_settings: RenderSettings) -> None:
        frame = render_frame(build_model(("INFO", {"args": "hi"})), plain_settings)

        assert frame.startswith(CLEAR_SCREEN)

    def test_windows_clear_sequence(self) -> None:
        frame = render_frame(DisplayModel(), RenderSettings(color=False, platform="win32"))

        assert frame.startswith(CLEAR_SCREEN_WIN32)

    def test_console_section(self, plain_settings: RenderSettings) -> None:
        """Console lines are joined with a continuation indent."""
        model = build_model(("INFO", {"args": "one"}), ("WARN", {"args": "two"}))

        frame = render_frame(model, plain_settings)

        assert "▼ Console\n\none\n  two\n\n" in frame

    def test_ready_status_bar(self, plain_settings: RenderSettings) -> None:
        """Server start with no builds shows the ready badge and address."""
        model = build_model(("SERVER_START", SERVER))

        frame = render_frame(model, plain_settings)

        assert frame.endswith(" DEVPAINT  READY  localhost:8080 › 192.168.1.5")
        assert "Building…" not in frame
        assert "LOADING" not in frame

    def test_building_indicator(self, plain_settings: RenderSettings) -> None:
        """An in-progress build shows Building… before the ready badge."""
        model = build_model(
            ("BUILD_FILE", {"path": "src/a.ts", "isBuilding": True}),
            ("SERVER_START", SERVER),
        )

        frame = render_frame(model, plain_settings)

        assert " Building… DEVPAINT  READY " in frame

    def test_building_hidden_before_server_start(self, plain_settings: RenderSettings) -> None:
        model = build_model(("BUILD_FILE", {"path": "src/a.ts", "isBuilding": True}))

        frame = render_frame(model, plain_settings)

        assert "Building…" not in frame
        assert frame.endswith("LOADING ")

    def test_server_without_ips(self, plain_settings: RenderSettings) -> None:
        model = build_model(("SERVER_START", {**SERVER, "ips": []}))

        frame = render_frame(model, plain_settings)

        assert frame.endswith("READY  localhost:8080")

    def test_custom_badge_label(self) -> None:
        frame = render_frame(DisplayModel(), RenderSettings(badge_label="SNOWPACK", color=False))

        assert " SNOWPACK  LOADING " in frame


class TestWorkerSections:
    """Tests for per-worker sections."""

    def test_worker_output_trimmed_and_indented(self, plain_settings: RenderSettings) -> None:
        model = build_model(("WORKER_MSG", {"id": "eslint", "msg": "\nline 1\nline 2\n\n"}))

        frame = render_frame(model, plain_settings)

        assert "▼ eslint\n\nline 1\n  line 2\n\n" in frame

    def test_display_name_lookup(self, plain_settings: RenderSettings) -> None:
        """Known worker ids use their display name."""
        model = build_model(("WORKER_MSG", {"id": "tsc", "msg": "error TS2304"}))

        frame = render_frame(model, plain_settings)

        assert "▼ TypeScript" in frame
        assert "▼ tsc" not in frame

    def test_empty_output_hidden(self, plain_settings: RenderSettings) -> None:
        model = build_model(("WORKER_UPDATE", {"id": "eslint", "state": ["RUNNING", "yellow"]}))

        frame = render_frame(model, plain_settings)

        assert "eslint" not in frame

    def test_zero_errors_suppressed(self, plain_settings: RenderSettings) -> None:
        """tsc reporting zero errors is hidden even though it has output."""
        model = build_model(("WORKER_MSG", {"id": "tsc", "msg": "Found 0 errors."}))

        frame = render_frame(model, plain_settings)

        assert model.workers["tsc"].output == "Found 0 errors."
        assert "TypeScript" not in frame
        assert "Found 0 errors." not in frame

    def test_suppression_is_keyed_by_worker(self, plain_settings: RenderSettings) -> None:
        """Another worker printing the same text is still shown."""
        model = build_model(("WORKER_MSG", {"id": "eslint", "msg": "Found 0 errors."}))

        frame = render_frame(model, plain_settings)

        assert "▼ eslint" in frame

    def test_workers_in_insertion_order(self, plain_settings: RenderSettings) -> None:
        model = build_model(
            ("WORKER_MSG", {"id": "b-worker", "msg": "b"}),
            ("WORKER_MSG", {"id": "a-worker", "msg": "a"}),
        )

        frame = render_frame(model, plain_settings)

        assert frame.index("b-worker") < frame.index("a-worker")

    def test_error_header_is_red(self) -> None:
        model = build_model(
            ("WORKER_MSG", {"id": "eslint", "msg": "2 problems"}),
            ("WORKER_COMPLETE", {"id": "eslint", "error": "exit 1"}),
        )

        frame = render_frame(model, RenderSettings())

        assert "\x1b[31m" in frame

    def test_false_error_header_is_not_red(self) -> None:
        model = build_model(("WORKER_COMPLETE", {"id": "eslint", "error": False}))

        frame = render_frame(model, RenderSettings())

        assert "\x1b[31m" not in frame

    def test_ok_header_is_not_red(self) -> None:
        model = build_model(("WORKER_MSG", {"id": "eslint", "msg": "2 warnings"}))

        frame = render_frame(model, RenderSettings())

        assert "\x1b[31m" not in frame
        assert "\x1b[1m" in frame

    def test_reset_worker_disappears(self, plain_settings: RenderSettings) -> None:
        """After a reset the worker has no output and no section."""
        model = build_model(
            ("WORKER_MSG", {"id": "eslint", "msg": "stale"}),
            ("WORKER_RESET", {"id": "eslint"}),
        )

        frame = render_frame(model, plain_settings)

        assert "stale" not in frame


class TestInstallSection:
    """Tests for the install phase section."""

    def test_install_section_is_last(self, plain_settings: RenderSettings) -> None:
        model = build_model(
            ("INFO", {"args": "hello"}),
            ("SERVER_START", SERVER),
            ("INSTALL_START", {}),
            ("INSTALL_MSG", {"msg": "✔ react\n✔ react-dom\n"}),
        )

        frame = render_frame(model, plain_settings)

        assert frame.endswith("▼ install\n\n  ✔ react\n  ✔ react-dom\n\n")
        assert frame.index("READY") < frame.index("▼ install")

    def test_install_section_hidden_after_complete(self, plain_settings: RenderSettings) -> None:
        model = build_model(
            ("INSTALL_START", {}),
            ("INSTALL_MSG", {"msg": "react"}),
            ("INSTALL_COMPLETE", {}),
        )

        frame = render_frame(model, plain_settings)

        assert "install" not in frame


class TestDeterminism:
    """Rendering is a pure function of the model."""

    def test_same_model_same_frame(self, plain_settings: RenderSettings) -> None:
        model = build_model(
            ("BUILD_FILE", {"path": "a.js", "isBuilding": True}),
            ("BUILD_FILE", {"path": "b.js", "isBuilding": True}),
            ("WORKER_MSG", {"id": "eslint", "msg": "x"}),
            ("SERVER_START", SERVER),
        )

        assert render_frame(model, plain_settings) == render_frame(model, plain_settings)

    def test_render_does_not_mutate(self, plain_settings: RenderSettings) -> None:
        model = build_model(("WORKER_MSG", {"id": "tsc", "msg": "  padded  "}))

        render_frame(model, plain_settings)

        assert model.workers["tsc"].output == "  padded  "


class TestPatternSuppressor:
    @pytest.mark.parametrize(
        ("worker_id", "output", "hidden"),
        [
            ("tsc", "Found 0 errors. Watching for file changes.", True),
            ("tsc", "Found 2 errors.", False),
            ("svelte-check", "svelte-check found no errors", True),
            ("unknown", "found no errors", False),
        ],
    )
    def test_patterns(self, worker_id: str, output: str, hidden: bool) -> None:
        suppress = pattern_suppressor({
            "tsc": ["Found 0 errors."],
            "svelte-check": ["found no errors"],
        })

        assert suppress(worker_id, output) is hidden


class TestTerminalRenderer:
    def test_paint_writes_frame(self, plain_settings: RenderSettings) -> None:
        stream = io.StringIO()
        renderer = TerminalRenderer(stream, plain_settings)

        renderer.paint(DisplayModel())
        renderer.paint(DisplayModel())

        assert stream.getvalue() == (CLEAR_SCREEN + " DEVPAINT  LOADING ") * 2
        assert renderer.frames == 2

    def test_write_errors_propagate(self, plain_settings: RenderSettings) -> None:
        stream = io.StringIO()
        stream.close()
        renderer = TerminalRenderer(stream, plain_settings)

        with pytest.raises(ValueError):
            renderer.paint(DisplayModel())
