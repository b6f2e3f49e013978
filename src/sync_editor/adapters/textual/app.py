"""Executable Textual app hosting the two synchronized editor panels."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.widgets import Button, Footer, Header, Label, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use sync_editor.adapters.textual.app"
    ) from exc

from sync_editor.document import HEADER_SUBTITLE, HEADER_TITLE, Snapshot
from sync_editor.export import ClipboardError, ClipboardPayload
from sync_editor.runtime import telemetry
from sync_editor.runtime.settings import EditorSettings
from sync_editor.session import EditorSession

from .controller import TextualEditorAdapter, TextualEditorHooks
from .render import render_markup

COPIED_FLASH_SECONDS = 2.0


class TerminalClipboard:
    """Clipboard backend using the terminal's OSC 52 support via Textual."""

    def __init__(self, app: App[None]) -> None:
        self._app = app

    def write_text(self, text: str) -> None:
        self._app.copy_to_clipboard(text)

    def write_rich(self, payload: ClipboardPayload) -> None:
        raise ClipboardError(
            "terminal clipboard accepts plain text only", mime_type="text/html"
        )


class SyncEditorApp(App[None]):
    """Rich text preview and HTML source sharing one undo history."""

    TITLE = HEADER_TITLE
    SUB_TITLE = HEADER_SUBTITLE

    CSS = """
	#panels {
		height: 1fr;
	}

	.panel {
		width: 1fr;
		padding: 0 1;
	}

	.toolbar {
		height: 3;
	}

	.panel-title {
		width: 1fr;
		padding: 1 1;
		text-style: bold;
	}

	#rich-title {
		color: $accent;
	}

	#html-title {
		color: $success;
	}

	.copied {
		width: 10;
		padding: 1 1;
		color: $success;
	}

	#rich-scroll {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#html-view {
		height: 1fr;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, settings: Optional[EditorSettings] = None) -> None:
        super().__init__()
        self.settings = settings or EditorSettings()
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self.terminal_clipboard = TerminalClipboard(self)
        self.logger = telemetry.get_logger("sync_editor.app")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="panels"):
            with Vertical(classes="panel"):
                with Horizontal(classes="toolbar"):
                    yield Label("Rich Text", id="rich-title", classes="panel-title")
                    yield Button("Undo", id="rich-undo", classes="undo")
                    yield Button("Redo", id="rich-redo", classes="redo")
                    yield Button("Copy Text", id="copy-rich", variant="primary")
                    yield Label("", id="rich-copied", classes="copied")
                with VerticalScroll(id="rich-scroll"):
                    yield Static("", id="rich-view")
            with Vertical(classes="panel"):
                with Horizontal(classes="toolbar"):
                    yield Label("</> HTML Source", id="html-title", classes="panel-title")
                    yield Button("Undo", id="html-undo", classes="undo")
                    yield Button("Redo", id="html-redo", classes="redo")
                    yield Button("Copy HTML", id="copy-html", variant="success")
                    yield Label("", id="html-copied", classes="copied")
                yield TextArea("", id="html-view")
        yield Footer()

    def on_mount(self) -> None:
        self.session = EditorSession.from_settings(self.settings)
        hooks = TextualEditorHooks(
            update_document=self._update_document,
            update_history=self._update_history,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self.set_interval(self.settings.poll_interval, self._process_timeouts)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter and event.text_area.id == "html-view":
            self.adapter.handle_host_edit(event.text_area.text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.endswith("-undo"):
            self.action_undo()
        elif button_id.endswith("-redo"):
            self.action_redo()
        elif button_id == "copy-rich" and self.adapter:
            if self.adapter.copy_rich_text(self.terminal_clipboard):
                self._flash_copied("#rich-copied")
        elif button_id == "copy-html" and self.adapter:
            if self.adapter.copy_html(self.terminal_clipboard):
                self._flash_copied("#html-copied")

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def _update_document(self, snapshot: Snapshot) -> None:
        self.query_one("#rich-view", Static).update(render_markup(snapshot))
        editor = self.query_one("#html-view", TextArea)
        if editor.text != snapshot:
            editor.load_text(snapshot)

    def _update_history(self, can_undo: bool, can_redo: bool) -> None:
        for button in self.query(".undo").results(Button):
            button.disabled = not can_undo
        for button in self.query(".redo").results(Button):
            button.disabled = not can_redo

    def _update_status(self, status: str) -> None:
        # "Copied!" is shown next to the button that triggered it.
        if status != "Copied!":
            self.notify(status, timeout=COPIED_FLASH_SECONDS)

    def _flash_copied(self, selector: str) -> None:
        label = self.query_one(selector, Label)
        label.update("Copied!")
        self.set_timer(COPIED_FLASH_SECONDS, lambda: label.update(""))

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _host_telemetry_config() -> telemetry.TelemetryConfig:
    # The terminal belongs to Textual while the app runs; only file sinks apply.
    level = os.environ.get(f"{telemetry.ENV_PREFIX}LOG_LEVEL", "INFO").upper()
    config = telemetry.TelemetryConfig(level=level)
    log_file = os.environ.get(f"{telemetry.ENV_PREFIX}LOG_FILE")
    if log_file:
        config.sinks.append(telemetry.SinkSpec(log_file, level=level))
    return config


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit HTML and its rich text rendering side by side."
    )
    parser.add_argument(
        "--document",
        type=Path,
        default=None,
        help="Seed the editor with this HTML file (default: welcome document)",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help="Quiet period before an edit becomes an undo step (default: 500)",
    )
    parser.add_argument(
        "--session",
        default=None,
        help="Session name used in log records",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset (default: file logging via SYNC_EDITOR_LOG_FILE)",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> EditorSettings:
    settings = EditorSettings.from_env().with_overrides(
        debounce_ms=args.debounce_ms, name=args.session
    )
    if args.document is not None:
        settings = settings.with_document_file(args.document)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    else:
        telemetry.configure(config=_host_telemetry_config())
    app = SyncEditorApp(settings=build_settings(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
