import asyncio

import pytest

from sync_editor.adapters.textual.app import (
    SyncEditorApp,
    TerminalClipboard,
    _parse_args,
    build_settings,
)
from sync_editor.export import ClipboardError, ClipboardPayload
from sync_editor.runtime.settings import EditorSettings


def test_terminal_clipboard_rejects_rich_payload() -> None:
    app = SyncEditorApp()
    clipboard = app.terminal_clipboard

    assert isinstance(clipboard, TerminalClipboard)

    with pytest.raises(ClipboardError):
        clipboard.write_rich(ClipboardPayload(html="<p>x</p>", plain="x"))


def test_build_settings_from_arguments(tmp_path) -> None:
    document = tmp_path / "doc.html"
    document.write_text("<h1>Doc</h1>", encoding="utf-8")

    args = _parse_args(["--debounce-ms", "120", "--document", str(document)])
    settings = build_settings(args)

    assert settings.debounce_ms == 120
    assert settings.initial_document == "<h1>Doc</h1>"


def test_app_undo_restores_html_panel() -> None:
    async def run() -> None:
        settings = EditorSettings(debounce_ms=0, initial_document="<p>A</p>")
        app = SyncEditorApp(settings=settings)
        async with app.run_test() as pilot:
            await pilot.pause()
            from textual.widgets import Button, TextArea

            editor = app.query_one("#html-view", TextArea)
            assert editor.text == "<p>A</p>"
            assert app.query_one("#rich-undo", Button).disabled is True

            assert app.adapter is not None
            app.adapter.handle_host_edit("<p>AB</p>")
            app.adapter.process_timeouts()
            await pilot.pause()
            assert editor.text == "<p>AB</p>"
            assert app.query_one("#html-undo", Button).disabled is False

            await pilot.press("ctrl+z")
            await pilot.pause()
            assert editor.text == "<p>A</p>"
            assert app.query_one("#html-redo", Button).disabled is False
            assert app.session is not None
            assert len(app.session.history) == 2

    asyncio.run(run())


def test_copy_html_button_writes_terminal_clipboard() -> None:
    async def run() -> None:
        settings = EditorSettings(initial_document="<p>A</p>")
        app = SyncEditorApp(settings=settings)
        async with app.run_test() as pilot:
            await pilot.pause()
            from textual.widgets import Button

            app.query_one("#copy-html", Button).press()
            await pilot.pause()
            assert app.clipboard == "<p>A</p>"

    asyncio.run(run())


def test_typing_then_undo_does_not_record_the_restore() -> None:
    async def run() -> None:
        settings = EditorSettings(
            debounce_ms=50, initial_document="<p>A</p>", poll_interval=0.01
        )
        app = SyncEditorApp(settings=settings)
        async with app.run_test() as pilot:
            await pilot.pause()
            from textual.widgets import TextArea

            editor = app.query_one("#html-view", TextArea)
            editor.focus()
            await pilot.press("x", "y")
            await pilot.pause(0.3)

            session = app.session
            assert session is not None
            typed = editor.text
            assert typed != "<p>A</p>"
            assert session.history.entries == ("<p>A</p>", typed)

            await pilot.press("ctrl+z")
            await pilot.pause(0.3)

            assert editor.text == "<p>A</p>"
            assert session.current_snapshot() == "<p>A</p>"
            assert session.history.entries == ("<p>A</p>", typed)
            assert session.history.cursor == 0
            assert session.guard.armed is False
            assert session.can_redo() is True

    asyncio.run(run())
