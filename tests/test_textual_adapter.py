from __future__ import annotations

from typing import List, Tuple

from sync_editor.adapters.textual import TextualEditorAdapter, TextualEditorHooks
from sync_editor.export import ClipboardError, ClipboardPayload
from sync_editor.session import EditorSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class PlainOnlyClipboard:
    def __init__(self) -> None:
        self.texts: List[str] = []

    def write_text(self, text: str) -> None:
        self.texts.append(text)

    def write_rich(self, payload: ClipboardPayload) -> None:
        raise ClipboardError("plain text only", mime_type="text/html")


def make_session(clock: FakeClock | None = None) -> EditorSession:
    return EditorSession("<p>A</p>", debounce_ms=500, clock=clock or FakeClock())


def test_adapter_renders_initial_document_and_affordance() -> None:
    documents: List[str] = []
    history: List[Tuple[bool, bool]] = []
    hooks = TextualEditorHooks(
        update_document=documents.append,
        update_history=lambda can_undo, can_redo: history.append((can_undo, can_redo)),
    )

    TextualEditorAdapter(make_session(), hooks)

    assert documents == ["<p>A</p>"]
    assert history == [(False, False)]


def test_adapter_commits_and_enables_undo() -> None:
    clock = FakeClock()
    documents: List[str] = []
    history: List[Tuple[bool, bool]] = []
    hooks = TextualEditorHooks(
        update_document=documents.append,
        update_history=lambda can_undo, can_redo: history.append((can_undo, can_redo)),
    )
    adapter = TextualEditorAdapter(make_session(clock), hooks)

    assert adapter.handle_host_edit("<p>AB</p>") is True
    assert adapter.process_timeouts() is False
    clock.now += 0.6
    assert adapter.process_timeouts() is True

    assert documents[-1] == "<p>AB</p>"
    assert history[-1] == (True, False)


def test_adapter_ignores_echoed_snapshot() -> None:
    session = make_session()
    adapter = TextualEditorAdapter(
        session, TextualEditorHooks(update_document=lambda snapshot: None)
    )

    assert adapter.handle_host_edit("<p>A</p>") is False
    assert session.coalescer.pending is None


def test_adapter_undo_redo_refresh_document() -> None:
    session = make_session()
    documents: List[str] = []
    history: List[Tuple[bool, bool]] = []
    hooks = TextualEditorHooks(
        update_document=documents.append,
        update_history=lambda can_undo, can_redo: history.append((can_undo, can_redo)),
    )
    adapter = TextualEditorAdapter(session, hooks)
    adapter.handle_host_edit("<p>AB</p>")
    session.flush()

    assert adapter.undo() == "<p>A</p>"
    assert documents[-1] == "<p>A</p>"
    assert history[-1] == (False, True)

    assert adapter.redo() == "<p>AB</p>"
    assert documents[-1] == "<p>AB</p>"
    assert history[-1] == (True, False)
    assert len(session.history) == 2


def test_adapter_reports_unavailable_navigation() -> None:
    statuses: List[str] = []
    hooks = TextualEditorHooks(
        update_document=lambda snapshot: None,
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(make_session(), hooks)

    assert adapter.undo() is None
    assert adapter.redo() is None
    assert statuses == ["nothing to undo", "nothing to redo"]


def test_adapter_copy_falls_back_to_plain_text() -> None:
    statuses: List[str] = []
    clipboard = PlainOnlyClipboard()
    hooks = TextualEditorHooks(
        update_document=lambda snapshot: None,
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(make_session(), hooks)

    assert adapter.copy_rich_text(clipboard) is True
    assert adapter.copy_html(clipboard) is True

    assert clipboard.texts == ["A", "<p>A</p>"]
    assert statuses == ["Copied!", "Copied!"]


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualEditorHooks(
        update_document=lambda snapshot: None,
        log=logs.append,
    )
    adapter = TextualEditorAdapter(make_session(), hooks)

    adapter.handle_host_edit("<p>AB</p>")

    assert any(line.startswith("edit ->") for line in logs)
    assert "pending_commit=False" in logs[0]


def test_adapter_close_detaches_views() -> None:
    session = make_session()
    documents: List[str] = []
    adapter = TextualEditorAdapter(
        session, TextualEditorHooks(update_document=documents.append)
    )

    adapter.close()
    session.on_content_change("<p>late</p>")

    assert documents == ["<p>A</p>"]
    assert session.coalescer.closed is True
