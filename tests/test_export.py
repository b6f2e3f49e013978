from typing import List

from sync_editor.export import (
    ClipboardError,
    ClipboardPayload,
    copy_html,
    copy_rich_text,
    html_to_plain_text,
)


class RecordingClipboard:
    def __init__(self, *, rich_fails: bool = False, text_fails: bool = False) -> None:
        self.rich_fails = rich_fails
        self.text_fails = text_fails
        self.texts: List[str] = []
        self.rich: List[ClipboardPayload] = []

    def write_text(self, text: str) -> None:
        if self.text_fails:
            raise ClipboardError("denied", mime_type="text/plain")
        self.texts.append(text)

    def write_rich(self, payload: ClipboardPayload) -> None:
        if self.rich_fails:
            raise ClipboardError("unsupported", mime_type="text/html")
        self.rich.append(payload)


def test_plain_text_concatenates_text_nodes() -> None:
    markup = "<h1>Title</h1><p>Some <strong>bold</strong> &amp; more</p>"

    assert html_to_plain_text(markup) == "TitleSome bold & more"


def test_plain_text_of_empty_markup() -> None:
    assert html_to_plain_text("") == ""
    assert html_to_plain_text("<p><br></p>") == ""


def test_payload_carries_both_flavours() -> None:
    payload = ClipboardPayload.from_markup("<em>hi</em>")

    assert payload.html == "<em>hi</em>"
    assert payload.plain == "hi"


def test_copy_rich_text_writes_rich_payload() -> None:
    clipboard = RecordingClipboard()

    assert copy_rich_text(clipboard, "<p>x</p>") is True

    assert clipboard.rich == [ClipboardPayload(html="<p>x</p>", plain="x")]
    assert clipboard.texts == []


def test_copy_rich_text_falls_back_to_plain_text() -> None:
    clipboard = RecordingClipboard(rich_fails=True)

    assert copy_rich_text(clipboard, "<p>x <u>y</u></p>") is True

    assert clipboard.rich == []
    assert clipboard.texts == ["x y"]


def test_copy_rich_text_reports_total_failure() -> None:
    clipboard = RecordingClipboard(rich_fails=True, text_fails=True)

    assert copy_rich_text(clipboard, "<p>x</p>") is False


def test_copy_html_writes_markup_verbatim() -> None:
    clipboard = RecordingClipboard()

    assert copy_html(clipboard, "<p>x</p>") is True
    assert clipboard.texts == ["<p>x</p>"]


def test_copy_html_failure_is_not_raised() -> None:
    clipboard = RecordingClipboard(text_fails=True)

    assert copy_html(clipboard, "<p>x</p>") is False
