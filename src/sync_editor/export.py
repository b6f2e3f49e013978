"""Clipboard payloads for the "Copy Text" and "Copy HTML" actions."""

from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser
from typing import List, Protocol

from sync_editor.runtime.telemetry import record_event


class ClipboardError(RuntimeError):
    """Raised by clipboard backends that cannot accept a write."""

    def __init__(self, message: str, *, mime_type: str | None = None) -> None:
        super().__init__(message)
        self.mime_type = mime_type


@dataclass(frozen=True, slots=True)
class ClipboardPayload:
    html: str
    plain: str

    @classmethod
    def from_markup(cls, markup: str) -> "ClipboardPayload":
        return cls(html=markup, plain=html_to_plain_text(markup))


class Clipboard(Protocol):
    """Backend the host provides for writing to the system clipboard."""

    def write_text(self, text: str) -> None:
        """Place plain text on the clipboard."""
        ...

    def write_rich(self, payload: ClipboardPayload) -> None:
        """Place ``text/html`` and ``text/plain`` flavours on the clipboard."""
        ...


class _TextContentParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def html_to_plain_text(markup: str) -> str:
    """Concatenate the text nodes of ``markup``, as a DOM ``textContent`` would."""

    parser = _TextContentParser()
    parser.feed(markup)
    parser.close()
    return "".join(parser.parts)


def copy_html(clipboard: Clipboard, markup: str) -> bool:
    """Copy the raw markup as plain text. Returns ``False`` on failure."""

    try:
        clipboard.write_text(markup)
    except ClipboardError as exc:
        record_event(
            "clipboard.failed",
            level="error",
            data={"kind": "html", "reason": str(exc)},
        )
        return False
    record_event("clipboard.copied", data={"kind": "html", "size": len(markup)})
    return True


def copy_rich_text(clipboard: Clipboard, markup: str) -> bool:
    """Copy HTML and plain flavours, falling back to plain text alone."""

    payload = ClipboardPayload.from_markup(markup)
    try:
        clipboard.write_rich(payload)
    except ClipboardError as exc:
        record_event(
            "clipboard.rich_fallback",
            level="warning",
            data={"reason": str(exc), "mime_type": exc.mime_type},
        )
    else:
        record_event("clipboard.copied", data={"kind": "rich", "size": len(markup)})
        return True

    try:
        clipboard.write_text(payload.plain)
    except ClipboardError as exc:
        record_event(
            "clipboard.failed",
            level="error",
            data={"kind": "plain", "reason": str(exc)},
        )
        return False
    record_event("clipboard.copied", data={"kind": "plain", "size": len(payload.plain)})
    return True


__all__ = [
    "Clipboard",
    "ClipboardError",
    "ClipboardPayload",
    "copy_html",
    "copy_rich_text",
    "html_to_plain_text",
]
