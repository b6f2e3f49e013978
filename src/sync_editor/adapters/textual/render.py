"""Render HTML snapshots as Rich text for the read-only rich panel."""

from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import Dict, List, Optional, Tuple

from rich.color import Color, ColorParseError
from rich.style import Style
from rich.text import Text

_BLOCK_TAGS = frozenset(
    {"p", "div", "ul", "ol", "li", "blockquote", "pre", "h1", "h2", "h3", "h4", "h5", "h6"}
)
_VOID_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link"})
_TAG_STYLES: Dict[str, Style] = {
    "h1": Style(bold=True, underline=True),
    "h2": Style(bold=True),
    "h3": Style(bold=True),
    "h4": Style(bold=True, italic=True),
    "h5": Style(bold=True, italic=True),
    "h6": Style(italic=True),
    "strong": Style(bold=True),
    "b": Style(bold=True),
    "em": Style(italic=True),
    "i": Style(italic=True),
    "u": Style(underline=True),
    "s": Style(strike=True),
    "code": Style(reverse=True),
    "a": Style(underline=True, color="blue"),
}
_COLOR_RE = re.compile(r"(?:^|;)\s*color\s*:\s*([^;]+)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def _inline_style(attrs: Dict[str, Optional[str]]) -> Optional[Style]:
    match = _COLOR_RE.search(attrs.get("style") or "")
    if match is None:
        return None
    try:
        return Style(color=Color.parse(match.group(1).strip()))
    except ColorParseError:
        return None


class _RichTextBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.text = Text()
        self._open: List[Tuple[str, Style]] = []

    def _at_line_start(self) -> bool:
        plain = self.text.plain
        return not plain or plain.endswith("\n")

    def _line_break(self) -> None:
        if not self._at_line_start():
            self.text.append("\n")

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag == "br":
            self.text.append("\n")
            return
        if tag in _BLOCK_TAGS:
            self._line_break()
        if tag == "li":
            self.text.append("  • ")
        if tag in _VOID_TAGS:
            return
        style = _TAG_STYLES.get(tag, Style())
        inline = _inline_style(dict(attrs))
        if inline is not None:
            style = style + inline
        self._open.append((tag, style))

    def handle_endtag(self, tag: str) -> None:
        for index in range(len(self._open) - 1, -1, -1):
            if self._open[index][0] == tag:
                del self._open[index:]
                break
        if tag in _BLOCK_TAGS:
            self._line_break()

    def handle_data(self, data: str) -> None:
        chunk = _WHITESPACE_RE.sub(" ", data)
        if self._at_line_start():
            chunk = chunk.lstrip()
        if not chunk:
            return
        style = sum((style for _, style in self._open), Style())
        self.text.append(chunk, style=style)


def render_markup(markup: str) -> Text:
    """Build a ``Text`` for ``markup``; unknown tags contribute only their text."""

    builder = _RichTextBuilder()
    builder.feed(markup)
    builder.close()
    text = builder.text
    text.rstrip()
    return text


__all__ = ["render_markup"]
