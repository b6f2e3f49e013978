"""Seed document and header copy shown by the editor host."""

from __future__ import annotations

HEADER_TITLE = "HTML <> Rich Text Sync"
HEADER_SUBTITLE = "Instantly see your formatted text as clean HTML, and vice-versa."

DEFAULT_DOCUMENT = """<h1>Welcome to the Sync Editor!</h1>
<p>This is a demonstration of a <strong>bidirectional editor</strong>. You can edit the rich text on the left, or the raw HTML on the right.</p>
<p><br></p>
<p>Try some things:</p>
<ul>
    <li>Change the <span style="color: rgb(230, 0, 0);">color</span> of this text.</li>
    <li>Make a word <em>italic</em> or <u>underlined</u>.</li>
    <li>Add a new heading or a list item.</li>
</ul>
<p><br></p>
<p>Your changes will be reflected in the other panel <em>instantly</em>.</p>"""

__all__ = ["DEFAULT_DOCUMENT", "HEADER_SUBTITLE", "HEADER_TITLE"]
