"""Document snapshot storage and seed content."""

from .defaults import DEFAULT_DOCUMENT, HEADER_SUBTITLE, HEADER_TITLE
from .store import Snapshot, SnapshotListener, SnapshotStore

__all__ = [
    "DEFAULT_DOCUMENT",
    "HEADER_SUBTITLE",
    "HEADER_TITLE",
    "Snapshot",
    "SnapshotListener",
    "SnapshotStore",
]
