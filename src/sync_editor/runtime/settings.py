"""Session settings resolved from defaults and ``SYNC_EDITOR_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from sync_editor.document.defaults import DEFAULT_DOCUMENT

from .telemetry import ENV_PREFIX, record_event

DEFAULT_DEBOUNCE_MS = 500
DEFAULT_POLL_INTERVAL = 0.05


@dataclass(frozen=True, slots=True)
class EditorSettings:
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    initial_document: str = DEFAULT_DOCUMENT
    name: str = "default"
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        """Build settings from the process environment (or ``environ``).

        Malformed numbers fall back to their defaults. ``SYNC_EDITOR_DOCUMENT``
        names a file whose contents seed the history.
        """

        env = os.environ if environ is None else environ
        settings = cls(
            debounce_ms=_env_int(env, "DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
            name=env.get(f"{ENV_PREFIX}SESSION", "default"),
            poll_interval=_env_float(env, "POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
        )
        document_path = env.get(f"{ENV_PREFIX}DOCUMENT")
        if document_path:
            settings = settings.with_document_file(Path(document_path))
        return settings

    def with_document_file(self, path: Path) -> "EditorSettings":
        return replace(self, initial_document=path.read_text(encoding="utf-8"))

    def with_overrides(self, **changes: object) -> "EditorSettings":
        updates = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **updates)


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        record_event(
            "settings.invalid", level="warning", data={"key": key, "value": value}
        )
        return fallback
    return parsed if parsed >= 0 else fallback


def _env_float(env: Mapping[str, str], key: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        record_event(
            "settings.invalid", level="warning", data={"key": key, "value": value}
        )
        return fallback
    return parsed if parsed > 0 else fallback


__all__ = ["EditorSettings", "DEFAULT_DEBOUNCE_MS", "DEFAULT_POLL_INTERVAL"]
