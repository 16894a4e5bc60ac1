from __future__ import annotations

from pathlib import Path
from typing import Iterable

from PyQt6.QtCore import QByteArray, QSettings

from markpad.domain.interfaces import ISettingsService
from markpad.domain.models import FilePath
from markpad.utils.constants import MAX_RECENTS, SETTINGS_GEOMETRY, SETTINGS_RECENTS


class SettingsService(ISettingsService):
    """Persist window geometry and the recent-files list in QSettings."""

    def __init__(self, qsettings: QSettings, *, max_recents: int = MAX_RECENTS) -> None:
        self._s = qsettings
        self._max_recents = max_recents

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        if isinstance(v, str):
            # QSettings INI backend returns a bare string for one-element lists
            return [v] if v else []
        return [str(x) for x in v] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent)[: self._max_recents])

    def add_recent(self, path: Path | str) -> list[str]:
        """Move `path` to the front of the recents, dropping case-insensitive duplicates."""
        entry = FilePath.create(path)
        items = [entry.value]
        for existing in self.get_recent():
            candidate = FilePath.create_or_none(existing)
            if candidate is not None and candidate != entry:
                items.append(candidate.value)
        items = items[: self._max_recents]
        self.set_recent(items)
        return items
