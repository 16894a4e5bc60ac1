from __future__ import annotations

from pathlib import Path
from typing import Any

from PyQt6.QtWidgets import QFileDialog

from markpad.services.ui.ports.dialogs import IFileDialogService
from markpad.utils.constants import DEFAULT_SAVE_NAME, OPEN_FILE_FILTER, SAVE_FILE_FILTER


class QtFileDialogService(IFileDialogService):
    """Qt-backed file pickers. The modal dialog runs its own event loop."""

    def __init__(self, parent: Any | None = None) -> None:
        self.parent = parent
        self._last_dir = ""

    async def get_open_file(self) -> Path | None:
        path_str, _ = QFileDialog.getOpenFileName(
            self.parent,
            "Open Markdown File",
            self._last_dir,
            OPEN_FILE_FILTER,
        )
        return self._remember(path_str)

    async def get_save_file(self, suggested_name: str | None = None) -> Path | None:
        start = suggested_name or DEFAULT_SAVE_NAME
        if self._last_dir and not Path(start).is_absolute():
            start = str(Path(self._last_dir) / start)
        path_str, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Save Markdown File",
            start,
            SAVE_FILE_FILTER,
        )
        return self._remember(path_str)

    def _remember(self, path_str: str) -> Path | None:
        if not path_str:
            return None
        path = Path(path_str)
        self._last_dir = str(path.parent)
        return path
