from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class IFileDialogService(Protocol):
    """
    Abstract UI port for file pickers. Keeps document handling decoupled from Qt.
    Both methods return None when the user cancels.
    """

    async def get_open_file(self) -> Path | None:
        """Return the file chosen for opening."""
        ...

    async def get_save_file(self, suggested_name: str | None = None) -> Path | None:
        """Return the destination chosen for saving, starting from `suggested_name`."""
        ...
