from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from markpad.domain.interfaces import IFileService

logger = logging.getLogger(__name__)


class FileService(IFileService):
    """UTF-8 text reads and atomic writes for markdown documents."""

    def read_text(self, path: Path | str) -> str:
        # utf-8-sig drops a leading BOM written by other editors
        text = Path(path).read_text(encoding="utf-8-sig")
        logger.debug("Read %d characters from %s", len(text), path)
        return text

    def write_text_atomic(self, path: Path | str, text: str) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        data = text.encode("utf-8")
        if sf.write(data) != len(data):
            sf.cancelWriting()
            raise OSError(f"Short write to: {path}")
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")
        logger.debug("Wrote %d bytes to %s", len(data), path)
