from __future__ import annotations

from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QTextEdit

from markpad.domain.formatting import TextEdit


def utf16_to_index(text: str, pos: int) -> int:
    """Convert a Qt (UTF-16 code unit) position into a ``str`` index."""
    if pos <= 0:
        return 0
    units = text.encode("utf-16-le")[: pos * 2]
    return len(units.decode("utf-16-le", errors="ignore"))


def index_to_utf16(text: str, index: int) -> int:
    """Convert a ``str`` index into a Qt (UTF-16 code unit) position."""
    return len(text[:index].encode("utf-16-le")) // 2


class QtTextEditorAdapter:
    """
    Narrow adapter between a QTextEdit and the pure formatting functions.

    Qt counts positions in UTF-16 code units while formatting works on ``str``
    indices; all conversion happens here.
    """

    def __init__(self, edit: QTextEdit) -> None:
        self._e = edit

    @property
    def widget(self) -> QTextEdit:
        return self._e

    def text(self) -> str:
        return self._e.toPlainText()

    def selection(self) -> tuple[int, int]:
        """Current selection as ``(start, length)`` in ``str`` indices."""
        c = self._e.textCursor()
        text = self.text()
        start = utf16_to_index(text, c.selectionStart())
        end = utf16_to_index(text, c.selectionEnd())
        return start, end - start

    def cursor_position(self) -> int:
        return self.selection()[0]

    def apply(self, edit: TextEdit) -> None:
        """Apply `edit` as one undoable step and select ``edit.selection``."""
        before = self.text()
        c = self._e.textCursor()
        c.beginEditBlock()
        try:
            c.setPosition(index_to_utf16(before, edit.start))
            c.setPosition(index_to_utf16(before, edit.end), QTextCursor.MoveMode.KeepAnchor)
            c.insertText(edit.replacement)
        finally:
            c.endEditBlock()

        after = self.text()
        sel_start, sel_len = edit.selection
        c.setPosition(index_to_utf16(after, sel_start))
        c.setPosition(index_to_utf16(after, sel_start + sel_len), QTextCursor.MoveMode.KeepAnchor)
        self._e.setTextCursor(c)
