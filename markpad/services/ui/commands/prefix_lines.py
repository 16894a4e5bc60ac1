from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from markpad.domain.formatting import TextEdit
from markpad.services.ui.adapters.qt_text_editor import QtTextEditorAdapter


class ILineFormatter(Protocol):
    def apply_line_formatting(self, prefix: str, cursor_position: int) -> TextEdit | None: ...


@dataclass(frozen=True)
class PrefixLines:
    """
    Command: insert `prefix` at the start of the line holding the selection start.
    Not a toggle; running it twice inserts the prefix twice.
    """

    editor: QtTextEditorAdapter
    formatter: ILineFormatter
    prefix: str

    def execute(self) -> TextEdit | None:
        edit = self.formatter.apply_line_formatting(self.prefix, self.editor.cursor_position())
        if edit is not None:
            self.editor.apply(edit)
        return edit
