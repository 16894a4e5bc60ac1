from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from markpad.domain.formatting import TextEdit
from markpad.services.ui.adapters.qt_text_editor import QtTextEditorAdapter


class IWrapFormatter(Protocol):
    """Anything that toggles markers on its document (MainPresenter, DocumentTab)."""

    def apply_formatting(
        self, prefix: str, suffix: str, selection_start: int, selection_length: int
    ) -> TextEdit | None: ...


@dataclass(frozen=True)
class SurroundSelection:
    """
    Command: toggle `prefix`/`suffix` around the editor selection.
    Wraps plain text, unwraps text that is already wrapped, and inserts the
    empty pair at the caret when nothing is selected.

    The formatter updates the document; the resulting edit is then replayed on
    the widget so the change is one undo step and the selection follows it.
    """

    editor: QtTextEditorAdapter
    formatter: IWrapFormatter
    prefix: str
    suffix: str

    def execute(self) -> TextEdit | None:
        start, length = self.editor.selection()
        edit = self.formatter.apply_formatting(self.prefix, self.suffix, start, length)
        if edit is not None:
            self.editor.apply(edit)
        return edit
