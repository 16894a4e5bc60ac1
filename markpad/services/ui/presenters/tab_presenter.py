from __future__ import annotations

import re
from typing import Callable

from markpad.domain.formatting import TextEdit, apply_edit, line_prefix, toggle_wrap
from markpad.domain.models import Document
from markpad.utils.constants import APP_NAME, ZOOM_MAX, ZOOM_MIN, ZOOM_STEP

TabListener = Callable[["DocumentTab", frozenset[str]], None]

# fields re-derived from the document on every document change
_DERIVED_FIELDS = frozenset({"tab_header", "window_title", "word_count", "character_count"})

# words are separated by ASCII blanks only; NBSP and friends join words
_WORD_SEPARATORS = re.compile(r"[ \n\r\t]+")


def _clamp_zoom(value: float) -> float:
    return min(max(value, ZOOM_MIN), ZOOM_MAX)


class DocumentTab:
    """
    View-state for one editor tab: the document it edits, the preview zoom and
    the display strings derived from the document.

    Listeners get ``(tab, changed_fields)`` after every change, for example
    ``{"content", "tab_header", "window_title", ...}`` after an edit.
    """

    def __init__(self, document: Document, *, zoom: float = 1.0) -> None:
        if document is None:
            raise ValueError("document must not be None")
        self._document = document
        self._zoom = _clamp_zoom(zoom)
        self._listeners: list[TabListener] = []
        document.subscribe(self._on_document_changed)

    @property
    def document(self) -> Document:
        return self._document

    @property
    def text(self) -> str:
        return self._document.content

    # ---------- derived display ----------

    @property
    def tab_header(self) -> str:
        star = "*" if self._document.has_unsaved_changes else ""
        return f"{star}{self._document.display_name}"

    @property
    def window_title(self) -> str:
        return f"{self.tab_header} - {APP_NAME}"

    @property
    def word_count(self) -> int:
        return sum(1 for part in _WORD_SEPARATORS.split(self._document.content) if part)

    @property
    def character_count(self) -> int:
        return len(self._document.content)

    # ---------- zoom ----------

    @property
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter
    def zoom(self, value: float) -> None:
        value = round(_clamp_zoom(value), 2)
        if value == self._zoom:
            return
        self._zoom = value
        self._emit(frozenset({"zoom", "zoom_percentage"}))

    @property
    def zoom_percentage(self) -> str:
        return f"{int(round(self._zoom * 100))}%"

    def zoom_in(self) -> None:
        self.zoom = self._zoom + ZOOM_STEP

    def zoom_out(self) -> None:
        self.zoom = self._zoom - ZOOM_STEP

    def zoom_reset(self) -> None:
        self.zoom = 1.0

    def adjust_zoom(self, delta: float) -> None:
        """Mouse-wheel zoom; one wheel notch (delta 1.0) is one zoom step."""
        self.zoom = self._zoom + delta * ZOOM_STEP

    # ---------- editing ----------

    def set_text(self, text: str) -> None:
        self._document.set_content(text)

    def apply_formatting(
        self, prefix: str, suffix: str, selection_start: int, selection_length: int
    ) -> TextEdit:
        edit = toggle_wrap(self.text, selection_start, selection_length, prefix, suffix)
        self._document.set_content(apply_edit(self.text, edit))
        return edit

    def apply_line_formatting(self, prefix: str, cursor_position: int) -> TextEdit:
        edit = line_prefix(self.text, cursor_position, prefix)
        self._document.set_content(apply_edit(self.text, edit))
        return edit

    # ---------- notification ----------

    def subscribe(self, listener: TabListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TabListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def detach(self) -> None:
        """Stop following the document; used when the tab is closed."""
        self._document.unsubscribe(self._on_document_changed)
        self._listeners.clear()

    def _on_document_changed(self, _document: Document, changed: frozenset[str]) -> None:
        self._emit(changed | _DERIVED_FIELDS)

    def _emit(self, changed: frozenset[str]) -> None:
        for listener in list(self._listeners):
            listener(self, changed)

    def __repr__(self) -> str:
        return f"DocumentTab({self.tab_header!r}, zoom={self._zoom})"
