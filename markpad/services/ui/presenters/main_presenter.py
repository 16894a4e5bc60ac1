from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from markpad.domain.formatting import TextEdit
from markpad.domain.interfaces import IMarkdownRenderer, ISettingsService
from markpad.domain.models import Document
from markpad.services.document_manager import DocumentManager
from markpad.services.ui.presenters.tab_presenter import DocumentTab
from markpad.utils.constants import APP_NAME

logger = logging.getLogger(__name__)

READY = "Ready"


@runtime_checkable
class IMainView(Protocol):
    """Passive view surface (implemented by the Qt MainWindow)."""

    # tabs
    def add_tab(self, tab: DocumentTab) -> None: ...
    def remove_tab(self, tab: DocumentTab) -> None: ...
    def select_tab(self, tab: DocumentTab) -> None: ...
    def refresh_tab(self, tab: DocumentTab, changed: frozenset[str]) -> None: ...

    # window chrome
    def set_title(self, title: str) -> None: ...
    def show_status(self, text: str) -> None: ...

    # recents
    def set_recents(self, items: list[str]) -> None: ...


class MainPresenter:
    """
    Coordinates the open tabs for the main window.

    Holds the ordered tab list and the selected tab, runs file commands through
    the DocumentManager and pushes the results to the view. The session always
    keeps at least one tab.
    """

    def __init__(
        self,
        view: IMainView,
        manager: DocumentManager,
        renderer: IMarkdownRenderer | None = None,
        settings: ISettingsService | None = None,
        *,
        default_zoom: float = 1.0,
    ) -> None:
        self.view = view
        self.manager = manager
        self.renderer = renderer
        self.settings = settings
        self.default_zoom = default_zoom
        self._tabs: list[DocumentTab] = []
        self._selected: DocumentTab | None = None
        self._status = READY

        self._add_tab(self.manager.create_new())
        if self.settings is not None:
            self.view.set_recents(self.settings.get_recent())

    # ---------- state ----------

    @property
    def tabs(self) -> Sequence[DocumentTab]:
        return tuple(self._tabs)

    @property
    def selected_tab(self) -> DocumentTab | None:
        return self._selected

    @property
    def status_message(self) -> str:
        return self._status

    @status_message.setter
    def status_message(self, text: str) -> None:
        self._status = text
        self.view.show_status(text)

    @property
    def window_title(self) -> str:
        return self._selected.window_title if self._selected is not None else APP_NAME

    def select_tab(self, tab: DocumentTab) -> None:
        if tab is None or tab not in self._tabs:
            raise ValueError("tab is not open in this session")
        if tab is self._selected:
            return
        self._selected = tab
        self.manager.set_active(tab.document)
        self.view.select_tab(tab)
        self.view.set_title(self.window_title)

    def tab_for(self, document: Document) -> DocumentTab | None:
        return next((t for t in self._tabs if t.document is document), None)

    # ---------- file commands ----------

    def new_document(self) -> DocumentTab:
        tab = self._add_tab(self.manager.create_new())
        self.status_message = "New document created"
        return tab

    async def open_document(self) -> DocumentTab | None:
        document = await self.manager.open()
        if document is None:
            return None
        tab = self._add_tab(document)
        self._remember(document)
        self.status_message = f"Opened: {document.display_name}"
        return tab

    async def open_files(self, paths: Iterable[str | os.PathLike[str]]) -> list[DocumentTab]:
        """Open each path in its own tab; unreadable files are reported and skipped."""
        paths = list(paths)
        opened: list[DocumentTab] = []
        for path in paths:
            document = await self.manager.open_file(path)
            if document is not None:
                opened.append(self._add_tab(document))
                self._remember(document)
        if not paths:
            return opened
        if len(paths) == 1:
            self.status_message = f"Opened: {os.path.basename(os.fspath(paths[0]))}"
        else:
            self.status_message = f"Opened {len(paths)} files"
        return opened

    async def save_document(self) -> bool:
        tab = self._selected
        if tab is None:
            return False
        saved = await self.manager.save(tab.document)
        self.view.set_title(self.window_title)
        if saved:
            self._remember(tab.document)
            self.status_message = f"Saved: {tab.document.display_name}"
        return saved

    async def save_document_as(self) -> bool:
        tab = self._selected
        if tab is None:
            return False
        saved = await self.manager.save_as(tab.document)
        self.view.set_title(self.window_title)
        if saved:
            self._remember(tab.document)
            self.status_message = f"Saved as: {tab.document.display_name}"
        return saved

    async def close_tab(self, tab: DocumentTab) -> bool:
        if tab is None or tab not in self._tabs:
            return False

        closed = await self.manager.close_document(tab.document)
        if not closed:
            return False

        was_selected = self._selected is tab
        if was_selected:
            self._selected = None
        self._tabs.remove(tab)
        tab.detach()
        self.view.remove_tab(tab)

        if not self._tabs:
            self._add_tab(self.manager.create_new())
        elif was_selected:
            self.select_tab(self._tabs[0])
        elif self._selected is not None:
            # the manager forgets the active document when it closes it
            self.manager.set_active(self._selected.document)

        self.status_message = "Document closed"
        return True

    async def close_all_tabs(self) -> bool:
        return await self.manager.close_all()

    # ---------- editing ----------

    def apply_formatting(
        self, prefix: str, suffix: str, selection_start: int, selection_length: int
    ) -> TextEdit | None:
        if self._selected is None:
            return None
        return self._selected.apply_formatting(prefix, suffix, selection_start, selection_length)

    def apply_line_formatting(self, prefix: str, cursor_position: int) -> TextEdit | None:
        if self._selected is None:
            return None
        return self._selected.apply_line_formatting(prefix, cursor_position)

    def render_preview(self, tab: DocumentTab | None = None) -> str:
        tab = tab or self._selected
        if tab is None or self.renderer is None:
            return ""
        return self.renderer.to_html(tab.text)

    def zoom_in(self) -> None:
        if self._selected is not None:
            self._selected.zoom_in()

    def zoom_out(self) -> None:
        if self._selected is not None:
            self._selected.zoom_out()

    def zoom_reset(self) -> None:
        if self._selected is not None:
            self._selected.zoom_reset()

    def adjust_zoom(self, delta: float) -> None:
        if self._selected is not None:
            self._selected.adjust_zoom(delta)

    # ---------- internals ----------

    def _add_tab(self, document: Document) -> DocumentTab:
        tab = DocumentTab(document, zoom=self.default_zoom)
        tab.subscribe(self._on_tab_changed)
        self._tabs.append(tab)
        self.view.add_tab(tab)
        self.select_tab(tab)
        return tab

    def _on_tab_changed(self, tab: DocumentTab, changed: frozenset[str]) -> None:
        self.view.refresh_tab(tab, changed)
        if tab is self._selected and "window_title" in changed:
            self.view.set_title(self.window_title)

    def _remember(self, document: Document) -> None:
        if self.settings is None or document.file_path is None:
            return
        self.view.set_recents(self.settings.add_recent(document.file_path.value))
