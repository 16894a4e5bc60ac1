from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

from PyQt6.QtCore import QByteArray, QEvent, QObject, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMenu,
    QSplitter,
    QStatusBar,
    QTabWidget,
    QTextBrowser,
    QTextEdit,
    QToolBar,
    QWidget,
)

from markpad.domain.formatting import LINE_PREFIXES, WRAP_MARKERS
from markpad.services.ui.adapters.qt_text_editor import QtTextEditorAdapter
from markpad.services.ui.commands import PrefixLines, SurroundSelection
from markpad.services.ui.presenters.main_presenter import MainPresenter
from markpad.services.ui.presenters.tab_presenter import DocumentTab
from markpad.utils.constants import APP_NAME, MAX_RECENTS

logger = logging.getLogger(__name__)

# (label, marker key, shortcut)
_WRAP_ACTIONS = [
    ("Bold", "bold", "Ctrl+B"),
    ("Italic", "italic", "Ctrl+I"),
    ("Strikethrough", "strikethrough", None),
    ("Inline Code", "inline_code", None),
    ("Code Block", "code_block", None),
    ("Link", "link", "Ctrl+K"),
    ("Image", "image", None),
]

_LINE_ACTIONS = [
    ("H1", "heading1"),
    ("H2", "heading2"),
    ("H3", "heading3"),
    ("Bullet List", "bullet_list"),
    ("Numbered List", "numbered_list"),
    ("Task List", "task_list"),
]


@dataclass
class _TabWidgets:
    page: QSplitter
    editor: QTextEdit
    preview: QWidget
    adapter: QtTextEditorAdapter
    base_font_size: float


class MainWindow(QMainWindow):
    """Thin PyQt window: renders presenter state and forwards user actions (IMainView)."""

    def __init__(self, *, app_title: str = APP_NAME, use_web_engine: bool = True) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.resize(1100, 700)

        self.presenter: MainPresenter | None = None
        self._use_web_engine = use_web_engine
        self._widgets: dict[DocumentTab, _TabWidgets] = {}
        self._syncing = False
        self._formatting = False
        self._close_confirmed = False
        self._pending: set[asyncio.Future[Any]] = set()

        self.tabs = QTabWidget(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setMovable(False)
        self.tabs.setDocumentMode(True)
        self.tabs.currentChanged.connect(self._on_current_changed)
        self.tabs.tabCloseRequested.connect(self._on_tab_close_requested)
        self.setCentralWidget(self.tabs)

        self.counts_label = QLabel(self)
        self.zoom_label = QLabel(self)
        status = QStatusBar(self)
        status.addPermanentWidget(self.counts_label)
        status.addPermanentWidget(self.zoom_label)
        self.setStatusBar(status)

        self._build_actions()
        self._build_toolbar()
        self._build_menu()

        self.setAcceptDrops(True)

    def attach_presenter(self, presenter: MainPresenter) -> None:
        self.presenter = presenter

    # ---------- UI creation ----------

    def _build_actions(self) -> None:
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_file
        )
        self.act_open = QAction(
            "Open…", self, shortcut=QKeySequence.StandardKey.Open, triggered=self._open_dialog
        )
        self.act_save = QAction(
            "Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save
        )
        self.act_save_as = QAction(
            "Save As…", self, shortcut=QKeySequence.StandardKey.SaveAs, triggered=self._save_as
        )
        self.act_close_tab = QAction(
            "Close Tab", self, shortcut=QKeySequence.StandardKey.Close, triggered=self._close_current
        )
        self.act_exit = QAction("E&xit", self, shortcut="Ctrl+Q", triggered=self.close)

        self.act_zoom_in = QAction(
            "Zoom In", self, shortcut=QKeySequence.StandardKey.ZoomIn, triggered=self._zoom_in
        )
        self.act_zoom_out = QAction(
            "Zoom Out", self, shortcut=QKeySequence.StandardKey.ZoomOut, triggered=self._zoom_out
        )
        self.act_zoom_reset = QAction("Reset Zoom", self, shortcut="Ctrl+0", triggered=self._zoom_reset)

        self.recent_menu = QMenu("Open Recent", self)

        self.format_actions: dict[str, QAction] = {}
        for label, key, shortcut in _WRAP_ACTIONS:
            marker = WRAP_MARKERS[key]
            act = QAction(
                label,
                self,
                triggered=lambda chk=False, m=marker: self._surround(m.prefix, m.suffix),
            )
            if shortcut:
                act.setShortcut(shortcut)
            self.format_actions[key] = act
        for label, key in _LINE_ACTIONS:
            self.format_actions[key] = QAction(
                label,
                self,
                triggered=lambda chk=False, p=LINE_PREFIXES[key]: self._prefix_line(p),
            )

    def _build_toolbar(self) -> None:
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_open, self.act_save, self.act_save_as):
            tb.addAction(a)
        tb.addSeparator()
        for a in (self.act_zoom_out, self.act_zoom_reset, self.act_zoom_in):
            tb.addAction(a)

        tbf = QToolBar("Formatting", self)
        for a in self.format_actions.values():
            tbf.addAction(a)

        self.addToolBar(tb)
        self.addToolBarBreak()
        self.addToolBar(tbf)

    def _build_menu(self) -> None:
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_open)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addSeparator()
        filem.addAction(self.act_close_tab)
        filem.addAction(self.act_exit)
        self.set_recents([])

        editm = m.addMenu("&Format")
        for a in self.format_actions.values():
            editm.addAction(a)

        viewm = m.addMenu("&View")
        for a in (self.act_zoom_in, self.act_zoom_out, self.act_zoom_reset):
            viewm.addAction(a)

    def _create_preview_widget(self) -> QWidget:
        """Prefer QWebEngineView (runs MathJax/KaTeX); fall back to QTextBrowser."""
        if self._use_web_engine:
            try:
                from PyQt6.QtWebEngineWidgets import QWebEngineView

                return QWebEngineView(self)
            except ImportError as e:
                logger.info("QWebEngineView unavailable, using QTextBrowser: %s", e)
                self._use_web_engine = False
        w = QTextBrowser(self)
        w.setOpenExternalLinks(True)
        return w

    # ---------- IMainView ----------

    def add_tab(self, tab: DocumentTab) -> None:
        editor = QTextEdit(self)
        editor.setAcceptRichText(False)
        editor.setTabStopDistance(4 * editor.fontMetrics().horizontalAdvance(" "))
        preview = self._create_preview_widget()

        page = QSplitter(Qt.Orientation.Horizontal, self)
        page.addWidget(editor)
        page.addWidget(preview)
        page.setStretchFactor(0, 1)
        page.setStretchFactor(1, 1)

        widgets = _TabWidgets(
            page=page,
            editor=editor,
            preview=preview,
            adapter=QtTextEditorAdapter(editor),
            base_font_size=preview.font().pointSizeF(),
        )
        self._widgets[tab] = widgets

        self._syncing = True
        try:
            editor.setPlainText(tab.text)
        finally:
            self._syncing = False
        editor.textChanged.connect(lambda t=tab: self._on_editor_changed(t))
        preview.installEventFilter(self)
        if isinstance(preview, QTextBrowser):
            preview.viewport().installEventFilter(self)

        self.tabs.addTab(page, tab.tab_header)
        self._render_preview(tab)
        self._apply_zoom(tab)

    def remove_tab(self, tab: DocumentTab) -> None:
        widgets = self._widgets.pop(tab, None)
        if widgets is None:
            return
        index = self.tabs.indexOf(widgets.page)
        if index >= 0:
            # the presenter picks the next selection itself
            self.tabs.blockSignals(True)
            try:
                self.tabs.removeTab(index)
            finally:
                self.tabs.blockSignals(False)
        widgets.page.deleteLater()

    def select_tab(self, tab: DocumentTab) -> None:
        widgets = self._widgets.get(tab)
        if widgets is not None:
            self.tabs.setCurrentWidget(widgets.page)
        self._update_counts(tab)

    def refresh_tab(self, tab: DocumentTab, changed: frozenset[str]) -> None:
        widgets = self._widgets.get(tab)
        if widgets is None:
            return
        if "tab_header" in changed:
            self.tabs.setTabText(self.tabs.indexOf(widgets.page), tab.tab_header)
        if "content" in changed:
            if not self._formatting and widgets.editor.toPlainText() != tab.text:
                self._syncing = True
                try:
                    widgets.editor.setPlainText(tab.text)
                finally:
                    self._syncing = False
            self._render_preview(tab)
        if "zoom" in changed:
            self._apply_zoom(tab)
        if self.presenter is not None and tab is self.presenter.selected_tab:
            self._update_counts(tab)

    def set_title(self, title: str) -> None:
        self.setWindowTitle(title)

    def show_status(self, text: str) -> None:
        self.statusBar().showMessage(text, 3000)

    def set_recents(self, items: list[str]) -> None:
        self.recent_menu.clear()
        if not items:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in items[:MAX_RECENTS]:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self.open_paths([x]))
            )

    # ---------- actions ----------

    def _new_file(self) -> None:
        if self.presenter is not None:
            self.presenter.new_document()

    def _open_dialog(self) -> None:
        if self.presenter is not None:
            self._spawn(self.presenter.open_document())

    def open_paths(self, paths: list[str]) -> None:
        if self.presenter is not None:
            self._spawn(self.presenter.open_files(paths))

    def _save(self) -> None:
        if self.presenter is not None:
            self._spawn(self.presenter.save_document())

    def _save_as(self) -> None:
        if self.presenter is not None:
            self._spawn(self.presenter.save_document_as())

    def _close_current(self) -> None:
        if self.presenter is not None and self.presenter.selected_tab is not None:
            self._spawn(self.presenter.close_tab(self.presenter.selected_tab))

    def _on_tab_close_requested(self, index: int) -> None:
        tab = self._tab_at(index)
        if tab is not None and self.presenter is not None:
            self._spawn(self.presenter.close_tab(tab))

    def _on_current_changed(self, index: int) -> None:
        tab = self._tab_at(index)
        if tab is not None and self.presenter is not None and tab in self.presenter.tabs:
            self.presenter.select_tab(tab)

    def _current_adapter(self) -> QtTextEditorAdapter | None:
        if self.presenter is None or self.presenter.selected_tab is None:
            return None
        widgets = self._widgets.get(self.presenter.selected_tab)
        return widgets.adapter if widgets is not None else None

    def _surround(self, prefix: str, suffix: str) -> None:
        adapter = self._current_adapter()
        if adapter is None:
            return
        self._run_format(SurroundSelection(adapter, self.presenter, prefix, suffix))
        adapter.widget.setFocus()

    def _prefix_line(self, prefix: str) -> None:
        adapter = self._current_adapter()
        if adapter is None:
            return
        self._run_format(PrefixLines(adapter, self.presenter, prefix))
        adapter.widget.setFocus()

    def _run_format(self, command: SurroundSelection | PrefixLines) -> None:
        # the command replays the edit on the widget itself
        self._formatting = True
        try:
            command.execute()
        finally:
            self._formatting = False

    def _zoom_in(self) -> None:
        if self.presenter is not None:
            self.presenter.zoom_in()

    def _zoom_out(self) -> None:
        if self.presenter is not None:
            self.presenter.zoom_out()

    def _zoom_reset(self) -> None:
        if self.presenter is not None:
            self.presenter.zoom_reset()

    # ---------- helpers ----------

    def _tab_at(self, index: int) -> DocumentTab | None:
        page = self.tabs.widget(index)
        return next((t for t, w in self._widgets.items() if w.page is page), None)

    def _on_editor_changed(self, tab: DocumentTab) -> None:
        if self._syncing:
            return
        widgets = self._widgets.get(tab)
        if widgets is not None:
            tab.set_text(widgets.editor.toPlainText())

    def _render_preview(self, tab: DocumentTab) -> None:
        widgets = self._widgets.get(tab)
        if widgets is None or self.presenter is None:
            return
        # QWebEngineView and QTextBrowser both implement setHtml(html)
        widgets.preview.setHtml(self.presenter.render_preview(tab))

    def _apply_zoom(self, tab: DocumentTab) -> None:
        widgets = self._widgets.get(tab)
        if widgets is None:
            return
        preview = widgets.preview
        if hasattr(preview, "setZoomFactor"):
            preview.setZoomFactor(tab.zoom)
        elif widgets.base_font_size > 0:
            font = preview.font()
            font.setPointSizeF(widgets.base_font_size * tab.zoom)
            preview.setFont(font)
        if self.presenter is not None and tab is self.presenter.selected_tab:
            self.zoom_label.setText(tab.zoom_percentage)

    def _update_counts(self, tab: DocumentTab) -> None:
        self.counts_label.setText(f"Words: {tab.word_count}  Characters: {tab.character_count}")
        self.zoom_label.setText(tab.zoom_percentage)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Future[Any]:
        fut = asyncio.ensure_future(coro)
        self._pending.add(fut)
        fut.add_done_callback(self._on_task_done)
        return fut

    def _on_task_done(self, fut: asyncio.Future[Any]) -> None:
        self._pending.discard(fut)
        if not fut.cancelled() and fut.exception() is not None:
            logger.error("UI command failed", exc_info=fut.exception())

    async def _confirm_close(self) -> None:
        if self.presenter is None or await self.presenter.close_all_tabs():
            self._close_confirmed = True
            self.close()

    # ---------- events ----------

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        # Ctrl + wheel over a preview zooms it
        if (
            event.type() == QEvent.Type.Wheel
            and event.modifiers() & Qt.KeyboardModifier.ControlModifier
            and self.presenter is not None
        ):
            self.presenter.adjust_zoom(event.angleDelta().y() / 120)
            return True
        return super().eventFilter(obj, event)

    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        local = [u.toLocalFile() for u in e.mimeData().urls() if u.toLocalFile()]
        if local:
            self.open_paths(local)

    def closeEvent(self, event):
        if self._close_confirmed or self.presenter is None:
            if self.presenter is not None and self.presenter.settings is not None:
                self.presenter.settings.set_geometry(bytes(self.saveGeometry()))
            super().closeEvent(event)
            return
        event.ignore()
        self._spawn(self._confirm_close())

    def restore_geometry(self, blob: bytes | None) -> None:
        if isinstance(blob, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(blob))

