from __future__ import annotations

import asyncio

import pytest
from PyQt6.QtWidgets import QTextBrowser

from markpad.services.markdown_renderer import MarkdownRenderer
from markpad.services.ui.main_window import MainWindow
from markpad.services.ui.presenters.main_presenter import MainPresenter

# ------------------------------
# Fixtures
# ------------------------------


@pytest.fixture()
def window(qapp, manager, settings_service) -> MainWindow:
    """
    MainWindow wired to a real presenter, in-memory files/dialogs/messages and
    file-based QSettings. QTextBrowser preview keeps the test off QtWebEngine.
    """
    w = MainWindow(app_title="Test", use_web_engine=False)
    presenter = MainPresenter(
        view=w, manager=manager, renderer=MarkdownRenderer(), settings=settings_service
    )
    w.attach_presenter(presenter)
    w.show()
    qapp.processEvents()
    return w


def _editor(window: MainWindow):
    return window._widgets[window.presenter.selected_tab].editor


def _select(editor, start: int, end: int) -> None:
    c = editor.textCursor()
    c.setPosition(start)
    c.setPosition(end, c.MoveMode.KeepAnchor)
    editor.setTextCursor(c)


# ------------------------------
# Core window behavior tests
# ------------------------------


def test_window_initial_state(window: MainWindow):
    assert window.tabs.count() == 1
    assert window.tabs.tabText(0) == "Untitled"
    assert window.windowTitle() == "Untitled - MarkPad"
    assert isinstance(window._widgets[window.presenter.selected_tab].preview, QTextBrowser)


def test_new_action_adds_tab(window: MainWindow):
    window.act_new.trigger()
    assert window.tabs.count() == 2
    assert window.tabs.currentIndex() == 1
    assert window.statusBar().currentMessage() == "New document created"


def test_switching_tabs_updates_presenter(window: MainWindow):
    first = window.presenter.selected_tab
    window.act_new.trigger()
    window.tabs.setCurrentIndex(0)
    assert window.presenter.selected_tab is first
    assert window.presenter.manager.active_document is first.document


def test_typing_updates_document_and_preview(window: MainWindow, files, qapp):
    files.store["/notes/a.md"] = "# A"
    asyncio.run(window.presenter.open_files(["/notes/a.md"]))
    editor = _editor(window)
    assert editor.toPlainText() == "# A"
    assert window.tabs.tabText(1) == "a.md"

    editor.setPlainText("# A\n\n**bold**")
    qapp.processEvents()

    tab = window.presenter.selected_tab
    assert tab.text == "# A\n\n**bold**"
    assert window.tabs.tabText(1) == "*a.md"
    assert window.windowTitle() == "*a.md - MarkPad"
    preview = window._widgets[tab].preview
    assert "bold" in preview.toPlainText()
    assert "Words: 3" in window.counts_label.text()


def test_document_change_is_pushed_to_editor(window: MainWindow):
    tab = window.presenter.selected_tab
    tab.set_text("from the model")
    assert _editor(window).toPlainText() == "from the model"


def test_formatting_actions_surround_and_prefix(window: MainWindow):
    editor = _editor(window)
    editor.setPlainText("hello")
    _select(editor, 0, 5)
    window.format_actions["bold"].trigger()
    assert editor.toPlainText() == "**hello**"
    assert window.presenter.selected_tab.text == "**hello**"

    # same selection again unwraps
    window.format_actions["bold"].trigger()
    assert editor.toPlainText() == "hello"

    editor.setPlainText("line1\nline2")
    _select(editor, 8, 8)
    window.format_actions["heading1"].trigger()
    assert editor.toPlainText() == "line1\n# line2"


def test_formatting_goes_through_presenter_and_keeps_undo(window: MainWindow, monkeypatch):
    calls = []
    real = window.presenter.apply_formatting

    def spy(*args):
        calls.append(args)
        return real(*args)

    monkeypatch.setattr(window.presenter, "apply_formatting", spy)
    editor = _editor(window)
    editor.setPlainText("word")
    _select(editor, 0, 4)

    window.format_actions["italic"].trigger()

    assert calls == [("*", "*", 0, 4)]
    assert window.presenter.selected_tab.text == "*word*"
    assert window.tabs.tabText(0) == "Untitled"
    # the editor was edited in place, not reloaded, so one undo restores it
    editor.undo()
    assert editor.toPlainText() == "word"
    assert window.presenter.selected_tab.text == "word"


def test_zoom_actions_update_label(window: MainWindow):
    window.act_zoom_in.trigger()
    assert window.zoom_label.text() == "110%"
    window.act_zoom_reset.trigger()
    assert window.zoom_label.text() == "100%"


def test_closing_tab_removes_it_from_widget(window: MainWindow):
    second = window.presenter.new_document()
    assert window.tabs.count() == 2

    assert asyncio.run(window.presenter.close_tab(second)) is True

    assert window.tabs.count() == 1
    assert second not in window._widgets
    assert window.tabs.currentIndex() == 0


def test_recents_menu_lists_opened_files(window: MainWindow, files):
    files.store["/notes/r.md"] = "ok"
    asyncio.run(window.presenter.open_files(["/notes/r.md"]))
    labels = [a.text() for a in window.recent_menu.actions()]
    assert labels[0] == "/notes/r.md"


def test_geometry_saved_on_confirmed_close(window: MainWindow, settings_service, qapp):
    window._close_confirmed = True
    window.close()
    qapp.processEvents()
    assert settings_service.get_geometry()
