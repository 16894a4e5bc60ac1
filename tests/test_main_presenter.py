from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from markpad.domain.models import Document, DocumentState
from markpad.services.ui.ports.messages import Answer
from markpad.services.ui.presenters.main_presenter import IMainView, MainPresenter


class FakeView:
    def __init__(self) -> None:
        self.tabs: list = []
        self.selected = None
        self.title = ""
        self.status: list[str] = []
        self.recents: list[str] = []
        self.refreshed: list[tuple[object, frozenset[str]]] = []

    def add_tab(self, tab) -> None:
        self.tabs.append(tab)

    def remove_tab(self, tab) -> None:
        self.tabs.remove(tab)

    def select_tab(self, tab) -> None:
        self.selected = tab

    def refresh_tab(self, tab, changed) -> None:
        self.refreshed.append((tab, changed))

    def set_title(self, title: str) -> None:
        self.title = title

    def show_status(self, text: str) -> None:
        self.status.append(text)

    def set_recents(self, items: list[str]) -> None:
        self.recents = list(items)


class FakeSettings:
    def __init__(self, recents=None) -> None:
        self._recents = list(recents or [])

    def get_recent(self) -> list[str]:
        return list(self._recents)

    def add_recent(self, path: str) -> list[str]:
        self._recents = [path] + [p for p in self._recents if p != path]
        return list(self._recents)


class FakeRenderer:
    def to_html(self, markdown_text: str) -> str:
        return f"<p>{markdown_text}</p>" if markdown_text else ""


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def presenter(view, manager) -> MainPresenter:
    return MainPresenter(view, manager, FakeRenderer(), FakeSettings(["/old.md"]))


def test_fake_view_satisfies_protocol(view):
    assert isinstance(view, IMainView)


def test_starts_with_one_untitled_tab(presenter, view, manager):
    assert len(presenter.tabs) == 1
    tab = presenter.selected_tab
    assert view.tabs == [tab]
    assert view.selected is tab
    assert manager.active_document is tab.document
    assert view.title == "Untitled - MarkPad"
    assert view.recents == ["/old.md"]
    assert presenter.status_message == "Ready"


def test_new_document_adds_and_selects(presenter, view):
    tab = presenter.new_document()
    assert len(presenter.tabs) == 2
    assert presenter.selected_tab is tab
    assert view.status[-1] == "New document created"


def test_select_tab_updates_manager_and_title(presenter, manager, view, files):
    first = presenter.selected_tab
    files.store["/notes/a.md"] = "x"
    asyncio.run(presenter.open_files(["/notes/a.md"]))
    assert view.title == "a.md - MarkPad"

    presenter.select_tab(first)
    assert manager.active_document is first.document
    assert view.selected is first
    assert view.title == "Untitled - MarkPad"


def test_select_unknown_tab_raises(presenter, view):
    from markpad.services.ui.presenters.tab_presenter import DocumentTab

    with pytest.raises(ValueError):
        presenter.select_tab(DocumentTab(Document()))


def test_open_document_via_dialog(presenter, files, dialogs, view):
    files.store[str(Path("/notes/b.md"))] = "# B"
    dialogs.open_answers = [Path("/notes/b.md")]

    tab = asyncio.run(presenter.open_document())

    assert tab is presenter.selected_tab
    assert tab.text == "# B"
    assert view.status[-1] == "Opened: b.md"
    assert view.recents[0] == str(Path("/notes/b.md"))


def test_open_document_cancelled(presenter, dialogs, view):
    dialogs.open_answers = [None]
    assert asyncio.run(presenter.open_document()) is None
    assert len(presenter.tabs) == 1
    assert view.status == []


def test_open_files_reports_count_and_skips_failures(presenter, files, messages, view):
    files.store["/notes/a.md"] = "a"
    files.store["/notes/b.md"] = "b"

    opened = asyncio.run(presenter.open_files(["/notes/a.md", "/notes/missing.md", "/notes/b.md"]))

    assert [t.document.display_name for t in opened] == ["a.md", "b.md"]
    assert len(presenter.tabs) == 3
    assert view.status[-1] == "Opened 3 files"
    assert messages.errors[0][0] == "Error Opening File"


def test_open_single_file_status(presenter, files, view):
    files.store["/notes/a.md"] = "a"
    asyncio.run(presenter.open_files(["/notes/a.md"]))
    assert view.status[-1] == "Opened: a.md"


def test_save_new_document_goes_through_dialog(presenter, dialogs, files, view):
    tab = presenter.selected_tab
    tab.set_text("hello world")
    dialogs.save_answers = [Path("/tmp/a.md")]

    assert asyncio.run(presenter.save_document()) is True

    assert tab.document.state is DocumentState.SAVED
    assert view.title == "a.md - MarkPad"
    assert view.status[-1] == "Saved: a.md"
    assert view.recents[0] == str(Path("/tmp/a.md"))


def test_save_as_cancelled_changes_nothing(presenter, dialogs, view):
    dialogs.save_answers = [None]
    assert asyncio.run(presenter.save_document_as()) is False
    assert view.status == []


def test_save_as_status(presenter, dialogs, view):
    dialogs.save_answers = [Path("/tmp/copy.md")]
    assert asyncio.run(presenter.save_document_as()) is True
    assert view.status[-1] == "Saved as: copy.md"


def test_document_edits_refresh_view(presenter, files, view):
    files.store["/notes/a.md"] = "a"
    asyncio.run(presenter.open_files(["/notes/a.md"]))
    tab = presenter.selected_tab

    tab.set_text("a!")

    last_tab, changed = view.refreshed[-1]
    assert last_tab is tab
    assert "tab_header" in changed
    assert view.title == "*a.md - MarkPad"


def test_closing_last_tab_creates_fresh_one(presenter, view, manager):
    only = presenter.selected_tab

    assert asyncio.run(presenter.close_tab(only)) is True

    assert len(presenter.tabs) == 1
    fresh = presenter.selected_tab
    assert fresh is not only
    assert fresh.document.state is DocumentState.NEW
    assert manager.active_document is fresh.document
    assert view.tabs == [fresh]
    assert view.status[-1] == "Document closed"


def test_closing_selected_tab_selects_first_remaining(presenter, manager):
    first = presenter.selected_tab
    presenter.new_document()
    third = presenter.new_document()

    assert asyncio.run(presenter.close_tab(third)) is True

    assert presenter.selected_tab is first
    assert manager.active_document is first.document


def test_closing_background_tab_keeps_selection(presenter, manager):
    first = presenter.selected_tab
    second = presenter.new_document()

    assert asyncio.run(presenter.close_tab(first)) is True

    assert presenter.tabs == (second,)
    assert presenter.selected_tab is second
    assert manager.active_document is second.document


def test_close_cancelled_keeps_tab(presenter, files, messages, view):
    files.store["/notes/a.md"] = "a"
    asyncio.run(presenter.open_files(["/notes/a.md"]))
    tab = presenter.selected_tab
    tab.set_text("changed")
    messages.answers = [Answer.CANCEL]

    assert asyncio.run(presenter.close_tab(tab)) is False

    assert tab in presenter.tabs
    assert tab.text == "changed"
    assert view.status[-1] != "Document closed"


def test_closed_tab_no_longer_refreshes_view(presenter, view):
    tab = presenter.new_document()
    asyncio.run(presenter.close_tab(tab))
    view.refreshed.clear()

    tab.document.set_content("ghost")

    assert view.refreshed == []


def test_close_all_tabs_asks_about_active_document(presenter, files, messages):
    files.store["/notes/a.md"] = "a"
    asyncio.run(presenter.open_files(["/notes/a.md"]))
    presenter.selected_tab.set_text("dirty")
    messages.answers = [Answer.CANCEL]

    assert asyncio.run(presenter.close_all_tabs()) is False
    assert len(messages.questions) == 1


def test_formatting_goes_to_selected_tab(presenter):
    tab = presenter.selected_tab
    tab.set_text("word")

    edit = presenter.apply_formatting("*", "*", 0, 4)
    assert tab.text == "*word*"
    assert edit.selection == (1, 4)

    presenter.apply_line_formatting("- ", 2)
    assert tab.text == "- *word*"


def test_render_preview(presenter):
    presenter.selected_tab.set_text("hi")
    assert presenter.render_preview() == "<p>hi</p>"


def test_render_preview_without_renderer(view, manager):
    p = MainPresenter(view, manager)
    assert p.render_preview() == ""


def test_zoom_passthrough(presenter):
    presenter.zoom_in()
    assert presenter.selected_tab.zoom_percentage == "110%"
    presenter.adjust_zoom(-3)
    assert presenter.selected_tab.zoom_percentage == "80%"
    presenter.zoom_reset()
    assert presenter.selected_tab.zoom == 1.0


def test_default_zoom_applies_to_new_tabs(view, manager):
    p = MainPresenter(view, manager, default_zoom=1.5)
    assert p.selected_tab.zoom == 1.5
    assert p.new_document().zoom == 1.5
