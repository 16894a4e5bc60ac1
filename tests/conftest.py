from __future__ import annotations

import os

# Run Qt headless when no display is available (CI / containers).
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pathlib import Path

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from markpad.services.document_manager import DocumentManager
from markpad.services.file_service import FileService
from markpad.services.markdown_renderer import MarkdownRenderer
from markpad.services.settings_service import SettingsService
from markpad.services.ui.ports.messages import Answer


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- In-memory collaborators for the document manager ---


class MemoryFiles:
    """IFileService fake backed by a dict; paths listed in `fail_*` raise OSError."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.fail_read: set[str] = set()
        self.fail_write: set[str] = set()
        self.writes: list[tuple[str, str]] = []

    def read_text(self, path: Path) -> str:
        key = str(path)
        if key in self.fail_read or key not in self.store:
            raise FileNotFoundError(f"No such file: {key}")
        return self.store[key]

    def write_text_atomic(self, path: Path, text: str) -> None:
        key = str(path)
        if key in self.fail_write:
            raise PermissionError(f"Permission denied: {key}")
        self.store[key] = text
        self.writes.append((key, text))


class ScriptedDialogs:
    """IFileDialogService fake returning queued answers (None = cancelled)."""

    def __init__(self) -> None:
        self.open_answers: list[Path | None] = []
        self.save_answers: list[Path | None] = []
        self.save_suggestions: list[str | None] = []
        self.open_calls = 0

    async def get_open_file(self) -> Path | None:
        self.open_calls += 1
        return self.open_answers.pop(0) if self.open_answers else None

    async def get_save_file(self, suggested_name: str | None = None) -> Path | None:
        self.save_suggestions.append(suggested_name)
        return self.save_answers.pop(0) if self.save_answers else None


class RecordingMessages:
    """IMessageService fake recording errors and replaying queued answers."""

    def __init__(self) -> None:
        self.errors: list[tuple[str, str]] = []
        self.infos: list[tuple[str, str]] = []
        self.questions: list[tuple[str, str]] = []
        self.answers: list[Answer] = []

    async def info(self, title: str, text: str) -> None:
        self.infos.append((title, text))

    async def error(self, title: str, text: str) -> None:
        self.errors.append((title, text))

    async def ask_yes_no_cancel(self, title: str, text: str) -> Answer:
        self.questions.append((title, text))
        return self.answers.pop(0) if self.answers else Answer.CANCEL


@pytest.fixture()
def files() -> MemoryFiles:
    return MemoryFiles()


@pytest.fixture()
def dialogs() -> ScriptedDialogs:
    return ScriptedDialogs()


@pytest.fixture()
def messages() -> RecordingMessages:
    return RecordingMessages()


@pytest.fixture()
def manager(files, dialogs, messages) -> DocumentManager:
    return DocumentManager(files=files, dialogs=dialogs, messages=messages)


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()
