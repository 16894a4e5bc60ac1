from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from markpad.domain.interfaces import IAppConfig, IFileService, IMarkdownRenderer, ISettingsService
from markpad.services.config.app_config import build_app_config
from markpad.services.document_manager import DocumentManager
from markpad.services.file_service import FileService
from markpad.services.markdown_renderer import MarkdownRenderer
from markpad.services.settings_service import SettingsService
from markpad.services.ui.adapters import QtFileDialogService, QtMessageService
from markpad.services.ui.main_window import MainWindow
from markpad.services.ui.ports.dialogs import IFileDialogService
from markpad.services.ui.ports.messages import IMessageService
from markpad.services.ui.presenters import MainPresenter
from markpad.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - wires default services when none are supplied
      - builds the window, its Qt dialog adapters and the presenter behind it
    """

    def __init__(
        self,
        config: IAppConfig | None = None,
        renderer: IMarkdownRenderer | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
    ) -> None:
        self.config: IAppConfig = config or build_app_config()
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer(
            math_engine=self.config.math_engine()  # type: ignore[arg-type]
        )
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        # UI ports are usually parented to the window, so they may be built late
        self.dialogs = dialogs
        self.messages = messages

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config: IAppConfig | None = None,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(config=config, qsettings=qsettings)

    # ---------- factories ----------

    def build_document_manager(self, parent=None) -> DocumentManager:
        if self.dialogs is None:
            self.dialogs = QtFileDialogService(parent)
        if self.messages is None:
            self.messages = QtMessageService(parent)
        return DocumentManager(
            files=self.file_service,
            dialogs=self.dialogs,
            messages=self.messages,
        )

    def build_main_window(
        self,
        *,
        start_paths: list[Path] | None = None,
        app_title: str = APP_NAME,
        use_web_engine: bool = True,
    ) -> MainWindow:
        """Create the Qt MainWindow with its presenter attached."""
        window = MainWindow(app_title=app_title, use_web_engine=use_web_engine)
        presenter = MainPresenter(
            view=window,
            manager=self.build_document_manager(parent=window),
            renderer=self.renderer,
            settings=self.settings_service,
            default_zoom=self.config.default_zoom(),
        )
        window.attach_presenter(presenter)
        window.restore_geometry(self.settings_service.get_geometry())
        if start_paths:
            window.open_paths([str(p) for p in start_paths])
        return window
