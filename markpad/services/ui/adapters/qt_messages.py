from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from markpad.services.ui.ports.messages import Answer, IMessageService

_BUTTON_ANSWERS = {
    QMessageBox.StandardButton.Yes: Answer.YES,
    QMessageBox.StandardButton.No: Answer.NO,
    QMessageBox.StandardButton.Cancel: Answer.CANCEL,
}


class QtMessageService(IMessageService):
    """Qt-backed implementation for message dialogs."""

    def __init__(self, parent: Any | None = None) -> None:
        self.parent = parent

    async def info(self, title: str, text: str) -> None:
        QMessageBox.information(self.parent, title, text)

    async def error(self, title: str, text: str) -> None:
        QMessageBox.critical(self.parent, title, text)

    async def ask_yes_no_cancel(self, title: str, text: str) -> Answer:
        resp = QMessageBox.question(
            self.parent,
            title,
            text,
            QMessageBox.StandardButton.Yes
            | QMessageBox.StandardButton.No
            | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Yes,
        )
        # Escape / window close comes back as Cancel or NoButton
        return _BUTTON_ANSWERS.get(resp, Answer.CANCEL)
