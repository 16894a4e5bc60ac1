from __future__ import annotations

import asyncio
import logging
import os

from markpad.domain.interfaces import IFileService
from markpad.domain.models import UNTITLED, Document, FilePath
from markpad.services.ui.ports.dialogs import IFileDialogService
from markpad.services.ui.ports.messages import Answer, IMessageService
from markpad.utils.constants import DEFAULT_SAVE_NAME

logger = logging.getLogger(__name__)

OPEN_ERROR_TITLE = "Error Opening File"
SAVE_ERROR_TITLE = "Error Saving File"
UNSAVED_TITLE = "Unsaved Changes"


class DocumentManager:
    """
    Owns the lifecycle of open documents: create, open, save and close.

    Every destructive step goes through the unsaved-changes prompt, and every
    file error is reported through the message port instead of propagating.
    Dialogs are awaited and file I/O runs in a worker thread, so callers on the
    UI loop are suspended, not blocked. Callers serialise actions per document.
    """

    def __init__(
        self,
        files: IFileService,
        dialogs: IFileDialogService,
        messages: IMessageService,
    ) -> None:
        if files is None or dialogs is None or messages is None:
            raise ValueError("DocumentManager requires file, dialog and message services")
        self.files = files
        self.dialogs = dialogs
        self.messages = messages
        self._active: Document | None = None

    @property
    def active_document(self) -> Document | None:
        return self._active

    def set_active(self, document: Document) -> None:
        if document is None:
            raise ValueError("document must not be None")
        self._active = document

    # ---------- create / open ----------

    def create_new(self) -> Document:
        document = Document()
        self._active = document
        return document

    async def open(self) -> Document | None:
        path = await self.dialogs.get_open_file()
        if path is None:
            return None
        return await self.open_file(path)

    async def open_file(self, path: str | os.PathLike[str]) -> Document | None:
        """Read `path` into a new active document; None if it could not be read."""
        try:
            file_path = FilePath.create(path)
            content = await asyncio.to_thread(self.files.read_text, file_path.as_path())
        except Exception as e:
            logger.warning("Failed to open %s: %s", path, e)
            await self.messages.error(OPEN_ERROR_TITLE, f"Failed to open file: {e}")
            return None

        document = Document()
        document.load(file_path.value, content)
        self._active = document
        logger.info("Opened %s", file_path)
        return document

    # ---------- save ----------

    async def save(self, document: Document) -> bool:
        """Write `document` to its file, asking for one first if it has none.

        Returns True when the content was persisted.
        """
        if document is None:
            raise ValueError("document must not be None")
        if document.file_path is None:
            return await self.save_as(document)
        return await self._write(document, document.file_path, rebind=False)

    async def save_as(self, document: Document) -> bool:
        if document is None:
            raise ValueError("document must not be None")
        path = await self.dialogs.get_save_file(self._suggested_name(document))
        if path is None:
            return False
        try:
            file_path = FilePath.create(path)
        except ValueError as e:
            await self.messages.error(SAVE_ERROR_TITLE, f"Failed to save file: {e}")
            return False
        return await self._write(document, file_path, rebind=True)

    async def _write(self, document: Document, file_path: FilePath, *, rebind: bool) -> bool:
        # the editor stays live while the worker thread writes
        text = document.content
        try:
            await asyncio.to_thread(self.files.write_text_atomic, file_path.as_path(), text)
        except Exception as e:
            logger.warning("Failed to save %s: %s", file_path, e)
            await self.messages.error(SAVE_ERROR_TITLE, f"Failed to save file: {e}")
            return False

        document.save(file_path.value if rebind else None, persisted=text)
        logger.info("Saved %s", file_path)
        return True

    @staticmethod
    def _suggested_name(document: Document) -> str:
        name = document.display_name
        return DEFAULT_SAVE_NAME if name == UNTITLED else name

    # ---------- close ----------

    async def close_document(self, document: Document) -> bool:
        """Close `document`, prompting to save unsaved changes.

        Returns False when the user cancels or the requested save did not happen.
        """
        if document is None:
            raise ValueError("document must not be None")

        if document.has_unsaved_changes:
            answer = await self.messages.ask_yes_no_cancel(
                UNSAVED_TITLE,
                f"'{document.display_name}' has unsaved changes. Do you want to save them?",
            )
            if answer is Answer.CANCEL:
                return False
            if answer is Answer.YES:
                await self.save(document)
                if document.has_unsaved_changes:
                    return False

        if self._active is document:
            self._active = None
        return True

    async def close_all(self) -> bool:
        # Only the active document is drained; iterating every open tab is the
        # caller's job (see MainPresenter.close_all_tabs).
        if self._active is None:
            return True
        return await self.close_document(self._active)
