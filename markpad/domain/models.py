from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Callable

UNTITLED = "Untitled"


class InvalidFilePathError(ValueError):
    """Raised when a FilePath is built from an empty or blank string."""


@dataclass(frozen=True, eq=False)
class FilePath:
    """
    Validated path value. Equality and hashing ignore case, so
    ``/Docs/A.md`` and ``/docs/a.md`` refer to the same document.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(
                f"FilePath value must be str, not {type(self.value).__name__}; "
                "use FilePath.create() for path-like objects"
            )
        if not self.value.strip():
            raise InvalidFilePathError("File path cannot be empty")

    @classmethod
    def create(cls, path: str | os.PathLike[str]) -> FilePath:
        return cls(os.fspath(path))

    @classmethod
    def create_or_none(cls, path: str | os.PathLike[str] | None) -> FilePath | None:
        if path is None:
            return None
        raw = os.fspath(path)
        if not raw.strip():
            return None
        return cls(raw)

    @property
    def file_name(self) -> str:
        return os.path.basename(self.value)

    @property
    def directory(self) -> str:
        return os.path.dirname(self.value)

    def as_path(self) -> Path:
        return Path(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilePath):
            return NotImplemented
        return self.value.casefold() == other.value.casefold()

    def __hash__(self) -> int:
        return hash(self.value.casefold())

    def __str__(self) -> str:
        return self.value


class DocumentState(Enum):
    NEW = auto()  # never saved, no file bound
    SAVED = auto()  # matches the file on disk
    MODIFIED = auto()  # unsaved edits


DocumentListener = Callable[["Document", frozenset[str]], None]


class Document:
    """
    In-memory markdown buffer with its save state.

    ``state`` is derived from ``file_path`` and the last persisted content and is
    recomputed after every mutation. Listeners registered with :meth:`subscribe`
    receive the names of the fields that changed (``content``, ``file_path``,
    ``state``).
    """

    def __init__(self) -> None:
        self._content = ""
        self._persisted = ""
        self._file_path: FilePath | None = None
        self._state = DocumentState.NEW
        self._listeners: list[DocumentListener] = []

    # ---------- read-only surface ----------

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, text: str) -> None:
        self.set_content(text)

    @property
    def file_path(self) -> FilePath | None:
        return self._file_path

    @property
    def state(self) -> DocumentState:
        return self._state

    @property
    def has_unsaved_changes(self) -> bool:
        return self._state is DocumentState.MODIFIED

    @property
    def display_name(self) -> str:
        return self._file_path.file_name if self._file_path is not None else UNTITLED

    # ---------- mutators ----------

    def set_content(self, text: str) -> None:
        changed = set()
        if text != self._content:
            self._content = text
            changed.add("content")
        self._commit(changed)

    def load(self, path: str | os.PathLike[str], content: str) -> None:
        """Bind to `path` with freshly read `content`; the document becomes Saved."""
        file_path = FilePath.create(path)
        changed = self._rebind(file_path)
        if content != self._content:
            changed.add("content")
        self._content = content
        self._persisted = content
        self._commit(changed)

    def save(
        self, new_path: str | os.PathLike[str] | None = None, *, persisted: str | None = None
    ) -> None:
        """Record the content as persisted, optionally rebinding the path.

        `persisted` is the text that actually reached the file; it defaults to the
        current content. Edits made since that text was taken leave the document
        Modified.
        """
        changed: set[str] = set()
        if new_path is not None:
            changed = self._rebind(FilePath.create(new_path))
        self._persisted = self._content if persisted is None else persisted
        self._commit(changed)

    def mark_as_new(self) -> None:
        changed = self._rebind(None)
        if self._content:
            changed.add("content")
        self._content = ""
        self._persisted = ""
        self._commit(changed)

    # ---------- change notification ----------

    def subscribe(self, listener: DocumentListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: DocumentListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ---------- internals ----------

    def _rebind(self, file_path: FilePath | None) -> set[str]:
        # compare raw values: a case-only rename is still a rebind
        old = self._file_path.value if self._file_path is not None else None
        new = file_path.value if file_path is not None else None
        self._file_path = file_path
        return {"file_path"} if old != new else set()

    def _recompute_state(self) -> DocumentState:
        if self._file_path is None:
            return DocumentState.NEW
        if self._content != self._persisted:
            return DocumentState.MODIFIED
        return DocumentState.SAVED

    def _commit(self, changed: set[str]) -> None:
        state = self._recompute_state()
        if state is not self._state:
            self._state = state
            changed.add("state")
        if not changed:
            return
        names = frozenset(changed)
        for listener in list(self._listeners):
            listener(self, names)

    def __repr__(self) -> str:
        return f"Document(file_path={self._file_path!s}, state={self._state.name})"
