from __future__ import annotations

from enum import Enum, auto
from typing import Protocol, runtime_checkable


class Answer(Enum):
    """Reply to a Yes/No/Cancel question."""

    YES = auto()
    NO = auto()
    CANCEL = auto()


@runtime_checkable
class IMessageService(Protocol):
    """
    Abstract UI port for message boxes. Decouples document handling from Qt widgets.
    """

    async def info(self, title: str, text: str) -> None: ...
    async def error(self, title: str, text: str) -> None: ...

    async def ask_yes_no_cancel(self, title: str, text: str) -> Answer:
        """Ask a question; closing the dialog without choosing counts as CANCEL."""
        ...
