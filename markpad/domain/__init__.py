"""Domain layer: documents, formatting transforms and collaborator interfaces."""

from .formatting import LINE_PREFIXES, WRAP_MARKERS, TextEdit, WrapMarker
from .interfaces import IFileService, IMarkdownRenderer, ISettingsService
from .models import Document, DocumentState, FilePath, InvalidFilePathError

__all__ = [
    "IMarkdownRenderer",
    "IFileService",
    "ISettingsService",
    "Document",
    "DocumentState",
    "FilePath",
    "InvalidFilePathError",
    "TextEdit",
    "WrapMarker",
    "WRAP_MARKERS",
    "LINE_PREFIXES",
]
