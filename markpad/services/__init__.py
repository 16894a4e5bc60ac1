"""Concrete service implementations."""

from .document_manager import DocumentManager
from .file_service import FileService
from .markdown_renderer import MarkdownRenderer
from .settings_service import SettingsService

__all__ = ["DocumentManager", "FileService", "MarkdownRenderer", "SettingsService"]
