from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Protocol


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to a full HTML page (empty input gives an empty string)."""

    def to_html(self, markdown_text: str) -> str: ...


class IFileService(Protocol):
    """Read/write UTF-8 text files. Failures raise OSError."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def add_recent(self, path: Path | str) -> list[str]: ...


class IConfigService(Protocol):
    """Read-only access to INI style configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_float(
        self, section: str, key: str, default: float | None = None
    ) -> float | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    """Application config with resolved version and typed editor settings."""

    def get_version(self) -> str: ...
    def log_level(self) -> str: ...
    def math_engine(self) -> str: ...
    def default_zoom(self) -> float: ...
