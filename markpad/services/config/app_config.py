from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from markpad.domain.interfaces import IAppConfig
from markpad.services.config.ini_config_service import IniConfigService
from markpad.utils.constants import ZOOM_MAX, ZOOM_MIN

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_MATH_ENGINES = {"mathjax", "katex"}


def _project_root_fallback() -> Path:
    """Bundle root under PyInstaller, otherwise the repository root."""
    meipass = getattr(sys, "_MEIPASS", None)
    if meipass:
        return Path(meipass)
    # markpad/services/config/app_config.py -> parents[3] is the repo root
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    m = _VERSION_RE.match(raw)
    return m.group(1) if m else None


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Wraps IniConfigService with the settings MarkPad actually reads.

    Version precedence: <project_root>/version, then [app] version, then "0.0.0".
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v
        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2
        return "0.0.0"

    def log_level(self) -> str:
        level = (self.ini.get("logging", "level", "INFO") or "INFO").strip().upper()
        return level if level in _LOG_LEVELS else "INFO"

    def math_engine(self) -> str:
        engine = (self.ini.get("preview", "math_engine", "mathjax") or "").strip().lower()
        return engine if engine in _MATH_ENGINES else "mathjax"

    def default_zoom(self) -> float:
        zoom = self.ini.get_float("preview", "zoom", 1.0)
        if zoom is None:
            return 1.0
        return min(max(zoom, ZOOM_MIN), ZOOM_MAX)

    # ---- delegate IniConfigService ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_float(self, section: str, key: str, default: float | None = None) -> float | None:
        return self.ini.get_float(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
