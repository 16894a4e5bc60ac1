"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    HTML_TEMPLATE,
    MAX_RECENTS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    ZOOM_MAX,
    ZOOM_MIN,
    ZOOM_STEP,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "CSS_PREVIEW",
    "HTML_TEMPLATE",
    "SETTINGS_GEOMETRY",
    "SETTINGS_RECENTS",
    "MAX_RECENTS",
    "ZOOM_MIN",
    "ZOOM_MAX",
    "ZOOM_STEP",
]
