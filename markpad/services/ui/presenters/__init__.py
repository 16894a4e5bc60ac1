from __future__ import annotations

from .main_presenter import IMainView, MainPresenter
from .tab_presenter import DocumentTab

__all__ = ["IMainView", "MainPresenter", "DocumentTab"]
