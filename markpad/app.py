from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

import qasync
from PyQt6.QtCore import QCoreApplication, Qt
from PyQt6.QtWidgets import QApplication

from markpad.di.container import Container
from markpad.services.config.app_config import build_app_config
from markpad.utils.constants import APP_NAME, APP_ORG
from markpad.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps logging, config and Qt on a qasync event loop, composes the
    application via the DI container and launches the main window.
    Extra CLI arguments are files to open.
    """
    config = build_app_config()
    setup_logging(config.log_level())
    logger.info("Starting %s %s", APP_NAME, config.get_version())

    # required before QApplication exists if the web-engine preview is used
    QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)
    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)
    app_close = asyncio.Event()
    app.aboutToQuit.connect(app_close.set)

    container = Container.default(config=config)
    start_paths = [Path(a) for a in argv[1:]]

    with loop:
        win = container.build_main_window(start_paths=start_paths, app_title=APP_NAME)
        win.show()
        loop.run_until_complete(app_close.wait())
    return 0
