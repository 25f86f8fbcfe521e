"""
Coin Dashboard - PyQt6 Desktop Application
Main entry point.
"""

import logging
import os
import sys

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication

from config.settings import get_settings_manager
from core.logger import setup_logging
from ui.main_window import MainWindow

__version__ = "1.0.0"


def main():
    """Main application entry point."""
    log_level_env = os.environ.get("LOG_LEVEL", "INFO").upper()
    setup_logging(log_level=getattr(logging, log_level_env, logging.INFO))

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Coin Dashboard")
    app.setApplicationVersion(__version__)

    settings_manager = get_settings_manager()
    if settings_manager.settings.proxy.enabled:
        settings_manager._apply_proxy_env()

    window = MainWindow(settings_manager)
    window.show()
    window.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
