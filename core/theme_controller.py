import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from config.settings import SettingsManager

logger = logging.getLogger(__name__)

THEME_MODES = ("dark", "light")


class ThemeController(QObject):
    """
    Owns the light/dark mode for one window tree.
    Created at startup and handed to the widgets that style themselves.
    """

    theme_changed = pyqtSignal(str)  # new mode

    def __init__(self, settings_manager: SettingsManager, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._settings_manager = settings_manager

        mode = settings_manager.settings.theme_mode
        if mode not in THEME_MODES:
            logger.warning(f"Unknown theme mode '{mode}', falling back to dark")
            mode = "dark"
        self._mode = mode

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def is_dark(self) -> bool:
        return self._mode == "dark"

    def toggle(self):
        """Switch between dark and light, persist and notify."""
        self._mode = "light" if self.is_dark else "dark"
        self._settings_manager.update_theme(self._mode)
        self.apply()
        self.theme_changed.emit(self._mode)

    def apply(self):
        """Push the current mode to the Fluent widgets."""
        from qfluentwidgets import Theme, setTheme

        setTheme(Theme.DARK if self.is_dark else Theme.LIGHT)
