"""
Header bar with the app title, refresh and theme controls using Fluent Design.
"""

from typing import Optional
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QLabel
from PyQt6.QtCore import pyqtSignal
from qfluentwidgets import TransparentToolButton, FluentIcon as FIF

from core.theme_controller import ThemeController
from ui.styles.theme import get_stylesheet


class Header(QWidget):
    """Top bar of the dashboard."""

    refresh_clicked = pyqtSignal()

    def __init__(self, theme: ThemeController, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._theme = theme
        self.setObjectName("header")
        self._setup_ui()
        self._theme.theme_changed.connect(self._on_theme_changed)
        self._on_theme_changed(self._theme.mode)

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 8, 16, 8)
        layout.setSpacing(6)

        self.title_label = QLabel("Crypto Dashboard")
        self.title_label.setObjectName("appTitle")
        layout.addWidget(self.title_label)

        layout.addStretch()

        self.refresh_btn = TransparentToolButton(FIF.SYNC, self)
        self.refresh_btn.setFixedSize(32, 32)
        self.refresh_btn.setToolTip("Refresh data")
        self.refresh_btn.clicked.connect(self.refresh_clicked)
        layout.addWidget(self.refresh_btn)

        self.theme_btn = TransparentToolButton(FIF.CONSTRACT, self)
        self.theme_btn.setFixedSize(32, 32)
        self.theme_btn.clicked.connect(self._theme.toggle)
        layout.addWidget(self.theme_btn)

    def _on_theme_changed(self, mode: str):
        target = "light" if mode == "dark" else "dark"
        self.theme_btn.setToolTip(f"Switch to {target} mode")
        self.setStyleSheet(get_stylesheet("header", mode))
