"""
Error panel with a retry button.
"""

from typing import Optional
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel
from PyQt6.QtCore import Qt, pyqtSignal
from qfluentwidgets import PrimaryPushButton, FluentIcon as FIF

from ui.styles.theme import get_stylesheet


class ErrorAlert(QWidget):
    """Shows the fetch failure message and offers a manual retry."""

    retry_clicked = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("errorAlert")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        self.message_label = QLabel("")
        self.message_label.setObjectName("errorMessage")
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.message_label)

        self.retry_btn = PrimaryPushButton(FIF.SYNC, "Retry", self)
        self.retry_btn.clicked.connect(self.retry_clicked)
        layout.addWidget(self.retry_btn, 0, Qt.AlignmentFlag.AlignCenter)

    def set_message(self, message: str):
        self.message_label.setText(message)

    def set_theme_mode(self, mode: str):
        self.setStyleSheet(get_stylesheet("error_alert", mode))
