from typing import Optional
from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import pyqtSignal
from qfluentwidgets import SearchLineEdit


class SearchBar(SearchLineEdit):
    """Search box emitting the term on every edit."""

    search_changed = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setPlaceholderText("Search by name or symbol...")
        self.setClearButtonEnabled(True)
        self.textChanged.connect(self.search_changed)

    def set_term(self, term: str):
        """Set the text without re-emitting when it is already current."""
        if self.text() != term:
            self.setText(term)
