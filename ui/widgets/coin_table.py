"""
Sortable coin table.
"""

from typing import Optional
from PyQt6.QtWidgets import QAbstractItemView, QHeaderView, QTableWidgetItem, QWidget
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from qfluentwidgets import TableWidget

from core.models import Coin, SortDirection, SortKey
from core.utils import format_change, format_currency, format_usd_compact
from ui.styles.theme import change_color


class CoinTable(TableWidget):
    """Coin table whose header clicks are turned into sort requests."""

    HEADERS = ["#", "Name", "Price", "24h %", "Market Cap"]
    SORT_COLUMNS = {
        0: SortKey.RANK,
        2: SortKey.PRICE,
        3: SortKey.CHANGE_24H,
        4: SortKey.MARKET_CAP,
    }

    sort_requested = pyqtSignal(object)  # SortKey
    coin_selected = pyqtSignal(str)  # coin id
    details_requested = pyqtSignal(str)  # coin id

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._coin_ids: list[str] = []
        self._theme_mode = "dark"
        self._sort = (SortKey.RANK, SortDirection.ASC)
        self._setup_ui()
        self.show_sort(*self._sort)

    def _setup_ui(self):
        self.setColumnCount(len(self.HEADERS))
        self.setHorizontalHeaderLabels(self.HEADERS)
        self.verticalHeader().hide()
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setWordWrap(False)

        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionsClickable(True)
        header.setSortIndicatorShown(True)
        header.sectionClicked.connect(self._on_header_clicked)

        self.cellClicked.connect(self._on_cell_clicked)
        self.cellDoubleClicked.connect(self._on_cell_double_clicked)

    def set_theme_mode(self, mode: str):
        self._theme_mode = mode

    def set_coins(self, coins: list[Coin]):
        """Replace all rows, keeping the given order."""
        self._coin_ids = [coin.id for coin in coins]
        self.setRowCount(len(coins))

        for row, coin in enumerate(coins):
            rank = "" if coin.market_cap_rank is None else str(coin.market_cap_rank)
            self.setItem(row, 0, self._item(rank))
            self.setItem(row, 1, self._item(f"{coin.name}  {coin.symbol.upper()}", align_right=False))
            self.setItem(row, 2, self._item(format_currency(coin.current_price)))

            change = coin.price_change_percentage_24h
            change_item = self._item(format_change(change))
            change_item.setForeground(QColor(change_color(change, self._theme_mode)))
            self.setItem(row, 3, change_item)

            self.setItem(row, 4, self._item(format_usd_compact(coin.market_cap)))

    def show_sort(self, key: SortKey, direction: SortDirection):
        """Move the header sort indicator to the active column."""
        self._sort = (key, direction)
        for column, column_key in self.SORT_COLUMNS.items():
            if column_key is key:
                order = (
                    Qt.SortOrder.AscendingOrder
                    if direction is SortDirection.ASC
                    else Qt.SortOrder.DescendingOrder
                )
                self.horizontalHeader().setSortIndicator(column, order)
                return

    def _item(self, text: str, align_right: bool = True) -> QTableWidgetItem:
        item = QTableWidgetItem(text)
        alignment = Qt.AlignmentFlag.AlignVCenter
        alignment |= Qt.AlignmentFlag.AlignRight if align_right else Qt.AlignmentFlag.AlignLeft
        item.setTextAlignment(alignment)
        return item

    def _on_header_clicked(self, column: int):
        key = self.SORT_COLUMNS.get(column)
        if key is not None:
            self.sort_requested.emit(key)
        else:
            # The header flips its indicator on any click; put it back
            self.show_sort(*self._sort)

    def _on_cell_clicked(self, row: int, column: int):
        if 0 <= row < len(self._coin_ids):
            self.coin_selected.emit(self._coin_ids[row])

    def _on_cell_double_clicked(self, row: int, column: int):
        if 0 <= row < len(self._coin_ids):
            self.details_requested.emit(self._coin_ids[row])
