"""
24h price chart for the selected coin, with quick-select buttons for the top coins.
"""

from typing import List, Optional
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel
from PyQt6.QtGui import QPainter, QBrush, QColor, QPen, QLinearGradient, QPainterPath
from PyQt6.QtCore import Qt, QPointF, pyqtSignal
from qfluentwidgets import CardWidget, TogglePushButton

from core.chart_data import PricePoint, generate_price_series
from core.models import Coin
from core.utils import format_currency
from ui.styles.theme import change_color, get_theme_colors

TOP_COINS = 5


class ChartCanvas(QWidget):
    """
    Line chart drawn with native QPainter.
    Grid lines with price labels on the left, hour labels along the bottom.
    """

    GRID_LINES = 4

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumHeight(300)
        self._points: List[PricePoint] = []
        self._line_color = "#4CAF50"
        self._theme_mode = "dark"

    def set_series(self, points: List[PricePoint], line_color: str, theme_mode: str):
        self._points = points
        self._line_color = line_color
        self._theme_mode = theme_mode
        self.update()

    def paintEvent(self, event):
        if len(self._points) < 2:
            return

        colors = get_theme_colors(self._theme_mode)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        prices = [p.price for p in self._points]
        min_val = min(prices)
        max_val = max(prices)
        range_val = max_val - min_val
        if range_val == 0:
            range_val = 1

        font = painter.font()
        font.setPointSize(8)
        painter.setFont(font)
        fm = painter.fontMetrics()

        labels = [
            f"${min_val + range_val * i / self.GRID_LINES:,.0f}" for i in range(self.GRID_LINES + 1)
        ]
        padding_left = max(fm.horizontalAdvance(label) for label in labels) + 10
        padding_right = 10
        padding_top = 10
        padding_bottom = fm.height() + 8

        w = self.width()
        h = self.height()
        plot_w = w - padding_left - padding_right
        plot_h = h - padding_top - padding_bottom

        def y_for(value: float) -> float:
            return padding_top + plot_h - ((value - min_val) / range_val) * plot_h

        # Horizontal grid (dashed) with price labels
        grid_pen = QPen(QColor(colors["border"]))
        grid_pen.setStyle(Qt.PenStyle.DashLine)
        for i, label in enumerate(labels):
            y = y_for(min_val + range_val * i / self.GRID_LINES)
            painter.setPen(grid_pen)
            painter.drawLine(int(padding_left), int(y), int(padding_left + plot_w), int(y))
            painter.setPen(QColor(colors["text_secondary"]))
            painter.drawText(2, int(y + fm.ascent() / 2), label)

        # Line
        step_x = plot_w / (len(self._points) - 1)
        points = [
            QPointF(padding_left + i * step_x, y_for(p.price)) for i, p in enumerate(self._points)
        ]

        path = QPainterPath()
        path.moveTo(points[0])
        for p in points[1:]:
            path.lineTo(p)

        line_color = QColor(self._line_color)

        # Gradient fill under the line
        fill_path = QPainterPath(path)
        fill_path.lineTo(padding_left + plot_w, padding_top + plot_h)
        fill_path.lineTo(padding_left, padding_top + plot_h)
        fill_path.closeSubpath()

        grad = QLinearGradient(0, padding_top, 0, padding_top + plot_h)
        c_fill_start = QColor(line_color)
        c_fill_start.setAlpha(60)
        c_fill_end = QColor(line_color)
        c_fill_end.setAlpha(5)
        grad.setColorAt(0, c_fill_start)
        grad.setColorAt(1, c_fill_end)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(grad))
        painter.drawPath(fill_path)

        pen = QPen(line_color)
        pen.setWidth(2)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)

        # Time labels every 4 hours
        painter.setPen(QColor(colors["text_secondary"]))
        for i in range(0, len(self._points), 4):
            label = self._points[i].label
            x = padding_left + i * step_x - fm.horizontalAdvance(label) / 2
            painter.drawText(int(x), int(h - 4), label)


class PriceChart(CardWidget):
    """Card with the chart of the selected coin."""

    coin_selected = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._theme_mode = "dark"
        self._coins: List[Coin] = []
        self._selected_id: Optional[str] = None
        self._buttons: List[TogglePushButton] = []
        self._setup_ui()

    def _setup_ui(self):
        self.setBorderRadius(8)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(12)

        title_row = QHBoxLayout()
        self.title_label = QLabel("Price Chart (24h)")
        title_row.addWidget(self.title_label)
        title_row.addStretch()
        self.price_label = QLabel("")
        title_row.addWidget(self.price_label)
        layout.addLayout(title_row)

        self.buttons_layout = QHBoxLayout()
        self.buttons_layout.setSpacing(6)
        self.buttons_layout.addStretch()
        layout.addLayout(self.buttons_layout)

        self.empty_label = QLabel("No data available for the selected coin.")
        self.empty_label.hide()
        layout.addWidget(self.empty_label)

        self.canvas = ChartCanvas()
        layout.addWidget(self.canvas, 1)

        self._apply_label_styles()

    def set_theme_mode(self, mode: str):
        self._theme_mode = mode
        self._apply_label_styles()
        self._refresh_chart()

    def set_coins(self, coins: List[Coin], selected_id: Optional[str]):
        """Show the quick-select buttons for the top coins and chart the selection."""
        self._coins = list(coins)
        self._selected_id = selected_id
        self._rebuild_buttons()
        self._refresh_chart()

    def set_selected(self, coin_id: Optional[str]):
        self._selected_id = coin_id
        for button in self._buttons:
            button.setChecked(button.property("coinId") == coin_id)
        self._refresh_chart()

    def _selected_coin(self) -> Optional[Coin]:
        for coin in self._coins:
            if coin.id == self._selected_id:
                return coin
        return None

    def _rebuild_buttons(self):
        for button in self._buttons:
            self.buttons_layout.removeWidget(button)
            button.deleteLater()
        self._buttons = []

        for index, coin in enumerate(self._coins[:TOP_COINS]):
            button = TogglePushButton(coin.name, self)
            button.setProperty("coinId", coin.id)
            button.setChecked(coin.id == self._selected_id)
            button.clicked.connect(lambda _checked, cid=coin.id: self._on_button_clicked(cid))
            self.buttons_layout.insertWidget(index, button)
            self._buttons.append(button)

    def _on_button_clicked(self, coin_id: str):
        # Keep exactly one button checked; the owner confirms via set_selected
        self.set_selected(coin_id)
        self.coin_selected.emit(coin_id)

    def _refresh_chart(self):
        coin = self._selected_coin()
        if coin is None:
            self.price_label.setText("")
            self.empty_label.show()
            self.canvas.hide()
            return

        self.empty_label.hide()
        self.canvas.show()
        self.price_label.setText(f"{coin.name}: {format_currency(coin.current_price)}")

        series = generate_price_series(coin)
        self.canvas.set_series(
            series, change_color(coin.price_change_percentage_24h, self._theme_mode), self._theme_mode
        )

    def _apply_label_styles(self):
        colors = get_theme_colors(self._theme_mode)
        self.title_label.setStyleSheet(f"font-size: 16px; font-weight: 600; color: {colors['text']};")
        self.price_label.setStyleSheet(f"font-size: 14px; font-weight: 500; color: {colors['text']};")
        self.empty_label.setStyleSheet(f"color: {colors['text_secondary']};")
