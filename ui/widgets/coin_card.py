"""
Coin card widget for displaying a single coin snapshot using Fluent Design.
"""

from typing import Callable, Optional
from PyQt6.QtWidgets import QVBoxLayout, QHBoxLayout, QLabel, QWidget
from PyQt6.QtCore import Qt, pyqtSignal, QUrl
from PyQt6.QtGui import QPixmap, QMouseEvent
from PyQt6.QtNetwork import QNetworkAccessManager, QNetworkProxy, QNetworkRequest, QNetworkReply
from qfluentwidgets import CardWidget

from config.settings import ProxyConfig
from core.models import Coin
from core.utils import format_change, format_currency, format_usd_compact
from ui.styles.theme import change_color, get_theme_colors

ICON_SIZE = 28


def create_network_manager(parent: QWidget, proxy_config: Optional[ProxyConfig]) -> QNetworkAccessManager:
    """Network manager for icon downloads, honouring the proxy settings."""
    manager = QNetworkAccessManager(parent)
    if proxy_config and proxy_config.enabled:
        proxy = QNetworkProxy()
        if proxy_config.type.lower() == 'http':
            proxy.setType(QNetworkProxy.ProxyType.HttpProxy)
        else:
            proxy.setType(QNetworkProxy.ProxyType.Socks5Proxy)
        proxy.setHostName(proxy_config.host)
        proxy.setPort(proxy_config.port)
        if proxy_config.username:
            proxy.setUser(proxy_config.username)
        if proxy_config.password:
            proxy.setPassword(proxy_config.password)
        manager.setProxy(proxy)
    return manager


class CoinCard(CardWidget):
    """
    Fluent Design card showing price, 24h change, market cap and volume.

    ``on_select`` is optional: cards built without it are display-only.
    """

    double_clicked = pyqtSignal(str)  # Emits coin id on double-click

    def __init__(
        self,
        coin: Coin,
        theme_mode: str = "dark",
        on_select: Optional[Callable[[str], None]] = None,
        network_manager: Optional[QNetworkAccessManager] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.coin = coin
        self._theme_mode = theme_mode
        self._on_select = on_select
        self._setup_ui()
        self._load_icon(network_manager)

        if on_select is not None:
            self.setCursor(Qt.CursorShape.PointingHandCursor)
            self.clicked.connect(lambda: self._on_select(self.coin.id))

    def _setup_ui(self):
        """Setup the widget UI with Fluent Design components."""
        colors = get_theme_colors(self._theme_mode)
        coin = self.coin

        self.setBorderRadius(8)
        self.setMinimumWidth(220)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(8)

        # Header row: icon + name + symbol + rank chip
        header_layout = QHBoxLayout()
        header_layout.setSpacing(8)

        self.icon_label = QLabel()
        self.icon_label.setFixedSize(ICON_SIZE, ICON_SIZE)
        header_layout.addWidget(self.icon_label)

        self.name_label = QLabel(coin.name)
        self.name_label.setStyleSheet(f"font-weight: bold; font-size: 15px; color: {colors['text']};")
        header_layout.addWidget(self.name_label)

        self.symbol_label = QLabel(coin.symbol.upper())
        self.symbol_label.setStyleSheet(f"font-size: 12px; color: {colors['text_secondary']};")
        header_layout.addWidget(self.symbol_label)

        header_layout.addStretch()

        rank = f"#{coin.market_cap_rank}" if coin.market_cap_rank is not None else "#-"
        self.rank_label = QLabel(rank)
        self.rank_label.setStyleSheet(
            f"font-size: 11px; color: {colors['accent_light']};"
            "background-color: rgba(109, 90, 205, 0.1);"
            "border: 1px solid rgba(109, 90, 205, 0.2); border-radius: 4px; padding: 1px 4px;"
        )
        header_layout.addWidget(self.rank_label)

        layout.addLayout(header_layout)

        self.price_label = QLabel(format_currency(coin.current_price))
        self.price_label.setStyleSheet(f"font-size: 20px; font-weight: 600; color: {colors['text']};")
        layout.addWidget(self.price_label)

        # 24h change row
        change = coin.price_change_percentage_24h
        change_layout = QHBoxLayout()
        self.change_label = QLabel(format_change(change))
        self.change_label.setStyleSheet(
            f"font-size: 13px; font-weight: 500; color: {change_color(change, self._theme_mode)};"
        )
        change_layout.addWidget(self.change_label)
        caption = QLabel("24h Change")
        caption.setStyleSheet(f"font-size: 11px; color: {colors['text_secondary']};")
        change_layout.addWidget(caption)
        change_layout.addStretch()
        layout.addLayout(change_layout)

        # Market cap / volume row
        stats_layout = QHBoxLayout()
        stats_layout.addLayout(self._stat_column("Market Cap", format_usd_compact(coin.market_cap), colors))
        stats_layout.addStretch()
        stats_layout.addLayout(self._stat_column("24h Volume", format_usd_compact(coin.total_volume), colors))
        layout.addLayout(stats_layout)

    def _stat_column(self, caption: str, value: str, colors: dict) -> QVBoxLayout:
        column = QVBoxLayout()
        column.setSpacing(2)
        caption_label = QLabel(caption)
        caption_label.setStyleSheet(f"font-size: 11px; color: {colors['text_secondary']};")
        value_label = QLabel(value)
        value_label.setStyleSheet(f"font-size: 13px; font-weight: 500; color: {colors['text']};")
        column.addWidget(caption_label)
        column.addWidget(value_label)
        return column

    def _load_icon(self, network_manager: Optional[QNetworkAccessManager]):
        """Load coin image from its URL."""
        if not self.coin.image or network_manager is None:
            self.icon_label.hide()
            return

        request = QNetworkRequest(QUrl(self.coin.image))
        # Set a user agent to avoid being blocked
        request.setHeader(QNetworkRequest.KnownHeaders.UserAgentHeader, "Mozilla/5.0")

        reply = network_manager.get(request)
        reply.finished.connect(lambda: self._on_icon_loaded(reply))

    def _on_icon_loaded(self, reply: QNetworkReply):
        """Handle icon download completion."""
        try:
            if reply.error() != QNetworkReply.NetworkError.NoError:
                self.icon_label.hide()
                return

            pixmap = QPixmap()
            if pixmap.loadFromData(reply.readAll()):
                self.icon_label.setPixmap(
                    pixmap.scaled(
                        ICON_SIZE,
                        ICON_SIZE,
                        Qt.AspectRatioMode.KeepAspectRatio,
                        Qt.TransformationMode.SmoothTransformation,
                    )
                )
            else:
                self.icon_label.hide()
        except RuntimeError:
            # Card was deleted before the download finished
            pass
        finally:
            reply.deleteLater()

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        """Handle double-click to open the details dialog."""
        if event.button() == Qt.MouseButton.LeftButton:
            self.double_clicked.emit(self.coin.id)
        super().mouseDoubleClickEvent(event)
