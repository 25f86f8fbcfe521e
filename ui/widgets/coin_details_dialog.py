"""
Dialog showing the market statistics of one coin using Fluent Design.
"""

import webbrowser

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QVBoxLayout, QWidget
from qfluentwidgets import BodyLabel, Dialog, StrongBodyLabel, SubtitleLabel

from core.models import Coin
from core.utils import (
    PLACEHOLDER,
    format_change,
    format_currency,
    format_large_number,
    format_usd_compact,
)

COINGECKO_COIN_URL = "https://www.coingecko.com/en/coins/{coin_id}"


def coin_page_url(coin: Coin) -> str:
    return COINGECKO_COIN_URL.format(coin_id=coin.id)


def coin_statistics(coin: Coin) -> list[tuple[str, str]]:
    """Label/value rows for the statistics section."""
    supply = format_large_number(coin.circulating_supply)
    if supply != PLACEHOLDER:
        supply = f"{supply} {coin.symbol.upper()}"
    return [
        ("Market Cap", format_usd_compact(coin.market_cap)),
        ("24h Trading Volume", format_usd_compact(coin.total_volume)),
        ("24h High", format_currency(coin.high_24h)),
        ("24h Low", format_currency(coin.low_24h)),
        ("Circulating Supply", supply),
        ("All-Time High", format_currency(coin.ath)),
        ("All-Time High Date", coin.ath_date[:10] or PLACEHOLDER),
        ("Last Updated", coin.last_updated.replace("T", " ")[:19] or PLACEHOLDER),
    ]


class CoinDetailsDialog(Dialog):
    """Fluent Design dialog with price, 24h change and market statistics."""

    def __init__(self, coin: Coin, parent: QWidget | None = None):
        super().__init__(title=f"{coin.name} ({coin.symbol.upper()})", content="", parent=parent)
        self.coin = coin

        self._setup_content()
        self.setFixedSize(440, 480)

        self.yesButton.setText("View on CoinGecko")
        self.cancelButton.setText("Close")
        self.yesButton.clicked.connect(self._open_coin_page)

    def _setup_content(self):
        coin = self.coin
        content_layout = QVBoxLayout()
        content_layout.setSpacing(10)

        price_label = SubtitleLabel(format_currency(coin.current_price))
        content_layout.addWidget(price_label)

        change = coin.price_change_percentage_24h
        content_layout.addWidget(BodyLabel(f"{format_change(change)}  24h Change"))

        content_layout.addWidget(StrongBodyLabel("Market Statistics"))
        for label, value in coin_statistics(coin):
            row = QHBoxLayout()
            row.addWidget(BodyLabel(label))
            row.addStretch()
            value_label = StrongBodyLabel(value)
            value_label.setAlignment(Qt.AlignmentFlag.AlignRight)
            row.addWidget(value_label)
            content_layout.addLayout(row)

        self.textLayout.addLayout(content_layout)

    def _open_coin_page(self):
        webbrowser.open(coin_page_url(self.coin))
