"""
Main dashboard window using Fluent Design.
"""

import logging
from datetime import date
from typing import Optional, Dict
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QScrollArea,
    QStackedWidget, QLabel,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent
from qfluentwidgets import IndeterminateProgressRing, PushButton, SegmentedWidget

from config.settings import SettingsManager, get_settings_manager
from core.coingecko_client import CoinGeckoClient
from core.dashboard_view_model import DashboardViewModel
from core.market_data_poller import MarketDataPoller, PollState
from core.models import Coin, ViewMode
from core.theme_controller import ThemeController
from ui.card_cache import reuse_cards
from ui.styles.theme import get_stylesheet, get_theme_colors
from ui.widgets.coin_card import CoinCard, create_network_manager
from ui.widgets.coin_details_dialog import CoinDetailsDialog
from ui.widgets.coin_table import CoinTable
from ui.widgets.error_alert import ErrorAlert
from ui.widgets.header import Header
from ui.widgets.price_chart import PriceChart
from ui.widgets.search_bar import SearchBar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Dashboard window: chart, highlights, and the coin list or grid."""

    GRID_COLUMNS = 4
    HIGHLIGHT_COUNT = 3

    def __init__(
        self,
        settings_manager: Optional[SettingsManager] = None,
        poller: Optional[MarketDataPoller] = None,
    ):
        super().__init__()

        self._settings_manager = settings_manager or get_settings_manager()
        settings = self._settings_manager.settings

        # Core components
        self._theme = ThemeController(self._settings_manager, self)
        self._view_model = DashboardViewModel(settings.view_mode, self)
        if poller is None:
            client = CoinGeckoClient(settings.api, settings.proxy)
            poller = MarketDataPoller(client, settings.refresh_interval, parent=self)
        self._poller = poller

        self._network_manager = create_network_manager(self, settings.proxy)
        self._grid_cards: Dict[str, CoinCard] = {}
        self._highlight_cards: Dict[str, CoinCard] = {}

        self._theme.apply()
        self._setup_ui()
        self._connect_signals()
        self._apply_theme(self._theme.mode)
        self._render_state(self._poller.state)

    def _setup_ui(self):
        """Setup the main window UI with Fluent Design components."""
        self.setWindowTitle("Crypto Dashboard")
        self.resize(self._settings_manager.settings.window_width, self._settings_manager.settings.window_height)

        central = QWidget()
        central.setObjectName("centralWidget")
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.header = Header(self._theme)
        layout.addWidget(self.header)

        body = QVBoxLayout()
        body.setContentsMargins(24, 16, 24, 16)
        body.setSpacing(16)
        layout.addLayout(body, 1)

        # Title
        self.title_label = QLabel("Cryptocurrency Dashboard")
        self.subtitle_label = QLabel("Track real-time prices and market data for top cryptocurrencies")
        body.addWidget(self.title_label)
        body.addWidget(self.subtitle_label)

        # Search and view toggle
        controls = QHBoxLayout()
        self.search_bar = SearchBar()
        controls.addWidget(self.search_bar, 3)

        self.view_toggle = SegmentedWidget()
        self.view_toggle.addItem(
            ViewMode.LIST.value, "List", lambda: self._view_model.set_view_mode(ViewMode.LIST)
        )
        self.view_toggle.addItem(
            ViewMode.GRID.value, "Grid", lambda: self._view_model.set_view_mode(ViewMode.GRID)
        )
        self.view_toggle.setCurrentItem(self._view_model.state.view_mode.value)
        controls.addWidget(self.view_toggle, 1, Qt.AlignmentFlag.AlignRight)
        body.addLayout(controls)

        # Content: loading / error / data
        self.content_stack = QStackedWidget()
        body.addWidget(self.content_stack, 1)

        self.footer_label = QLabel(
            f"© {date.today().year} Crypto Dashboard - Data provided by CoinGecko API"
        )
        self.footer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        body.addWidget(self.footer_label)

        self.loading_page = QWidget()
        loading_layout = QVBoxLayout(self.loading_page)
        self.loading_ring = IndeterminateProgressRing()
        loading_layout.addWidget(self.loading_ring, 0, Qt.AlignmentFlag.AlignCenter)
        self.content_stack.addWidget(self.loading_page)

        self.error_alert = ErrorAlert()
        error_page = QWidget()
        error_layout = QVBoxLayout(error_page)
        error_layout.addWidget(self.error_alert, 0, Qt.AlignmentFlag.AlignCenter)
        self.content_stack.addWidget(error_page)
        self.error_page = error_page

        self.data_page = self._build_data_page()
        self.content_stack.addWidget(self.data_page)

    def _build_data_page(self) -> QScrollArea:
        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        content = QWidget()
        content.setObjectName("scrollContent")
        layout = QVBoxLayout(content)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(16)

        # Chart + highlights
        top_row = QHBoxLayout()
        top_row.setSpacing(16)
        self.price_chart = PriceChart()
        top_row.addWidget(self.price_chart, 2)

        self.highlights_layout = QVBoxLayout()
        self.highlights_layout.setSpacing(12)
        self.highlights_layout.addStretch()
        top_row.addLayout(self.highlights_layout, 1)
        layout.addLayout(top_row)

        self.list_title = QLabel("Top Cryptocurrencies")
        layout.addWidget(self.list_title)

        # List / grid / empty
        self.list_stack = QStackedWidget()

        self.coin_table = CoinTable()
        self.coin_table.setMinimumHeight(480)
        self.list_stack.addWidget(self.coin_table)

        self.grid_page = QWidget()
        self.grid_layout = QGridLayout(self.grid_page)
        self.grid_layout.setContentsMargins(0, 0, 0, 0)
        self.grid_layout.setSpacing(12)
        self.list_stack.addWidget(self.grid_page)

        self.empty_page = QWidget()
        self.empty_page.setObjectName("emptyState")
        self.empty_page.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)
        empty_layout = QVBoxLayout(self.empty_page)
        empty_layout.setContentsMargins(24, 48, 24, 48)
        self.empty_label = QLabel("")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(self.empty_label)
        self.clear_search_btn = PushButton("Clear Search")
        empty_layout.addWidget(self.clear_search_btn, 0, Qt.AlignmentFlag.AlignCenter)
        self.list_stack.addWidget(self.empty_page)

        layout.addWidget(self.list_stack)
        layout.addStretch()

        scroll_area.setWidget(content)
        return scroll_area

    def _connect_signals(self):
        """Connect signals to slots."""
        self.header.refresh_clicked.connect(self._poller.refetch)
        self.error_alert.retry_clicked.connect(self._poller.refetch)
        self._theme.theme_changed.connect(self._apply_theme)

        # Poller -> view model / content
        self._poller.coins_updated.connect(self._view_model.set_coins)
        self._poller.state_changed.connect(self._render_state)

        # User input -> view model
        self.search_bar.search_changed.connect(self._view_model.set_search_term)
        self.clear_search_btn.clicked.connect(self._clear_search)
        self.coin_table.sort_requested.connect(self._view_model.request_sort)
        self.coin_table.coin_selected.connect(self._view_model.select_coin)
        self.coin_table.details_requested.connect(self._show_details)
        self.price_chart.coin_selected.connect(self._view_model.select_coin)

        # View model -> widgets
        self._view_model.view_changed.connect(self._on_view_changed)
        self._view_model.sort_changed.connect(self.coin_table.show_sort)
        self._view_model.selection_changed.connect(self.price_chart.set_selected)
        self._view_model.view_mode_changed.connect(self._on_view_mode_changed)

    def start(self):
        """Begin polling market data."""
        self._poller.start()

    def _render_state(self, state: PollState):
        """Pick the content page for the current poll state."""
        if state.error:
            self.error_alert.set_message(state.error)
            self.content_stack.setCurrentWidget(self.error_page)
        elif state.loading and not state.coins:
            self.content_stack.setCurrentWidget(self.loading_page)
        else:
            self.content_stack.setCurrentWidget(self.data_page)

    def _on_view_changed(self, coins: list[Coin]):
        state = self._view_model.state
        self.price_chart.set_coins(coins, state.selected_coin_id)
        self._update_highlights(coins[: self.HIGHLIGHT_COUNT])

        if not coins:
            self.empty_label.setText(f'No cryptocurrencies found matching "{state.search_term}"')
            self.list_stack.setCurrentWidget(self.empty_page)
            return

        if state.view_mode is ViewMode.LIST:
            self.coin_table.set_coins(coins)
            self.list_stack.setCurrentWidget(self.coin_table)
        else:
            self._update_grid(coins)
            self.list_stack.setCurrentWidget(self.grid_page)

    def _clear_search(self):
        self.search_bar.set_term("")
        self._view_model.clear_search()

    def _on_view_mode_changed(self, mode: str):
        self._settings_manager.update_view_mode(mode)
        self.view_toggle.setCurrentItem(mode)
        self._on_view_changed(self._view_model.derived)

    def _update_highlights(self, coins: list[Coin]):
        """Show the first coins as clickable cards, keeping cards whose coin did not change."""
        kept, stale = reuse_cards(self._highlight_cards, coins)
        self._discard_cards(self.highlights_layout, stale)
        for card in kept.values():
            self.highlights_layout.removeWidget(card)

        self._highlight_cards = {}
        for index, coin in enumerate(coins):
            card = kept.get(coin.id)
            if card is None:
                card = self._create_card(coin, on_select=self._view_model.select_coin)
            self.highlights_layout.insertWidget(index, card)
            self._highlight_cards[coin.id] = card

    def _update_grid(self, coins: list[Coin]):
        """Lay out cards for the derived list, reusing cards whose coin did not change."""
        kept, stale = reuse_cards(self._grid_cards, coins)
        self._discard_cards(self.grid_layout, stale)
        for card in kept.values():
            self.grid_layout.removeWidget(card)

        self._grid_cards = {}
        for index, coin in enumerate(coins):
            card = kept.get(coin.id)
            if card is None:
                card = self._create_card(coin)
            row, column = divmod(index, self.GRID_COLUMNS)
            self.grid_layout.addWidget(card, row, column)
            self._grid_cards[coin.id] = card

    def _create_card(self, coin: Coin, on_select=None) -> CoinCard:
        card = CoinCard(
            coin,
            self._theme.mode,
            on_select=on_select,
            network_manager=self._network_manager,
        )
        card.double_clicked.connect(self._show_details)
        return card

    @staticmethod
    def _discard_cards(layout, cards):
        for card in cards:
            layout.removeWidget(card)
            card.deleteLater()

    def _show_details(self, coin_id: str):
        coin = next((c for c in self._view_model.derived if c.id == coin_id), None)
        if coin is None:
            logger.debug(f"Details requested for unknown coin {coin_id}")
            return

        dialog = CoinDetailsDialog(coin, self)
        dialog.exec()

    def _apply_theme(self, mode: str):
        """Restyle every widget that does not follow the Fluent theme on its own."""
        colors = get_theme_colors(mode)
        self.setStyleSheet(get_stylesheet("main_window", mode))
        self.empty_page.setStyleSheet(get_stylesheet("empty_state", mode))
        self.error_alert.set_theme_mode(mode)
        self.title_label.setStyleSheet(f"font-size: 28px; font-weight: 700; color: {colors['text']};")
        self.subtitle_label.setStyleSheet(f"font-size: 14px; color: {colors['text_secondary']};")
        self.list_title.setStyleSheet(f"font-size: 20px; font-weight: 600; color: {colors['text']};")
        self.footer_label.setStyleSheet(f"font-size: 12px; color: {colors['text_secondary']};")

        self.coin_table.set_theme_mode(mode)
        self.price_chart.set_theme_mode(mode)

        # Cards bake their colors in; rebuild them
        self._discard_cards(self.grid_layout, self._grid_cards.values())
        self._discard_cards(self.highlights_layout, self._highlight_cards.values())
        self._grid_cards = {}
        self._highlight_cards = {}
        self._on_view_changed(self._view_model.derived)

    def closeEvent(self, event: QCloseEvent):
        """Stop polling and remember the window size."""
        self._poller.stop()

        settings = self._settings_manager.settings
        settings.window_width = self.width()
        settings.window_height = self.height()
        self._settings_manager.save()

        super().closeEvent(event)
