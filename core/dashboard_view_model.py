import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from core.models import Coin, SortDirection, SortKey, ViewMode
from core.view_derivation import (
    DEFAULT_SELECTED_COIN,
    correct_selection,
    derive_view,
    next_sort,
)

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    search_term: str = ""
    sort_key: SortKey = SortKey.RANK
    sort_direction: SortDirection = SortDirection.ASC
    selected_coin_id: Optional[str] = DEFAULT_SELECTED_COIN
    view_mode: ViewMode = ViewMode.LIST


class DashboardViewModel(QObject):
    """
    Presentation state for the dashboard.
    Holds the latest coin snapshot and re-derives the visible list on every input change.
    """

    view_changed = pyqtSignal(list)  # derived list[Coin]
    sort_changed = pyqtSignal(object, object)  # SortKey, SortDirection
    selection_changed = pyqtSignal(str)
    view_mode_changed = pyqtSignal(str)

    def __init__(self, view_mode: ViewMode | str = ViewMode.LIST, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._state = ViewState(view_mode=ViewMode(view_mode))
        self._coins: list[Coin] = []
        self._derived: list[Coin] = []

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def derived(self) -> list[Coin]:
        return list(self._derived)

    @property
    def selected_coin(self) -> Optional[Coin]:
        for coin in self._derived:
            if coin.id == self._state.selected_coin_id:
                return coin
        return None

    def set_coins(self, coins: Sequence[Coin]):
        self._coins = list(coins)
        self._rederive()

    def set_search_term(self, term: str):
        if term == self._state.search_term:
            return
        self._state.search_term = term
        self._rederive()

    def clear_search(self):
        self.set_search_term("")

    def request_sort(self, key: SortKey | str):
        """Handle a click on a sortable column header."""
        key, direction = next_sort(self._state.sort_key, self._state.sort_direction, key)
        self._state.sort_key = key
        self._state.sort_direction = direction
        logger.debug(f"Sorting by {key.value} {direction.value}")

        self.sort_changed.emit(key, direction)
        self._rederive()

    def select_coin(self, coin_id: str):
        if coin_id == self._state.selected_coin_id:
            return
        self._state.selected_coin_id = coin_id
        self.selection_changed.emit(coin_id)

    def set_view_mode(self, mode: ViewMode | str):
        mode = ViewMode(mode)
        if mode is self._state.view_mode:
            return
        self._state.view_mode = mode
        self.view_mode_changed.emit(mode.value)

    def _rederive(self):
        state = self._state
        self._derived = derive_view(
            self._coins, state.search_term, state.sort_key, state.sort_direction
        )

        corrected = correct_selection(self._derived, state.selected_coin_id)
        selection_moved = corrected != state.selected_coin_id
        state.selected_coin_id = corrected

        self.view_changed.emit(list(self._derived))
        if selection_moved:
            self.selection_changed.emit(corrected)
