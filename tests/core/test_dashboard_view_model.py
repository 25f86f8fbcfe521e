from unittest.mock import MagicMock

import pytest

from core.dashboard_view_model import DashboardViewModel
from core.models import SortDirection, SortKey, ViewMode


class TestDashboardViewModel:
    @pytest.fixture
    def coins(self, make_coin):
        return [
            make_coin("bitcoin", "Bitcoin", "btc", market_cap_rank=1, current_price=50000.0),
            make_coin("ethereum", "Ethereum", "eth", market_cap_rank=2, current_price=3000.0),
            make_coin("solana", "Solana", "sol", market_cap_rank=5, current_price=150.0),
        ]

    @pytest.fixture
    def view_model(self, qapp, coins):
        vm = DashboardViewModel()
        vm.set_coins(coins)
        return vm

    def test_defaults(self, qapp):
        vm = DashboardViewModel()

        assert vm.state.search_term == ""
        assert vm.state.sort_key is SortKey.RANK
        assert vm.state.sort_direction is SortDirection.ASC
        assert vm.state.selected_coin_id == "bitcoin"
        assert vm.state.view_mode is ViewMode.LIST
        assert vm.derived == []

    def test_set_coins_derives_rank_order(self, view_model):
        assert [c.id for c in view_model.derived] == ["bitcoin", "ethereum", "solana"]
        assert view_model.selected_coin.id == "bitcoin"

    def test_search_emits_filtered_view(self, view_model):
        received = MagicMock()
        view_model.view_changed.connect(received)

        view_model.set_search_term("SOL")

        received.assert_called_once()
        assert [c.id for c in received.call_args.args[0]] == ["solana"]

    def test_search_moves_selection_to_first_match(self, view_model):
        selections = MagicMock()
        view_model.selection_changed.connect(selections)

        view_model.set_search_term("eth")

        assert view_model.state.selected_coin_id == "ethereum"
        selections.assert_called_once_with("ethereum")

    def test_search_with_no_match_keeps_selection(self, view_model):
        selections = MagicMock()
        view_model.selection_changed.connect(selections)

        view_model.set_search_term("dogecoin")

        assert view_model.derived == []
        assert view_model.state.selected_coin_id == "bitcoin"
        assert view_model.selected_coin is None
        selections.assert_not_called()

    def test_selection_kept_when_still_visible(self, view_model):
        view_model.select_coin("solana")
        view_model.set_search_term("s")

        assert view_model.state.selected_coin_id == "solana"

    def test_clear_search_restores_full_list(self, view_model):
        view_model.set_search_term("eth")
        view_model.clear_search()

        assert len(view_model.derived) == 3

    def test_same_search_term_does_not_rederive(self, view_model):
        received = MagicMock()
        view_model.view_changed.connect(received)

        view_model.set_search_term("")

        received.assert_not_called()

    def test_sort_clicks_toggle_then_reset(self, view_model):
        sorts = MagicMock()
        view_model.sort_changed.connect(sorts)

        view_model.request_sort(SortKey.PRICE)
        assert view_model.state.sort_direction is SortDirection.ASC
        assert [c.id for c in view_model.derived] == ["solana", "ethereum", "bitcoin"]

        view_model.request_sort(SortKey.PRICE)
        assert view_model.state.sort_direction is SortDirection.DESC
        assert [c.id for c in view_model.derived] == ["bitcoin", "ethereum", "solana"]

        view_model.request_sort(SortKey.PRICE)
        assert view_model.state.sort_direction is SortDirection.ASC

        view_model.request_sort(SortKey.MARKET_CAP)
        assert view_model.state.sort_key is SortKey.MARKET_CAP
        assert view_model.state.sort_direction is SortDirection.ASC

        assert sorts.call_count == 4
        sorts.assert_called_with(SortKey.MARKET_CAP, SortDirection.ASC)

    def test_sort_keeps_selection(self, view_model):
        view_model.select_coin("ethereum")
        view_model.request_sort(SortKey.PRICE)

        assert view_model.state.selected_coin_id == "ethereum"

    def test_new_snapshot_without_selected_coin(self, view_model, make_coin):
        view_model.select_coin("solana")
        view_model.set_coins([make_coin("bitcoin", market_cap_rank=1)])

        assert view_model.state.selected_coin_id == "bitcoin"

    def test_select_coin_emits_once(self, view_model):
        selections = MagicMock()
        view_model.selection_changed.connect(selections)

        view_model.select_coin("ethereum")
        view_model.select_coin("ethereum")

        selections.assert_called_once_with("ethereum")

    def test_view_mode_toggle(self, view_model):
        modes = MagicMock()
        view_model.view_mode_changed.connect(modes)

        view_model.set_view_mode("grid")
        view_model.set_view_mode(ViewMode.GRID)

        assert view_model.state.view_mode is ViewMode.GRID
        modes.assert_called_once_with("grid")

    def test_initial_view_mode_from_settings(self, qapp):
        assert DashboardViewModel("grid").state.view_mode is ViewMode.GRID
