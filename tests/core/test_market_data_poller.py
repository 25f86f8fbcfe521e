from unittest.mock import MagicMock

import pytest

from core.coingecko_client import CoinGeckoClient, MarketDataError
from core.market_data_poller import FETCH_ERROR_MESSAGE, MarketDataPoller, PollState
from core.models import parse_coins


class PendingDispatch:
    """Holds worker bodies until the test decides to complete them."""

    def __init__(self):
        self.pending = []

    def __call__(self, task):
        self.pending.append(task)

    def complete(self, index):
        self.pending.pop(index)()


@pytest.fixture
def client():
    return MagicMock(spec=CoinGeckoClient)


@pytest.fixture
def coins(coin_payload):
    return parse_coins(coin_payload)


def make_poller(client, dispatch=None):
    return MarketDataPoller(client, interval_seconds=60, dispatch=dispatch or (lambda fn: fn()))


class TestPollerFetch:
    def test_initial_state(self, qapp, client):
        poller = make_poller(client)

        assert poller.state == PollState()
        assert poller.coins == []
        assert poller.loading is False
        assert poller.error is None

    def test_successful_fetch_replaces_coins(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        poller = make_poller(client)
        updates = MagicMock()
        poller.coins_updated.connect(updates)

        poller.fetch()

        assert poller.coins == coins
        assert poller.loading is False
        assert poller.error is None
        updates.assert_called_once_with(coins)

    def test_failure_keeps_previous_coins(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        poller = make_poller(client)
        poller.fetch()

        client.fetch_markets.side_effect = MarketDataError("HTTP Error: 429")
        errors = MagicMock()
        poller.error_changed.connect(errors)
        poller.fetch()

        assert poller.coins == coins
        assert poller.loading is False
        assert poller.error == FETCH_ERROR_MESSAGE
        errors.assert_called_with(FETCH_ERROR_MESSAGE)

    def test_unexpected_exception_becomes_error(self, qapp, client):
        client.fetch_markets.side_effect = KeyError("boom")
        poller = make_poller(client)

        poller.fetch()

        assert poller.error == FETCH_ERROR_MESSAGE
        assert poller.coins == []

    def test_next_fetch_clears_error(self, qapp, client, coins):
        client.fetch_markets.side_effect = MarketDataError("down")
        poller = make_poller(client)
        poller.fetch()
        assert poller.error == FETCH_ERROR_MESSAGE

        client.fetch_markets.side_effect = None
        client.fetch_markets.return_value = coins
        poller.fetch()

        assert poller.error is None
        assert poller.coins == coins

    def test_loading_true_while_request_in_flight(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        dispatch = PendingDispatch()
        poller = make_poller(client, dispatch)
        loading = MagicMock()
        poller.loading_changed.connect(loading)

        poller.fetch()
        assert poller.loading is True

        dispatch.complete(0)
        assert poller.loading is False
        assert [call.args[0] for call in loading.call_args_list] == [True, False]

    def test_empty_list_is_a_valid_snapshot(self, qapp, client):
        client.fetch_markets.return_value = []
        poller = make_poller(client)

        poller.fetch()

        assert poller.coins == []
        assert poller.error is None


class TestPollerOrdering:
    def test_late_response_from_older_request_cannot_overwrite(self, qapp, client, make_coin):
        first_result = [make_coin("first")]
        second_result = [make_coin("second")]
        dispatch = PendingDispatch()
        poller = make_poller(client, dispatch)

        poller.fetch()
        poller.fetch()

        client.fetch_markets.return_value = second_result
        dispatch.complete(1)
        client.fetch_markets.return_value = first_result
        dispatch.complete(0)

        assert [c.id for c in poller.coins] == ["second"]

    def test_older_failure_does_not_set_error(self, qapp, client, coins):
        dispatch = PendingDispatch()
        poller = make_poller(client, dispatch)

        poller.fetch()
        poller.fetch()

        client.fetch_markets.return_value = coins
        dispatch.complete(1)
        client.fetch_markets.side_effect = MarketDataError("timeout")
        dispatch.complete(0)

        assert poller.error is None
        assert poller.coins == coins

    def test_refetch_while_loading_keeps_loading_until_latest(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        dispatch = PendingDispatch()
        poller = make_poller(client, dispatch)

        poller.fetch()
        poller.refetch()
        dispatch.complete(0)

        assert poller.loading is True
        assert poller.coins == []

        dispatch.complete(0)
        assert poller.loading is False
        assert poller.coins == coins


class TestPollerLifecycle:
    def test_start_fetches_immediately_and_arms_timer(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        poller = make_poller(client)

        poller.start()

        assert poller.is_running
        client.fetch_markets.assert_called_once()
        assert poller.coins == coins
        poller.stop()

    def test_start_twice_does_not_double_fetch(self, qapp, client):
        client.fetch_markets.return_value = []
        poller = make_poller(client)

        poller.start()
        poller.start()

        client.fetch_markets.assert_called_once()
        poller.stop()

    def test_timer_interval_in_milliseconds(self, qapp, client):
        poller = MarketDataPoller(client, interval_seconds=30, dispatch=lambda fn: None)

        assert poller._timer.interval() == 30000

    def test_stop_disarms_timer(self, qapp, client):
        client.fetch_markets.return_value = []
        poller = make_poller(client)
        poller.start()

        poller.stop()

        assert not poller.is_running

    def test_response_after_stop_is_dropped(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        dispatch = PendingDispatch()
        poller = make_poller(client, dispatch)
        updates = MagicMock()
        poller.state_changed.connect(updates)

        poller.start()
        updates.reset_mock()
        poller.stop()
        dispatch.complete(0)

        assert poller.coins == []
        updates.assert_not_called()

    def test_fetch_after_stop_is_ignored(self, qapp, client):
        poller = make_poller(client)
        poller.stop()

        poller.fetch()

        client.fetch_markets.assert_not_called()
        assert poller.loading is False

    def test_stop_is_idempotent(self, qapp, client):
        poller = make_poller(client)

        poller.stop()
        poller.stop()

        assert not poller.is_running

    def test_restart_after_stop(self, qapp, client, coins):
        client.fetch_markets.return_value = coins
        poller = make_poller(client)
        poller.start()
        poller.stop()

        poller.start()

        assert poller.is_running
        assert client.fetch_markets.call_count == 2
        poller.stop()
