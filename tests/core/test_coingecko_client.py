from unittest.mock import MagicMock, patch

import pytest
import requests

from config.settings import ApiConfig, ProxyConfig
from core.coingecko_client import CoinGeckoClient, MarketDataError


@pytest.fixture
def mock_get():
    with patch("core.coingecko_client.requests.get") as get:
        yield get


def make_response(payload=None, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestCoinGeckoClient:
    def test_requests_markets_endpoint(self, mock_get, coin_payload):
        mock_get.return_value = make_response(coin_payload)
        client = CoinGeckoClient()

        client.fetch_markets()

        mock_get.assert_called_once_with(
            "https://api.coingecko.com/api/v3/coins/markets",
            params={
                "vs_currency": "usd",
                "order": "market_cap_desc",
                "per_page": 100,
                "page": 1,
                "sparkline": "false",
                "price_change_percentage": "24h",
            },
            headers={"Accept": "application/json"},
            proxies=None,
            timeout=10.0,
        )

    def test_custom_api_config(self, mock_get):
        mock_get.return_value = make_response([])
        client = CoinGeckoClient(
            api=ApiConfig(base_url="http://localhost:8000/", vs_currency="eur", per_page=10),
        )

        client.fetch_markets()

        args, kwargs = mock_get.call_args
        assert args[0] == "http://localhost:8000/coins/markets"
        assert kwargs["params"]["vs_currency"] == "eur"
        assert kwargs["params"]["per_page"] == 10

    def test_parses_coins_in_response_order(self, mock_get, coin_payload):
        mock_get.return_value = make_response(coin_payload)

        coins = CoinGeckoClient().fetch_markets()

        assert [c.id for c in coins] == ["bitcoin", "ethereum"]
        assert coins[1].price_change_percentage_24h == -1.2

    def test_each_fetch_issues_its_own_request(self, mock_get):
        mock_get.side_effect = [make_response([]), make_response([])]
        client = CoinGeckoClient()

        client.fetch_markets()
        client.fetch_markets()

        assert mock_get.call_count == 2

    def test_http_error(self, mock_get):
        mock_get.return_value = make_response(status_code=429)

        with pytest.raises(MarketDataError, match="HTTP Error: 429"):
            CoinGeckoClient().fetch_markets()

    def test_transport_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(MarketDataError, match="Request failed"):
            CoinGeckoClient().fetch_markets()

    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(MarketDataError) as exc_info:
            CoinGeckoClient().fetch_markets()

        assert isinstance(exc_info.value.__cause__, requests.Timeout)

    def test_invalid_json(self, mock_get):
        mock_get.return_value = make_response(json_error=ValueError("Expecting value"))

        with pytest.raises(MarketDataError, match="Invalid JSON body"):
            CoinGeckoClient().fetch_markets()

    @pytest.mark.parametrize(
        "payload",
        [
            {"status": {"error_code": 429}},
            [{"id": "bitcoin"}],
            ["bitcoin"],
        ],
    )
    def test_malformed_body(self, mock_get, payload):
        mock_get.return_value = make_response(payload)

        with pytest.raises(MarketDataError, match="Malformed markets body"):
            CoinGeckoClient().fetch_markets()

    def test_empty_list_is_valid(self, mock_get):
        mock_get.return_value = make_response([])

        assert CoinGeckoClient().fetch_markets() == []

    def test_proxy_passed_to_request(self, mock_get):
        mock_get.return_value = make_response([])
        client = CoinGeckoClient(proxy=ProxyConfig(enabled=True, host="127.0.0.1", port=7890))

        client.fetch_markets()

        assert mock_get.call_args.kwargs["proxies"] == {
            "http": "http://127.0.0.1:7890",
            "https": "http://127.0.0.1:7890",
        }

    def test_disabled_proxy_clears_proxies(self):
        client = CoinGeckoClient(proxy=ProxyConfig(enabled=True))

        client.configure_proxy(ProxyConfig(enabled=False))

        assert client.proxies == {}
