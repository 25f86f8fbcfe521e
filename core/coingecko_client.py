"""
CoinGecko REST client for the markets listing.
"""

import logging
from typing import Dict, Optional

import requests

from config.settings import ApiConfig, ProxyConfig
from core.models import Coin, MalformedCoinError, parse_coins

logger = logging.getLogger(__name__)


class MarketDataError(Exception):
    """Any failure to obtain a usable markets listing."""


class CoinGeckoClient:
    """
    Fetches the top coins by market cap from the CoinGecko markets endpoint.

    Every call issues its own ``requests.get``, so overlapping polls on
    different worker threads share no connection state.
    """

    MARKETS_PATH = "/coins/markets"
    HEADERS = {"Accept": "application/json"}

    def __init__(self, api: Optional[ApiConfig] = None, proxy: Optional[ProxyConfig] = None):
        self._api = api or ApiConfig()
        self._proxies: Dict[str, str] = {}
        self.configure_proxy(proxy)

    @property
    def markets_url(self) -> str:
        return self._api.base_url.rstrip("/") + self.MARKETS_PATH

    @property
    def proxies(self) -> Dict[str, str]:
        return dict(self._proxies)

    def configure_proxy(self, proxy: Optional[ProxyConfig]):
        proxy_url = proxy.get_proxy_url() if proxy else None
        if proxy_url:
            logger.debug(f"Configuring proxy for CoinGeckoClient: {proxy_url}")
            self._proxies = {"http": proxy_url, "https": proxy_url}
        else:
            self._proxies = {}

    def market_params(self) -> dict:
        return {
            "vs_currency": self._api.vs_currency,
            "order": "market_cap_desc",
            "per_page": self._api.per_page,
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }

    def fetch_markets(self) -> list[Coin]:
        """
        Fetch one page of coins ordered by descending market cap (Synchronous/Blocking).

        Raises:
            MarketDataError: on transport errors, non-2xx responses or a body
                that is not a list of coin objects.
        """
        logger.debug(f"Fetching markets from {self.markets_url}")

        try:
            resp = requests.get(
                self.markets_url,
                params=self.market_params(),
                headers=self.HEADERS,
                proxies=self._proxies or None,
                timeout=self._api.timeout,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise MarketDataError(f"HTTP Error: {resp.status_code}") from e
        except requests.RequestException as e:
            raise MarketDataError(f"Request failed: {e}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError
            raise MarketDataError(f"Invalid JSON body: {e}") from e

        try:
            coins = parse_coins(payload)
        except MalformedCoinError as e:
            raise MarketDataError(f"Malformed markets body: {e}") from e

        logger.debug(f"Fetched {len(coins)} coins")
        return coins
