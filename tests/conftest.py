import pytest
from PyQt6.QtCore import QCoreApplication

from core.models import Coin


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def coin_payload():
    """Raw CoinGecko markets entries."""
    return [
        {
            "id": "bitcoin",
            "symbol": "btc",
            "name": "Bitcoin",
            "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
            "current_price": 50000,
            "market_cap": 980000000000,
            "market_cap_rank": 1,
            "price_change_percentage_24h": 2.5,
            "price_change_24h": 1219.5,
            "total_volume": 31000000000,
            "high_24h": 50500,
            "low_24h": 48600,
            "ath": 73738,
            "ath_date": "2024-03-14T07:10:36.635Z",
            "last_updated": "2024-05-01T12:00:00.000Z",
            "circulating_supply": 19690000,
            "fully_diluted_valuation": 1050000000000,
        },
        {
            "id": "ethereum",
            "symbol": "eth",
            "name": "Ethereum",
            "image": "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
            "current_price": 3000,
            "market_cap": 360000000000,
            "market_cap_rank": 2,
            "price_change_percentage_24h": -1.2,
            "price_change_24h": -36.4,
            "total_volume": 15000000000,
            "high_24h": 3080,
            "low_24h": 2950,
            "ath": 4878,
            "ath_date": "2021-11-10T14:24:19.604Z",
            "last_updated": "2024-05-01T12:00:00.000Z",
            "circulating_supply": 120100000,
        },
    ]


@pytest.fixture
def make_coin():
    """Factory for coins with only the fields a test cares about."""

    def _make(coin_id, name=None, symbol=None, **fields):
        return Coin(
            id=coin_id,
            name=name or coin_id.title(),
            symbol=symbol or coin_id[:3],
            **fields,
        )

    return _make
