"""
Standard data models for the application.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional


class MalformedCoinError(ValueError):
    """Raised when a market payload entry is not a coin record."""


@dataclass(frozen=True)
class Coin:
    """One market snapshot of a tradable asset."""

    id: str
    symbol: str
    name: str
    image: str = ""
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    market_cap_rank: Optional[int] = None
    price_change_percentage_24h: Optional[float] = None
    price_change_24h: Optional[float] = None
    total_volume: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    ath: Optional[float] = None
    ath_date: str = ""
    last_updated: str = ""
    circulating_supply: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Coin":
        """
        Build a coin from one CoinGecko markets entry.

        Only the basic shape is checked: the entry must be an object with
        string id, symbol and name. Unknown keys are ignored.
        """
        if not isinstance(data, dict):
            raise MalformedCoinError(f"Expected an object, got {type(data).__name__}")

        for key in ("id", "symbol", "name"):
            if not isinstance(data.get(key), str):
                raise MalformedCoinError(f"Coin entry is missing '{key}'")

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}

        # Upstream sends null for unknown text fields
        for key in ("image", "ath_date", "last_updated"):
            if values.get(key) is None:
                values[key] = ""

        return cls(**values)


def parse_coins(payload: Any) -> list[Coin]:
    """Parse a markets response body into coins, preserving order."""
    if not isinstance(payload, list):
        raise MalformedCoinError(f"Expected a list of coins, got {type(payload).__name__}")
    return [Coin.from_dict(item) for item in payload]


class SortKey(str, Enum):
    """Sortable columns, valued by the coin field they compare."""

    RANK = "market_cap_rank"
    PRICE = "current_price"
    CHANGE_24H = "price_change_percentage_24h"
    MARKET_CAP = "market_cap"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ViewMode(str, Enum):
    LIST = "list"
    GRID = "grid"
