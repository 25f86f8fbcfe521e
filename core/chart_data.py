"""
Synthetic 24h price series for the chart.

The markets endpoint carries no history, so the series is shaped from the
coin's 24h change: it starts near the price 24 hours ago, trends toward the
current price and adds noise proportional to the size of the move.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from core.models import Coin

HOURS = 24


@dataclass(frozen=True)
class PricePoint:
    time: datetime
    price: float

    @property
    def label(self) -> str:
        return self.time.strftime("%H:%M")


def generate_price_series(
    coin: Coin,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> list[PricePoint]:
    """Return HOURS + 1 hourly points ending at ``now``, oldest first."""
    if not coin.current_price:
        return []

    now = now or datetime.now()
    rng = rng or random.Random()

    base_price = coin.current_price
    price_change = coin.price_change_24h or 0.0
    direction = 1 if price_change >= 0 else -1
    volatility = abs(price_change) / base_price * 0.5

    points = []
    for hours_ago in range(HOURS, -1, -1):
        noise = (rng.random() - 0.5) * volatility * base_price
        trend = direction * (1 - hours_ago / HOURS) * abs(price_change)
        price = base_price - price_change + trend + noise
        points.append(PricePoint(time=now - timedelta(hours=hours_ago), price=price))

    return points
