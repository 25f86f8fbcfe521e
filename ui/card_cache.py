"""
Reuse of coin cards across view updates.
"""

from typing import Dict, List, Protocol, Sequence, Tuple

from core.models import Coin


class HasCoin(Protocol):
    coin: Coin


def reuse_cards(
    cards: Dict[str, HasCoin], coins: Sequence[Coin]
) -> Tuple[Dict[str, HasCoin], List[HasCoin]]:
    """
    Split cached cards into the ones still showing an unchanged coin and the stale rest.

    Returns ``(kept, stale)``: ``kept`` maps coin id to a card whose coin equals
    the new snapshot; every other cached card is in ``stale`` and should be deleted.
    """
    kept = {}
    for coin in coins:
        card = cards.get(coin.id)
        if card is not None and card.coin == coin:
            kept[coin.id] = card

    stale = [card for coin_id, card in cards.items() if kept.get(coin_id) is not card]
    return kept, stale
