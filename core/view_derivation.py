"""
Derived coin views: search filtering, column sorting and selection bookkeeping.
All functions are pure and never mutate their inputs.
"""

from typing import Optional, Sequence

from core.models import Coin, SortDirection, SortKey

DEFAULT_SELECTED_COIN = "bitcoin"


def filter_coins(coins: Sequence[Coin], term: str) -> list[Coin]:
    """
    Keep coins whose name or symbol contains the search term, ignoring case.

    An empty term keeps every coin in input order. Whitespace in the term
    is matched literally.
    """
    needle = term.casefold()
    if not needle:
        return list(coins)

    return [
        coin for coin in coins
        if needle in coin.name.casefold() or needle in coin.symbol.casefold()
    ]


def sort_coins(
    coins: Sequence[Coin],
    key: SortKey | str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Coin]:
    """
    Return coins ordered by the given column.

    The sort is stable in both directions: descending order reverses the
    comparison, so coins with equal values keep their input order. Coins
    missing the value go last, in input order.
    """
    field = SortKey(key).value
    descending = SortDirection(direction) is SortDirection.DESC

    valued = [coin for coin in coins if getattr(coin, field) is not None]
    missing = [coin for coin in coins if getattr(coin, field) is None]

    # sorted(reverse=True) keeps equal elements in their original order
    ordered = sorted(valued, key=lambda coin: getattr(coin, field), reverse=descending)
    return ordered + missing


def derive_view(
    coins: Sequence[Coin],
    term: str,
    key: SortKey | str,
    direction: SortDirection | str,
) -> list[Coin]:
    """Filter by search term, then sort by the active column."""
    return sort_coins(filter_coins(coins, term), key, direction)


def next_sort(
    current_key: SortKey, current_direction: SortDirection, clicked: SortKey | str
) -> tuple[SortKey, SortDirection]:
    """
    Sort state after a column header click.

    Clicking the active column flips its direction; any other column
    becomes active in ascending order.
    """
    clicked = SortKey(clicked)
    if clicked is current_key:
        return current_key, current_direction.flipped()
    return clicked, SortDirection.ASC


def correct_selection(derived: Sequence[Coin], selected_id: Optional[str]) -> Optional[str]:
    """
    Keep the selection inside the derived view.

    A selection missing from a non-empty view moves to its first coin; an
    empty view leaves the selection unchanged.
    """
    if not derived:
        return selected_id
    if any(coin.id == selected_id for coin in derived):
        return selected_id
    return derived[0].id
