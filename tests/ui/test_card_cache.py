from dataclasses import replace
from types import SimpleNamespace

from ui.card_cache import reuse_cards


def make_cards(coins):
    return {coin.id: SimpleNamespace(coin=coin) for coin in coins}


def test_unchanged_coins_keep_their_cards(make_coin):
    coins = [make_coin("bitcoin", current_price=1.0), make_coin("ethereum", current_price=2.0)]
    cards = make_cards(coins)

    kept, stale = reuse_cards(cards, coins)

    assert kept == cards
    assert kept["bitcoin"] is cards["bitcoin"]
    assert stale == []


def test_changed_coin_gets_a_new_card(make_coin):
    bitcoin = make_coin("bitcoin", current_price=1.0)
    cards = make_cards([bitcoin])

    kept, stale = reuse_cards(cards, [replace(bitcoin, current_price=2.0)])

    assert kept == {}
    assert stale == [cards["bitcoin"]]


def test_coins_no_longer_shown_are_stale(make_coin):
    bitcoin, ethereum = make_coin("bitcoin"), make_coin("ethereum")
    cards = make_cards([bitcoin, ethereum])

    kept, stale = reuse_cards(cards, [ethereum])

    assert list(kept) == ["ethereum"]
    assert stale == [cards["bitcoin"]]


def test_repeated_updates_with_same_snapshot_reuse_everything(make_coin):
    coins = [make_coin("bitcoin"), make_coin("ethereum"), make_coin("tether")]
    cards = make_cards(coins)

    for _ in range(3):
        cards, stale = reuse_cards(cards, coins)
        assert stale == []

    assert list(cards) == ["bitcoin", "ethereum", "tether"]


def test_new_coins_have_no_card(make_coin):
    kept, stale = reuse_cards({}, [make_coin("bitcoin")])

    assert kept == {}
    assert stale == []
