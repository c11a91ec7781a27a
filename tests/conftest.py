"""Pytest fixtures for casino engine tests."""

import pytest
from decimal import Decimal

from casino.cards import Card, Deck, Rank, Suit
from casino.hand import Hand
from casino.rng import make_stream, next_int
from casino.wallet import Wallet


class LastCardStream:
    """
    Stream stub that always selects the last card of a deck.

    Paired with `stacked_deck`, cards come out in the order they were listed.
    """

    def __init__(self) -> None:
        self.counter = 0
        self.nonce = "stacked"

    def next(self) -> float:
        self.counter += 1
        return 1 - 2**-48

    def next_int(self, max_exclusive: int) -> int:
        return next_int(self, max_exclusive)


def stacked_deck(*codes: str, filler: int = 10) -> Deck:
    """
    Build a deck that deals `codes` in order.

    `filler` extra cards sit underneath so a round never runs dry.
    """
    cards = [Card.from_string(code) for code in codes]
    padding = [Card(Rank.TWO, Suit.CLUBS)] * filler
    return Deck.from_cards(padding + list(reversed(cards)))


def make_hand(*codes: str) -> Hand:
    """Build a hand from card codes like 'AS', '10H'."""
    return Hand([Card.from_string(code) for code in codes])


@pytest.fixture
def stream():
    """Seeded randomness stream for reproducible tests."""
    return make_stream("test-seed", "test-0")


@pytest.fixture
def last_card_stream():
    """Stream stub for stacked decks."""
    return LastCardStream()


@pytest.fixture
def wallet():
    """A wallet holding 1000."""
    return Wallet(Decimal("1000"))


@pytest.fixture
def deck():
    """A single fresh deck."""
    return Deck(1)


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_17_hand():
    """A hard 17 hand (10-7)."""
    return make_hand("10S", "7H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


@pytest.fixture
def stack():
    """Factory for decks that deal the given card codes in order."""
    return stacked_deck


@pytest.fixture
def hand_of():
    """Factory for hands built from card codes."""
    return make_hand
