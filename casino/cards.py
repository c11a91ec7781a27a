"""Card and Deck classes - immutable cards, draw-without-replacement decks."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from casino.errors import DeckExhausted
from casino.rng import FloatSource, next_int


class Suit(Enum):
    """Card suits in canonical deck order."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def code(self) -> str:
        """Return the single-letter suit code."""
        return self.value


class Rank(Enum):
    """Card ranks. Ace is rank 1."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }.get(self, str(self.value))

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def code(self) -> str:
        """Return the audit-log encoding, e.g. 'AS' or '10H'."""
        return f"{self.rank}{self.suit.code}"

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', '10h'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {str(rank): rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {suit.code: suit for suit in Suit}
        suit_map.update({str(suit): suit for suit in Suit})

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class Deck:
    """
    One or more concatenated 52-card sets, drawn without replacement.

    Drawing picks a uniformly random position from the stream and
    swap-removes it, so no separate shuffle step exists. The order of the
    remaining cards carries no meaning.
    """

    def __init__(self, copies: int = 1) -> None:
        """
        Initialize a deck in canonical order.

        Args:
            copies: Number of 52-card sets (6 for a blackjack shoe, 8 for baccarat)
        """
        if copies < 1:
            raise ValueError("Deck must have at least 1 copy")
        self._copies = copies
        self._cards: list[Card] = [
            Card(rank, suit)
            for _ in range(copies)
            for suit in Suit
            for rank in Rank
        ]

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Deck":
        """Build a deck holding exactly the given cards."""
        deck = cls.__new__(cls)
        deck._cards = list(cards)
        deck._copies = max(1, -(-len(deck._cards) // 52))
        return deck

    def draw(self, stream: FloatSource) -> Card:
        """Remove and return the card at a stream-chosen position."""
        if not self._cards:
            raise DeckExhausted("Cannot draw from an empty deck")
        i = next_int(stream, len(self._cards))
        last = len(self._cards) - 1
        self._cards[i], self._cards[last] = self._cards[last], self._cards[i]
        return self._cards.pop()

    def draw_many(self, n: int, stream: FloatSource) -> list[Card]:
        """Draw n cards one at a time, in call order."""
        return [self.draw(stream) for _ in range(n)]

    @property
    def copies(self) -> int:
        """Return the number of 52-card sets the deck was built from."""
        return self._copies

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


def fresh_deck(copies: int = 1) -> Deck:
    """Build `copies` concatenated decks, suit-major and rank-minor."""
    return Deck(copies)


def draw_one(deck: Deck, stream: FloatSource) -> Card:
    """Draw a single card from the deck."""
    return deck.draw(stream)


def draw_many(deck: Deck, n: int, stream: FloatSource) -> list[Card]:
    """Draw n cards sequentially; card 1 is dealt before card 2."""
    return deck.draw_many(n, stream)
