"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from casino.cards import Card


def blackjack_value(card: Card) -> int:
    """Return the hard point value of a card (Ace = 1, tens and faces = 10)."""
    return min(card.rank.value, 10)


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def hard_total(self) -> int:
        """Return the total with every Ace counted as 1."""
        return sum(blackjack_value(card) for card in self.cards)

    @property
    def has_ace(self) -> bool:
        """Check if the hand holds at least one Ace."""
        return any(card.is_ace for card in self.cards)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Aces are promoted from 1 to 11 one at a time while the total stays
        at or below 21.
        """
        total = self.hard_total
        aces = sum(1 for card in self.cards if card.is_ace)

        while aces > 0 and total + 10 <= 21:
            total += 10
            aces -= 1

        return total

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an ace counted as 11)."""
        return self.has_ace and self.hard_total + 10 <= 21

    @property
    def is_soft_17(self) -> bool:
        """Check for a 17 reached only by counting an Ace as 11."""
        return self.has_ace and self.hard_total + 10 == 17

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def codes(self) -> list[str]:
        """Return the audit codes of the cards in order."""
        return [card.code for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def dealer_should_hit(hand: Hand) -> bool:
    """Dealer draws below 17 and on soft 17."""
    value = hand.value
    if value < 17:
        return True
    return value == 17 and hand.is_soft_17


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands after both have finished drawing.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    # Player busts always loses
    if player_hand.is_busted:
        return -1

    # Dealer busts, player wins
    if dealer_hand.is_busted:
        return 1

    if player_hand.value > dealer_hand.value:
        return 1
    if dealer_hand.value > player_hand.value:
        return -1
    return 0  # Push
