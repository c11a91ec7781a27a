"""Jacks or Better (9/6) video poker engine."""

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, Sequence

from casino.cards import Card, Deck
from casino.errors import InvalidAction, InvalidSelection
from casino.fairness import game_nonce
from casino.game.base import RoundBase
from casino.game.events import EventEmitter, EventType
from casino.game.state import Result
from casino.money import VIDEO_POKER_LIMITS, validate_stake
from casino.rng import RandomnessStream, make_stream
from casino.wallet import WalletLike

HAND_SIZE = 5


class PokerHand(Enum):
    """Paytable rows, best first, as (label, multiple)."""

    ROYAL_FLUSH = ("Royal Flush", 250)
    STRAIGHT_FLUSH = ("Straight Flush", 50)
    FOUR_OF_A_KIND = ("Four of a Kind", 25)
    FULL_HOUSE = ("Full House", 9)
    FLUSH = ("Flush", 6)
    STRAIGHT = ("Straight", 4)
    THREE_OF_A_KIND = ("Three of a Kind", 3)
    TWO_PAIR = ("Two Pair", 2)
    JACKS_OR_BETTER = ("Jacks or Better", 1)
    NO_WIN = ("No Win", 0)

    def __init__(self, label: str, multiple: int) -> None:
        self.label = label
        self.multiple = multiple

    def __str__(self) -> str:
        return self.label


def poker_rank(card: Card) -> int:
    """Rank with Ace high (14)."""
    return 14 if card.is_ace else card.rank.value


def is_flush(cards: Sequence[Card]) -> bool:
    """All cards share one suit."""
    return len({card.suit for card in cards}) == 1


def is_straight(cards: Sequence[Card]) -> bool:
    """Five consecutive ranks, Ace either low or high, no wrap-around."""
    low = sorted(card.rank.value for card in cards)
    if len(set(low)) != len(cards):
        return False
    high = sorted(poker_rank(card) for card in cards)
    return low[-1] - low[0] == len(cards) - 1 or high[-1] - high[0] == len(cards) - 1


def is_royal(cards: Sequence[Card]) -> bool:
    """Flush holding exactly 10, J, Q, K, A."""
    return is_flush(cards) and {poker_rank(card) for card in cards} == {10, 11, 12, 13, 14}


def classify(cards: Sequence[Card]) -> PokerHand:
    """Return the best paytable row a five-card hand makes."""
    if len(cards) != HAND_SIZE:
        raise ValueError(f"A poker hand has {HAND_SIZE} cards, got {len(cards)}")

    flush = is_flush(cards)
    straight = is_straight(cards)

    if is_royal(cards):
        return PokerHand.ROYAL_FLUSH
    if flush and straight:
        return PokerHand.STRAIGHT_FLUSH

    counts = Counter(poker_rank(card) for card in cards)
    shape = sorted(counts.values(), reverse=True)

    if shape[0] == 4:
        return PokerHand.FOUR_OF_A_KIND
    if shape[:2] == [3, 2]:
        return PokerHand.FULL_HOUSE
    if flush:
        return PokerHand.FLUSH
    if straight:
        return PokerHand.STRAIGHT
    if shape[0] == 3:
        return PokerHand.THREE_OF_A_KIND
    if shape[:2] == [2, 2]:
        return PokerHand.TWO_PAIR
    if shape[0] == 2:
        pair_rank = next(rank for rank, count in counts.items() if count == 2)
        if pair_rank >= 11:
            return PokerHand.JACKS_OR_BETTER
    return PokerHand.NO_WIN


def payout_for(hand: PokerHand, stake: Decimal) -> Decimal:
    """Amount returned: stake × (multiple + 1) on a paying hand, else nothing."""
    if hand.multiple > 0:
        return stake * (hand.multiple + 1)
    return Decimal("0")


@dataclass(frozen=True)
class VideoPokerOutcome:
    """Dealt hand, holds, final hand and settlement."""

    dealt: tuple[Card, ...]
    held: tuple[int, ...]
    final: tuple[Card, ...]
    hand: PokerHand
    result: Result
    wagered: Decimal
    settlement: Decimal


class VideoPokerRound(RoundBase):
    """
    Deal five, hold any subset, draw replacements in place.

    `deal()` and `draw()` are separate so the hold decision can be made by
    whoever is driving the round.
    """

    game = "video_poker"

    def __init__(
        self,
        wallet: WalletLike,
        stake: Decimal,
        stream: RandomnessStream,
        deck: Deck | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        if deck is None:
            deck = Deck(1)
        super().__init__(wallet, stream, deck, events)
        self.stake = stake
        self.dealt: tuple[Card, ...] = ()
        self.outcome: VideoPokerOutcome | None = None

    @classmethod
    def open(
        cls,
        wallet: WalletLike,
        seed: str | bytes,
        nonce: int | str,
        stake: Decimal | int | str,
        table_min: Decimal | int = VIDEO_POKER_LIMITS.min_bet,
        table_max: Decimal | int = VIDEO_POKER_LIMITS.max_bet,
        events: EventEmitter | None = None,
    ) -> "VideoPokerRound":
        """Validate the stake, then debit and deal a new round."""
        amount = validate_stake(stake, table_min, table_max, wallet.balance)
        stream = make_stream(seed, game_nonce(cls.game, nonce))
        round_ = cls(wallet, amount, stream, events=events)
        round_.deal()
        return round_

    @property
    def awaiting_holds(self) -> bool:
        """True between the deal and the draw."""
        return bool(self.dealt) and self.outcome is None

    @property
    def awaiting_decision(self) -> bool:
        return self.awaiting_holds

    def deal(self) -> tuple[Card, ...]:
        """Debit the stake and deal five cards."""
        if self.dealt:
            raise InvalidAction("Cards were already dealt")
        self._debit(self.stake)
        self._start_event()
        self.dealt = tuple(self._draw("hand", position=i) for i in range(HAND_SIZE))
        return self.dealt

    def draw(self, holds: Iterable[int]) -> VideoPokerOutcome:
        """
        Replace every position not held, keeping held cards in place.

        Args:
            holds: Zero-based positions to keep

        Raises:
            InvalidSelection: If a position is outside 0-4
        """
        if not self.awaiting_holds:
            raise InvalidAction("Deal before drawing")

        holds = list(holds)
        invalid = [
            p for p in holds
            if isinstance(p, bool) or not isinstance(p, int) or not 0 <= p < HAND_SIZE
        ]
        if invalid:
            raise InvalidSelection(f"Hold positions must be 0-{HAND_SIZE - 1}, got {invalid}")
        held = frozenset(holds)

        self.events.emit_new(EventType.CARDS_HELD, positions=sorted(held))
        final = tuple(
            card if i in held else self._draw("hand", position=i)
            for i, card in enumerate(self.dealt)
        )

        hand = classify(final)
        settlement = payout_for(hand, self.stake)
        self._credit(settlement)

        self.outcome = VideoPokerOutcome(
            dealt=self.dealt,
            held=tuple(sorted(held)),
            final=final,
            hand=hand,
            result=Result.WIN if settlement > 0 else Result.LOSE,
            wagered=self.wagered,
            settlement=settlement,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            hand=hand.label,
            multiple=hand.multiple,
            settlement=str(settlement),
            balance=str(self.wallet.balance),
        )
        return self.outcome


# Hold callback: receives the dealt hand, returns zero-based positions to keep
HoldChooser = Callable[[tuple[Card, ...]], Iterable[int]]


def play_round(
    wallet: WalletLike,
    seed: str | bytes,
    nonce: int | str,
    stake: Decimal | int | str,
    choose_holds: HoldChooser,
    table_min: Decimal | int = VIDEO_POKER_LIMITS.min_bet,
    table_max: Decimal | int = VIDEO_POKER_LIMITS.max_bet,
    events: EventEmitter | None = None,
) -> VideoPokerOutcome:
    """Play a video poker round to completion."""
    round_ = VideoPokerRound.open(wallet, seed, nonce, stake, table_min, table_max, events)
    return round_.draw(choose_holds(round_.dealt))
