"""European single-zero roulette engine."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from casino.errors import InvalidBetAmount, InvalidBetType, InvalidSelection
from casino.fairness import ROULETTE_POCKETS, game_nonce
from casino.game.base import RoundBase
from casino.game.events import EventEmitter, EventType
from casino.game.state import Result
from casino.money import ROULETTE_LIMITS, format_money, validate_stake
from casino.rng import RandomnessStream, make_stream
from casino.wallet import WalletLike

RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})


class Color(Enum):
    """Pocket colors."""

    GREEN = "green"
    RED = "red"
    BLACK = "black"

    def __str__(self) -> str:
        return self.value


def color_of(number: int) -> Color:
    """Return the color of a pocket."""
    if number == 0:
        return Color.GREEN
    return Color.RED if number in RED_NUMBERS else Color.BLACK


class BetKind(Enum):
    """Supported bet types with their profit multiple."""

    STRAIGHT = "straight"
    RED = "red"
    BLACK = "black"
    ODD = "odd"
    EVEN = "even"
    DOZEN = "dozen"

    @property
    def multiple(self) -> int:
        """Profit multiple paid on a win (stake returned on top)."""
        return {
            BetKind.STRAIGHT: 35,
            BetKind.DOZEN: 2,
        }.get(self, 1)

    @classmethod
    def parse(cls, value: "BetKind | str") -> "BetKind":
        """Parse a bet type name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidBetType(f"Unknown roulette bet: {value!r}") from exc


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RouletteBet:
    """
    One bet on the layout.

    `number` is only carried by straight bets, `dozen` (1, 2 or 3) only by
    dozen bets.
    """

    kind: BetKind
    amount: Decimal
    number: int | None = None
    dozen: int | None = None

    def __post_init__(self) -> None:
        if self.kind == BetKind.STRAIGHT:
            if not _is_int(self.number) or not 0 <= self.number < ROULETTE_POCKETS:
                raise InvalidSelection(f"Straight bet needs a number 0-36, got {self.number!r}")
        elif self.number is not None:
            raise InvalidSelection(f"{self.kind.value} bet does not take a number")

        if self.kind == BetKind.DOZEN:
            if not _is_int(self.dozen) or self.dozen not in (1, 2, 3):
                raise InvalidSelection(f"Dozen must be 1, 2 or 3, got {self.dozen!r}")
        elif self.dozen is not None:
            raise InvalidSelection(f"{self.kind.value} bet does not take a dozen")

    @classmethod
    def straight(cls, number: int, amount: Decimal) -> "RouletteBet":
        return cls(BetKind.STRAIGHT, amount, number=number)

    @classmethod
    def red(cls, amount: Decimal) -> "RouletteBet":
        return cls(BetKind.RED, amount)

    @classmethod
    def black(cls, amount: Decimal) -> "RouletteBet":
        return cls(BetKind.BLACK, amount)

    @classmethod
    def odd(cls, amount: Decimal) -> "RouletteBet":
        return cls(BetKind.ODD, amount)

    @classmethod
    def even(cls, amount: Decimal) -> "RouletteBet":
        return cls(BetKind.EVEN, amount)

    @classmethod
    def dozen_of(cls, dozen: int, amount: Decimal) -> "RouletteBet":
        return cls(BetKind.DOZEN, amount, dozen=dozen)

    def wins(self, spin: int) -> bool:
        """Check this bet against a spin."""
        if self.kind == BetKind.STRAIGHT:
            return spin == self.number
        if self.kind == BetKind.RED:
            return color_of(spin) == Color.RED
        if self.kind == BetKind.BLACK:
            return color_of(spin) == Color.BLACK
        if spin == 0:
            return False
        if self.kind == BetKind.ODD:
            return spin % 2 == 1
        if self.kind == BetKind.EVEN:
            return spin % 2 == 0
        # Dozen
        assert self.dozen is not None
        return (self.dozen - 1) * 12 < spin <= self.dozen * 12

    def payout(self, spin: int) -> Decimal:
        """Amount returned for this bet: stake × (multiple + 1) or nothing."""
        if self.wins(spin):
            return self.amount * (self.kind.multiple + 1)
        return Decimal("0")

    def describe(self) -> str:
        if self.kind == BetKind.STRAIGHT:
            return f"straight {self.number}"
        if self.kind == BetKind.DOZEN:
            return f"dozen {self.dozen}"
        return self.kind.value


@dataclass(frozen=True)
class BetResult:
    """Settlement of one bet."""

    bet: RouletteBet
    result: Result
    payout: Decimal


@dataclass(frozen=True)
class RouletteOutcome:
    """Spin and per-bet settlement."""

    spin: int
    color: Color
    results: tuple[BetResult, ...]
    wagered: Decimal
    settlement: Decimal


def spin_wheel(stream: RandomnessStream) -> int:
    """Draw one pocket, 0-36."""
    return stream.next_int(ROULETTE_POCKETS)


def settle_bets(bets: Iterable[RouletteBet], spin: int) -> tuple[list[BetResult], Decimal]:
    """Evaluate every bet independently against one spin."""
    results = []
    total = Decimal("0")
    for bet in bets:
        payout = bet.payout(spin)
        results.append(BetResult(bet, Result.WIN if payout > 0 else Result.LOSE, payout))
        total += payout
    return results, total


def validate_bets(
    bets: Iterable[RouletteBet],
    table_min: Decimal | int,
    table_max: Decimal | int,
    balance: Decimal,
) -> list[RouletteBet]:
    """
    Check each bet against the table limits and all of them against the balance.

    Returns:
        The bets with cent-rounded amounts
    """
    checked = []
    remaining = balance
    for bet in bets:
        amount = validate_stake(bet.amount, table_min, table_max, balance)
        if amount > remaining:
            raise InvalidBetAmount(
                f"Bets total more than the balance of {format_money(balance)}"
            )
        remaining -= amount
        checked.append(RouletteBet(bet.kind, amount, number=bet.number, dozen=bet.dozen))
    return checked


class RouletteRound(RoundBase):
    """All bets placed, one spin, independent settlement per bet."""

    game = "roulette"

    def __init__(
        self,
        wallet: WalletLike,
        bets: list[RouletteBet],
        stream: RandomnessStream,
        events: EventEmitter | None = None,
    ) -> None:
        super().__init__(wallet, stream, None, events)
        self.bets = bets

    def play(self) -> RouletteOutcome:
        """Debit every bet, spin once and pay the winners."""
        for bet in self.bets:
            self._debit(bet.amount)
        self._start_event()

        spin = spin_wheel(self.stream)
        color = color_of(spin)
        self.events.emit_new(
            EventType.WHEEL_SPUN,
            spin=spin,
            color=str(color),
            counter=self.stream.counter,
        )

        results, total = settle_bets(self.bets, spin)
        for item in results:
            self.events.emit_new(
                EventType.BET_RESOLVED,
                bet=item.bet.describe(),
                amount=str(item.bet.amount),
                result=str(item.result),
                payout=str(item.payout),
            )
        self._credit(total)

        self.events.emit_new(
            EventType.ROUND_ENDED,
            spin=spin,
            settlement=str(total),
            balance=str(self.wallet.balance),
        )
        return RouletteOutcome(
            spin=spin,
            color=color,
            results=tuple(results),
            wagered=self.wagered,
            settlement=total,
        )


def play_round(
    wallet: WalletLike,
    seed: str | bytes,
    nonce: int | str,
    bets: Iterable[RouletteBet],
    table_min: Decimal | int = ROULETTE_LIMITS.min_bet,
    table_max: Decimal | int = ROULETTE_LIMITS.max_bet,
    events: EventEmitter | None = None,
) -> RouletteOutcome:
    """Validate all bets, then spin and settle them."""
    checked = validate_bets(bets, table_min, table_max, wallet.balance)
    stream = make_stream(seed, game_nonce(RouletteRound.game, nonce))
    return RouletteRound(wallet, checked, stream, events=events).play()
