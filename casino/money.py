"""Money parsing and bet-amount validation shared by every game."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from casino.errors import InvalidBetAmount

CENT = Decimal("0.01")


def to_money(amount: Decimal | int | float | str) -> Decimal:
    """
    Convert user input to a cent-rounded Decimal.

    Strings may carry a currency sign or thousands separators ("$1,250.50").

    Raises:
        InvalidBetAmount: If the amount is not a finite number
    """
    if isinstance(amount, bool):
        raise InvalidBetAmount(f"Invalid amount: {amount!r}")
    if isinstance(amount, str):
        amount = "".join(ch for ch in amount if ch.isdigit() or ch in ".-")
    try:
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidBetAmount(f"Invalid amount: {amount!r}") from exc
    if not value.is_finite():
        raise InvalidBetAmount(f"Amount must be finite, got {amount!r}")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Format an amount as dollars, e.g. '$12.50'."""
    return f"${Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)}"


@dataclass(frozen=True)
class TableLimits:
    """Minimum and maximum stake accepted by a table."""

    min_bet: Decimal
    max_bet: Decimal

    def __post_init__(self) -> None:
        if self.min_bet <= 0:
            raise ValueError("min_bet must be positive")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must be at least min_bet")

    @classmethod
    def of(cls, min_bet: Decimal | int | str, max_bet: Decimal | int | str) -> "TableLimits":
        """Build limits from plain numbers."""
        return cls(Decimal(min_bet), Decimal(max_bet))


BLACKJACK_LIMITS = TableLimits.of(5, 500)
BACCARAT_LIMITS = TableLimits.of(5, 1000)
ROULETTE_LIMITS = TableLimits.of(1, 500)
VIDEO_POKER_LIMITS = TableLimits.of(1, 25)


def validate_stake(
    amount: Decimal | int | float | str,
    table_min: Decimal | int,
    table_max: Decimal | int,
    balance: Decimal,
) -> Decimal:
    """
    Validate a stake against table limits and the wallet balance.

    Returns:
        The cent-rounded stake

    Raises:
        InvalidBetAmount: If the stake is non-finite, outside the limits,
            or larger than the balance
    """
    stake = to_money(amount)
    if stake < Decimal(table_min) or stake > Decimal(table_max):
        raise InvalidBetAmount(
            f"Bet must be between {format_money(Decimal(table_min))} "
            f"and {format_money(Decimal(table_max))}"
        )
    if stake > balance:
        raise InvalidBetAmount(
            f"Bet of {format_money(stake)} exceeds balance of {format_money(balance)}"
        )
    return stake
