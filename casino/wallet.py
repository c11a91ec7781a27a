"""Wallet capability consumed by the game engines."""

from decimal import Decimal
from typing import Protocol

from casino.errors import InsufficientFunds, InvalidBetAmount, InvalidCreditAmount


class WalletLike(Protocol):
    """Debit/credit capability the engines rely on."""

    @property
    def balance(self) -> Decimal: ...

    def debit(self, amount: Decimal) -> None: ...

    def credit(self, amount: Decimal) -> None: ...


class Wallet:
    """In-memory wallet holding a Decimal balance."""

    def __init__(self, balance: Decimal | int | str = Decimal("1000")) -> None:
        self._balance = Decimal(balance)

    @property
    def balance(self) -> Decimal:
        """Return the current balance."""
        return self._balance

    def can_bet(self, amount: Decimal) -> bool:
        """Check if amount is a positive finite stake within the balance."""
        return amount.is_finite() and amount > 0 and amount <= self._balance

    def debit(self, amount: Decimal) -> None:
        """
        Remove a stake from the balance.

        Raises:
            InvalidBetAmount: If amount is non-finite or not positive
            InsufficientFunds: If amount exceeds the balance
        """
        amount = Decimal(amount)
        if not amount.is_finite() or amount <= 0:
            raise InvalidBetAmount(f"Invalid debit amount: {amount}")
        if amount > self._balance:
            raise InsufficientFunds(
                f"Cannot debit {amount}, balance is {self._balance}"
            )
        self._balance -= amount

    def credit(self, amount: Decimal) -> None:
        """
        Add winnings or a returned stake to the balance.

        Raises:
            InvalidCreditAmount: If amount is negative or non-finite
        """
        amount = Decimal(amount)
        if not amount.is_finite() or amount < 0:
            raise InvalidCreditAmount(f"Invalid credit amount: {amount}")
        self._balance += amount

    def restore(self, balance: Decimal | int | str) -> None:
        """Overwrite the balance with a persisted value."""
        self._balance = Decimal(balance)

    def __repr__(self) -> str:
        return f"Wallet(balance={self._balance})"
