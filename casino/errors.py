"""Exceptions raised by the casino engines."""


class CasinoError(Exception):
    """Base class for every error a round can abort with."""


class InvalidBetAmount(CasinoError, ValueError):
    """Stake is non-finite, outside table limits, or over the balance."""


class InvalidBetType(CasinoError, ValueError):
    """Unrecognized bet variant."""


class InvalidSelection(CasinoError, ValueError):
    """Malformed bet payload or hold selection."""


class InvalidAction(CasinoError, ValueError):
    """Player action not permitted in the current round state."""


class InsufficientFunds(CasinoError):
    """Wallet debit exceeds the available balance."""


class InvalidCreditAmount(CasinoError, ValueError):
    """Wallet credit is negative or non-finite."""


class InvalidRange(CasinoError, ValueError):
    """Upper bound for a random integer is not a positive integer."""


class DeckExhausted(CasinoError, IndexError):
    """Draw requested from an empty deck."""
