"""Round state enumerations."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Blackjack round states.

    Flow: DEALING → PLAYER_TURN → DEALER_TURN → SETTLED
    """

    # Initial cards being dealt
    DEALING = auto()

    # Waiting on hit / stand / double
    PLAYER_TURN = auto()

    # Dealer reveals and draws
    DEALER_TURN = auto()

    # Outcome fixed and paid
    SETTLED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Result(Enum):
    """Classification of a settled bet."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    NATURAL = "natural"

    def __str__(self) -> str:
        return self.value
