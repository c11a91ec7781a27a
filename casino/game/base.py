"""Shared plumbing for a single round: wallet, stream, deck and audit trail."""

from decimal import Decimal
from typing import Any

from casino.cards import Card, Deck
from casino.game.events import EventEmitter, EventType
from casino.rng import RandomnessStream
from casino.wallet import WalletLike


class RoundBase:
    """
    State owned exclusively by one round.

    The deck and stream are created for the round and discarded with it;
    nothing else may draw from them while the round is in progress.
    """

    game: str = ""

    def __init__(
        self,
        wallet: WalletLike,
        stream: RandomnessStream,
        deck: Deck | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self.wallet = wallet
        self.stream = stream
        self.deck = deck
        self.events = events or EventEmitter()
        self.wagered = Decimal("0")

    @property
    def awaiting_decision(self) -> bool:
        """True while the round waits on the player and its stream must stay secret."""
        return False

    def _debit(self, amount: Decimal) -> None:
        """Take a stake from the wallet and record it."""
        self.wallet.debit(amount)
        self.wagered += amount
        self.events.emit_new(
            EventType.STAKE_DEBITED,
            amount=str(amount),
            balance=str(self.wallet.balance),
        )

    def _credit(self, amount: Decimal) -> None:
        """Pay a settlement; zero settlements are not sent to the wallet."""
        if amount > 0:
            self.wallet.credit(amount)
        self.events.emit_new(
            EventType.PAYOUT_CREDITED,
            amount=str(amount),
            balance=str(self.wallet.balance),
        )

    def _draw(self, hand: str, hidden: bool = False, **data: Any) -> Card:
        """Draw one card and log it with the stream position that chose it."""
        if self.deck is None:
            raise RuntimeError(f"{type(self).__name__} has no deck")
        card = self.deck.draw(self.stream)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card="??" if hidden else card.code,
            hand=hand,
            counter=self.stream.counter,
            **data,
        )
        return card

    def _start_event(self) -> None:
        self.events.emit_new(
            EventType.ROUND_STARTED,
            game=self.game,
            nonce=str(self.stream.nonce),
        )
