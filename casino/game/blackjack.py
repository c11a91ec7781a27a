"""Blackjack round engine with state machine."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable

from transitions import Machine

from casino.cards import Card, Deck
from casino.errors import InvalidAction
from casino.fairness import game_nonce
from casino.game.base import RoundBase
from casino.game.events import EventEmitter, EventType
from casino.game.state import Result, RoundState
from casino.hand import Hand, compare_hands, dealer_should_hit
from casino.money import BLACKJACK_LIMITS, validate_stake
from casino.rng import RandomnessStream, make_stream
from casino.wallet import WalletLike

SHOE_DECKS = 6
NATURAL_PAYOUT = Decimal("2.5")


class Action(Enum):
    """Player decisions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"


@dataclass(frozen=True)
class BlackjackOutcome:
    """Final hands and settlement of a blackjack round."""

    player: tuple[Card, ...]
    dealer: tuple[Card, ...]
    player_value: int
    dealer_value: int
    result: Result
    wagered: Decimal
    settlement: Decimal
    doubled: bool = False


class BlackjackRound(RoundBase):
    """
    One blackjack round against an H17 dealer.

    The round is driven by `start()` followed by `hit()`, `stand()` or
    `double()` calls; it settles itself as soon as the outcome is known.
    """

    game = "blackjack"

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_done", "source": "dealing", "dest": "player_turn"},
        {"trigger": "natural", "source": "dealing", "dest": "settled"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "settled"},
    ]

    def __init__(
        self,
        wallet: WalletLike,
        stake: Decimal,
        stream: RandomnessStream,
        deck: Deck | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a round.

        Args:
            wallet: Wallet the stake is debited from and winnings paid to
            stake: Validated stake
            stream: Randomness stream scoped to this round
            deck: Shoe to deal from (a fresh 6-deck shoe if omitted)
            events: Emitter receiving the audit trail
        """
        if deck is None:
            deck = Deck(SHOE_DECKS)
        super().__init__(wallet, stream, deck, events)
        self.stake = stake
        self.player = Hand()
        self.dealer = Hand()
        self.doubled = False
        self.outcome: BlackjackOutcome | None = None
        self._started = False
        self._first_decision = True

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="dealing",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @classmethod
    def open(
        cls,
        wallet: WalletLike,
        seed: str | bytes,
        nonce: int | str,
        stake: Decimal | int | str,
        table_min: Decimal | int = BLACKJACK_LIMITS.min_bet,
        table_max: Decimal | int = BLACKJACK_LIMITS.max_bet,
        events: EventEmitter | None = None,
    ) -> "BlackjackRound":
        """Validate the stake, then debit and deal a new round."""
        amount = validate_stake(stake, table_min, table_max, wallet.balance)
        stream = make_stream(seed, game_nonce(cls.game, nonce))
        round_ = cls(wallet, amount, stream, events=events)
        round_.start()
        return round_

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    def start(self) -> None:
        """Debit the stake and deal player, dealer, player, dealer."""
        if self._started:
            raise InvalidAction("Round already started")
        self._started = True

        self._debit(self.stake)
        self._start_event()

        self.player.add_card(self._draw("player"))
        self.dealer.add_card(self._draw("dealer"))
        self.player.add_card(self._draw("player"))
        self.dealer.add_card(self._draw("dealer", hidden=True))

        if self.player.is_blackjack or self.dealer.is_blackjack:
            self._reveal()
            self.events.emit_new(
                EventType.NATURAL,
                player=self.player.is_blackjack,
                dealer=self.dealer.is_blackjack,
            )
            self.natural()
            self._settle()
            return

        self.deal_done()

    @property
    def awaiting_decision(self) -> bool:
        return self.state == RoundState.PLAYER_TURN

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == RoundState.PLAYER_TURN

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == RoundState.PLAYER_TURN

    @property
    def can_double(self) -> bool:
        """Doubling is only offered on the first decision and needs a second stake."""
        return (
            self.state == RoundState.PLAYER_TURN
            and self._first_decision
            and self.wallet.balance >= self.stake
        )

    def hit(self) -> None:
        """Player takes another card."""
        if not self.can_hit:
            raise InvalidAction(f"Cannot hit in state {self.state}")

        self._first_decision = False
        self.player.add_card(self._draw("player"))
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player.value)

        if self.player.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player.value)
            self._finish_player_turn()
            return

        self.player_action()

    def stand(self) -> None:
        """Player keeps the current hand."""
        if not self.can_stand:
            raise InvalidAction(f"Cannot stand in state {self.state}")

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player.value)
        self._finish_player_turn()

    def double(self) -> None:
        """Player doubles the stake, takes exactly one card and stands."""
        if not self.can_double:
            raise InvalidAction("Double is only allowed as the first decision with enough balance")

        self._debit(self.stake)
        self.doubled = True
        self._first_decision = False
        self.player.add_card(self._draw("player"))
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_value=self.player.value,
            wagered=str(self.wagered),
        )

        if self.player.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player.value)

        self._finish_player_turn()

    def act(self, action: Action | str) -> None:
        """Apply a decision given as an Action or its name."""
        try:
            action = Action(action)
        except ValueError as exc:
            raise InvalidAction(f"Unknown action: {action}") from exc

        handlers = {
            Action.HIT: self.hit,
            Action.STAND: self.stand,
            Action.DOUBLE: self.double,
        }
        handlers[action]()

    def _finish_player_turn(self) -> None:
        self.player_done()
        self._play_dealer()

    def _reveal(self) -> None:
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=self.dealer.cards[1].code,
            hand_value=self.dealer.value,
        )

    def _play_dealer(self) -> None:
        """Dealer reveals, then draws to 17 and on soft 17."""
        self._reveal()

        while dealer_should_hit(self.dealer):
            self.dealer.add_card(self._draw("dealer"))
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer.value)

        if self.dealer.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer.value)

        self.dealer_done()
        self._settle()

    def _resolve(self) -> tuple[Result, Decimal]:
        player_bj = self.player.is_blackjack
        dealer_bj = self.dealer.is_blackjack

        if player_bj and dealer_bj:
            return Result.PUSH, self.stake
        if player_bj:
            return Result.NATURAL, self.stake * NATURAL_PAYOUT
        if dealer_bj:
            return Result.LOSE, Decimal("0")

        comparison = compare_hands(self.player, self.dealer)
        if comparison == 1:
            return Result.WIN, self.wagered * 2
        if comparison == 0:
            return Result.PUSH, self.wagered
        return Result.LOSE, Decimal("0")

    def _settle(self) -> None:
        result, settlement = self._resolve()
        self._credit(settlement)

        self.outcome = BlackjackOutcome(
            player=tuple(self.player.cards),
            dealer=tuple(self.dealer.cards),
            player_value=self.player.value,
            dealer_value=self.dealer.value,
            result=result,
            wagered=self.wagered,
            settlement=settlement,
            doubled=self.doubled,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=str(result),
            settlement=str(settlement),
            balance=str(self.wallet.balance),
        )


# Decision callback consulted at every player decision point
Decider = Callable[[BlackjackRound], Action | str]


def play_round(
    wallet: WalletLike,
    seed: str | bytes,
    nonce: int | str,
    stake: Decimal | int | str,
    decide: Decider,
    table_min: Decimal | int = BLACKJACK_LIMITS.min_bet,
    table_max: Decimal | int = BLACKJACK_LIMITS.max_bet,
    events: EventEmitter | None = None,
) -> BlackjackOutcome:
    """
    Play a blackjack round to completion.

    Args:
        wallet: Wallet to debit and credit
        seed: Session seed
        nonce: Round nonce, unique per session
        stake: Amount to bet
        decide: Called with the round at each decision point
        table_min: Minimum stake
        table_max: Maximum stake
        events: Emitter receiving the audit trail

    Returns:
        The settled outcome
    """
    round_ = BlackjackRound.open(wallet, seed, nonce, stake, table_min, table_max, events)
    while round_.outcome is None:
        round_.act(decide(round_))
    return round_.outcome
