"""Baccarat (punto banco) round engine."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from casino.cards import Card, Deck
from casino.errors import InvalidBetType
from casino.fairness import game_nonce
from casino.game.base import RoundBase
from casino.game.events import EventEmitter, EventType
from casino.game.state import Result
from casino.money import BACCARAT_LIMITS, validate_stake
from casino.rng import RandomnessStream, make_stream
from casino.wallet import WalletLike

SHOE_DECKS = 8
TIE_PAYOUT = Decimal("9")
BANKER_COMMISSION = Decimal("0.05")


class BaccaratBet(Enum):
    """Which side the stake backs."""

    PLAYER = "player"
    BANKER = "banker"
    TIE = "tie"

    @classmethod
    def parse(cls, value: "BaccaratBet | str") -> "BaccaratBet":
        """Parse a bet name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidBetType(f"Unknown baccarat bet: {value!r}") from exc


def baccarat_value(card: Card) -> int:
    """Ace counts 1, two to nine face value, tens and faces 0."""
    return card.rank.value if card.rank.value < 10 else 0


def hand_total(cards: list[Card] | tuple[Card, ...]) -> int:
    """Sum of card values modulo 10."""
    return sum(baccarat_value(card) for card in cards) % 10


def player_draws(player_total: int) -> bool:
    """Player takes a third card on 0-5."""
    return player_total <= 5


def banker_draws(banker_total: int, player_third: Card | None) -> bool:
    """
    Banker third-card tableau.

    Args:
        banker_total: Banker's two-card total
        player_third: Player's third card, or None if the player stood
    """
    if player_third is None:
        return banker_total <= 5

    pv = baccarat_value(player_third)
    if banker_total <= 2:
        return True
    if banker_total == 3:
        return pv != 8
    if banker_total == 4:
        return 2 <= pv <= 7
    if banker_total == 5:
        return 4 <= pv <= 7
    if banker_total == 6:
        return pv in (6, 7)
    return False


@dataclass(frozen=True)
class Coup:
    """Final player and banker hands of one deal."""

    player: tuple[Card, ...]
    banker: tuple[Card, ...]

    @property
    def player_total(self) -> int:
        return hand_total(self.player)

    @property
    def banker_total(self) -> int:
        return hand_total(self.banker)

    @property
    def is_natural(self) -> bool:
        """Either two-card hand totals 8 or 9."""
        return hand_total(self.player[:2]) >= 8 or hand_total(self.banker[:2]) >= 8

    @property
    def winner(self) -> BaccaratBet:
        """Side with the higher total, or TIE."""
        if self.player_total == self.banker_total:
            return BaccaratBet.TIE
        if self.player_total > self.banker_total:
            return BaccaratBet.PLAYER
        return BaccaratBet.BANKER


def settle(bet: BaccaratBet, stake: Decimal, winner: BaccaratBet) -> tuple[Result, Decimal]:
    """
    Settle a stake against the winning side.

    Returns:
        The result and the amount to credit (stake included)
    """
    if bet == BaccaratBet.TIE:
        if winner == BaccaratBet.TIE:
            return Result.WIN, stake * TIE_PAYOUT
        return Result.LOSE, Decimal("0")

    if winner == BaccaratBet.TIE:
        return Result.PUSH, stake
    if winner != bet:
        return Result.LOSE, Decimal("0")
    if bet == BaccaratBet.BANKER:
        return Result.WIN, stake + stake * (1 - BANKER_COMMISSION)
    return Result.WIN, stake * 2


@dataclass(frozen=True)
class BaccaratOutcome:
    """Settled baccarat round."""

    coup: Coup
    bet: BaccaratBet
    winner: BaccaratBet
    result: Result
    wagered: Decimal
    settlement: Decimal


class BaccaratRound(RoundBase):
    """A single baccarat coup with one bet."""

    game = "baccarat"

    def __init__(
        self,
        wallet: WalletLike,
        bet: BaccaratBet,
        stake: Decimal,
        stream: RandomnessStream,
        deck: Deck | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        if deck is None:
            deck = Deck(SHOE_DECKS)
        super().__init__(wallet, stream, deck, events)
        self.bet = bet
        self.stake = stake

    def deal(self) -> Coup:
        """Deal player, banker, player, banker, then apply the drawing rules."""
        player: list[Card] = []
        banker: list[Card] = []
        player.append(self._draw("player"))
        banker.append(self._draw("banker"))
        player.append(self._draw("player"))
        banker.append(self._draw("banker"))

        player_total = hand_total(player)
        banker_total = hand_total(banker)

        if player_total >= 8 or banker_total >= 8:
            self.events.emit_new(
                EventType.NATURAL,
                player_total=player_total,
                banker_total=banker_total,
            )
            return Coup(tuple(player), tuple(banker))

        player_third: Card | None = None
        if player_draws(player_total):
            player_third = self._draw("player")
            player.append(player_third)
            self.events.emit_new(
                EventType.THIRD_CARD,
                hand="player",
                card=player_third.code,
                total=hand_total(player),
            )

        if banker_draws(banker_total, player_third):
            card = self._draw("banker")
            banker.append(card)
            self.events.emit_new(
                EventType.THIRD_CARD,
                hand="banker",
                card=card.code,
                total=hand_total(banker),
            )

        return Coup(tuple(player), tuple(banker))

    def play(self) -> BaccaratOutcome:
        """Debit, deal and settle the round."""
        self._debit(self.stake)
        self._start_event()

        coup = self.deal()
        winner = coup.winner
        result, settlement = settle(self.bet, self.stake, winner)
        self._credit(settlement)

        self.events.emit_new(
            EventType.ROUND_ENDED,
            winner=winner.value,
            player_total=coup.player_total,
            banker_total=coup.banker_total,
            result=str(result),
            settlement=str(settlement),
        )
        return BaccaratOutcome(
            coup=coup,
            bet=self.bet,
            winner=winner,
            result=result,
            wagered=self.wagered,
            settlement=settlement,
        )


def play_round(
    wallet: WalletLike,
    seed: str | bytes,
    nonce: int | str,
    bet: BaccaratBet | str,
    stake: Decimal | int | str,
    table_min: Decimal | int = BACCARAT_LIMITS.min_bet,
    table_max: Decimal | int = BACCARAT_LIMITS.max_bet,
    events: EventEmitter | None = None,
) -> BaccaratOutcome:
    """Validate the bet, then play one baccarat coup to completion."""
    side = BaccaratBet.parse(bet)
    amount = validate_stake(stake, table_min, table_max, wallet.balance)
    stream = make_stream(seed, game_nonce(BaccaratRound.game, nonce))
    return BaccaratRound(wallet, side, amount, stream, events=events).play()
