"""Game engines and round state management."""

from casino.game.events import GameEvent, EventEmitter, EventType
from casino.game.state import Result, RoundState
from casino.game.blackjack import Action, BlackjackRound
from casino.game.baccarat import BaccaratBet, BaccaratRound
from casino.game.roulette import BetKind, RouletteBet, RouletteRound
from casino.game.video_poker import PokerHand, VideoPokerRound

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "Result",
    "RoundState",
    "Action",
    "BlackjackRound",
    "BaccaratBet",
    "BaccaratRound",
    "BetKind",
    "RouletteBet",
    "RouletteRound",
    "PokerHand",
    "VideoPokerRound",
]
