"""Pydantic schemas for API requests and responses."""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Any, Literal


class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    code: str


class HandResponse(BaseModel):
    """Cards plus their total (None while a card is face down)."""

    cards: list[CardResponse | None]
    value: int | None


# Session schemas
class SessionResponse(BaseModel):
    """Session summary."""

    session_id: str | None = None
    balance: float
    seed_commitment: str
    nonce: int


class RotateSeedResponse(BaseModel):
    """Previous seed revealed and the commitment of its successor."""

    revealed_seed: str
    previous_commitment: str
    rounds_played: int
    seed_commitment: str


# Game schemas
class BetRequest(BaseModel):
    """Request to place a stake."""

    amount: Decimal = Field(..., gt=0, description="Stake")


class ActionRequest(BaseModel):
    """Request for a blackjack decision."""

    action: Literal["hit", "stand", "double"]


class BlackjackStateResponse(BaseModel):
    """Current blackjack round."""

    nonce: int
    state: str
    player: HandResponse
    dealer: HandResponse
    can_hit: bool
    can_stand: bool
    can_double: bool
    result: str | None = None
    wagered: float
    settlement: float | None = None
    balance: float


class BaccaratRequest(BetRequest):
    """Request to play a baccarat coup."""

    bet: Literal["player", "banker", "tie"]


class BaccaratResponse(BaseModel):
    """Settled baccarat coup."""

    nonce: int
    player: HandResponse
    banker: HandResponse
    winner: str
    result: str
    wagered: float
    settlement: float
    balance: float


class RouletteBetRequest(BetRequest):
    """One roulette bet."""

    type: Literal["straight", "red", "black", "odd", "even", "dozen"]
    number: int | None = Field(default=None, ge=0, le=36)
    dozen: int | None = Field(default=None, ge=1, le=3)


class RouletteRequest(BaseModel):
    """All bets for one spin."""

    bets: list[RouletteBetRequest] = Field(default_factory=list)


class RouletteBetResponse(BaseModel):
    """Settlement row for one bet."""

    type: str
    number: int | None
    dozen: int | None
    amount: float
    result: str
    payout: float


class RouletteResponse(BaseModel):
    """Spin result."""

    nonce: int
    spin: int
    color: str
    bets: list[RouletteBetResponse]
    wagered: float
    settlement: float
    balance: float


class HoldRequest(BaseModel):
    """Zero-based positions to keep."""

    holds: list[int] = Field(default_factory=list)


class VideoPokerResponse(BaseModel):
    """Video poker round, before or after the draw."""

    nonce: int
    dealt: list[CardResponse]
    held: list[int] | None = None
    final: list[CardResponse] | None = None
    hand: str | None = None
    multiple: int | None = None
    result: str | None = None
    wagered: float
    settlement: float | None = None
    balance: float


# Fairness schemas
class VerifyRequest(BaseModel):
    """Replay a round from a revealed seed."""

    seed: str = Field(..., min_length=1)
    nonce: int = Field(..., ge=0)
    game: Literal["blackjack", "baccarat", "roulette", "video_poker"]
    count: int = Field(default=6, ge=0, le=416, description="Cards to replay")
    commitment: str | None = None


class VerifyResponse(BaseModel):
    """Recomputed draws."""

    game: str
    nonce: int
    commitment: str
    commitment_valid: bool | None = None
    cards: list[CardResponse] | None = None
    spin: int | None = None


# Audit schemas
class AuditEntry(BaseModel):
    """One recorded round event."""

    sequence: int
    type: str
    timestamp: str
    data: dict[str, Any]


class AuditResponse(BaseModel):
    """Event log of a round."""

    nonce: int
    events: list[AuditEntry]
