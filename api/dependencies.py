"""Shared request dependencies and response helpers."""

from typing import Annotated, Iterable

from fastapi import Header, HTTPException

from api.schemas import CardResponse, HandResponse
from api.session import PlayerState, extract_session_id, load_player
from casino.cards import Card


async def current_session(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> str:
    """Resolve the signed session header to a raw session ID."""
    session_id = extract_session_id(token)
    if session_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return session_id


async def require_player(session_id: str) -> PlayerState:
    """Load the session's player or fail with 404."""
    player = await load_player(session_id)
    if player is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return player


def card_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(rank=str(card.rank), suit=card.suit.code, code=card.code)


def hand_response(cards: Iterable[Card], value: int | None) -> HandResponse:
    """Convert cards and their total to HandResponse."""
    return HandResponse(cards=[card_response(c) for c in cards], value=value)
