"""Blackjack endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import current_session, hand_response, require_player
from api.schemas import (
    ActionRequest,
    AuditResponse,
    BetRequest,
    BlackjackStateResponse,
    HandResponse,
)
from api.session import PlayerState, save_player
from casino.game.blackjack import BlackjackRound
from casino.game.state import RoundState
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


def _dealer_response(round_: BlackjackRound) -> HandResponse:
    """Hide the hole card until the dealer reveals."""
    if round_.state == RoundState.PLAYER_TURN:
        response = hand_response(round_.dealer.cards[:1], None)
        response.cards.append(None)
        return response
    return hand_response(round_.dealer.cards, round_.dealer.value)


def _state_response(nonce: int, round_: BlackjackRound) -> BlackjackStateResponse:
    outcome = round_.outcome
    return BlackjackStateResponse(
        nonce=nonce,
        state=round_.state.name,
        player=hand_response(round_.player.cards, round_.player.value),
        dealer=_dealer_response(round_),
        can_hit=round_.can_hit,
        can_stand=round_.can_stand,
        can_double=round_.can_double,
        result=str(outcome.result) if outcome else None,
        wagered=float(round_.wagered),
        settlement=float(outcome.settlement) if outcome else None,
        balance=float(round_.wallet.balance),
    )


def _open_round(player: PlayerState) -> tuple[int, BlackjackRound] | None:
    entry = player.rounds.get(BlackjackRound.game)
    if entry is None or not entry[1].awaiting_decision:
        return None
    return entry


@router.post("/deal")
async def deal(
    request: BetRequest,
    session_id: Annotated[str, Depends(current_session)],
) -> BlackjackStateResponse:
    """Debit the stake and deal a new round."""
    player = await require_player(session_id)
    if _open_round(player) is not None:
        raise HTTPException(status_code=409, detail="Finish the current round first")

    nonce = player.seeds.nonce
    round_ = BlackjackRound.open(
        player.wallet,
        player.seeds.seed,
        nonce,
        request.amount,
        config.game.blackjack.min_bet,
        config.game.blackjack.max_bet,
    )
    player.seeds.next_nonce()
    player.rounds[BlackjackRound.game] = (nonce, round_)
    await save_player(session_id, player)

    if round_.outcome is not None:
        logger.info("Blackjack round %d settled on a natural: %s", nonce, round_.outcome.result)
    return _state_response(nonce, round_)


@router.post("/action")
async def action(
    request: ActionRequest,
    session_id: Annotated[str, Depends(current_session)],
) -> BlackjackStateResponse:
    """Apply hit, stand or double to the open round."""
    player = await require_player(session_id)
    entry = _open_round(player)
    if entry is None:
        raise HTTPException(status_code=409, detail="No blackjack round in progress")

    nonce, round_ = entry
    round_.act(request.action)
    await save_player(session_id, player)

    if round_.outcome is not None:
        logger.info(
            "Blackjack round %d settled: %s, paid %s",
            nonce,
            round_.outcome.result,
            round_.outcome.settlement,
        )
    return _state_response(nonce, round_)


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Depends(current_session)],
) -> BlackjackStateResponse:
    """Return the latest blackjack round of the session."""
    player = await require_player(session_id)
    entry = player.rounds.get(BlackjackRound.game)
    if entry is None:
        raise HTTPException(status_code=404, detail="No blackjack round played yet")
    return _state_response(*entry)


@router.get("/audit")
async def get_audit(
    session_id: Annotated[str, Depends(current_session)],
) -> AuditResponse:
    """Return the event log of the latest blackjack round; the hole card stays masked."""
    player = await require_player(session_id)
    entry = player.rounds.get(BlackjackRound.game)
    if entry is None:
        raise HTTPException(status_code=404, detail="No blackjack round played yet")
    nonce, round_ = entry
    return AuditResponse(nonce=nonce, events=round_.events.records())
