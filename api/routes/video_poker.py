"""Video poker endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import card_response, current_session, require_player
from api.schemas import AuditResponse, BetRequest, HoldRequest, VideoPokerResponse
from api.session import save_player
from casino.game.video_poker import VideoPokerRound
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


def _response(nonce: int, round_: VideoPokerRound) -> VideoPokerResponse:
    outcome = round_.outcome
    response = VideoPokerResponse(
        nonce=nonce,
        dealt=[card_response(c) for c in round_.dealt],
        wagered=float(round_.wagered),
        balance=float(round_.wallet.balance),
    )
    if outcome is not None:
        response.held = list(outcome.held)
        response.final = [card_response(c) for c in outcome.final]
        response.hand = outcome.hand.label
        response.multiple = outcome.hand.multiple
        response.result = str(outcome.result)
        response.settlement = float(outcome.settlement)
    return response


@router.post("/deal")
async def deal(
    request: BetRequest,
    session_id: Annotated[str, Depends(current_session)],
) -> VideoPokerResponse:
    """Debit the stake and deal five cards."""
    player = await require_player(session_id)
    entry = player.rounds.get(VideoPokerRound.game)
    if entry is not None and entry[1].awaiting_decision:
        raise HTTPException(status_code=409, detail="Draw before dealing again")

    nonce = player.seeds.nonce
    round_ = VideoPokerRound.open(
        player.wallet,
        player.seeds.seed,
        nonce,
        request.amount,
        config.game.video_poker.min_bet,
        config.game.video_poker.max_bet,
    )
    player.seeds.next_nonce()
    player.rounds[VideoPokerRound.game] = (nonce, round_)
    await save_player(session_id, player)
    return _response(nonce, round_)


@router.post("/draw")
async def draw(
    request: HoldRequest,
    session_id: Annotated[str, Depends(current_session)],
) -> VideoPokerResponse:
    """Hold the chosen positions and replace the rest."""
    player = await require_player(session_id)
    entry = player.rounds.get(VideoPokerRound.game)
    if entry is None or not entry[1].awaiting_decision:
        raise HTTPException(status_code=409, detail="No video poker hand awaiting a draw")

    nonce, round_ = entry
    outcome = round_.draw(request.holds)
    await save_player(session_id, player)
    logger.info("Video poker round %d: %s, paid %s", nonce, outcome.hand.label, outcome.settlement)
    return _response(nonce, round_)


@router.get("/audit")
async def get_audit(
    session_id: Annotated[str, Depends(current_session)],
) -> AuditResponse:
    """Return the event log of the latest video poker round."""
    player = await require_player(session_id)
    entry = player.rounds.get(VideoPokerRound.game)
    if entry is None:
        raise HTTPException(status_code=404, detail="No video poker round played yet")
    nonce, round_ = entry
    return AuditResponse(nonce=nonce, events=round_.events.records())
