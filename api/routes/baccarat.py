"""Baccarat endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import current_session, hand_response, require_player
from api.schemas import BaccaratRequest, BaccaratResponse
from api.session import save_player
from casino.game.baccarat import hand_total, play_round
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/play")
async def play(
    request: BaccaratRequest,
    session_id: Annotated[str, Depends(current_session)],
) -> BaccaratResponse:
    """Play one coup with a single bet."""
    player = await require_player(session_id)
    nonce = player.seeds.nonce
    outcome = play_round(
        player.wallet,
        player.seeds.seed,
        nonce,
        request.bet,
        request.amount,
        config.game.baccarat.min_bet,
        config.game.baccarat.max_bet,
    )
    player.seeds.next_nonce()
    await save_player(session_id, player)
    logger.info(
        "Baccarat round %d: %s wins, paid %s", nonce, outcome.winner.value, outcome.settlement
    )

    return BaccaratResponse(
        nonce=nonce,
        player=hand_response(outcome.coup.player, hand_total(outcome.coup.player)),
        banker=hand_response(outcome.coup.banker, hand_total(outcome.coup.banker)),
        winner=outcome.winner.value,
        result=str(outcome.result),
        wagered=float(outcome.wagered),
        settlement=float(outcome.settlement),
        balance=float(player.wallet.balance),
    )
