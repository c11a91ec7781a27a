"""Roulette endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import current_session, require_player
from api.schemas import RouletteBetResponse, RouletteRequest, RouletteResponse
from api.session import save_player
from casino.game.roulette import BetKind, RouletteBet, play_round
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/spin")
async def spin(
    request: RouletteRequest,
    session_id: Annotated[str, Depends(current_session)],
) -> RouletteResponse:
    """Place every bet, spin once and settle."""
    player = await require_player(session_id)
    bets = [
        RouletteBet(BetKind.parse(b.type), b.amount, number=b.number, dozen=b.dozen)
        for b in request.bets
    ]
    nonce = player.seeds.nonce
    outcome = play_round(
        player.wallet,
        player.seeds.seed,
        nonce,
        bets,
        config.game.roulette.min_bet,
        config.game.roulette.max_bet,
    )
    player.seeds.next_nonce()
    await save_player(session_id, player)
    logger.info(
        "Roulette round %d: %d %s, paid %s", nonce, outcome.spin, outcome.color, outcome.settlement
    )

    return RouletteResponse(
        nonce=nonce,
        spin=outcome.spin,
        color=str(outcome.color),
        bets=[
            RouletteBetResponse(
                type=r.bet.kind.value,
                number=r.bet.number,
                dozen=r.bet.dozen,
                amount=float(r.bet.amount),
                result=str(r.result),
                payout=float(r.payout),
            )
            for r in outcome.results
        ],
        wagered=float(outcome.wagered),
        settlement=float(outcome.settlement),
        balance=float(player.wallet.balance),
    )
