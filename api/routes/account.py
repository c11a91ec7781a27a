"""Session and seed endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import current_session, require_player
from api.schemas import RotateSeedResponse, SessionResponse
from api.session import PlayerState, create_session, save_player
from casino.fairness import commitment
from casino.wallet import Wallet
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/new")
async def new_session() -> SessionResponse:
    """Open a session with a fresh wallet and a committed seed."""
    player = PlayerState(wallet=Wallet(config.game.starting_balance))
    token = await create_session(player)
    logger.info("Session opened, seed commitment %s", player.seeds.commitment)

    return SessionResponse(
        session_id=token,
        balance=float(player.wallet.balance),
        seed_commitment=player.seeds.commitment,
        nonce=player.seeds.nonce,
    )


@router.get("")
async def get_session_summary(
    session_id: Annotated[str, Depends(current_session)],
) -> SessionResponse:
    """Current balance, seed commitment and next nonce."""
    player = await require_player(session_id)
    return SessionResponse(
        balance=float(player.wallet.balance),
        seed_commitment=player.seeds.commitment,
        nonce=player.seeds.nonce,
    )


@router.post("/rotate")
async def rotate_seed(
    session_id: Annotated[str, Depends(current_session)],
) -> RotateSeedResponse:
    """Reveal the current seed so past rounds can be verified, then commit to a new one."""
    player = await require_player(session_id)
    open_games = player.open_games()
    if open_games:
        raise HTTPException(
            status_code=409,
            detail=f"Finish the open {', '.join(open_games)} round before revealing the seed",
        )

    rounds_played = player.seeds.nonce
    revealed = player.seeds.rotate()
    previous = commitment(revealed)

    player.revealed.append(
        {"seed": revealed, "commitment": previous, "rounds": rounds_played}
    )
    await save_player(session_id, player)
    logger.info("Seed %s revealed after %d rounds", previous, rounds_played)

    return RotateSeedResponse(
        revealed_seed=revealed,
        previous_commitment=previous,
        rounds_played=rounds_played,
        seed_commitment=player.seeds.commitment,
    )
