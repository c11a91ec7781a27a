"""Round verification endpoint."""

from fastapi import APIRouter, HTTPException

from api.dependencies import card_response
from api.schemas import VerifyRequest, VerifyResponse
from casino.fairness import (
    GAME_DECKS,
    commitment,
    replay_cards,
    replay_spin,
    verify_commitment,
)

router = APIRouter()


@router.post("/verify")
async def verify_round(request: VerifyRequest) -> VerifyResponse:
    """Recompute the cards or spin of a round from its revealed seed."""
    response = VerifyResponse(
        game=request.game,
        nonce=request.nonce,
        commitment=commitment(request.seed),
    )
    if request.commitment is not None:
        response.commitment_valid = verify_commitment(request.seed, request.commitment)

    if request.game == "roulette":
        response.spin = replay_spin(request.seed, request.nonce)
        return response

    deck_size = GAME_DECKS[request.game] * 52
    if request.count > deck_size:
        raise HTTPException(
            status_code=400,
            detail=f"A {request.game} round draws at most {deck_size} cards",
        )
    cards = replay_cards(request.seed, request.nonce, request.game, request.count)
    response.cards = [card_response(c) for c in cards]
    return response
