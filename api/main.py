"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api import session
from api.routes import account, baccarat, blackjack, fairness, roulette, video_poker
from casino.errors import CasinoError
from config import config

logging.basicConfig(level=logging.DEBUG if config.debug else logging.INFO)
logger = logging.getLogger(__name__)

RATE_LIMIT = f"{config.rate_limit.requests_per_minute}/minute"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[RATE_LIMIT],
)

# (router, prefix, tag)
ROUTERS = [
    (account.router, "/api/session", "session"),
    (blackjack.router, "/api/blackjack", "blackjack"),
    (baccarat.router, "/api/baccarat", "baccarat"),
    (roulette.router, "/api/roulette", "roulette"),
    (video_poker.router, "/api/video-poker", "video poker"),
    (fairness.router, "/api/fairness", "fairness"),
]


async def _sweep_sessions(interval: int) -> None:
    """Periodically drop cached players whose stored session expired."""
    while True:
        await asyncio.sleep(interval)
        evicted = await session.evict_stale_players()
        if evicted:
            logger.debug("Evicted %d expired sessions", evicted)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the active backends, sweep expired sessions and release the store on shutdown."""
    logger.info(
        "Casino starting: sessions in %s, rate limit %s",
        "redis" if config.redis.enabled else "memory",
        RATE_LIMIT if config.rate_limit.enabled else "off",
    )
    sweeper = asyncio.create_task(_sweep_sessions(config.session_sweep_interval))
    yield
    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper
    if session._session_store is not None:
        await session._session_store.close()
        session._session_store = None


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 with the limit that was hit."""
    logger.warning("Rate limit hit by %s on %s", get_remote_address(request), request.url.path)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _casino_error_handler(request: Request, exc: CasinoError) -> JSONResponse:
    """Report a rejected bet or action; the round never started or is unchanged."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


app = FastAPI(
    title="Provably Fair Casino",
    description="Blackjack, baccarat, roulette and video poker over a verifiable seed",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(CasinoError, _casino_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(RATE_LIMIT)
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


for router, prefix, tag in ROUTERS:
    app.include_router(router, prefix=prefix, tags=[tag])
