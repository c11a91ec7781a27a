"""Signed player sessions kept in memory or in Redis."""

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from casino.fairness import SeedSession
from casino.game.base import RoundBase
from casino.wallet import Wallet
from config import config

# Keeps session tokens from validating as any other itsdangerous payload
_TOKEN_SALT = "casino-session"


class SessionSigner:
    """Turns raw session IDs into tamper-proof, expiring tokens."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(
            secret_key or config.security.secret_key, salt=_TOKEN_SALT
        )

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Recover the session ID from a token.

        Args:
            token: Token previously returned by `sign`
            max_age: Maximum age in seconds (defaults to the session TTL)

        Returns:
            The session ID, or None if the token is forged, mangled or expired
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Key-value storage for serialized player records with expiry."""

    def __init__(self, ttl: int | None = None) -> None:
        self.ttl = ttl or config.session_ttl

    @abstractmethod
    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data, or None if missing or expired."""

    @abstractmethod
    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Store session data and restart its expiry clock."""

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete session; missing sessions are ignored."""

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> int:
        """Drop expired sessions the backend does not expire on its own."""
        return 0

    async def close(self) -> None:
        """Release backend connections."""


class InMemorySessionStore(SessionStore):
    """Process-local store for development and tests."""

    def __init__(self, ttl: int | None = None) -> None:
        super().__init__(ttl)
        # session_id -> (data, monotonic deadline)
        self._sessions: dict[str, tuple[dict[str, Any], float]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        data, deadline = entry
        if deadline <= time.monotonic():
            del self._sessions[session_id]
            return None
        return data

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        self._sessions[session_id] = (data, time.monotonic() + (ttl or self.ttl))

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        now = time.monotonic()
        expired = [sid for sid, (_, deadline) in self._sessions.items() if deadline <= now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)


class RedisSessionStore(SessionStore):
    """Redis-backed store; expiry is delegated to SETEX."""

    def __init__(
        self,
        redis_client: redis.Redis,
        prefix: str = "casino:session:",
        ttl: int | None = None,
    ) -> None:
        super().__init__(ttl)
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def get(self, session_id: str) -> dict[str, Any] | None:
        raw = await self._redis.get(self._key(session_id))
        return None if raw is None else json.loads(raw)

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        await self._redis.setex(self._key(session_id), ttl or self.ttl, json.dumps(data))

    async def delete(self, session_id: str) -> None:
        await self._redis.delete(self._key(session_id))

    async def exists(self, session_id: str) -> bool:
        return await self._redis.exists(self._key(session_id)) > 0

    async def close(self) -> None:
        await self._redis.aclose()


_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Get or create the store selected by REDIS_ENABLED."""
    global _session_store

    if _session_store is None:
        if config.redis.enabled:
            _session_store = RedisSessionStore(redis.from_url(config.redis.url))
        else:
            _session_store = InMemorySessionStore()
    return _session_store


@dataclass
class PlayerState:
    """Everything a session carries between rounds: balance and seed chain."""

    wallet: Wallet
    seeds: SeedSession = field(default_factory=SeedSession)
    revealed: list[dict[str, Any]] = field(default_factory=list)
    # Rounds waiting on a decision, by game; process-local and never persisted
    rounds: dict[str, tuple[int, RoundBase]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the session store; money travels as a string."""
        return {
            "balance": str(self.wallet.balance),
            "seed": self.seeds.seed,
            "nonce": self.seeds.nonce,
            "revealed": list(self.revealed),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerState":
        """Restore from session data."""
        return cls(
            wallet=Wallet(Decimal(data["balance"])),
            seeds=SeedSession(seed=data["seed"], nonce=data["nonce"]),
            revealed=list(data.get("revealed", [])),
        )

    def refresh(self, data: dict[str, Any]) -> None:
        """Adopt a newer stored record, keeping the wallet object parked rounds hold."""
        self.wallet.restore(Decimal(data["balance"]))
        self.seeds.seed = data["seed"]
        self.seeds.nonce = data["nonce"]
        self.revealed = list(data.get("revealed", []))

    def open_games(self) -> list[str]:
        """Games with a round still waiting on the player."""
        return sorted(
            game for game, (_, round_) in self.rounds.items() if round_.awaiting_decision
        )


# The store is the source of truth for balance and seeds. This cache only keeps
# each session on one PlayerState so parked rounds and requests share a wallet.
_players: dict[str, PlayerState] = {}


def new_session_id() -> str:
    """Create a new raw session ID."""
    return str(uuid4())


async def create_session(player: PlayerState | None = None) -> str:
    """Register a player (a fresh one by default) and return its signed token."""
    session_id = new_session_id()
    if player is None:
        player = PlayerState(wallet=Wallet(config.game.starting_balance))
    await save_player(session_id, player)
    return get_session_signer().sign(session_id)


async def load_player(session_id: str) -> PlayerState | None:
    """
    Get the player for a raw session ID with balance and seeds read from the store.

    A session the store no longer has is dropped from the cache together with
    its parked rounds.
    """
    data = await (await get_session_store()).get(session_id)
    if data is None:
        _players.pop(session_id, None)
        return None

    player = _players.get(session_id)
    if player is None:
        player = PlayerState.from_dict(data)
        _players[session_id] = player
    else:
        player.refresh(data)
    return player


async def save_player(session_id: str, player: PlayerState) -> None:
    """Persist the player's balance and seed chain."""
    _players[session_id] = player
    await (await get_session_store()).set(session_id, player.to_dict())


async def delete_session(session_id: str) -> None:
    """Forget a session everywhere."""
    _players.pop(session_id, None)
    await (await get_session_store()).delete(session_id)


async def evict_stale_players() -> int:
    """Expire stored sessions and drop cached players whose record is gone."""
    store = await get_session_store()
    await store.cleanup_expired()
    stale = [sid for sid in list(_players) if not await store.exists(sid)]
    for sid in stale:
        _players.pop(sid, None)
    return len(stale)


def extract_session_id(token: str) -> str | None:
    """Return the raw session ID from a signed token, or None if invalid."""
    return get_session_signer().unsign(token)
