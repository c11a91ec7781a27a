"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from casino.money import (
    BACCARAT_LIMITS,
    BLACKJACK_LIMITS,
    ROULETTE_LIMITS,
    VIDEO_POKER_LIMITS,
    TableLimits,
)


def _env_flag(name: str, default: bool) -> bool:
    """Only the literal 'true' (any case) switches a flag on."""
    return os.getenv(name, "true" if default else "false").lower() == "true"


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _table_limits(game: str, default: TableLimits) -> TableLimits:
    """
    Read `<GAME>_MIN_BET` / `<GAME>_MAX_BET`, falling back to the house limits.

    Raises:
        ValueError: If the limits are not numbers, inverted or not positive
    """
    prefix = game.upper()
    min_bet = os.getenv(f"{prefix}_MIN_BET", str(default.min_bet))
    max_bet = os.getenv(f"{prefix}_MAX_BET", str(default.max_bet))
    try:
        return TableLimits.of(min_bet, max_bet)
    except InvalidOperation as exc:
        raise ValueError(
            f"{prefix} table limits must be numbers, got {min_bet!r} and {max_bet!r}"
        ) from exc


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", True))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Key used to sign session tokens."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY") or secrets.token_urlsafe(32)
    )


@dataclass(frozen=True)
class RedisConfig:
    """Redis session backend; off unless REDIS_ENABLED=true."""

    enabled: bool = field(default_factory=lambda: _env_flag("REDIS_ENABLED", False))
    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class GameConfig:
    """Starting balance and table limits for every game."""

    starting_balance: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("CASINO_STARTING_BALANCE", "1000"))
    )
    blackjack: TableLimits = field(
        default_factory=lambda: _table_limits("blackjack", BLACKJACK_LIMITS)
    )
    baccarat: TableLimits = field(
        default_factory=lambda: _table_limits("baccarat", BACCARAT_LIMITS)
    )
    roulette: TableLimits = field(
        default_factory=lambda: _table_limits("roulette", ROULETTE_LIMITS)
    )
    video_poker: TableLimits = field(
        default_factory=lambda: _table_limits("video_poker", VIDEO_POKER_LIMITS)
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", False))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = field(default_factory=lambda: int(os.getenv("SESSION_TTL", "3600")))
    session_sweep_interval: int = field(
        default_factory=lambda: int(os.getenv("SESSION_SWEEP_INTERVAL", "60"))
    )

    redis: RedisConfig = field(default_factory=RedisConfig)
    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
