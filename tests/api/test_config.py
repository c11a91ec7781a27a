"""Tests for configuration classes."""

import os
import pytest
from decimal import Decimal
from unittest.mock import patch

from config import (
    AppConfig,
    CORSConfig,
    GameConfig,
    RateLimitConfig,
    RedisConfig,
    SecurityConfig,
    _parse_cors_origins,
)


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_default_origin(self):
        """Test the local development origin is allowed by default."""
        with patch.dict(os.environ, {}, clear=True):
            assert CORSConfig().allowed_origins == ["http://localhost:8000"]

    def test_parses_comma_separated_origins(self):
        """Test origins are split and stripped."""
        with patch.dict(os.environ, {"CORS_ORIGINS": " http://a.test , http://b.test ,"}):
            assert _parse_cors_origins() == ["http://a.test", "http://b.test"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            limits = RateLimitConfig()
            assert limits.enabled is True
            assert limits.requests_per_minute == 60

    @pytest.mark.parametrize("value", ["false", "0", "no", "off"])
    def test_only_true_enables(self, value):
        """Test anything but 'true' disables rate limiting."""
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": value, "RATE_LIMIT_RPM": "120"}):
            limits = RateLimitConfig()
            assert limits.enabled is False
            assert limits.requests_per_minute == 120


class TestSecurityConfig:
    """Tests for SecurityConfig class."""

    def test_secret_key_from_env(self):
        with patch.dict(os.environ, {"SECRET_KEY": "signing-key"}):
            assert SecurityConfig().secret_key == "signing-key"

    def test_secret_key_generated(self):
        with patch.dict(os.environ, {}, clear=True):
            assert len(SecurityConfig().secret_key) > 0


class TestRedisConfig:
    """Tests for RedisConfig class."""

    def test_disabled_by_default(self):
        """Test sessions stay in memory unless Redis is switched on."""
        with patch.dict(os.environ, {}, clear=True):
            redis = RedisConfig()
            assert redis.enabled is False
            assert redis.url == "redis://localhost:6379/0"

    def test_from_env(self):
        env = {
            "REDIS_ENABLED": "TRUE",
            "REDIS_HOST": "cache.internal",
            "REDIS_PORT": "6380",
            "REDIS_DB": "2",
            "REDIS_PASSWORD": "pw",
        }
        with patch.dict(os.environ, env):
            redis = RedisConfig()
            assert redis.enabled is True
            assert redis.url == "redis://:pw@cache.internal:6380/2"


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_table_limits(self):
        """Test each game carries its own table limits."""
        game = GameConfig()
        assert (game.blackjack.min_bet, game.blackjack.max_bet) == (Decimal("5"), Decimal("500"))
        assert (game.baccarat.min_bet, game.baccarat.max_bet) == (Decimal("5"), Decimal("1000"))
        assert (game.roulette.min_bet, game.roulette.max_bet) == (Decimal("1"), Decimal("500"))
        assert (game.video_poker.min_bet, game.video_poker.max_bet) == (
            Decimal("1"),
            Decimal("25"),
        )

    def test_starting_balance(self):
        with patch.dict(os.environ, {}, clear=True):
            assert GameConfig().starting_balance == Decimal("1000")
        with patch.dict(os.environ, {"CASINO_STARTING_BALANCE": "250.50"}):
            assert GameConfig().starting_balance == Decimal("250.50")

    def test_limits_from_env(self):
        """Test a table can be re-limited without touching the others."""
        with patch.dict(os.environ, {"ROULETTE_MIN_BET": "2", "ROULETTE_MAX_BET": "200"}):
            game = GameConfig()
            assert game.roulette.min_bet == Decimal("2")
            assert game.roulette.max_bet == Decimal("200")
            assert game.blackjack.max_bet == Decimal("500")

    def test_inverted_limits_rejected(self):
        with patch.dict(os.environ, {"VIDEO_POKER_MIN_BET": "30"}):
            with pytest.raises(ValueError):
                GameConfig()

    @pytest.mark.parametrize("value", ["five", "", "NaN"])
    def test_non_numeric_limits_rejected(self, value):
        """Test a malformed limit surfaces as ValueError, not a decimal signal."""
        with patch.dict(os.environ, {"BACCARAT_MIN_BET": value}):
            with pytest.raises(ValueError, match="BACCARAT"):
                GameConfig()

    def test_frozen(self):
        """Test that GameConfig is immutable."""
        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            GameConfig().starting_balance = Decimal("1")


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            app = AppConfig()
            assert app.debug is False
            assert app.host == "0.0.0.0"
            assert app.port == 8000
            assert app.session_ttl == 3600

    def test_debug_and_ttl_from_env(self):
        with patch.dict(os.environ, {"DEBUG": "True", "SESSION_TTL": "600"}):
            app = AppConfig()
            assert app.debug is True
            assert app.session_ttl == 600

    def test_nested_configs(self):
        app = AppConfig()
        assert isinstance(app.redis, RedisConfig)
        assert isinstance(app.game, GameConfig)
        assert isinstance(app.cors, CORSConfig)
        assert isinstance(app.rate_limit, RateLimitConfig)
        assert isinstance(app.security, SecurityConfig)
