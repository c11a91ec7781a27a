"""Seed commitments and round replay for provably-fair play."""

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field

from casino.cards import Card, Deck
from casino.rng import make_stream, next_int

# Nonce prefix and deck copies per game
GAME_TAGS: dict[str, str] = {
    "blackjack": "bj",
    "baccarat": "bac",
    "roulette": "rl",
    "video_poker": "vp",
}
GAME_DECKS: dict[str, int] = {
    "blackjack": 6,
    "baccarat": 8,
    "video_poker": 1,
}
ROULETTE_POCKETS = 37


def generate_seed() -> str:
    """Return a fresh 256-bit seed, hex encoded."""
    return secrets.token_hex(32)


def commitment(seed: str | bytes) -> str:
    """Return the SHA-256 commitment published before any round is played."""
    data = seed if isinstance(seed, bytes) else seed.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def verify_commitment(seed: str | bytes, expected: str) -> bool:
    """Check a revealed seed against the commitment published earlier."""
    return hmac.compare_digest(commitment(seed), expected.lower())


def tagged_nonce(tag: str, nonce: int | str) -> str:
    """Scope a round nonce to one game, e.g. 'bj-7'."""
    return f"{tag}-{nonce}"


def game_nonce(game: str, nonce: int | str) -> str:
    """Return the tagged nonce a game's stream is built from."""
    if game not in GAME_TAGS:
        raise ValueError(f"Unknown game: {game}")
    return tagged_nonce(GAME_TAGS[game], nonce)


@dataclass
class SeedSession:
    """
    A committed seed and the strictly increasing round nonce used with it.

    The seed stays secret until `rotate()` reveals it; every round consumes
    one nonce so (seed, game, nonce) never repeats within a session.
    """

    seed: str = field(default_factory=generate_seed)
    nonce: int = 0

    @property
    def commitment(self) -> str:
        """Return the public commitment for the current seed."""
        return commitment(self.seed)

    def next_nonce(self) -> int:
        """Return the nonce for the next round and advance."""
        current = self.nonce
        self.nonce += 1
        return current

    def rotate(self) -> str:
        """Reveal the current seed and start over with a fresh one."""
        revealed = self.seed
        self.seed = generate_seed()
        self.nonce = 0
        return revealed


def replay_cards(seed: str | bytes, nonce: int | str, game: str, count: int) -> list[Card]:
    """
    Recompute the first `count` cards a round drew, in deal order.

    Player decisions only change how many cards a round draws, never which
    ones, so this covers every card game.
    """
    if game not in GAME_DECKS:
        raise ValueError(f"{game} does not deal cards")
    deck = Deck(GAME_DECKS[game])
    if not 0 <= count <= len(deck):
        raise ValueError(f"count must be between 0 and {len(deck)}")
    stream = make_stream(seed, game_nonce(game, nonce))
    return deck.draw_many(count, stream)


def replay_spin(seed: str | bytes, nonce: int | str) -> int:
    """Recompute the pocket a roulette round landed on."""
    stream = make_stream(seed, game_nonce("roulette", nonce))
    return next_int(stream, ROULETTE_POCKETS)
