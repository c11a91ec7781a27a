"""Deterministic randomness stream for provably-fair draws."""

import hashlib
from typing import Protocol

from casino.errors import InvalidRange

# 48 bits of each digest are used per draw
_FLOAT_BYTES = 6
_FLOAT_SCALE = 2**48


class FloatSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def next(self) -> float: ...


class RandomnessStream:
    """
    Hash-based stream of uniform floats in [0, 1).

    Each value is derived from SHA-256("<seed>:<nonce>:<counter>"), so anyone
    who learns the seed after the round can replay every draw in order.
    """

    def __init__(self, seed: str | bytes, nonce: str | int) -> None:
        """
        Initialize a stream.

        Args:
            seed: Session seed (bytes are hashed raw, strings as UTF-8)
            nonce: Per-round discriminator, rendered with str()
        """
        self._prefix = _as_bytes(seed) + b":" + str(nonce).encode("utf-8") + b":"
        self._seed = seed
        self._nonce = nonce
        self._counter = 0

    @property
    def seed(self) -> str | bytes:
        """Return the seed this stream was built from."""
        return self._seed

    @property
    def nonce(self) -> str | int:
        """Return the nonce this stream was built from."""
        return self._nonce

    @property
    def counter(self) -> int:
        """Return the number of values drawn so far."""
        return self._counter

    def next(self) -> float:
        """Return the next float in [0, 1) and advance the counter."""
        digest = hashlib.sha256(self._prefix + str(self._counter).encode("ascii")).digest()
        self._counter += 1
        return int.from_bytes(digest[:_FLOAT_BYTES], "big") / _FLOAT_SCALE

    def next_int(self, max_exclusive: int) -> int:
        """Return the next integer in [0, max_exclusive)."""
        return next_int(self, max_exclusive)

    def __repr__(self) -> str:
        return f"RandomnessStream(nonce={self._nonce!r}, counter={self._counter})"


def _as_bytes(seed: str | bytes) -> bytes:
    if isinstance(seed, bytes):
        return seed
    return str(seed).encode("utf-8")


def make_stream(seed: str | bytes, nonce: str | int) -> RandomnessStream:
    """Create a fresh stream positioned at counter 0."""
    return RandomnessStream(seed, nonce)


def next_int(stream: FloatSource, max_exclusive: int) -> int:
    """
    Map the next stream value onto an integer in [0, max_exclusive).

    Raises:
        InvalidRange: If max_exclusive is not a positive integer
    """
    if (
        isinstance(max_exclusive, bool)
        or not isinstance(max_exclusive, int)
        or max_exclusive <= 0
    ):
        raise InvalidRange(f"max_exclusive must be a positive integer, got {max_exclusive!r}")
    return int(stream.next() * max_exclusive)
