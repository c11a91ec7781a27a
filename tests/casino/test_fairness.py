"""Tests for seed commitments and replay."""

import hashlib

import pytest
from decimal import Decimal

from casino.cards import Deck
from casino.fairness import (
    SeedSession,
    commitment,
    game_nonce,
    generate_seed,
    replay_cards,
    replay_spin,
    verify_commitment,
)
from casino.game.blackjack import Action, play_round as play_blackjack
from casino.game.roulette import RouletteBet, play_round as play_roulette
from casino.game.video_poker import play_round as play_video_poker
from casino.rng import make_stream, next_int
from casino.wallet import Wallet


class TestCommitments:
    """Tests for seed commitments."""

    def test_generate_seed_is_256_bit_hex(self):
        seed = generate_seed()
        assert len(seed) == 64
        int(seed, 16)
        assert generate_seed() != seed

    def test_commitment_is_sha256(self):
        assert commitment("abc") == hashlib.sha256(b"abc").hexdigest()

    def test_verify_commitment(self):
        seed = generate_seed()
        assert verify_commitment(seed, commitment(seed))
        assert verify_commitment(seed, commitment(seed).upper())
        assert not verify_commitment(seed + "x", commitment(seed))


class TestNonces:
    """Tests for nonce tagging and sequencing."""

    @pytest.mark.parametrize(
        "game, tagged",
        [
            ("blackjack", "bj-3"),
            ("baccarat", "bac-3"),
            ("roulette", "rl-3"),
            ("video_poker", "vp-3"),
        ],
    )
    def test_game_nonce(self, game, tagged):
        assert game_nonce(game, 3) == tagged

    def test_unknown_game(self):
        with pytest.raises(ValueError):
            game_nonce("craps", 1)

    def test_seed_session_nonces_strictly_increase(self):
        session = SeedSession(seed="s")
        assert [session.next_nonce() for _ in range(3)] == [0, 1, 2]
        assert session.nonce == 3

    def test_rotate_reveals_and_resets(self):
        session = SeedSession(seed="old-seed", nonce=5)
        published = session.commitment

        revealed = session.rotate()

        assert revealed == "old-seed"
        assert verify_commitment(revealed, published)
        assert session.seed != "old-seed"
        assert session.nonce == 0
        assert session.commitment != published


class TestReplay:
    """Tests for recomputing rounds from a revealed seed."""

    def test_replay_cards_matches_blackjack_round(self):
        """Test a verifier recovers every card a blackjack round dealt."""
        outcome = play_blackjack(Wallet(Decimal("1000")), "seed", 4, 10, lambda r: Action.STAND)

        # Deal order: player, dealer, player, dealer, then dealer draws
        dealt = [outcome.player[0], outcome.dealer[0], outcome.player[1], outcome.dealer[1]]
        dealt += list(outcome.dealer[2:])
        assert replay_cards("seed", 4, "blackjack", len(dealt)) == dealt

    def test_replay_cards_matches_video_poker_round(self):
        """Test replacements follow the dealt cards in position order."""
        outcome = play_video_poker(Wallet(Decimal("100")), "seed", 9, 5, lambda dealt: [0, 2])

        replacements = [c for i, c in enumerate(outcome.final) if i not in (0, 2)]
        assert replay_cards("seed", 9, "video_poker", 8) == list(outcome.dealt) + replacements

    def test_replay_spin_matches_roulette_round(self):
        outcome = play_roulette(Wallet(Decimal("100")), "seed", 2, [RouletteBet.red(Decimal("5"))])
        assert replay_spin("seed", 2) == outcome.spin

    def test_replay_spin_is_stream_draw(self):
        assert replay_spin("seed", 2) == next_int(make_stream("seed", "rl-2"), 37)

    def test_replay_cards_uses_game_shoe(self):
        expected = Deck(8).draw_many(4, make_stream("seed", "bac-0"))
        assert replay_cards("seed", 0, "baccarat", 4) == expected

    def test_replay_rejects_roulette_and_oversized_counts(self):
        with pytest.raises(ValueError):
            replay_cards("seed", 0, "roulette", 1)
        with pytest.raises(ValueError):
            replay_cards("seed", 0, "video_poker", 53)
