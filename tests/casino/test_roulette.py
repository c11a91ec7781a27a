"""Tests for the roulette engine."""

import pytest
from decimal import Decimal

from casino.errors import InvalidBetAmount, InvalidBetType, InvalidSelection
from casino.fairness import replay_spin
from casino.game.events import EventType
from casino.game.roulette import (
    BetKind,
    Color,
    RouletteBet,
    RouletteRound,
    color_of,
    play_round,
    settle_bets,
    spin_wheel,
    validate_bets,
)
from casino.game.state import Result
from casino.rng import make_stream
from casino.wallet import Wallet


class TestWheel:
    """Tests for pocket colors and spins."""

    def test_zero_is_green(self):
        assert color_of(0) == Color.GREEN

    @pytest.mark.parametrize("number", [1, 3, 12, 19, 36])
    def test_red_numbers(self, number):
        assert color_of(number) == Color.RED

    @pytest.mark.parametrize("number", [2, 10, 11, 20, 35])
    def test_black_numbers(self, number):
        assert color_of(number) == Color.BLACK

    def test_eighteen_of_each(self):
        colors = [color_of(n) for n in range(37)]
        assert colors.count(Color.RED) == 18
        assert colors.count(Color.BLACK) == 18

    def test_spin_in_range(self):
        stream = make_stream("seed", "rl-0")
        spins = [spin_wheel(stream) for _ in range(500)]
        assert all(0 <= s <= 36 for s in spins)
        assert stream.counter == 500


class TestBets:
    """Tests for bet matching and payout."""

    def test_straight(self):
        bet = RouletteBet.straight(17, Decimal("5"))
        assert bet.wins(17)
        assert not bet.wins(18)
        assert bet.payout(17) == Decimal("180")

    def test_red_and_black(self):
        assert RouletteBet.red(Decimal("10")).payout(1) == Decimal("20")
        assert RouletteBet.black(Decimal("10")).payout(1) == Decimal("0")

    def test_zero_loses_outside_bets(self):
        """Test zero beats every even-money and dozen bet."""
        for bet in (
            RouletteBet.red(Decimal("1")),
            RouletteBet.black(Decimal("1")),
            RouletteBet.odd(Decimal("1")),
            RouletteBet.even(Decimal("1")),
            RouletteBet.dozen_of(1, Decimal("1")),
        ):
            assert not bet.wins(0)

    def test_odd_even(self):
        assert RouletteBet.odd(Decimal("1")).wins(7)
        assert RouletteBet.even(Decimal("1")).wins(36)
        assert not RouletteBet.even(Decimal("1")).wins(7)

    @pytest.mark.parametrize(
        "dozen,inside,outside", [(1, 12, 13), (2, 13, 25), (3, 36, 24)]
    )
    def test_dozens(self, dozen, inside, outside):
        bet = RouletteBet.dozen_of(dozen, Decimal("10"))
        assert bet.wins(inside)
        assert not bet.wins(outside)
        assert bet.payout(inside) == Decimal("30")

    def test_multiples(self):
        assert BetKind.STRAIGHT.multiple == 35
        assert BetKind.DOZEN.multiple == 2
        assert BetKind.RED.multiple == 1

    @pytest.mark.parametrize("number", [-1, 37, None, True, 1.0])
    def test_straight_needs_valid_number(self, number):
        with pytest.raises(InvalidSelection):
            RouletteBet(BetKind.STRAIGHT, Decimal("1"), number=number)

    @pytest.mark.parametrize("dozen", [0, 4, None, True])
    def test_dozen_needs_valid_dozen(self, dozen):
        with pytest.raises(InvalidSelection):
            RouletteBet(BetKind.DOZEN, Decimal("1"), dozen=dozen)

    def test_outside_bet_takes_no_number(self):
        with pytest.raises(InvalidSelection):
            RouletteBet(BetKind.RED, Decimal("1"), number=5)

    def test_parse_kind(self):
        assert BetKind.parse("Dozen") == BetKind.DOZEN
        with pytest.raises(InvalidBetType):
            BetKind.parse("split")


class TestSettlement:
    """Tests for independent settlement of several bets."""

    def test_zero_with_red_and_straight_zero(self):
        """Test spin 0 loses red and pays straight-0 at 35:1."""
        bets = [RouletteBet.red(Decimal("10")), RouletteBet.straight(0, Decimal("5"))]
        results, total = settle_bets(bets, 0)
        assert [r.result for r in results] == [Result.LOSE, Result.WIN]
        assert results[1].payout == Decimal("180")
        assert total == Decimal("180")

    def test_no_bets(self):
        results, total = settle_bets([], 12)
        assert results == []
        assert total == Decimal("0")


class TestValidation:
    """Tests for limits and balance checks."""

    def test_each_bet_within_limits(self):
        with pytest.raises(InvalidBetAmount):
            validate_bets([RouletteBet.red(Decimal("0.5"))], 1, 500, Decimal("100"))
        with pytest.raises(InvalidBetAmount):
            validate_bets([RouletteBet.red(Decimal("501"))], 1, 500, Decimal("1000"))

    def test_total_within_balance(self):
        """Test bets that fit individually but not together are refused."""
        bets = [RouletteBet.red(Decimal("60")), RouletteBet.black(Decimal("60"))]
        with pytest.raises(InvalidBetAmount):
            validate_bets(bets, 1, 500, Decimal("100"))

    def test_amounts_rounded_to_cents(self):
        checked = validate_bets([RouletteBet.odd(Decimal("2.005"))], 1, 500, Decimal("100"))
        assert checked[0].amount == Decimal("2.01")
        assert checked[0].kind == BetKind.ODD


class TestRound:
    """Tests for full spins."""

    def test_play_debits_spins_and_pays(self, wallet):
        stream = make_stream("seed", "rl-5")
        spin = replay_spin("seed", 5)
        bets = [RouletteBet.straight(spin, Decimal("5")), RouletteBet.red(Decimal("10"))]
        round_ = RouletteRound(wallet, bets, stream)
        outcome = round_.play()

        assert outcome.spin == spin
        assert outcome.wagered == Decimal("15")
        assert outcome.results[0].result == Result.WIN
        assert wallet.balance == Decimal("985") + outcome.settlement
        assert len(round_.events.of_type(EventType.STAKE_DEBITED)) == 2
        assert len(round_.events.of_type(EventType.BET_RESOLVED)) == 2

    def test_play_round_matches_replay(self):
        wallet = Wallet(Decimal("100"))
        outcome = play_round(wallet, "seed", 3, [RouletteBet.even(Decimal("10"))])
        assert outcome.spin == replay_spin("seed", 3)
        assert outcome.color == color_of(outcome.spin)

    def test_empty_bet_list_still_spins(self):
        wallet = Wallet(Decimal("100"))
        outcome = play_round(wallet, "seed", 3, [])
        assert outcome.results == ()
        assert outcome.wagered == Decimal("0")
        assert wallet.balance == Decimal("100")

    def test_invalid_bets_leave_wallet_untouched(self):
        wallet = Wallet(Decimal("100"))
        bets = [RouletteBet.red(Decimal("90")), RouletteBet.black(Decimal("20"))]
        with pytest.raises(InvalidBetAmount):
            play_round(wallet, "seed", 1, bets)
        assert wallet.balance == Decimal("100")
