"""Tests for Card and Deck classes."""

import pytest
from hypothesis import given, strategies as st

from casino.cards import Card, Deck, Rank, Suit, draw_many, draw_one, fresh_deck
from casino.errors import DeckExhausted
from casino.rng import make_stream


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.rank.value == 1

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    @pytest.mark.parametrize(
        "rank, suit, code",
        [
            (Rank.ACE, Suit.SPADES, "AS"),
            (Rank.TEN, Suit.HEARTS, "10H"),
            (Rank.JACK, Suit.CLUBS, "JC"),
            (Rank.QUEEN, Suit.DIAMONDS, "QD"),
            (Rank.KING, Suit.SPADES, "KS"),
            (Rank.SEVEN, Suit.CLUBS, "7C"),
        ],
    )
    def test_card_code(self, rank, suit, code):
        """Test the audit-log encoding."""
        assert Card(rank, suit).code == code
        assert str(Card(rank, suit)) == code

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        """Test creating cards from strings with suit symbols."""
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    @pytest.mark.parametrize("bad", ["", "A", "1S", "11H", "AX"])
    def test_card_from_invalid_string(self, bad):
        """Test malformed strings are rejected."""
        with pytest.raises(ValueError):
            Card.from_string(bad)

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestDeck:
    """Tests for the Deck class."""

    def test_fresh_deck_has_52_unique_cards(self):
        """Test a single deck."""
        deck = fresh_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_canonical_order(self):
        """Test suit-major, rank-minor ordering."""
        cards = list(fresh_deck())
        assert cards[0] == Card(Rank.ACE, Suit.CLUBS)
        assert cards[12] == Card(Rank.KING, Suit.CLUBS)
        assert cards[13] == Card(Rank.ACE, Suit.DIAMONDS)
        assert cards[-1] == Card(Rank.KING, Suit.SPADES)

    @pytest.mark.parametrize("copies", [1, 6, 8])
    def test_multi_deck_shoe(self, copies):
        """Test concatenated decks hold every card once per copy."""
        deck = fresh_deck(copies)
        assert len(deck) == 52 * copies
        assert list(deck).count(Card(Rank.ACE, Suit.SPADES)) == copies

    def test_zero_copies_rejected(self):
        """Test a deck needs at least one copy."""
        with pytest.raises(ValueError):
            Deck(0)

    def test_draw_removes_card(self, deck, stream):
        """Test drawing shrinks the deck and removes the card."""
        card = draw_one(deck, stream)
        assert len(deck) == 51
        assert card not in list(deck)

    def test_draw_consumes_stream(self, deck, stream):
        """Test each draw consumes exactly one stream value."""
        draw_many(deck, 3, stream)
        assert stream.counter == 3

    def test_draw_from_empty_deck_raises(self, stream):
        """Test drawing from an empty deck."""
        deck = Deck.from_cards([])
        with pytest.raises(DeckExhausted):
            deck.draw(stream)

    def test_exhausting_a_deck(self, deck, stream):
        """Test a deck can be dealt out entirely, then fails."""
        cards = draw_many(deck, 52, stream)
        assert len(set(cards)) == 52
        with pytest.raises(DeckExhausted):
            draw_one(deck, stream)

    def test_deterministic_draws(self):
        """Test the same seed and nonce deal the same cards."""
        a = draw_many(fresh_deck(6), 20, make_stream("seed", "bj-4"))
        b = draw_many(fresh_deck(6), 20, make_stream("seed", "bj-4"))
        assert a == b

    def test_stacked_deck_deals_in_order(self, stack, last_card_stream):
        """Test the stacked-deck helper used throughout the engine tests."""
        deck = stack("AS", "KH", "2D")
        assert draw_many(deck, 3, last_card_stream) == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TWO, Suit.DIAMONDS),
        ]

    @given(
        copies=st.integers(min_value=1, max_value=8),
        n=st.integers(min_value=0, max_value=52),
        nonce=st.integers(min_value=0, max_value=10**6),
    )
    def test_draw_many_without_replacement(self, copies, n, nonce):
        """Test n draws shrink the deck by n and never repeat a physical card."""
        deck = fresh_deck(copies)
        before = list(deck)
        drawn = draw_many(deck, n, make_stream("property-seed", nonce))

        assert len(deck) == 52 * copies - n
        remaining = list(deck)
        for card in drawn:
            remaining.append(card)
        # Drawn plus remaining is exactly the original multiset
        assert sorted(remaining, key=repr) == sorted(before, key=repr)
