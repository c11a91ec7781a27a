"""Provably-fair casino engine - 100% UI-agnostic."""

from casino.cards import Card, Deck, Rank, Suit, draw_many, draw_one, fresh_deck
from casino.errors import (
    CasinoError,
    DeckExhausted,
    InsufficientFunds,
    InvalidAction,
    InvalidBetAmount,
    InvalidBetType,
    InvalidCreditAmount,
    InvalidRange,
    InvalidSelection,
)
from casino.hand import Hand
from casino.rng import RandomnessStream, make_stream, next_int
from casino.wallet import Wallet

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "draw_many",
    "draw_one",
    "fresh_deck",
    "CasinoError",
    "DeckExhausted",
    "InsufficientFunds",
    "InvalidAction",
    "InvalidBetAmount",
    "InvalidBetType",
    "InvalidCreditAmount",
    "InvalidRange",
    "InvalidSelection",
    "Hand",
    "RandomnessStream",
    "make_stream",
    "next_int",
    "Wallet",
]
