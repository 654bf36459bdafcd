"""Blackjack round-resolution engine - 100% UI-agnostic."""

from blackjack.cards import Card, Shoe, Rank, Suit
from blackjack.dealer import DealerPolicy, StandOnAll17
from blackjack.errors import (
    BetRejection,
    BlackjackError,
    IllegalAction,
    InsufficientBankrollForSplit,
    InvalidBet,
)
from blackjack.hand import Hand, HandValue, evaluate
from blackjack.ledger import BankrollLedger

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "HandValue",
    "evaluate",
    "DealerPolicy",
    "StandOnAll17",
    "BankrollLedger",
    "BetRejection",
    "BlackjackError",
    "IllegalAction",
    "InsufficientBankrollForSplit",
    "InvalidBet",
]
