"""Pytest fixtures for blackjack engine tests."""

import pytest
from decimal import Decimal
from random import Random

from blackjack.cards import Card, Shoe, Rank, Suit
from blackjack.hand import Hand
from blackjack.ledger import BankrollLedger
from blackjack.game import RoundEngine


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled single-deck shoe."""
    return Shoe(rng=rng)


@pytest.fixture
def make_hand():
    """Build a hand from card strings like 'AS', '10D'."""

    def _make(*cards: str, bet: int | str = 0) -> Hand:
        hand = Hand(bet=Decimal(str(bet)))
        for code in cards:
            hand.add_card(Card.from_string(code))
        return hand

    return _make


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.KING, Suit.HEARTS))
    return hand


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    hand = Hand()
    hand.add_card(Card(Rank.EIGHT, Suit.CLUBS))
    hand.add_card(Card(Rank.EIGHT, Suit.DIAMONDS))
    return hand


@pytest.fixture
def bust_hand():
    """A busted hand."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    hand.add_card(Card(Rank.KING, Suit.CLUBS))
    return hand


@pytest.fixture
def ledger():
    """A ledger holding 100."""
    return BankrollLedger(Decimal("100"))


@pytest.fixture
def make_engine():
    """
    Build an engine whose every round is dealt from a stacked shoe.

    Cards are dealt in list order: player, dealer, player, dealer (hole),
    then hits, split cards and dealer draws as they happen.
    """

    def _make(cards: list[str], bankroll: int | str = 100, **kwargs) -> RoundEngine:
        return RoundEngine(
            initial_bankroll=Decimal(str(bankroll)),
            shoe_factory=lambda: Shoe.from_cards(cards, rng=Random(7)),
            **kwargs,
        )

    return _make


@pytest.fixture
def engine(rng):
    """A new engine with a seeded shoe."""
    return RoundEngine(initial_bankroll=Decimal("500"), rng=rng)
