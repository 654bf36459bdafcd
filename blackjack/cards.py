"""Card and Shoe classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Callable, Iterable, Iterator


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the base point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_RANK_CODES = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

_SUIT_CODES = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the base point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])


def full_deck() -> list[Card]:
    """Return the 52 distinct cards in suit-then-rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Shoe:
    """
    A single 52-card deck that refills itself.

    Drawing from an exhausted shoe transparently refills it with a complete,
    freshly shuffled deck before the draw is satisfied.
    """

    DECK_SIZE = 52

    def __init__(
        self,
        rng: Random | None = None,
        on_shuffle: Callable[[], None] | None = None,
    ) -> None:
        """
        Initialize a shuffled shoe.

        Args:
            rng: Random number generator for shuffling
            on_shuffle: Called every time the shoe is refilled and reshuffled
        """
        self._rng = rng or Random()
        self.on_shuffle = on_shuffle
        self._cards: list[Card] = []
        self.shuffle()

    @classmethod
    def from_cards(
        cls,
        cards: Iterable[Card | str],
        rng: Random | None = None,
    ) -> "Shoe":
        """
        Build a shoe that deals the given cards first, in order.

        Cards may be given as Card objects or strings ('AS', '10♦').
        Once these run out the shoe refills like any other.
        """
        stacked = [c if isinstance(c, Card) else Card.from_string(c) for c in cards]
        if len(stacked) > cls.DECK_SIZE or len(set(stacked)) != len(stacked):
            raise ValueError("A shoe holds at most 52 distinct cards")

        shoe = cls(rng=rng)
        # draw() pops from the end
        shoe._cards = list(reversed(stacked))
        return shoe

    def shuffle(self) -> None:
        """Refill with all 52 cards and shuffle them."""
        self._cards = full_deck()
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card, refilling the shoe first if it is empty."""
        if not self._cards:
            self.shuffle()
            if self.on_shuffle is not None:
                self.on_shuffle()
        return self._cards.pop()

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
