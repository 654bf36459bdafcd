"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator, NamedTuple

from blackjack.cards import Card
from blackjack.rules import ACE_REDUCTION, BLACKJACK_TOTAL


class HandValue(NamedTuple):
    """Total of a hand and whether an ace still counts as 11."""

    total: int
    is_soft: bool


def evaluate(cards: Iterable[Card]) -> HandValue:
    """
    Compute the best total and softness of a sequence of cards.

    Aces start at 11 and are re-counted as 1, one at a time, while the
    total is over 21. Softness is derived from the hard total (every ace
    counted as 1): the hand is soft when it holds an ace and the hard total
    plus 10 does not bust.
    """
    total = 0
    hard_total = 0
    aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            aces += 1
            hard_total += 1
        else:
            hard_total += card.value

    reductions = aces
    while total > BLACKJACK_TOTAL and reductions > 0:
        total -= ACE_REDUCTION
        reductions -= 1

    is_soft = aces > 0 and hard_total + ACE_REDUCTION <= BLACKJACK_TOTAL
    return HandValue(total, is_soft)


@dataclass
class Hand:
    """A blackjack hand with its wager and per-hand flags."""

    cards: list[Card] = field(default_factory=list)
    bet: Decimal = Decimal("0")
    is_doubled: bool = False
    is_split_hand: bool = False
    forced_stand: bool = False
    # Part of the wager already debited from the bankroll
    held: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if self.bet < 0:
            raise ValueError("Hand bet cannot be negative")

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def evaluation(self) -> HandValue:
        """Return the (total, is_soft) pair for the current cards."""
        return evaluate(self.cards)

    @property
    def value(self) -> int:
        """Best total: the highest value that doesn't bust, or the lowest bust value."""
        return self.evaluation.total

    @property
    def is_soft(self) -> bool:
        """Check if an ace is currently counted as 11."""
        return self.evaluation.is_soft

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == BLACKJACK_TOTAL

    @property
    def is_busted(self) -> bool:
        return self.value > BLACKJACK_TOTAL

    @property
    def is_pair(self) -> bool:
        """
        Check if the hand is a pair.

        Ranks must be identical: a Jack and a King are worth the same but
        are not a pair.
        """
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    @property
    def can_split(self) -> bool:
        """Check if the hand is an unsplit pair."""
        return self.is_pair and not self.is_split_hand

    @property
    def can_double(self) -> bool:
        """Check if the hand can be doubled down."""
        return len(self.cards) == 2 and not self.is_doubled and not self.forced_stand

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack and not self.is_split_hand:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = f"(BUST {self.value})"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value}, bet={self.bet})"


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare a finished player hand against the final dealer hand.

    Naturals are settled before play begins, so only totals matter here.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    # Player busts always loses, even if the dealer busts too
    if player_hand.is_busted:
        return -1

    if dealer_hand.is_busted:
        return 1

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
