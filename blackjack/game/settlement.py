"""Wager settlement.

Pure functions of the final hands: settling the same hands twice always
gives the same outcomes.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Sequence

from blackjack.hand import Hand, compare_hands
from blackjack.rules import BLACKJACK_PAYOUT


class Outcome(Enum):
    """Result of one player hand."""

    WIN = auto()
    LOSS = auto()
    PUSH = auto()

    def __str__(self) -> str:
        return self.name.title()


@dataclass(frozen=True)
class HandOutcome:
    """Outcome of one hand and the amount won or lost."""

    hand_index: int
    outcome: Outcome
    amount: Decimal = Decimal("0")
    natural: bool = False

    @property
    def net(self) -> Decimal:
        """Signed bankroll change for this hand."""
        if self.outcome == Outcome.WIN:
            return self.amount
        if self.outcome == Outcome.LOSS:
            return -self.amount
        return Decimal("0")


def is_natural_round(player_hands: Sequence[Hand], dealer_hand: Hand) -> bool:
    """
    Check if the round ended on the natural check.

    Only the single, unsplit opening hand can hold a natural, and the
    dealer keeps exactly two cards when either side has one.
    """
    if len(player_hands) != 1 or player_hands[0].is_split_hand:
        return False
    return player_hands[0].is_blackjack or dealer_hand.is_blackjack


def settle_natural(player_hand: Hand, dealer_hand: Hand) -> HandOutcome:
    """Settle a round in which either side was dealt blackjack."""
    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack

    if player_bj and dealer_bj:
        return HandOutcome(0, Outcome.PUSH, natural=True)
    if player_bj:
        return HandOutcome(0, Outcome.WIN, player_hand.bet * BLACKJACK_PAYOUT, natural=True)
    return HandOutcome(0, Outcome.LOSS, player_hand.bet, natural=True)


def settle_hand(hand_index: int, hand: Hand, dealer_hand: Hand) -> HandOutcome:
    """Settle one played hand against the final dealer hand."""
    result = compare_hands(hand, dealer_hand)
    if result > 0:
        return HandOutcome(hand_index, Outcome.WIN, hand.bet)
    if result < 0:
        return HandOutcome(hand_index, Outcome.LOSS, hand.bet)
    return HandOutcome(hand_index, Outcome.PUSH)


def settle_round(player_hands: Sequence[Hand], dealer_hand: Hand) -> list[HandOutcome]:
    """
    Settle every player hand, in order.

    Split hands settle independently against the same dealer hand.
    """
    if is_natural_round(player_hands, dealer_hand):
        return [settle_natural(player_hands[0], dealer_hand)]
    return [settle_hand(i, hand, dealer_hand) for i, hand in enumerate(player_hands)]


def net_change(outcomes: Sequence[HandOutcome]) -> Decimal:
    """Total bankroll change of a set of outcomes."""
    return sum((o.net for o in outcomes), Decimal("0"))
