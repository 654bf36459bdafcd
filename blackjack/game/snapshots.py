"""Read-only views of the round handed to the interaction shell."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from blackjack.cards import Card
from blackjack.errors import BetRejection
from blackjack.game.settlement import HandOutcome
from blackjack.game.state import RoundState
from blackjack.hand import Hand


class Action(Enum):
    """Player decisions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BetResult:
    """Answer to a wager: accepted, or rejected with a reason."""

    accepted: bool
    amount: Decimal
    reason: BetRejection | None = None

    @classmethod
    def accept(cls, amount: Decimal) -> "BetResult":
        return cls(accepted=True, amount=amount)

    @classmethod
    def reject(cls, amount: Decimal, reason: BetRejection) -> "BetResult":
        return cls(accepted=False, amount=amount, reason=reason)


@dataclass(frozen=True)
class HandSnapshot:
    """State of one player hand."""

    index: int
    cards: tuple[Card, ...]
    total: int
    is_soft: bool
    bet: Decimal
    is_doubled: bool
    forced_stand: bool
    is_blackjack: bool
    is_busted: bool
    is_finished: bool

    @classmethod
    def from_hand(cls, index: int, hand: Hand, is_finished: bool) -> "HandSnapshot":
        value = hand.evaluation
        return cls(
            index=index,
            cards=tuple(hand.cards),
            total=value.total,
            is_soft=value.is_soft,
            bet=hand.bet,
            is_doubled=hand.is_doubled,
            forced_stand=hand.forced_stand,
            is_blackjack=hand.is_blackjack and not hand.is_split_hand,
            is_busted=hand.is_busted,
            is_finished=is_finished,
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_busted:
            return f"{cards_str} (BUST {self.total})"
        if self.is_blackjack:
            return f"{cards_str} (BLACKJACK)"
        if self.is_soft:
            return f"{cards_str} (soft {self.total})"
        return f"{cards_str} ({self.total})"


@dataclass(frozen=True)
class RoundSnapshot:
    """
    What the player can see of the round.

    While the hole card is hidden, ``dealer_cards`` holds the upcard only
    and ``dealer_total`` is the upcard's value.
    """

    state: RoundState
    dealer_cards: tuple[Card, ...]
    dealer_total: int
    dealer_hole_hidden: bool
    player_hands: tuple[HandSnapshot, ...]
    active_hand_index: int | None
    bankroll: Decimal

    @property
    def dealer_upcard(self) -> Card | None:
        return self.dealer_cards[0] if self.dealer_cards else None


@dataclass(frozen=True)
class RoundResult:
    """Settled round: ordered per-hand outcomes and the new bankroll."""

    outcomes: tuple[HandOutcome, ...]
    dealer_cards: tuple[Card, ...]
    dealer_total: int
    dealer_busted: bool
    bankroll: Decimal
    net: Decimal
