"""Dealer drawing policies."""

from abc import ABC, abstractmethod

from blackjack.hand import HandValue
from blackjack.rules import DEALER_STAND_TOTAL


class DealerPolicy(ABC):
    """
    Decides whether the dealer draws another card.

    The round engine only asks the policy; it never inspects the rule
    itself, so a different house rule is a different policy object.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short description of the rule."""
        ...

    @abstractmethod
    def should_hit(self, hand_value: HandValue) -> bool:
        """Return True if the dealer must draw on this hand."""
        ...


class StandOnAll17(DealerPolicy):
    """Dealer hits below 17 and stands on every 17, soft or hard."""

    @property
    def name(self) -> str:
        return "Dealer stands on soft 17"

    def should_hit(self, hand_value: HandValue) -> bool:
        return hand_value.total < DEALER_STAND_TOTAL


DEFAULT_DEALER_POLICY = StandOnAll17()
