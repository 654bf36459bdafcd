"""Recoverable error conditions raised by the engine."""

from decimal import Decimal
from enum import Enum, auto


class BetRejection(Enum):
    """Why a wager was refused."""

    NON_POSITIVE = auto()
    EXCEEDS_BANKROLL = auto()

    def __str__(self) -> str:
        return {
            BetRejection.NON_POSITIVE: "Bet must be positive",
            BetRejection.EXCEEDS_BANKROLL: "Bet cannot exceed bankroll",
        }[self]


class BlackjackError(Exception):
    """Base class for engine errors. None of them are fatal."""


class InvalidBet(BlackjackError):
    """Wager is non-positive or larger than the bankroll."""

    def __init__(self, reason: BetRejection, amount: Decimal) -> None:
        super().__init__(f"{reason}: {amount}")
        self.reason = reason
        self.amount = amount


class IllegalAction(BlackjackError):
    """Action is not in the legal set for the current decision point."""

    def __init__(self, action: object, message: str) -> None:
        super().__init__(message)
        self.action = action


class InsufficientBankrollForSplit(BlackjackError):
    """Not enough bankroll to fund the second wager of a split."""

    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(
            f"Not enough bankroll to split (need another {required}, have {available})"
        )
        self.required = required
        self.available = available
