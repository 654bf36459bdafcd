"""Bankroll ledger."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """Kinds of bankroll movement."""

    CREDIT = auto()
    DEBIT = auto()
    HOLD = auto()
    RELEASE = auto()


@dataclass(frozen=True)
class LedgerEntry:
    """One recorded bankroll movement."""

    kind: EntryKind
    amount: Decimal
    balance: Decimal
    note: str = ""


def to_amount(value: int | float | str | Decimal) -> Decimal:
    """Convert a user or config supplied amount to Decimal."""
    return value if isinstance(value, Decimal) else Decimal(str(value))


class BankrollLedger:
    """
    Tracks the player's balance.

    Stakes that must be funded up front (the second wager of a split, the
    extra wager of a double down) are held: taken out of the balance at once
    and released again when the round settles. Settlement then credits or
    debits the outcome, so a round's net movement equals its outcomes.
    """

    def __init__(self, initial: int | float | str | Decimal = Decimal("500")) -> None:
        initial = to_amount(initial)
        if initial < 0:
            raise ValueError("Bankroll cannot start negative")
        self._balance = initial
        self._held = Decimal("0")
        self._entries: list[LedgerEntry] = []

    @property
    def balance(self) -> Decimal:
        """Funds currently available for betting."""
        return self._balance

    @property
    def held(self) -> Decimal:
        """Stakes debited for the round in progress and not yet released."""
        return self._held

    @property
    def entries(self) -> list[LedgerEntry]:
        return self._entries.copy()

    def can_cover(self, amount: Decimal) -> bool:
        """Check if the available balance covers an amount."""
        return self._balance >= amount

    def credit(self, amount: Decimal, note: str = "") -> Decimal:
        """Add winnings to the balance."""
        self._check_amount(amount)
        self._balance += amount
        self._record(EntryKind.CREDIT, amount, note)
        return self._balance

    def debit(self, amount: Decimal, note: str = "") -> Decimal:
        """Remove a loss from the balance."""
        self._check_amount(amount)
        self._balance -= amount
        self._record(EntryKind.DEBIT, amount, note)
        return self._balance

    def hold(self, amount: Decimal, note: str = "") -> Decimal:
        """Debit a stake immediately and remember it until release."""
        self._check_amount(amount)
        if not self.can_cover(amount):
            raise ValueError(f"Cannot hold {amount}, only {self._balance} available")
        self._balance -= amount
        self._held += amount
        self._record(EntryKind.HOLD, amount, note)
        return self._balance

    def release(self, amount: Decimal, note: str = "") -> Decimal:
        """Return a held stake to the balance."""
        self._check_amount(amount)
        if amount > self._held:
            raise ValueError(f"Cannot release {amount}, only {self._held} held")
        self._held -= amount
        self._balance += amount
        self._record(EntryKind.RELEASE, amount, note)
        return self._balance

    def _check_amount(self, amount: Decimal) -> None:
        if amount < 0:
            raise ValueError(f"Ledger amounts must be non-negative, got {amount}")

    def _record(self, kind: EntryKind, amount: Decimal, note: str) -> None:
        entry = LedgerEntry(kind=kind, amount=amount, balance=self._balance, note=note)
        self._entries.append(entry)
        logger.debug("%s %s (%s) -> balance %s", kind.name, amount, note, self._balance)

    def __repr__(self) -> str:
        return f"BankrollLedger(balance={self._balance}, held={self._held})"
