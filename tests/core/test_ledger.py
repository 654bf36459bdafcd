"""Tests for the bankroll ledger."""

from decimal import Decimal

import pytest

from blackjack.ledger import BankrollLedger, EntryKind, to_amount


class TestBankrollLedger:
    """Tests for BankrollLedger."""

    def test_initial_balance(self, ledger):
        assert ledger.balance == Decimal("100")
        assert ledger.held == Decimal("0")
        assert ledger.entries == []

    def test_accepts_plain_numbers(self):
        assert BankrollLedger(250).balance == Decimal("250")
        assert BankrollLedger("12.50").balance == Decimal("12.50")

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            BankrollLedger(-1)

    def test_credit_and_debit(self, ledger):
        ledger.credit(Decimal("15"), note="win")
        ledger.debit(Decimal("40"), note="loss")
        assert ledger.balance == Decimal("75")
        assert [e.kind for e in ledger.entries] == [EntryKind.CREDIT, EntryKind.DEBIT]
        assert ledger.entries[-1].balance == Decimal("75")

    def test_negative_amounts_rejected(self, ledger):
        with pytest.raises(ValueError):
            ledger.credit(Decimal("-5"))
        with pytest.raises(ValueError):
            ledger.debit(Decimal("-5"))

    def test_hold_debits_immediately(self, ledger):
        """Test that held stakes leave the balance at once."""
        ledger.hold(Decimal("30"), note="split")
        assert ledger.balance == Decimal("70")
        assert ledger.held == Decimal("30")

    def test_release_returns_stake(self, ledger):
        ledger.hold(Decimal("30"))
        ledger.release(Decimal("30"))
        assert ledger.balance == Decimal("100")
        assert ledger.held == Decimal("0")

    def test_cannot_hold_more_than_balance(self, ledger):
        with pytest.raises(ValueError):
            ledger.hold(Decimal("101"))
        assert ledger.balance == Decimal("100")

    def test_cannot_release_more_than_held(self, ledger):
        ledger.hold(Decimal("10"))
        with pytest.raises(ValueError):
            ledger.release(Decimal("11"))

    def test_can_cover(self, ledger):
        assert ledger.can_cover(Decimal("100"))
        assert not ledger.can_cover(Decimal("100.01"))

    def test_entries_are_a_copy(self, ledger):
        ledger.credit(Decimal("1"))
        ledger.entries.clear()
        assert len(ledger.entries) == 1


def test_to_amount():
    """Test amount conversion keeps exact decimal values."""
    assert to_amount(10) == Decimal("10")
    assert to_amount(0.1) == Decimal("0.1")
    assert to_amount("7.5") == Decimal("7.5")
    amount = Decimal("3")
    assert to_amount(amount) is amount
