"""Tests for dealer policies."""

import pytest

from blackjack.dealer import DEFAULT_DEALER_POLICY, DealerPolicy, StandOnAll17


class TestStandOnAll17:
    """Tests for the fixed house rule."""

    def test_default_policy(self):
        assert isinstance(DEFAULT_DEALER_POLICY, StandOnAll17)

    def test_stands_on_soft_17(self, soft_17_hand):
        """Test that A-6 stands."""
        assert not StandOnAll17().should_hit(soft_17_hand.evaluation)

    def test_stands_on_hard_17(self, make_hand):
        """Test that 10-7 stands."""
        assert not StandOnAll17().should_hit(make_hand("10S", "7H").evaluation)

    def test_hits_16(self, hard_16_hand):
        """Test that 10-6 hits."""
        assert StandOnAll17().should_hit(hard_16_hand.evaluation)

    def test_hits_soft_16(self, make_hand):
        assert StandOnAll17().should_hit(make_hand("AS", "5H").evaluation)

    @pytest.mark.parametrize("codes", [("10S", "8H"), ("AS", "9H"), ("KS", "QH"), ("10S", "6H", "KC")])
    def test_stands_above_17_and_on_bust(self, make_hand, codes):
        assert not StandOnAll17().should_hit(make_hand(*codes).evaluation)

    def test_policy_is_abstract(self):
        """Test that the seam cannot be used without a rule."""
        with pytest.raises(TypeError):
            DealerPolicy()

    def test_name(self):
        assert "soft 17" in StandOnAll17().name
