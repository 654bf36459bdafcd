"""Tests for wager settlement."""

from decimal import Decimal

from blackjack.game.settlement import (
    HandOutcome,
    Outcome,
    is_natural_round,
    net_change,
    settle_hand,
    settle_natural,
    settle_round,
)


class TestNaturals:
    """Tests for rounds ended by blackjack."""

    def test_player_natural_pays_three_to_two(self, make_hand):
        player = make_hand("AS", "KH", bet=10)
        dealer = make_hand("9C", "8D")
        outcome = settle_natural(player, dealer)
        assert outcome == HandOutcome(0, Outcome.WIN, Decimal("15"), natural=True)

    def test_odd_bet_natural_is_exact(self, make_hand):
        outcome = settle_natural(make_hand("AS", "KH", bet=5), make_hand("9C", "8D"))
        assert outcome.amount == Decimal("7.5")

    def test_dealer_natural_takes_bet(self, make_hand):
        outcome = settle_natural(make_hand("9S", "8H", bet=10), make_hand("AC", "QD"))
        assert outcome.outcome == Outcome.LOSS
        assert outcome.net == Decimal("-10")

    def test_both_natural_push(self, make_hand):
        outcome = settle_natural(make_hand("AS", "KH", bet=10), make_hand("AC", "QD"))
        assert outcome.outcome == Outcome.PUSH
        assert outcome.net == Decimal("0")

    def test_is_natural_round(self, make_hand):
        assert is_natural_round([make_hand("AS", "KH")], make_hand("9C", "8D"))
        assert is_natural_round([make_hand("9S", "8H")], make_hand("AC", "QD"))
        assert not is_natural_round([make_hand("9S", "8H")], make_hand("10C", "QD"))

    def test_split_21_is_not_natural(self, make_hand):
        """Test that a split hand of two cards totalling 21 is paid even money."""
        first = make_hand("AS", "KH", bet=10)
        first.is_split_hand = True
        second = make_hand("AD", "5C", bet=10)
        second.is_split_hand = True
        dealer = make_hand("10C", "8D")

        assert not is_natural_round([first, second], dealer)
        outcomes = settle_round([first, second], dealer)
        assert outcomes[0] == HandOutcome(0, Outcome.WIN, Decimal("10"))
        assert outcomes[1] == HandOutcome(1, Outcome.LOSS, Decimal("10"))


class TestPlayedHands:
    """Tests for hands settled after play."""

    def test_bust_loses_even_if_dealer_busts(self, bust_hand, make_hand):
        bust_hand.bet = Decimal("10")
        outcome = settle_hand(0, bust_hand, make_hand("10C", "6D", "QS"))
        assert outcome.outcome == Outcome.LOSS

    def test_dealer_bust_pays_bet(self, make_hand):
        outcome = settle_hand(0, make_hand("10S", "2H", bet=10), make_hand("10C", "6D", "QS"))
        assert outcome == HandOutcome(0, Outcome.WIN, Decimal("10"))

    def test_doubled_loss_is_doubled_bet(self, make_hand):
        hand = make_hand("10S", "6H", "2C", bet=20)
        hand.is_doubled = True
        outcome = settle_hand(0, hand, make_hand("10C", "9D"))
        assert outcome.net == Decimal("-20")

    def test_push_amount_is_zero(self, make_hand):
        outcome = settle_hand(1, make_hand("10S", "8H", bet=10), make_hand("10C", "8D"))
        assert outcome == HandOutcome(1, Outcome.PUSH)

    def test_split_hands_settle_independently(self, make_hand):
        dealer = make_hand("10C", "8D")
        hands = [make_hand("8S", "KH", bet=10), make_hand("8H", "9C", bet=10)]
        for hand in hands:
            hand.is_split_hand = True

        outcomes = settle_round(hands, dealer)

        assert [o.outcome for o in outcomes] == [Outcome.PUSH, Outcome.WIN]
        assert net_change(outcomes) == Decimal("10")

    def test_settlement_is_deterministic(self, make_hand):
        """Test that settling the same final hands twice gives the same result."""
        dealer = make_hand("10C", "6D", "3S")
        hands = [make_hand("10S", "9H", bet=10)]
        assert settle_round(hands, dealer) == settle_round(hands, dealer)
        assert len(dealer) == 3


def test_net_change_empty():
    assert net_change([]) == Decimal("0")
