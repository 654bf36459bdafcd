"""Fixed table rules.

Single 52-card deck reshuffled every round, blackjack pays 3:2, dealer
stands on all 17s, one split per round with one card to split aces,
double on the first two cards only.
"""

from decimal import Decimal

BLACKJACK_TOTAL = 21

# Difference between an ace counted as 11 and as 1
ACE_REDUCTION = 10

BLACKJACK_PAYOUT = Decimal("1.5")

DEALER_STAND_TOTAL = 17
