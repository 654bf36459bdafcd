"""Round engine with state machine."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from random import Random
from typing import Callable

from transitions import Machine

from blackjack.cards import Card, Shoe
from blackjack.dealer import DEFAULT_DEALER_POLICY, DealerPolicy
from blackjack.errors import (
    BetRejection,
    IllegalAction,
    InsufficientBankrollForSplit,
    InvalidBet,
)
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.settlement import Outcome, net_change, settle_round
from blackjack.game.snapshots import (
    Action,
    BetResult,
    HandSnapshot,
    RoundResult,
    RoundSnapshot,
)
from blackjack.game.state import RoundState
from blackjack.hand import Hand, evaluate
from blackjack.ledger import BankrollLedger, to_amount

logger = logging.getLogger(__name__)

# States in which the dealer's second card is still face down
_HOLE_CARD_HIDDEN = {
    RoundState.AWAITING_BET,
    RoundState.INITIAL_DEAL,
    RoundState.NATURAL_CHECK,
    RoundState.SPLIT_DECISION,
    RoundState.PLAYER_TURN,
}


@dataclass
class Round:
    """Everything that belongs to one bet-play-settle cycle."""

    bet: Decimal
    dealer_hand: Hand = field(default_factory=Hand)
    player_hands: list[Hand] = field(default_factory=list)
    # Hands before this index are finished
    active_index: int = 0
    split_used: bool = False
    result: RoundResult | None = None

    @property
    def active_hand(self) -> Hand | None:
        if 0 <= self.active_index < len(self.player_hands):
            return self.player_hands[self.active_index]
        return None


class RoundEngine:
    """
    Blackjack round engine using a state machine.

    One player against the dealer. The engine never prompts: the shell asks
    for the legal actions, applies one, and reads snapshots and events.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "bet_accepted", "source": "awaiting_bet", "dest": "initial_deal"},
        {"trigger": "cards_dealt", "source": "initial_deal", "dest": "natural_check"},
        {"trigger": "natural_found", "source": "natural_check", "dest": "settlement"},
        {"trigger": "pair_dealt", "source": "natural_check", "dest": "split_decision"},
        {"trigger": "no_pair_dealt", "source": "natural_check", "dest": "player_turn"},
        {"trigger": "split_resolved", "source": "split_decision", "dest": "player_turn"},
        {"trigger": "hand_played", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "hands_done", "source": "player_turn", "dest": "dealer_reveal"},
        {"trigger": "all_hands_bust", "source": "player_turn", "dest": "settlement"},
        {"trigger": "hole_card_revealed", "source": "dealer_reveal", "dest": "dealer_play"},
        {"trigger": "dealer_finished", "source": "dealer_play", "dest": "settlement"},
        {"trigger": "outcomes_recorded", "source": "settlement", "dest": "round_settled"},
        {"trigger": "reset_round", "source": "round_settled", "dest": "awaiting_bet"},
    ]

    def __init__(
        self,
        initial_bankroll: int | str | Decimal = Decimal("500"),
        dealer_policy: DealerPolicy | None = None,
        rng: Random | None = None,
        shoe_factory: Callable[[], Shoe] | None = None,
    ) -> None:
        """
        Initialize a new engine.

        Args:
            initial_bankroll: Starting bankroll
            dealer_policy: Dealer drawing rule (stands on all 17s if not provided)
            rng: Random number generator for reproducible games
            shoe_factory: Builds the fresh shoe used for each round
        """
        self.ledger = BankrollLedger(initial_bankroll)
        self.dealer_policy = dealer_policy or DEFAULT_DEALER_POLICY
        self._rng = rng or Random()
        self._shoe_factory = shoe_factory or (lambda: Shoe(rng=self._rng))
        self.shoe: Shoe | None = None
        self.round: Round | None = None
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_log_state_change",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def bankroll(self) -> Decimal:
        return self.ledger.balance

    @property
    def is_bankrupt(self) -> bool:
        """Check if there is nothing left to bet."""
        return self.state == RoundState.AWAITING_BET and self.ledger.balance <= 0

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _log_state_change(self) -> None:
        logger.debug("Round state -> %s", self.state.name)

    # Betting

    def validate_bet(self, amount: int | float | str | Decimal) -> Decimal:
        """
        Check a wager against the bankroll.

        Raises:
            InvalidBet: if the amount is not positive or exceeds the bankroll
        """
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidBet(BetRejection.NON_POSITIVE, amount)
        if not self.ledger.can_cover(amount):
            raise InvalidBet(BetRejection.EXCEEDS_BANKROLL, amount)
        return amount

    def place_bet(self, amount: int | float | str | Decimal) -> BetResult:
        """
        Place the wager for the next round.

        The bet is recorded, not debited; the bankroll changes at settlement.

        Args:
            amount: Bet amount

        Returns:
            An accepted result, or a rejected one with the reason
        """
        if self.state != RoundState.AWAITING_BET:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot bet in current state",
                state=self.state.name,
            )
            raise IllegalAction(None, f"Cannot bet while in state {self.state}")

        try:
            amount = self.validate_bet(amount)
        except InvalidBet as exc:
            logger.info("Bet rejected: %s", exc)
            self.events.emit_new(
                EventType.BET_REJECTED,
                amount=exc.amount,
                reason=exc.reason.name,
                available=self.ledger.balance,
            )
            return BetResult.reject(exc.amount, exc.reason)

        self.round = Round(bet=amount)
        self.events.emit_new(EventType.BET_PLACED, amount=amount)
        self.bet_accepted()
        return BetResult.accept(amount)

    # Dealing

    def start_round(self) -> RoundSnapshot:
        """
        Deal the opening cards and check for naturals.

        Returns:
            Snapshot showing the dealer upcard and the player hand
        """
        if self.state != RoundState.INITIAL_DEAL or self.round is None:
            raise IllegalAction(None, "Place a bet before starting a round")

        self.shoe = self._shoe_factory()
        self.shoe.on_shuffle = self._on_shoe_shuffled

        rnd = self.round
        player_hand = Hand(bet=rnd.bet)
        rnd.player_hands = [player_hand]

        # Deal: player, dealer, player, dealer (face down)
        self._deal_card_to_hand(player_hand)
        self._deal_card_to_hand(rnd.dealer_hand)
        self._deal_card_to_hand(player_hand)
        self._deal_card_to_hand(rnd.dealer_hand, face_up=False)
        self.cards_dealt()

        self.events.emit_new(
            EventType.ROUND_STARTED,
            upcard=str(rnd.dealer_hand.cards[0]),
            hand_value=player_hand.value,
            bet=rnd.bet,
        )
        self._check_naturals()
        return self.snapshot()

    def _on_shoe_shuffled(self) -> None:
        logger.info("Shoe exhausted mid-round, reshuffling a fresh deck")
        self.events.emit_new(EventType.SHOE_SHUFFLED)

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        assert self.shoe is not None and self.round is not None
        card = self.shoe.draw()
        hand.add_card(card)
        is_dealer = hand is self.round.dealer_hand
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if is_dealer else "player",
            hand_index=None if is_dealer else self._index_of(hand),
            hand_value=hand.value if face_up or not is_dealer else None,
        )
        return card

    def _index_of(self, hand: Hand) -> int:
        assert self.round is not None
        for i, candidate in enumerate(self.round.player_hands):
            if candidate is hand:
                return i
        raise ValueError("Hand is not part of the current round")

    def _check_naturals(self) -> None:
        """End the round at once if either side holds blackjack."""
        assert self.round is not None
        player_hand = self.round.player_hands[0]
        dealer_hand = self.round.dealer_hand
        player_bj = player_hand.is_blackjack
        dealer_bj = dealer_hand.is_blackjack

        if player_bj:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
        if dealer_bj:
            self.events.emit_new(EventType.DEALER_BLACKJACK)

        if player_bj or dealer_bj:
            self._emit_dealer_reveal()
            self.natural_found()
            return

        if player_hand.can_split:
            self.pair_dealt()
            self.events.emit_new(
                EventType.SPLIT_OFFERED,
                cards=[str(c) for c in player_hand.cards],
                required=player_hand.bet,
            )
            return

        self.no_pair_dealt()

    # Player decisions

    def legal_actions(self, hand_index: int) -> frozenset[Action]:
        """
        Actions the player may take on a hand right now.

        Only the active hand has actions. Double needs an unmodified
        two-card hand and a bankroll that covers its bet; split is offered once,
        before any other action, on an unsplit pair.
        """
        if self.state not in (RoundState.SPLIT_DECISION, RoundState.PLAYER_TURN):
            return frozenset()
        rnd = self.round
        if rnd is None or hand_index != rnd.active_index:
            return frozenset()

        hand = rnd.player_hands[hand_index]
        if hand.forced_stand or hand.is_busted:
            return frozenset()

        actions = {Action.HIT, Action.STAND}
        if hand.can_double and self.ledger.can_cover(hand.bet):
            actions.add(Action.DOUBLE)
        if self.state == RoundState.SPLIT_DECISION:
            actions.add(Action.SPLIT)
        return frozenset(actions)

    def apply_action(self, hand_index: int, action: Action) -> HandSnapshot:
        """
        Apply a player decision to a hand.

        Taking any other action while a split is on offer declines it.

        Raises:
            IllegalAction: if the action is not legal; nothing changes
        """
        if action not in self.legal_actions(hand_index):
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message=f"Cannot {action} now",
                action=str(action),
                hand_index=hand_index,
                state=self.state.name,
            )
            raise IllegalAction(
                action, f"{action} is not allowed on hand {hand_index + 1} in state {self.state}"
            )

        assert self.round is not None
        if action == Action.SPLIT:
            self._split()
            return self.hand_snapshot(hand_index)

        if self.state == RoundState.SPLIT_DECISION:
            self._decline_split(reason="player")

        hand = self.round.player_hands[hand_index]
        if action == Action.HIT:
            self._hit(hand_index, hand)
        elif action == Action.DOUBLE:
            self._double_down(hand_index, hand)
        else:
            self.events.emit_new(
                EventType.PLAYER_STAND, hand_index=hand_index, hand_value=hand.value
            )
            self._advance_to_next_hand()

        return self.hand_snapshot(hand_index)

    def decline_split(self) -> None:
        """Turn down the split offer and play the pair as one hand."""
        if self.state != RoundState.SPLIT_DECISION:
            raise IllegalAction(Action.SPLIT, "No split is on offer")
        self._decline_split(reason="player")

    def _decline_split(self, reason: str) -> None:
        self.events.emit_new(EventType.SPLIT_DECLINED, reason=reason)
        self.split_resolved()

    def _hit(self, hand_index: int, hand: Hand) -> None:
        card = self._deal_card_to_hand(hand)
        self.events.emit_new(
            EventType.PLAYER_HIT,
            hand_index=hand_index,
            card=str(card),
            hand_value=hand.value,
        )

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=hand_index)
            self._advance_to_next_hand()
            return

        self.hand_played()  # Stay in player turn

    def _double_down(self, hand_index: int, hand: Hand) -> None:
        """Double the bet, take exactly one card, and finish the hand."""
        self.ledger.hold(hand.bet, note=f"double hand {hand_index + 1}")
        hand.held += hand.bet
        hand.bet *= 2
        hand.is_doubled = True

        card = self._deal_card_to_hand(hand)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_index=hand_index,
            card=str(card),
            hand_value=hand.value,
            new_bet=hand.bet,
        )

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=hand_index)

        self._advance_to_next_hand()

    def _fund_split(self, amount: Decimal) -> None:
        if not self.ledger.can_cover(amount):
            raise InsufficientBankrollForSplit(amount, self.ledger.balance)
        self.ledger.hold(amount, note="split")

    def _split(self) -> None:
        """Split the opening pair into two hands, one card each, plus one dealt card."""
        assert self.round is not None
        rnd = self.round
        hand = rnd.player_hands[0]

        try:
            self._fund_split(hand.bet)
        except InsufficientBankrollForSplit as exc:
            logger.info("Split declined: %s", exc)
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                required=exc.required,
                available=exc.available,
            )
            self._decline_split(reason="insufficient_bankroll")
            return

        first, second = hand.cards
        split_aces = first.is_ace and second.is_ace
        rnd.player_hands = [
            Hand(cards=[first], bet=hand.bet, is_split_hand=True, forced_stand=split_aces),
            Hand(
                cards=[second],
                bet=hand.bet,
                is_split_hand=True,
                forced_stand=split_aces,
                held=hand.bet,
            ),
        ]
        rnd.split_used = True

        for new_hand in rnd.player_hands:
            self._deal_card_to_hand(new_hand)

        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hand1_value=rnd.player_hands[0].value,
            hand2_value=rnd.player_hands[1].value,
            split_aces=split_aces,
        )
        self.split_resolved()
        self._skip_finished_hands()

    def _advance_to_next_hand(self) -> None:
        """Move to the next hand or dealer turn."""
        assert self.round is not None
        self.round.active_index += 1
        self._skip_finished_hands()

    def _skip_finished_hands(self) -> None:
        """Auto-stand forced hands; hand over to the dealer once none are playable."""
        assert self.round is not None
        rnd = self.round
        while rnd.active_hand is not None and rnd.active_hand.forced_stand:
            self.events.emit_new(
                EventType.HAND_AUTO_STAND,
                hand_index=rnd.active_index,
                hand_value=rnd.active_hand.value,
            )
            rnd.active_index += 1

        if rnd.active_hand is not None:
            self.hand_played()
            return

        if all(h.is_busted for h in rnd.player_hands):
            # Dealer hand stays as dealt
            self.all_hands_bust()
            return

        self.hands_done()
        self._play_dealer()

    # Dealer

    def _emit_dealer_reveal(self) -> None:
        assert self.round is not None
        dealer_hand = self.round.dealer_hand
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer_hand.cards[1]),
            cards=[str(c) for c in dealer_hand.cards],
            hand_value=dealer_hand.value,
        )

    def _play_dealer(self) -> None:
        """Dealer draws according to the policy."""
        assert self.round is not None
        dealer_hand = self.round.dealer_hand
        self._emit_dealer_reveal()
        self.hole_card_revealed()

        while self.dealer_policy.should_hit(dealer_hand.evaluation):
            card = self._deal_card_to_hand(dealer_hand)
            self.events.emit_new(
                EventType.DEALER_HITS,
                card=str(card),
                cards=[str(c) for c in dealer_hand.cards],
                hand_value=dealer_hand.value,
            )

        if dealer_hand.is_busted:
            self.events.emit_new(
                EventType.DEALER_BUSTS,
                cards=[str(c) for c in dealer_hand.cards],
                hand_value=dealer_hand.value,
            )
        else:
            self.events.emit_new(
                EventType.DEALER_STANDS,
                cards=[str(c) for c in dealer_hand.cards],
                hand_value=dealer_hand.value,
                is_soft=dealer_hand.is_soft,
            )

        self.dealer_finished()

    # Settlement

    def settle(self) -> RoundResult:
        """
        Resolve the round and pay out bets.

        Held stakes are released, then each hand's outcome is credited or
        debited. Calling settle again returns the recorded result without
        touching the bankroll.
        """
        rnd = self.round
        if self.state == RoundState.ROUND_SETTLED and rnd is not None and rnd.result:
            return rnd.result
        if self.state != RoundState.SETTLEMENT or rnd is None:
            raise IllegalAction(None, f"Round cannot be settled in state {self.state}")

        outcomes = settle_round(rnd.player_hands, rnd.dealer_hand)

        for i, hand in enumerate(rnd.player_hands):
            if hand.held:
                self.ledger.release(hand.held, note=f"stake hand {i + 1}")

        for outcome in outcomes:
            note = f"hand {outcome.hand_index + 1}"
            if outcome.outcome == Outcome.WIN:
                self.ledger.credit(outcome.amount, note=note)
                self.events.emit_new(
                    EventType.PLAYER_WINS,
                    hand_index=outcome.hand_index,
                    amount=outcome.amount,
                    natural=outcome.natural,
                )
            elif outcome.outcome == Outcome.LOSS:
                self.ledger.debit(outcome.amount, note=note)
                self.events.emit_new(
                    EventType.PLAYER_LOSES,
                    hand_index=outcome.hand_index,
                    amount=outcome.amount,
                    busted=rnd.player_hands[outcome.hand_index].is_busted,
                )
            else:
                self.events.emit_new(EventType.PUSH, hand_index=outcome.hand_index)

        result = RoundResult(
            outcomes=tuple(outcomes),
            dealer_cards=tuple(rnd.dealer_hand.cards),
            dealer_total=rnd.dealer_hand.value,
            dealer_busted=rnd.dealer_hand.is_busted,
            bankroll=self.ledger.balance,
            net=net_change(outcomes),
        )
        rnd.result = result
        logger.info("Round settled: net %s, bankroll %s", result.net, result.bankroll)
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=result.net,
            bankroll=result.bankroll,
        )

        self.outcomes_recorded()
        return result

    def new_round(self) -> None:
        """Return to betting after a settled round."""
        if self.state != RoundState.ROUND_SETTLED:
            raise IllegalAction(None, f"Cannot start a new round in state {self.state}")
        self.round = None
        self.shoe = None
        self.reset_round()

    # Views

    def hand_snapshot(self, hand_index: int) -> HandSnapshot:
        """Snapshot of one player hand."""
        if self.round is None or not 0 <= hand_index < len(self.round.player_hands):
            raise IndexError(f"No player hand {hand_index}")
        hand = self.round.player_hands[hand_index]
        finished = hand_index < self.round.active_index or self.state not in (
            RoundState.SPLIT_DECISION,
            RoundState.PLAYER_TURN,
        )
        return HandSnapshot.from_hand(hand_index, hand, is_finished=finished)

    def snapshot(self) -> RoundSnapshot:
        """Snapshot of the round as the player sees it."""
        rnd = self.round
        hidden = self.state in _HOLE_CARD_HIDDEN
        if rnd is None:
            dealer_cards: tuple[Card, ...] = ()
            hands: tuple[HandSnapshot, ...] = ()
        else:
            all_dealer = tuple(rnd.dealer_hand.cards)
            dealer_cards = all_dealer[:1] if hidden else all_dealer
            hands = tuple(self.hand_snapshot(i) for i in range(len(rnd.player_hands)))

        active = None
        if rnd is not None and self.state in (RoundState.SPLIT_DECISION, RoundState.PLAYER_TURN):
            active = rnd.active_index

        return RoundSnapshot(
            state=self.state,
            dealer_cards=dealer_cards,
            dealer_total=evaluate(dealer_cards).total,
            dealer_hole_hidden=hidden and bool(dealer_cards),
            player_hands=hands,
            active_hand_index=active,
            bankroll=self.ledger.balance,
        )
