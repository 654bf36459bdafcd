"""Console interaction shell.

Owns every prompt, all input parsing and all rendering. The engine only
sees well-formed amounts and actions.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Callable

from blackjack.game import Action, EventType, GameEvent, Outcome, RoundEngine, RoundState
from blackjack.game.snapshots import HandSnapshot, RoundResult

logger = logging.getLogger(__name__)

COMMANDS = {
    "H": Action.HIT,
    "S": Action.STAND,
    "D": Action.DOUBLE,
}


def money(amount: Decimal) -> str:
    """Format an amount as dollars with two decimals."""
    return f"${amount:.2f}"


def parse_amount(text: str) -> Decimal | None:
    """Parse a bet amount; None if it is not a finite number."""
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


class ConsoleShell:
    """Plays rounds on a RoundEngine through text prompts."""

    def __init__(
        self,
        engine: RoundEngine,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.engine = engine
        self._input = input_fn
        self._output = output_fn
        self._split_shortfall: Decimal | None = None
        engine.subscribe(self._on_event)

    def say(self, text: str = "") -> None:
        self._output(text)

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip().upper()

    def run(self) -> Decimal:
        """Play until the player quits or the bankroll is gone. Returns the final bankroll."""
        self.say("=== Console Blackjack ===")
        self.say(f"Start bankroll: {money(self.engine.bankroll)}")
        self.say(f"Blackjack pays 3:2 • {self.engine.dealer_policy.name}")
        self.say("Commands: H = Hit, S = Stand, D = Double, P = Split (when allowed), Q = Quit")

        try:
            while not self.engine.is_bankrupt:
                if not self.play_round():
                    break
                if self.engine.is_bankrupt:
                    self.say("You are out of money.")
                    break
                if not self.play_again():
                    break
        except EOFError:
            logger.debug("Input closed, leaving the table")

        self.say()
        self.say("Thanks for playing!")
        return self.engine.bankroll

    def play_round(self) -> bool:
        """Play one full round. Returns False if the player quit at the bet prompt."""
        if not self.prompt_bet():
            return False

        snapshot = self.engine.start_round()

        if snapshot.state == RoundState.SPLIT_DECISION:
            self.offer_split()
        if self.engine.state == RoundState.PLAYER_TURN:
            self.play_hands()

        self.show_result(self.engine.settle())
        self.engine.new_round()
        return True

    def prompt_bet(self) -> bool:
        """Ask until a bet is accepted. Returns False if the player quits."""
        while True:
            self.say()
            text = self.ask(f"Enter your bet (or Q to quit) [Bankroll {money(self.engine.bankroll)}]: ")
            if text == "Q":
                return False

            amount = parse_amount(text)
            if amount is None:
                self.say("Enter a valid number or Q.")
                continue

            result = self.engine.place_bet(amount)
            if result.accepted:
                return True
            self.say(f"{result.reason}.")

    def offer_split(self) -> None:
        hand = self.engine.hand_snapshot(0)
        cards = " ".join(str(c) for c in hand.cards)
        choice = self.ask(f"You can split ({cards}). Split? (P to split, anything else to skip): ")
        if choice != "P":
            self.engine.decline_split()
            return

        self._split_shortfall = None
        self.engine.apply_action(0, Action.SPLIT)
        if self._split_shortfall is not None:
            self.say(f"Not enough bankroll to split (need another {money(self._split_shortfall)}).")

    def play_hands(self) -> None:
        """Prompt for actions on each playable hand, in order."""
        announced: int | None = None
        while True:
            snapshot = self.engine.snapshot()
            index = snapshot.active_hand_index
            if index is None:
                return

            if index != announced:
                self._announce_hand(index, snapshot.player_hands[index], len(snapshot.player_hands))
                announced = index

            legal = self.engine.legal_actions(index)
            options = "H=Hit, S=Stand"
            if Action.DOUBLE in legal:
                options += ", D=Double"
            action = COMMANDS.get(self.ask(f"Choose action [{options}]: "))

            if action is None or action not in legal:
                self.say("Invalid or unavailable choice.")
                continue

            self.engine.apply_action(index, action)

    def _announce_hand(self, index: int, hand: HandSnapshot, hand_count: int) -> None:
        label = f" {index + 1}" if hand_count > 1 else ""
        self.say()
        self.say(f"-- Playing your Hand{label}: {hand}")

    def show_result(self, result: RoundResult) -> None:
        """Print the outcome of every hand and the new bankroll."""
        hands = self.engine.snapshot().player_hands
        multi = len(hands) > 1

        for outcome in result.outcomes:
            if outcome.natural:
                self._show_natural(outcome.outcome, outcome.amount)
                continue

            tag = f"Hand {outcome.hand_index + 1}" if multi else "Hand"
            hand = hands[outcome.hand_index]
            if outcome.outcome == Outcome.WIN:
                reason = " (dealer bust)" if result.dealer_busted else ""
                self.say(f"{tag} wins {money(outcome.amount)}{reason}.")
            elif outcome.outcome == Outcome.LOSS:
                reason = " (bust)" if hand.is_busted else ""
                self.say(f"{tag} loses {money(outcome.amount)}{reason}.")
            else:
                self.say(f"{tag} pushes (no money won or lost).")

        self.say(f"Bankroll: {money(result.bankroll)}")

    def _show_natural(self, outcome: Outcome, amount: Decimal) -> None:
        if outcome == Outcome.PUSH:
            self.say("Push: both have Blackjack.")
        elif outcome == Outcome.WIN:
            self.say(f"Blackjack! You win {money(amount)} (pays 3:2).")
        else:
            self.say(f"Dealer has Blackjack. You lose {money(amount)}.")

    def play_again(self) -> bool:
        while True:
            self.say()
            choice = self.ask("Play another round? (Y/N): ")
            if choice == "Y":
                return True
            if choice == "N":
                return False
            self.say("Please enter Y or N.")

    def _on_event(self, event: GameEvent) -> None:
        """Render engine events that happen between prompts."""
        data = event.data
        kind = event.event_type

        if kind == EventType.ROUND_STARTED:
            snapshot = self.engine.snapshot()
            self.say()
            self.say(f"Dealer shows: {snapshot.dealer_upcard}")
            self.say(f"Your hand: {snapshot.player_hands[0]}")
        elif kind == EventType.DEALER_REVEALS:
            self.say(f"Dealer's hand: {' '.join(data['cards'])} ({data['hand_value']})")
        elif kind == EventType.DEALER_HITS:
            self.say(f"Dealer hits: {' '.join(data['cards'])} ({data['hand_value']})")
        elif kind == EventType.DEALER_BUSTS:
            self.say("Dealer busts!")
        elif kind == EventType.DEALER_STANDS:
            soft = "soft " if data["is_soft"] else ""
            self.say(f"Dealer stands on {soft}{data['hand_value']}.")
        elif kind in (EventType.PLAYER_HIT, EventType.PLAYER_DOUBLE):
            hand = self.engine.hand_snapshot(data["hand_index"])
            verb = "doubled and drew" if kind == EventType.PLAYER_DOUBLE else "drew"
            self.say(f"You {verb} {data['card']}. Hand: {hand}")
        elif kind == EventType.PLAYER_BUSTS:
            self.say("Busted!")
        elif kind == EventType.PLAYER_STAND:
            self.say(f"You stand with {data['hand_value']}.")
        elif kind == EventType.PLAYER_SPLIT:
            self.say("Split hands:")
            for hand in self.engine.snapshot().player_hands:
                self.say(f"  Hand {hand.index + 1}: {hand}")
        elif kind == EventType.HAND_AUTO_STAND:
            self.say(f"Split Aces: hand {data['hand_index'] + 1} gets one card only -> auto-stand.")
        elif kind == EventType.INSUFFICIENT_FUNDS:
            self._split_shortfall = data["required"]
        elif kind == EventType.SHOE_SHUFFLED:
            self.say("(Deck exhausted - reshuffling.)")
