"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: AWAITING_BET → INITIAL_DEAL → NATURAL_CHECK → [SPLIT_DECISION] →
    PLAYER_TURN → DEALER_REVEAL → DEALER_PLAY → SETTLEMENT → ROUND_SETTLED
    """

    # Idle, waiting for a wager
    AWAITING_BET = auto()

    # Two cards each, player first
    INITIAL_DEAL = auto()

    # Either side holding blackjack ends the round
    NATURAL_CHECK = auto()

    # Player holds a pair and may split it once
    SPLIT_DECISION = auto()

    # Player acts on each hand in order
    PLAYER_TURN = auto()

    # Hole card turned over
    DEALER_REVEAL = auto()

    # Dealer draws by policy
    DEALER_PLAY = auto()

    # Outcomes computed, bankroll not yet updated
    SETTLEMENT = auto()

    # Round finished, ready for next
    ROUND_SETTLED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    RoundState.AWAITING_BET: [RoundState.INITIAL_DEAL],
    RoundState.INITIAL_DEAL: [RoundState.NATURAL_CHECK],
    RoundState.NATURAL_CHECK: [
        RoundState.SETTLEMENT,
        RoundState.SPLIT_DECISION,
        RoundState.PLAYER_TURN,
    ],
    RoundState.SPLIT_DECISION: [RoundState.PLAYER_TURN],
    RoundState.PLAYER_TURN: [
        RoundState.PLAYER_TURN,
        RoundState.DEALER_REVEAL,
        RoundState.SETTLEMENT,  # every hand busted
    ],
    RoundState.DEALER_REVEAL: [RoundState.DEALER_PLAY],
    RoundState.DEALER_PLAY: [RoundState.SETTLEMENT],
    RoundState.SETTLEMENT: [RoundState.ROUND_SETTLED],
    RoundState.ROUND_SETTLED: [RoundState.AWAITING_BET],
}


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
