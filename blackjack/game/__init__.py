"""Round engine and state management."""

from blackjack.game.events import GameEvent, EventType
from blackjack.game.state import RoundState
from blackjack.game.settlement import HandOutcome, Outcome
from blackjack.game.snapshots import (
    Action,
    BetResult,
    HandSnapshot,
    RoundResult,
    RoundSnapshot,
)
from blackjack.game.engine import RoundEngine

__all__ = [
    "GameEvent",
    "EventType",
    "RoundState",
    "HandOutcome",
    "Outcome",
    "Action",
    "BetResult",
    "HandSnapshot",
    "RoundResult",
    "RoundSnapshot",
    "RoundEngine",
]
