"""Tests for the event emitter and round state table."""

import pytest

from blackjack.game import RoundEngine
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.state import VALID_TRANSITIONS, RoundState, is_valid_transition


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_HIT, card="5♠")
        emitter.emit_new(EventType.PLAYER_STAND)

        assert [e.event_type for e in received] == [EventType.PLAYER_HIT]
        assert received[0].data == {"card": "5♠"}

    def test_catch_all_runs_after_typed(self):
        """Test handler order for one event."""
        emitter = EventEmitter()
        calls = []
        emitter.subscribe(lambda e: calls.append("all"))
        emitter.subscribe(lambda e: calls.append("typed"), EventType.PUSH)

        emitter.emit_new(EventType.PUSH)

        assert calls == ["typed", "all"]

    def test_history(self):
        emitter = EventEmitter()
        event = emitter.emit_new(EventType.BET_PLACED, amount=10)

        assert emitter.history == [event]
        emitter.history.clear()
        assert len(emitter.history) == 1

    def test_events_are_immutable(self):
        event = GameEvent(EventType.PUSH)
        with pytest.raises(AttributeError):
            event.event_type = EventType.PLAYER_WINS

    def test_str(self):
        assert str(GameEvent(EventType.PUSH, {"hand_index": 0})) == "PUSH: {'hand_index': 0}"


class TestRoundStates:
    """Tests for the state transition table."""

    def test_happy_path(self):
        path = [
            RoundState.AWAITING_BET,
            RoundState.INITIAL_DEAL,
            RoundState.NATURAL_CHECK,
            RoundState.SPLIT_DECISION,
            RoundState.PLAYER_TURN,
            RoundState.DEALER_REVEAL,
            RoundState.DEALER_PLAY,
            RoundState.SETTLEMENT,
            RoundState.ROUND_SETTLED,
            RoundState.AWAITING_BET,
        ]
        for current, following in zip(path, path[1:]):
            assert is_valid_transition(current, following)

    def test_naturals_skip_play(self):
        assert is_valid_transition(RoundState.NATURAL_CHECK, RoundState.SETTLEMENT)

    def test_all_busted_skips_dealer(self):
        assert is_valid_transition(RoundState.PLAYER_TURN, RoundState.SETTLEMENT)

    @pytest.mark.parametrize(
        "current, following",
        [
            (RoundState.AWAITING_BET, RoundState.PLAYER_TURN),
            (RoundState.PLAYER_TURN, RoundState.SPLIT_DECISION),
            (RoundState.ROUND_SETTLED, RoundState.SETTLEMENT),
            (RoundState.DEALER_PLAY, RoundState.PLAYER_TURN),
        ],
    )
    def test_invalid_transitions(self, current, following):
        assert not is_valid_transition(current, following)

    def test_engine_machine_matches_table(self):
        """Test every machine transition is in the table and vice versa."""
        machine_edges = {
            (RoundState[t["source"].upper()], RoundState[t["dest"].upper()])
            for t in RoundEngine.TRANSITIONS
        }
        table_edges = {
            (source, dest) for source, dests in VALID_TRANSITIONS.items() for dest in dests
        }
        assert machine_edges == table_edges

    def test_str(self):
        assert str(RoundState.SPLIT_DECISION) == "Split Decision"
