"""Tests for chip accounting (holdem/game.py)."""

import pytest

from config.settings import GameConfig
from holdem.errors import HandInProgress
from holdem.game import GameEngine
from holdem.player import ActionType

TOTAL = 20_000

FOLD = ActionType.FOLD
CHECK = ActionType.CHECK
CALL = ActionType.CALL
BET = ActionType.BET
RAISE = ActionType.RAISE
ALL_IN = ActionType.ALL_IN


def committed(engine):
    return sum(p.total_committed for p in engine.players)


class TestChipConservation:
    """Test that chips are always conserved."""

    def test_chip_conservation_after_start(self, started_engine):
        """Blinds move chips into the pot without creating any."""
        assert started_engine.total_chips() == TOTAL
        assert started_engine.pot == committed(started_engine)

    @pytest.mark.parametrize(
        "actions",
        [
            [FOLD],
            [CALL, CHECK, CHECK, CHECK, CHECK, CHECK, CHECK, CHECK],
            [RAISE, CALL, BET, RAISE, CALL, CHECK, CHECK, CHECK, CHECK],
            [CALL, CHECK, BET, FOLD],
            [CALL, CHECK, CHECK, CHECK, CHECK, CHECK, CHECK, BET, CALL],
            [ALL_IN, FOLD],
            [ALL_IN, CALL],
            [RAISE, RAISE, RAISE, ALL_IN, CALL],
        ],
    )
    def test_chip_conservation_through_actions(self, started_engine, actions):
        """Pot plus stacks stays constant after every action."""
        engine = started_engine
        for action in actions:
            engine.perform_action(action)
            assert engine.total_chips() == TOTAL
            if engine.is_pending_action():
                assert engine.pot == committed(engine)
        assert not engine.is_pending_action()
        assert engine.pot == 0
        assert sum(p.chips for p in engine.players) == TOTAL

    def test_new_hand_rejected_while_hand_in_progress(self, started_engine):
        """Restarting mid-hand fails and leaves the committed chips in the pot."""
        engine = started_engine
        engine.perform_action(RAISE)
        assert engine.pot == 80
        with pytest.raises(HandInProgress):
            engine.start_new_hand()
        assert engine.pot == 80
        assert engine.total_chips() == TOTAL
        assert engine.hand_number == 1
        assert engine.is_pending_action()

        engine.perform_action(FOLD)
        engine.start_new_hand()
        assert engine.total_chips() == TOTAL

    def test_chip_conservation_over_many_hands(self, engine):
        """Alternating folds and check-downs never leak chips."""
        for hand in range(20):
            engine.start_new_hand()
            if hand % 2:
                engine.perform_action(FOLD)
            while engine.is_pending_action():
                engine.perform_action(CALL if engine.can_call() else CHECK)
            assert engine.total_chips() == TOTAL
            assert engine.pot == 0


class TestCallAmount:
    """Test call sizing."""

    def test_small_blind_completes(self, started_engine):
        engine = started_engine
        assert engine.call_amount() == 10
        engine.perform_action(CALL)
        assert engine.players[1].current_bet == 20

    def test_call_after_raise(self, started_engine):
        """Calling a raise matches the raised total."""
        engine = started_engine
        engine.perform_action(RAISE)
        assert engine.call_amount() == 40
        engine.perform_action(CALL)
        assert engine.players[0].total_committed == 60
        assert engine.players[1].total_committed == 60

    def test_short_call_is_all_in(self):
        """A call for more than the stack commits what is left."""
        engine = GameEngine(GameConfig(seed=5))
        engine.start_new_hand()
        engine.players[0].chips = 30
        engine.perform_action(RAISE)  # Bob to 60
        engine.perform_action(CALL)  # Alice has 30 behind her blind
        alice = engine.players[0]
        assert alice.all_in
        assert alice.total_committed == 50


class TestAllInDetection:
    """Test all-in bookkeeping."""

    def test_all_in_commits_all_chips(self, started_engine):
        engine = started_engine
        bob = engine.players[1]
        engine.perform_action(ALL_IN)
        assert bob.chips == 0
        assert bob.all_in
        assert bob.total_committed == 10_000

    def test_all_in_below_bet_keeps_to_call(self, started_engine):
        """An all-in for less than the current bet does not lower it."""
        engine = started_engine
        engine.players[1].chips = 5
        engine.perform_action(ALL_IN)
        assert engine.to_call == 20
        assert engine.players[1].current_bet == 15
