"""Tests for the per-turn driver."""

import logging

import pytest

from star_traders.actions.exchange import buy_shares
from star_traders.core.enums import MoveKind, Selection, TurnPhase
from star_traders.core.exceptions import GameStateError
from star_traders.game.game_state import GameSettings, create_game
from star_traders.game.turn_manager import TurnManager


def first_move(game_state, moves):
    return 0


@pytest.fixture
def seeded_game():
    return create_game(["Alice", "Bob"], GameSettings(seed=21, max_turns=10))


class TestPlayTurn:
    """One turn: catalog, move, trading, handover."""

    def test_turn_hands_over_to_next_player(self, seeded_game):
        manager = TurnManager(seeded_game)
        mover = seeded_game.current_player.name
        record = manager.play_turn(first_move)

        assert record.player_name == mover
        assert len(record.moves) == 20
        assert record.selection == 0
        assert record.outcome.position == record.moves[0]
        assert seeded_game.current_player.name != mover
        assert record.phase_results["trading"] == "skip"

    def test_trading_hook_runs_for_mover(self, seeded_game):
        manager = TurnManager(seeded_game)
        seen = []
        record = manager.play_turn(first_move, trade=lambda gs: seen.append(gs.current_player.name))

        assert record.traded
        assert seen == [record.player_name]

    def test_trading_hook_can_use_the_exchange(self, make_game):
        game_state = make_game([".*...", "....."], number_moves=1)
        manager = TurnManager(game_state)

        record = manager.play_turn(first_move, trade=lambda gs: buy_shares(gs, 0, 5))
        assert record.outcome.kind == MoveKind.FOUNDED
        assert game_state.players[0].stock_owned[0] == 10
        assert game_state.check_invariants() == []

    def test_quit_skips_remaining_phases(self, seeded_game):
        manager = TurnManager(seeded_game)
        mover = seeded_game.current_player_index
        record = manager.play_turn(lambda gs, moves: Selection.QUIT)

        assert record.game_over
        assert "trading" not in record.phase_results
        assert seeded_game.current_player_index == mover

    def test_exhausted_catalog_ends_game(self, make_game, scripted_stream):
        game_state = make_game(["+*", ".."], random_stream=scripted_stream([]), number_moves=3)
        record = TurnManager(game_state).play_turn(first_move)

        assert record.game_over
        assert record.outcome is None
        assert game_state.end_reason == "no_moves"

    def test_inactive_game_rejected(self, seeded_game):
        seeded_game.end_game("quit")
        with pytest.raises(GameStateError):
            TurnManager(seeded_game).play_turn(first_move)


class TestPhaseCallbacks:
    """Callbacks wrap each phase and never break a turn."""

    def test_pre_and_post_callbacks(self, seeded_game):
        manager = TurnManager(seeded_game)
        calls = []
        manager.register_phase_callback(TurnPhase.RESOLVE_MOVE, lambda gs, timing: calls.append(timing))
        manager.play_turn(first_move)
        assert calls == ["pre", "post"]

    def test_failing_callback_is_logged(self, seeded_game, caplog):
        manager = TurnManager(seeded_game)

        def broken(gs, timing):
            raise RuntimeError("display went away")

        manager.register_phase_callback(TurnPhase.SELECT_MOVES, broken)
        with caplog.at_level(logging.WARNING):
            record = manager.play_turn(first_move)

        assert record.outcome is not None
        assert "display went away" in caplog.text


class TestPlayGame:
    """Whole games through the turn manager."""

    def test_game_runs_to_turn_limit(self, seeded_game):
        manager = TurnManager(seeded_game)
        records = manager.play_game(first_move)

        assert seeded_game.is_completed
        assert seeded_game.end_reason in ("turn_limit", "all_bankrupt")
        assert len(records) == len(manager.turn_history)
        assert records[-1].game_over
        assert manager.get_turn_status()["is_active"] is False
