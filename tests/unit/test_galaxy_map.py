"""
Tests for the galaxy map and the move catalog

Checked behaviour:
1. Off-grid cells read as empty space
2. Star field generation draws one float per cell, column by column
3. The catalog is reproducible, sorted and made of distinct empty cells
4. Too few empty cells ends the game without touching the map
"""

import numpy as np
import pytest

from star_traders.actions.move_catalog import select_moves
from star_traders.core.enums import CellType
from star_traders.core.exceptions import GameAlreadyEndedError, InvalidMoveError, SimulationError
from star_traders.core.random_stream import ScriptedRandomStream
from star_traders.game.board import GalaxyMap
from star_traders.game.game_state import GameSettings, create_game
from star_traders.utils.map_renderer import render_text


# =============================================================================
# GalaxyMap
# =============================================================================


class TestGalaxyMap:
    """Cell access, neighbours and text round trips."""

    def test_off_grid_reads_empty(self):
        """Neighbours past the edge are empty space."""
        galaxy = GalaxyMap.from_rows(["*.", ".."])
        nbrs = galaxy.neighbors(0, 0)
        assert nbrs.left == CellType.EMPTY
        assert nbrs.up == CellType.EMPTY
        assert nbrs.right == CellType.EMPTY
        assert nbrs.down == CellType.EMPTY
        assert galaxy.get(-1, 5) == CellType.EMPTY

    def test_neighbour_order(self):
        """Neighbours come back left, right, up, down."""
        galaxy = GalaxyMap.from_rows([".A.", "B.C", ".D."])
        assert galaxy.neighbors(1, 1).values() == (1, 2, 0, 3)
        assert galaxy.neighbors(1, 1).first_company() == 1

    def test_rows_are_y_and_columns_are_x(self):
        galaxy = GalaxyMap.from_rows(["..*", "+.."])
        assert galaxy.width == 3
        assert galaxy.height == 2
        assert galaxy.get(2, 0) == CellType.STAR
        assert galaxy.get(0, 1) == CellType.OUTPOST
        assert galaxy.to_rows() == ["..*", "+.."]

    def test_unknown_symbol_rejected(self):
        with pytest.raises(InvalidMoveError):
            GalaxyMap.from_rows(["..?"])

    def test_set_off_map_rejected(self):
        galaxy = GalaxyMap(3, 3)
        with pytest.raises(InvalidMoveError):
            galaxy.set(3, 0, CellType.OUTPOST)

    def test_relabel_and_clear(self):
        galaxy = GalaxyMap.from_rows(["AAB", "..B"])
        assert galaxy.relabel(0, 1) == 2
        assert galaxy.to_rows() == ["BBB", "..B"]
        assert galaxy.clear_company(1) == 4
        assert galaxy.count_empty() == 6
        assert galaxy.company_ids_on_map() == []

    def test_render_text_with_axes(self):
        galaxy = GalaxyMap.from_rows(["+*", "A."])
        assert render_text(galaxy) == ["+*", "A."]
        assert render_text(galaxy, with_axes=True) == ["   01", " 0 +*", " 1 A."]


class TestStarField:
    """Star placement consumes the stream in a fixed order."""

    def test_generation_draw_order(self):
        """One float per cell (x outer, y inner), then the first player."""
        script = ScriptedRandomStream([0.05, 0.5, 0.5, 0.09, 1])
        settings = GameSettings(width=2, height=2, number_moves=1)
        game_state = create_game(["Alice", "Bob"], settings, script)

        assert game_state.galaxy.get(0, 0) == CellType.STAR
        assert game_state.galaxy.get(0, 1) == CellType.EMPTY
        assert game_state.galaxy.get(1, 0) == CellType.EMPTY
        assert game_state.galaxy.get(1, 1) == CellType.STAR
        assert game_state.current_player.name == "Bob"
        assert script.remaining == 0

    def test_single_player_draws_no_first_player(self):
        script = ScriptedRandomStream([0.5, 0.5])
        settings = GameSettings(width=1, height=2, number_moves=1)
        game_state = create_game(["Solo"], settings, script)
        assert game_state.current_player.name == "Solo"
        assert script.remaining == 0


# =============================================================================
# Move catalog
# =============================================================================


class TestSelectMoves:
    """select_moves: reproducible sorted menus of empty cells."""

    def test_reproducible_for_same_seed(self):
        first = create_game(["Alice", "Bob"], GameSettings(seed=7))
        second = create_game(["Alice", "Bob"], GameSettings(seed=7))
        assert select_moves(first) == select_moves(second)

    def test_catalog_sorted_unique_and_empty(self):
        game_state = create_game(["Alice", "Bob"], GameSettings(seed=11))
        moves = select_moves(game_state)

        assert len(moves) == 20
        assert moves == sorted(moves)
        assert len(set(moves)) == 20
        assert all(game_state.galaxy.is_empty(x, y) for x, y in moves)
        assert game_state.moves == moves

    def test_rejects_occupied_and_repeated_draws(self, make_game):
        """Draws land on a star and a repeat before the quota fills."""
        script = ScriptedRandomStream([2, 1, 0, 0, 2, 1, 1, 0])
        game_state = make_game(["*..", "..."], random_stream=script, number_moves=2)

        moves = select_moves(game_state)
        assert moves == [(1, 0), (2, 1)]
        assert script.remaining == 0

    def test_too_few_empty_cells_ends_game(self, make_game, scripted_stream):
        game_state = make_game(["+*.", "A.."], random_stream=scripted_stream([]), number_moves=4)
        before = game_state.galaxy.cells.copy()

        assert select_moves(game_state) is None
        assert game_state.is_completed
        assert game_state.end_reason == "no_moves"
        assert np.array_equal(game_state.galaxy.cells, before)

    def test_no_catalog_after_game_end(self, make_game):
        game_state = make_game(["..."])
        game_state.end_game("quit")
        with pytest.raises(GameAlreadyEndedError):
            select_moves(game_state)

    def test_script_mismatch_is_loud(self, make_game):
        """A float where an int is expected fails instead of guessing."""
        game_state = make_game(["..."], random_stream=ScriptedRandomStream([0.5]))
        with pytest.raises(SimulationError):
            select_moves(game_state)
