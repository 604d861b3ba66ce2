"""
Tests for move resolution

All games run on a quiet stream (every draw 0.95), so each share price
increment multiplies by 1.475, adds inc / 14.5 to max_stock and never
changes the return, and no economic event fires after the move.

Checked behaviour:
1. Bare outposts, new companies and expansions
2. Founding falls back to an outpost when every slot is taken
3. Outpost chains are absorbed once each, depth first
4. Two-, three- and four-way mergers, including the equal value case
5. Sentinel selections and invalid selections
"""

import numpy as np
import pytest

from star_traders.actions.move_resolver import process_move, resolve_position
from star_traders.core.enums import MoveKind, Selection
from star_traders.core.exceptions import (
    GameAlreadyEndedError, InvalidMoveError, InvalidSelectionError
)


def play(game_state, x, y):
    """Offer (x, y) as the only catalog entry and select it."""
    game_state.moves = [(x, y)]
    return process_move(game_state, 0)


# =============================================================================
# Outposts, founding and expansion
# =============================================================================


class TestPlacement:
    """Classification of moves with no merger involved."""

    def test_isolated_cell_becomes_outpost(self, make_game):
        game_state = make_game(["...", "...", "..."])
        outcome = play(game_state, 1, 1)

        assert outcome.kind == MoveKind.OUTPOST
        assert game_state.galaxy.to_rows() == ["...", ".+.", "..."]
        assert game_state.companies_on_map == []

    def test_star_neighbour_founds_company(self, make_game):
        game_state = make_game([".*.", "...", "..."])
        outcome = play(game_state, 1, 1)

        assert outcome.kind == MoveKind.FOUNDED
        assert outcome.founded_company_id == 0
        assert outcome.star_bonuses == 1
        assert game_state.galaxy.get(1, 1) == 0

        altair = game_state.companies[0]
        assert altair.on_map
        assert altair.stock_issued == 5
        assert altair.share_price == pytest.approx(60 + 300 * 1.475)
        assert altair.max_stock == 70
        assert game_state.players[0].stock_owned[0] == 5
        assert game_state.players[1].stock_owned[0] == 0

    def test_founder_collects_dividends_after_move(self, make_game):
        """The economy runs after the move and pays the mover."""
        game_state = make_game([".*.", "...", "..."])
        play(game_state, 1, 1)

        price = 60 + 300 * 1.475
        dividend = 5 * price * 0.05 + 1.0 * price * 2.0
        assert game_state.players[0].cash == pytest.approx(6000 + dividend)

    def test_lowest_free_id_is_founded(self, make_game, list_company):
        game_state = make_game(["A....", ".....", "...*."])
        list_company(game_state, 0, {0: 5})
        outcome = play(game_state, 3, 1)

        assert outcome.founded_company_id == 1
        assert game_state.galaxy.get(3, 1) == 1

    def test_founding_resets_stale_holdings(self, make_game):
        game_state = make_game(["+.."])
        game_state.players[1].stock_owned[0] = 9
        play(game_state, 1, 0)
        assert game_state.players[1].stock_owned[0] == 0
        assert game_state.check_invariants() == []

    def test_all_slots_taken_gives_outpost(self, make_game, list_company):
        game_state = make_game([".*.", "...", "..."])
        for company_id in range(8):
            list_company(game_state, company_id, {0: 1})
        outcome = play(game_state, 1, 1)

        assert outcome.kind == MoveKind.OUTPOST
        assert outcome.founded_company_id is None
        assert game_state.galaxy.get(1, 1) == -2

    def test_expansion_onto_neighbour(self, make_game, list_company):
        game_state = make_game(["A..", "..."])
        list_company(game_state, 0, {0: 10}, price=100.0, max_stock=50)
        outcome = resolve_position(game_state, 1, 0)

        assert outcome.kind == MoveKind.EXPANDED
        assert outcome.company_id == 0
        assert game_state.galaxy.to_rows() == ["AA.", "..."]
        assert game_state.companies[0].share_price == pytest.approx(100 + 60 * 1.475)
        assert game_state.companies[0].max_stock == 54

    def test_star_bonus_per_adjacent_star(self, make_game, list_company):
        game_state = make_game(["A.*", ".*."])
        list_company(game_state, 0, {0: 10}, price=100.0)
        outcome = resolve_position(game_state, 1, 0)

        assert outcome.star_bonuses == 2
        expected = 100 + 60 * 1.475 + 2 * 300 * 1.475
        assert game_state.companies[0].share_price == pytest.approx(expected)

    def test_occupied_cell_rejected(self, make_game):
        game_state = make_game(["*.."])
        with pytest.raises(InvalidMoveError):
            resolve_position(game_state, 0, 0)


# =============================================================================
# Outpost absorption
# =============================================================================


class TestOutpostAbsorption:
    """Chains of outposts join the company that reaches them."""

    def test_three_contiguous_outposts_join_new_company(self, make_game):
        game_state = make_game([".....", ".+++.", "....."])
        outcome = play(game_state, 0, 1)

        assert outcome.kind == MoveKind.FOUNDED
        assert outcome.absorbed_outposts == [(1, 1), (2, 1), (3, 1)]
        assert game_state.galaxy.to_rows()[1] == "AAAA."

        altair = game_state.companies[0]
        assert altair.share_price == pytest.approx(60 + 3 * 70 * 1.475)
        assert altair.max_stock == 62

    def test_star_next_to_absorbed_outpost(self, make_game):
        game_state = make_game([".+*", "..."])
        play(game_state, 0, 0)

        assert game_state.galaxy.to_rows() == ["AA*", "..."]
        assert game_state.companies[0].share_price == pytest.approx(60 + 2 * 70 * 1.475)

    def test_loop_of_outposts_counted_once(self, make_game):
        """A block of outposts reachable two ways is absorbed cell by cell."""
        game_state = make_game([".++", ".++"])
        outcome = play(game_state, 0, 0)

        assert outcome.absorbed_outposts == [(1, 0), (2, 0), (2, 1), (1, 1)]
        assert game_state.galaxy.to_rows() == ["AAA", ".AA"]
        assert game_state.companies[0].share_price == pytest.approx(60 + 4 * 70 * 1.475)

    def test_expansion_absorbs_outposts(self, make_game, list_company):
        game_state = make_game(["A.+", "..+"])
        list_company(game_state, 0, {0: 5}, price=60.0)
        outcome = resolve_position(game_state, 1, 0)

        assert outcome.kind == MoveKind.EXPANDED
        assert outcome.absorbed_outposts == [(2, 0), (2, 1)]
        assert game_state.galaxy.to_rows() == ["AAA", "..A"]


# =============================================================================
# Mergers through move resolution
# =============================================================================


class TestMergeScan:
    """The six neighbour pairs are checked in a fixed order."""

    def test_two_company_merge(self, make_game, list_company):
        game_state = make_game(["A.B"])
        list_company(game_state, 0, {0: 10}, price=100.0, share_return=0.05)
        list_company(game_state, 1, {0: 1, 1: 4}, price=40.0, share_return=0.10)
        outcome = resolve_position(game_state, 1, 0)

        assert outcome.kind == MoveKind.MERGED
        assert len(outcome.mergers) == 1
        assert outcome.mergers[0].dominant_id == 0
        assert outcome.company_id == 0
        assert game_state.galaxy.to_rows() == ["AAA"]
        assert not game_state.companies[1].on_map
        assert game_state.check_invariants() == []

    def test_equal_values_favour_second_company(self, make_game, list_company):
        """Left company is the first operand; on a tie the right one survives."""
        game_state = make_game(["A.B"])
        list_company(game_state, 0, {0: 4}, price=50.0, share_return=0.05)
        list_company(game_state, 1, {1: 4}, price=50.0, share_return=0.05)
        outcome = resolve_position(game_state, 1, 0)

        assert outcome.mergers[0].dominant_id == 1
        assert game_state.galaxy.to_rows() == ["BBB"]
        assert not game_state.companies[0].on_map

    def test_three_way_merge(self, make_game, list_company):
        """Left-right merges first, then the survivor meets the company above."""
        game_state = make_game([".A.", "B.C", "..."])
        list_company(game_state, 0, {0: 10}, price=1000.0, share_return=0.10)
        list_company(game_state, 1, {0: 4}, price=100.0, share_return=0.05)
        list_company(game_state, 2, {1: 4}, price=50.0, share_return=0.05)
        outcome = resolve_position(game_state, 1, 1)

        pairs = [(m.dominant_id, m.loser_id) for m in outcome.mergers]
        assert pairs == [(1, 2), (0, 1)]
        assert outcome.company_id == 0
        assert game_state.galaxy.to_rows() == [".A.", "AAA", "..."]
        assert [c.company_id for c in game_state.companies_on_map] == [0]
        assert game_state.players[1].stock_owned[0] == 1
        assert game_state.check_invariants() == []

    def test_four_way_merge_ends_with_one_company(self, make_game, list_company):
        """With equal starting values the first survivor keeps growing."""
        game_state = make_game([".A.", "B.C", ".D."])
        for company_id in range(4):
            list_company(game_state, company_id, {0: 4}, price=50.0, share_return=0.05)
        outcome = resolve_position(game_state, 1, 1)

        pairs = [(m.dominant_id, m.loser_id) for m in outcome.mergers]
        assert pairs == [(2, 1), (2, 0), (2, 3)]
        assert game_state.galaxy.to_rows() == [".C.", "CCC", ".C."]
        assert [c.company_id for c in game_state.companies_on_map] == [2]
        assert game_state.check_invariants() == []

    def test_same_company_on_two_sides_is_not_a_merge(self, make_game, list_company):
        game_state = make_game(["A.A"])
        list_company(game_state, 0, {0: 5})
        outcome = resolve_position(game_state, 1, 0)

        assert outcome.kind == MoveKind.EXPANDED
        assert outcome.mergers == []


# =============================================================================
# Selections
# =============================================================================


class TestSelections:
    """process_move entry point."""

    def test_select_by_coordinate(self, make_game):
        game_state = make_game(["...", "..."])
        game_state.moves = [(0, 0), (2, 1)]
        outcome = process_move(game_state, (2, 1))
        assert outcome.position == (2, 1)

    def test_select_by_numpy_index(self, make_game):
        game_state = make_game(["...", "..."])
        game_state.moves = [(0, 0), (2, 1)]
        outcome = process_move(game_state, np.int64(1))
        assert outcome.position == (2, 1)
        assert outcome.kind == MoveKind.OUTPOST

    @pytest.mark.parametrize("selection", [5, -1, (1, 1), "a", None, True])
    def test_invalid_selection(self, make_game, selection):
        game_state = make_game(["...", "..."])
        game_state.moves = [(0, 0)]
        with pytest.raises(InvalidSelectionError):
            process_move(game_state, selection)

    def test_quit_ends_game_without_economy(self, make_game, quiet_stream):
        game_state = make_game(["..."], random_stream=quiet_stream)
        outcome = process_move(game_state, Selection.QUIT)

        assert outcome.kind == MoveKind.QUIT
        assert outcome.game_over
        assert game_state.end_reason == "quit"
        assert quiet_stream.float_draws == 0

    def test_voluntary_bankruptcy_then_economy(self, make_game, list_company, quiet_stream):
        game_state = make_game(["A.."], random_stream=quiet_stream)
        list_company(game_state, 0, {0: 3, 1: 2})
        outcome = process_move(game_state, Selection.BANKRUPT)

        alice = game_state.players[0]
        assert outcome.kind == MoveKind.BANKRUPT
        assert not outcome.game_over
        assert not alice.in_game
        assert alice.cash == 0.0
        assert game_state.companies[0].stock_issued == 2
        assert quiet_stream.float_draws > 0

    def test_last_player_bankrupt_ends_game(self, make_game):
        game_state = make_game(["..."], player_names=("Solo",))
        outcome = process_move(game_state, Selection.BANKRUPT)
        assert outcome.game_over
        assert game_state.end_reason == "all_bankrupt"

    def test_no_moves_after_game_end(self, make_game):
        game_state = make_game(["..."])
        game_state.end_game("quit")
        with pytest.raises(GameAlreadyEndedError):
            process_move(game_state, Selection.QUIT)
