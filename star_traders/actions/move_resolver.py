"""Move resolution: turning a selected map cell into outposts, companies and mergers.

The cell's four neighbours decide what happens, checked in order:

1. all empty: the cell becomes an outpost;
2. no company next door, but an outpost or star: a new company is founded
   (or, when every company slot is taken, an outpost is placed);
3. otherwise the neighbouring companies merge pairwise, and the survivor
   extends onto the cell.

A cell that ends up owned by a company then collects a bonus for each
adjacent star and absorbs any adjacent chain of outposts.
"""

from numbers import Integral
from typing import List, Optional, Tuple, Union
import logging

from ..core.enums import CellType, MoveKind, Selection
from ..core.constants import (
    SHARE_PRICE_INC, SHARE_PRICE_INC_STAR, SHARE_PRICE_INC_OUTPOST,
    SHARE_PRICE_INC_OUTSTAR, INITIAL_STOCK_ISSUED
)
from ..core.exceptions import InvalidSelectionError, InvalidMoveError, raise_if_game_ended
from ..entities.company import next_free_company_id
from ..game.game_state import GameState
from ..game.board import Coordinate, is_company
from .base_action import MoveOutcome
from .bankruptcy import bankrupt_player
from .merger import merge_companies

MoveSelection = Union[int, Coordinate, Selection]

# Neighbour pairs checked for mergers, as attribute names on Neighbors
MERGE_PAIRS = (
    ("left", "right"),
    ("left", "up"),
    ("left", "down"),
    ("right", "up"),
    ("right", "down"),
    ("up", "down"),
)


def process_move(game_state: GameState, selection: MoveSelection) -> MoveOutcome:
    """Resolve the current player's selection, then run the economy.

    ``selection`` is an index into the current move catalog, a coordinate
    from it, or one of the ``Selection`` sentinels. ``Selection.QUIT``
    ends the game without touching the economy.
    """
    raise_if_game_ended(game_state, "process_move")

    if selection == Selection.QUIT:
        game_state.end_game("quit")
        outcome = MoveOutcome(kind=MoveKind.QUIT, game_over=True)
        game_state._log_action("move", outcome.get_action_data())
        return outcome

    if selection == Selection.BANKRUPT:
        bankrupt_player(game_state, forced=False)
        outcome = MoveOutcome(kind=MoveKind.BANKRUPT)
    else:
        x, y = _selection_to_coordinate(game_state, selection)
        outcome = resolve_position(game_state, x, y)

    game_state._log_action("move", outcome.get_action_data())

    if not game_state.is_completed:
        from ..simulation.economy import adjust_values
        adjust_values(game_state)

    outcome.game_over = game_state.is_completed
    return outcome


def _selection_to_coordinate(game_state: GameState, selection) -> Coordinate:
    moves = game_state.moves
    if isinstance(selection, bool) or not isinstance(selection, (Integral, tuple)):
        raise InvalidSelectionError(
            f"Unrecognised selection {selection!r}",
            error_code="BAD_SELECTION",
            context={"selection": selection}
        )

    if isinstance(selection, Integral):
        selection = int(selection)
        if not 0 <= selection < len(moves):
            raise InvalidSelectionError(
                f"Selection {selection} is outside the move catalog",
                error_code="BAD_SELECTION",
                context={"selection": selection, "catalog_size": len(moves)}
            )
        return moves[selection]

    if tuple(selection) not in moves:
        raise InvalidSelectionError(
            f"Coordinate {selection} is not in the move catalog",
            error_code="BAD_SELECTION",
            context={"selection": selection}
        )
    return tuple(selection)


def resolve_position(game_state: GameState, x: int, y: int) -> MoveOutcome:
    """Apply a move at (x, y) to the map and company registry."""
    galaxy = game_state.galaxy
    if not galaxy.is_empty(x, y):
        raise InvalidMoveError(
            f"Cell ({x}, {y}) is not empty space",
            error_code="CELL_OCCUPIED",
            context={"x": x, "y": y, "value": galaxy.get(x, y)}
        )

    rng = game_state.random_stream
    outcome = MoveOutcome(kind=MoveKind.OUTPOST, position=(x, y))
    nbrs = galaxy.neighbors(x, y)

    if nbrs.all_empty:
        galaxy.set(x, y, CellType.OUTPOST)

    elif not nbrs.any_company:
        founded = try_start_new_company(game_state, x, y)
        if founded is not None:
            outcome.kind = MoveKind.FOUNDED
            outcome.founded_company_id = founded

    else:
        for first, second in MERGE_PAIRS:
            a = getattr(nbrs, first)
            b = getattr(nbrs, second)
            if is_company(a) and is_company(b) and a != b:
                galaxy.set(x, y, a)
                outcome.mergers.append(merge_companies(game_state, a, b))
                nbrs = galaxy.neighbors(x, y)
        if outcome.mergers:
            outcome.kind = MoveKind.MERGED

    # Extend a neighbouring company onto the cell
    nearby = nbrs.first_company()
    if nearby is not None:
        galaxy.set(x, y, nearby)
        game_state.companies[nearby].increase_share_price(SHARE_PRICE_INC, rng)
        if outcome.kind == MoveKind.OUTPOST:
            outcome.kind = MoveKind.EXPANDED

    current = galaxy.get(x, y)
    if is_company(current):
        outcome.company_id = current
        company = game_state.companies[current]

        for value in nbrs.values():
            if value == CellType.STAR:
                company.increase_share_price(SHARE_PRICE_INC_STAR, rng)
                outcome.star_bonuses += 1

        seeds = [
            coord for coord, value in zip(galaxy.neighbor_coordinates(x, y), nbrs.values())
            if value == CellType.OUTPOST
        ]
        outcome.absorbed_outposts = absorb_outposts(game_state, current, seeds)

    return outcome


def try_start_new_company(game_state: GameState, x: int, y: int) -> Optional[int]:
    """Found a company at (x, y), or place an outpost if no slot is free.

    Only called for a cell next to an outpost or star with no company
    alongside. Returns the new company id, or None for an outpost.
    """
    galaxy = game_state.galaxy
    company_id = next_free_company_id(game_state.companies)

    if company_id is None:
        galaxy.set(x, y, CellType.OUTPOST)
        return None

    company = game_state.companies[company_id]
    company.found()
    galaxy.set(x, y, company_id)

    for player in game_state.players:
        player.stock_owned[company_id] = 0
    founder = game_state.current_player
    founder.stock_owned[company_id] = INITIAL_STOCK_ISSUED

    logging.info(f"A new company has been formed: {company.name} (founded by {founder.name})")
    game_state._log_action("company_founded", {
        "company": company.name,
        "company_id": company_id,
        "position": (x, y),
        "founder": founder.name,
    })
    return company_id


def absorb_outposts(game_state: GameState, company_id: int,
                    seeds: List[Coordinate]) -> List[Coordinate]:
    """Convert every outpost connected to ``seeds`` into company territory.

    Cells are visited depth first in left, right, up, down order. Each
    absorbed outpost raises the share price once, plus once more per
    adjacent star. Returns the absorbed cells in visiting order.
    """
    galaxy = game_state.galaxy
    company = game_state.companies[company_id]
    rng = game_state.random_stream

    absorbed: List[Coordinate] = []
    visited = set()
    stack: List[Tuple[int, int]] = list(reversed(seeds))

    while stack:
        x, y = stack.pop()
        if (x, y) in visited or galaxy.get(x, y) != CellType.OUTPOST:
            continue
        visited.add((x, y))

        nbrs = galaxy.neighbors(x, y)
        galaxy.set(x, y, company_id)
        company.increase_share_price(SHARE_PRICE_INC_OUTPOST, rng)
        for _ in range(nbrs.count(CellType.STAR)):
            company.increase_share_price(SHARE_PRICE_INC_OUTSTAR, rng)
        absorbed.append((x, y))

        next_cells = [
            coord for coord, value in zip(galaxy.neighbor_coordinates(x, y), nbrs.values())
            if value == CellType.OUTPOST and coord not in visited
        ]
        stack.extend(reversed(next_cells))

    return absorbed
