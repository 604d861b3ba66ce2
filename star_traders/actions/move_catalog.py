"""Generation of each turn's menu of selectable map cells."""

from typing import List, Optional
import logging

from ..core.exceptions import raise_if_game_ended
from ..game.game_state import GameState
from ..game.board import Coordinate


def select_moves(game_state: GameState) -> Optional[List[Coordinate]]:
    """Pick this turn's candidate cells and store them on the game state.

    Returns the catalog sorted by (x, y), or None when fewer empty cells
    remain than the catalog needs; in that case the game is over and the
    map is untouched.
    """
    raise_if_game_ended(game_state, "select_moves")

    galaxy = game_state.galaxy
    number_moves = game_state.settings.number_moves
    rng = game_state.random_stream

    if galaxy.count_empty() < number_moves:
        logging.info(f"Only {galaxy.count_empty()} empty cells left: no more moves possible")
        game_state.moves = []
        game_state.end_game("no_moves")
        return None

    chosen: List[Coordinate] = []
    while len(chosen) < number_moves:
        x = rng.uniform_int(galaxy.width)
        y = rng.uniform_int(galaxy.height)
        if galaxy.is_empty(x, y) and (x, y) not in chosen:
            chosen.append((x, y))

    chosen.sort()
    game_state.moves = chosen
    return chosen
