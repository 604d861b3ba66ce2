"""
Star Traders - an interstellar trading and shipping game engine.

This package provides the galaxy map, move resolution, company mergers and
the turn-by-turn economy of Star Traders, with a headless simulator for
autoplay.
"""

__version__ = "0.1.0"
__author__ = "Star Traders Simulator Team"

from .game.game_state import GameState, GameSettings, create_game
from .game.turn_manager import TurnManager
from .entities.player import Player
from .entities.company import Company
from .actions.move_catalog import select_moves
from .actions.move_resolver import process_move
from .simulation.simulator import StarTradersSimulator, SimulationConfig

__all__ = [
    "GameState", "GameSettings", "create_game", "TurnManager",
    "Player", "Company", "select_moves", "process_move",
    "StarTradersSimulator", "SimulationConfig",
]
