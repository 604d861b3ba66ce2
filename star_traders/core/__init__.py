"""Core game engine components."""

from .enums import *
from .exceptions import *
from .constants import *
from .random_stream import RandomStream, SeededRandomStream, ScriptedRandomStream, FixedRandomStream

__all__ = [
    # Enums
    "CellType", "Selection", "GameStatus", "MoveKind", "TurnPhase",
    # Exceptions
    "StarTradersError", "ValidationError", "GameStateError", "ActionError",
    "InvalidSelectionError", "InvalidMoveError", "TradingError",
    # Random streams
    "RandomStream", "SeededRandomStream", "ScriptedRandomStream", "FixedRandomStream",
    # Constants
    "MAX_X", "MAX_Y", "NUMBER_MOVES", "MAX_PLAYERS", "MAX_COMPANIES",
]
