"""Core enumerations for the Star Traders engine."""

from enum import Enum, IntEnum


class CellType(IntEnum):
    """Non-company values a galaxy map cell can hold.

    Company cells hold the company id itself (0 .. MAX_COMPANIES - 1), so
    every non-company value is negative.
    """
    EMPTY = -1
    OUTPOST = -2
    STAR = -3


class Selection(Enum):
    """Sentinel selections that bypass spatial move resolution."""
    BANKRUPT = "bankrupt"
    QUIT = "quit"


class GameStatus(Enum):
    """Game status enumeration."""
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MoveKind(Enum):
    """What a resolved move did to the map."""
    OUTPOST = "outpost"
    FOUNDED = "founded"
    EXPANDED = "expanded"
    MERGED = "merged"
    BANKRUPT = "bankrupt"
    QUIT = "quit"


class TurnPhase(Enum):
    """Phases within a single player's turn."""
    SELECT_MOVES = "select_moves"
    RESOLVE_MOVE = "resolve_move"
    TRADING = "trading"
    NEXT_PLAYER = "next_player"
