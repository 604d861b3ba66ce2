"""Turn management and phase progression for Star Traders."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Callable
from enum import Enum
import logging

from ..core.enums import TurnPhase
from ..core.exceptions import GameStateError, SimulationError
from ..actions.base_action import MoveOutcome
from ..actions.move_catalog import select_moves
from ..actions.move_resolver import MoveSelection, process_move
from .board import Coordinate
from .game_state import GameState

# Chooses a selection from the catalog for the current player
MoveChooser = Callable[[GameState, List[Coordinate]], MoveSelection]
# Trading done by the current player between their move and the next player
TradingHook = Callable[[GameState], None]

PHASE_ORDER = (
    TurnPhase.SELECT_MOVES,
    TurnPhase.RESOLVE_MOVE,
    TurnPhase.TRADING,
    TurnPhase.NEXT_PLAYER,
)


class PhaseResult(Enum):
    """Result of processing a turn phase."""
    CONTINUE = "continue"
    SKIP = "skip"
    END_GAME = "end_game"


@dataclass
class TurnRecord:
    """What happened during one player's turn."""

    turn_number: int
    player_name: str
    moves: List[Coordinate] = field(default_factory=list)
    selection: Optional[MoveSelection] = None
    outcome: Optional[MoveOutcome] = None
    traded: bool = False
    game_over: bool = False
    phase_results: Dict[str, str] = field(default_factory=dict)


class TurnManager:
    """Drives one player turn at a time through its phases.

    Callbacks registered for a phase run before and after it with
    ``(game_state, timing)``, where timing is ``"pre"`` or ``"post"``.
    """

    def __init__(self, game_state: GameState):
        self.game_state = game_state
        self.phase_callbacks: Dict[TurnPhase, List[Callable]] = {}
        self.turn_history: List[TurnRecord] = []

    def register_phase_callback(self, phase: TurnPhase, callback: Callable) -> None:
        """Register a callback for a specific phase."""
        if phase not in self.phase_callbacks:
            self.phase_callbacks[phase] = []
        self.phase_callbacks[phase].append(callback)

    def play_turn(self, choose_move: MoveChooser,
                  trade: Optional[TradingHook] = None) -> TurnRecord:
        """Play the current player's turn from move selection to handover."""
        if not self.game_state.is_active:
            raise GameStateError("Cannot play a turn - game is not active")

        record = TurnRecord(
            turn_number=self.game_state.turn_number,
            player_name=self.game_state.current_player.name,
        )
        processors = {
            TurnPhase.SELECT_MOVES: lambda: self._process_select_moves(record),
            TurnPhase.RESOLVE_MOVE: lambda: self._process_resolve_move(record, choose_move),
            TurnPhase.TRADING: lambda: self._process_trading(record, trade),
            TurnPhase.NEXT_PLAYER: self._process_next_player,
        }

        for phase in PHASE_ORDER:
            self._run_phase_callbacks(phase, "pre")
            result = processors[phase]()
            record.phase_results[phase.value] = result.value
            self._run_phase_callbacks(phase, "post")
            if result == PhaseResult.END_GAME:
                break

        record.game_over = self.game_state.is_completed
        self.turn_history.append(record)
        return record

    def play_game(self, choose_move: MoveChooser, trade: Optional[TradingHook] = None,
                  max_player_turns: Optional[int] = None) -> List[TurnRecord]:
        """Play turns until the game ends.

        ``max_player_turns`` guards against a runaway loop; exceeding it
        raises ``SimulationError``.
        """
        if max_player_turns is None:
            max_player_turns = (self.game_state.settings.max_turns + 1) * len(self.game_state.players)

        records = []
        while self.game_state.is_active:
            if len(records) >= max_player_turns:
                raise SimulationError(
                    "Game did not finish within the player turn limit",
                    error_code="RUNAWAY_GAME",
                    context={"player_turns": len(records)}
                )
            records.append(self.play_turn(choose_move, trade))
        return records

    def _run_phase_callbacks(self, phase: TurnPhase, timing: str) -> None:
        """Run callbacks for a phase."""
        callbacks = self.phase_callbacks.get(phase, [])
        for callback in callbacks:
            try:
                callback(self.game_state, timing)
            except Exception as e:
                logging.warning(f"Phase callback error for {phase.value}: {str(e)}")

    # Phase processors

    def _process_select_moves(self, record: TurnRecord) -> PhaseResult:
        moves = select_moves(self.game_state)
        if moves is None:
            return PhaseResult.END_GAME
        record.moves = list(moves)
        return PhaseResult.CONTINUE

    def _process_resolve_move(self, record: TurnRecord, choose_move: MoveChooser) -> PhaseResult:
        record.selection = choose_move(self.game_state, list(record.moves))
        record.outcome = process_move(self.game_state, record.selection)
        if record.outcome.game_over:
            return PhaseResult.END_GAME
        return PhaseResult.CONTINUE

    def _process_trading(self, record: TurnRecord, trade: Optional[TradingHook]) -> PhaseResult:
        player = self.game_state.current_player
        if trade is None or not player.in_game:
            return PhaseResult.SKIP
        trade(self.game_state)
        record.traded = True
        return PhaseResult.CONTINUE

    def _process_next_player(self) -> PhaseResult:
        self.game_state.next_player()
        if self.game_state.is_completed:
            return PhaseResult.END_GAME
        return PhaseResult.CONTINUE

    def get_turn_status(self) -> Dict[str, Any]:
        """Get a snapshot of whose turn it is and how far the game has gone."""
        gs = self.game_state
        return {
            "turn_number": gs.turn_number,
            "max_turns": gs.settings.max_turns,
            "current_player": gs.current_player.name if gs.current_player else None,
            "active_players": [p.name for p in gs.active_players],
            "turns_played": len(self.turn_history),
            "is_active": gs.is_active,
        }

    def __str__(self) -> str:
        status = self.get_turn_status()
        return (f"TurnManager: Turn {status['turn_number']}/{status['max_turns']}, "
                f"Player: {status['current_player']}")
