"""Headless autoplay for Star Traders games."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Callable
import logging
from datetime import datetime

from ..game.game_state import GameState, GameSettings, create_game
from ..game.turn_manager import TurnManager, TurnRecord
from ..game.board import Coordinate
from ..core.exceptions import InvalidGameStateError, SimulationError, StarTradersError
from ..core.random_stream import RandomStream, SeededRandomStream
from ..utils.validation import GameValidator


@dataclass
class SimulationConfig:
    """Configuration for simulation runs."""

    max_turns: int = 50
    player_names: List[str] = field(default_factory=lambda: ["Player1", "Player2"])
    random_seed: Optional[int] = None
    detailed_logging: bool = False
    render_map_path: Optional[str] = None  # PNG of the final galaxy
    check_invariants: bool = False  # Verify the ledger after every turn

    def validate(self) -> None:
        """Validate simulation configuration."""
        GameValidator.validate_max_turns(self.max_turns)
        GameValidator.validate_player_names(self.player_names)


@dataclass
class SimulationResult:
    """Results of a simulation run."""

    game_id: str
    config: SimulationConfig
    final_state: GameState
    winner: Optional[str] = None
    total_turns: int = 0
    player_turns: int = 0
    end_reason: Optional[str] = None
    execution_time_seconds: float = 0.0

    final_standings: List[Dict[str, Any]] = field(default_factory=list)
    action_statistics: Dict[str, int] = field(default_factory=dict)

    def get_summary(self) -> Dict[str, Any]:
        """Get concise simulation summary."""
        return {
            "game_id": self.game_id,
            "winner": self.winner,
            "total_turns": self.total_turns,
            "player_turns": self.player_turns,
            "end_reason": self.end_reason,
            "execution_time": f"{self.execution_time_seconds:.2f}s",
            "final_values": {s["name"]: s["total_value"] for s in self.final_standings},
        }


class StarTradersSimulator:
    """Plays a whole game with random move choices and no trading."""

    def __init__(self, config: SimulationConfig = None, random_stream: Optional[RandomStream] = None):
        self.config = config or SimulationConfig()
        self.config.validate()

        self.random_stream = random_stream or SeededRandomStream(self.config.random_seed)
        self.game_state: Optional[GameState] = None
        self.turn_manager: Optional[TurnManager] = None
        self.turn_records: List[TurnRecord] = []
        self.simulation_callbacks: Dict[str, List[Callable]] = {}
        self.start_time: Optional[datetime] = None

        # Setup logging
        if self.config.detailed_logging:
            logging.basicConfig(level=logging.INFO)

    def create_game(self) -> GameState:
        """Create a new game for the configured players."""
        settings = GameSettings(max_turns=self.config.max_turns, seed=self.config.random_seed)
        self.game_state = create_game(list(self.config.player_names), settings, self.random_stream)
        self.turn_manager = TurnManager(self.game_state)
        return self.game_state

    def choose_move(self, game_state: GameState, moves: List[Coordinate]) -> int:
        """Pick a catalog entry uniformly at random from the session stream."""
        return game_state.random_stream.uniform_int(len(moves))

    def run(self) -> SimulationResult:
        """Run a complete simulation."""
        self.start_time = datetime.now()

        try:
            self.create_game()
            logging.info(f"Starting simulation with {len(self.game_state.players)} players")

            while self.game_state.is_active:
                record = self.turn_manager.play_turn(self.choose_move)
                self.turn_records.append(record)
                self._trigger_callbacks("turn_completed", record)

                if self.config.check_invariants:
                    self._verify_invariants()

            if self.config.render_map_path:
                from ..utils.map_renderer import render_galaxy_png
                render_galaxy_png(self.game_state, self.config.render_map_path)

            result = self._generate_simulation_result()
            result.execution_time_seconds = (datetime.now() - self.start_time).total_seconds()

            logging.info(f"Simulation completed: {result.get_summary()}")
            return result

        except SimulationError:
            raise
        except StarTradersError as e:
            logging.error(f"Simulation failed: {str(e)}")
            raise SimulationError(f"Simulation execution failed: {str(e)}")

    def _verify_invariants(self) -> None:
        try:
            self.game_state.validate()
        except InvalidGameStateError as e:
            raise SimulationError(
                "Ledger invariants broken during simulation",
                error_code="INVARIANT",
                context={"turn": self.game_state.turn_number, **e.context}
            )

    def _generate_simulation_result(self) -> SimulationResult:
        """Generate final simulation results."""
        gs = self.game_state
        result = SimulationResult(
            game_id=gs.game_id,
            config=self.config,
            final_state=gs,
            total_turns=min(gs.turn_number, gs.settings.max_turns),
            player_turns=len(self.turn_records),
            end_reason=gs.end_reason,
        )

        winner = gs.winner
        if winner:
            result.winner = winner.name

        for player in gs.final_standings():
            result.final_standings.append(player.get_portfolio_summary(gs.companies))

        # Count action types
        for action_entry in gs.action_log:
            action_type = action_entry.get("action_type", "unknown")
            result.action_statistics[action_type] = result.action_statistics.get(action_type, 0) + 1

        return result

    def register_callback(self, event_type: str, callback: Callable) -> None:
        """Register callback for simulation events."""
        if event_type not in self.simulation_callbacks:
            self.simulation_callbacks[event_type] = []
        self.simulation_callbacks[event_type].append(callback)

    def _trigger_callbacks(self, event_type: str, *args) -> None:
        for callback in self.simulation_callbacks.get(event_type, []):
            try:
                callback(self.game_state, *args)
            except Exception as e:
                logging.warning(f"Simulation callback error for {event_type}: {str(e)}")

    def get_simulation_status(self) -> Dict[str, Any]:
        """Get current simulation status."""
        if not self.game_state:
            return {"status": "not_started"}

        return {
            **self.game_state.get_game_summary(),
            "player_turns": len(self.turn_records),
            "execution_time": (
                (datetime.now() - self.start_time).total_seconds()
                if self.start_time else 0
            )
        }


def run_quick_simulation(player_names: List[str], max_turns: int = 50,
                         seed: Optional[int] = None) -> SimulationResult:
    """Play one seeded game and return its result."""
    config = SimulationConfig(max_turns=max_turns, player_names=player_names, random_seed=seed)
    return StarTradersSimulator(config).run()
