"""Central game state management for Star Traders."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Union
from datetime import datetime
import logging
import uuid

from ..core.enums import GameStatus
from ..core.exceptions import GameStateError, InvalidGameStateError, InvalidPlayerError, ValidationError
from ..core.constants import (
    MAX_X, MAX_Y, NUMBER_MOVES, DEFAULT_MAX_TURN, INITIAL_INTEREST_RATE, MAX_PLAYERS
)
from ..core.random_stream import RandomStream, SeededRandomStream
from ..utils.validation import GameValidator, Validator
from ..entities.player import Player, create_starting_player
from ..entities.company import Company, create_company_registry
from .board import GalaxyMap, Coordinate


@dataclass
class GameSettings:
    """Configuration settings for a game."""

    max_turns: int = DEFAULT_MAX_TURN
    width: int = MAX_X
    height: int = MAX_Y
    number_moves: int = NUMBER_MOVES
    seed: Optional[int] = None

    def validate(self) -> None:
        """Validate game settings."""
        GameValidator.validate_max_turns(self.max_turns)
        Validator.validate_positive(self.width, "width")
        Validator.validate_positive(self.height, "height")
        Validator.validate_range(self.number_moves, 1, self.width * self.height, "number_moves")


@dataclass
class GameState:
    """Everything one game session owns.

    The engine functions take this aggregate by reference and mutate it in
    place; nothing is held in module globals, so several sessions can run
    side by side.
    """

    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: GameStatus = GameStatus.SETUP
    settings: GameSettings = field(default_factory=GameSettings)
    random_stream: Optional[RandomStream] = None

    # Game progression
    turn_number: int = 1
    current_player_index: int = 0
    first_player_index: int = 0
    interest_rate: float = INITIAL_INTEREST_RATE
    end_reason: Optional[str] = None

    # Ledger and map
    players: List[Player] = field(default_factory=list)
    companies: List[Company] = field(default_factory=create_company_registry)
    galaxy: Optional[GalaxyMap] = None

    # Move catalog for the current turn
    moves: List[Coordinate] = field(default_factory=list)

    action_log: List[Dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.random_stream is None:
            self.random_stream = SeededRandomStream(self.settings.seed)
        if self.galaxy is None:
            self.galaxy = GalaxyMap(self.settings.width, self.settings.height)

    def validate(self) -> None:
        """Validate entire game state."""
        self.settings.validate()
        Validator.validate_list_length(self.players, 1, MAX_PLAYERS, "players")
        Validator.validate_range(self.current_player_index, 0, len(self.players) - 1, "current_player_index")
        for player in self.players:
            player.validate()
        for company in self.companies:
            company.validate()

        violations = self.check_invariants()
        if violations:
            raise InvalidGameStateError(
                "Game state invariants violated",
                error_code="INVARIANT",
                context={"violations": "; ".join(violations)}
            )

    @property
    def is_setup(self) -> bool:
        return self.status == GameStatus.SETUP

    @property
    def is_active(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == GameStatus.COMPLETED

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players or self.current_player_index >= len(self.players):
            return None
        return self.players[self.current_player_index]

    @property
    def active_players(self) -> List[Player]:
        """Players still in the game."""
        return [p for p in self.players if p.in_game]

    @property
    def companies_on_map(self) -> List[Company]:
        return [c for c in self.companies if c.on_map]

    def add_player(self, name: str) -> Player:
        """Add a player to the game."""
        if not self.is_setup:
            raise GameStateError("Cannot add players after game starts")

        if len(self.players) >= MAX_PLAYERS:
            raise GameStateError(f"Cannot add more than {MAX_PLAYERS} players")

        if any(p.name == name for p in self.players):
            raise GameStateError(f"Player name {name!r} already taken")

        player = create_starting_player(name)
        self.players.append(player)
        self._log_action("player_added", {"name": name})
        return player

    def start_game(self) -> None:
        """Scatter the stars and pick who goes first."""
        if not self.is_setup:
            raise GameStateError("Game is not in setup phase")

        if not self.players:
            raise GameStateError("Need at least one player to start")

        rng = self.random_stream
        self.galaxy = GalaxyMap.generate(rng, self.settings.width, self.settings.height)

        if len(self.players) == 1:
            self.first_player_index = 0
        else:
            self.first_player_index = rng.uniform_int(len(self.players))
        self.current_player_index = self.first_player_index

        self.turn_number = 1
        self.interest_rate = INITIAL_INTEREST_RATE
        self.status = GameStatus.IN_PROGRESS

        logging.info(f"Game {self.game_id[:8]} started with {len(self.players)} players; "
                     f"{self.current_player.name} goes first")
        self._log_action("game_started", {
            "player_count": len(self.players),
            "first_player": self.current_player.name,
            "settings": self.settings.__dict__,
        })

    def end_game(self, reason: str = "completed") -> None:
        """End the game."""
        if self.is_completed:
            return

        self.status = GameStatus.COMPLETED
        self.end_reason = reason
        winner = self.winner

        logging.info(f"Game {self.game_id[:8]} ended ({reason}); winner: {winner.name if winner else None}")
        self._log_action("game_ended", {
            "reason": reason,
            "winner": winner.name if winner else None,
            "final_values": {p.name: round(self.total_value(p), 2) for p in self.players},
        })

    def get_player(self, player: Union[int, Player]) -> Player:
        if isinstance(player, Player):
            return player
        if not 0 <= player < len(self.players):
            raise InvalidPlayerError(
                f"Player index {player} is not valid",
                error_code="INVALID_PLAYER",
                context={"index": player, "player_count": len(self.players)}
            )
        return self.players[player]

    def total_value(self, player: Union[int, Player]) -> float:
        """Net worth: cash minus debt plus market value of on-map holdings."""
        return self.get_player(player).total_value(self.companies)

    def next_player(self) -> None:
        """Advance to the next player still in the game.

        The turn counter ticks over each time play wraps around to the
        player who went first. When nobody is left in the game, or the
        turn limit is passed, the game ends instead.
        """
        if not self.active_players:
            self.end_game("all_bankrupt")
            return

        count = len(self.players)
        while True:
            self.current_player_index = (self.current_player_index + 1) % count
            if self.current_player_index == self.first_player_index:
                self.turn_number += 1
            if self.players[self.current_player_index].in_game:
                break

        self.current_player.bid_used = False

        if self.turn_number > self.settings.max_turns:
            self.end_game("turn_limit")

    def final_standings(self) -> List[Player]:
        """All players ranked by net worth, richest first."""
        return sorted(self.players, key=self.total_value, reverse=True)

    @property
    def winner(self) -> Optional[Player]:
        """Richest player still in the game, or richest overall if none are."""
        if not self.players:
            return None
        standings = self.final_standings()
        for player in standings:
            if player.in_game:
                return player
        return standings[0]

    def check_invariants(self) -> List[str]:
        """Describe every broken ledger or map invariant (empty when sound)."""
        violations = []

        for company in self.companies:
            held = sum(p.stock_owned[company.company_id] for p in self.players)
            cells = self.galaxy.count_company_cells(company.company_id)

            if company.on_map and held != company.stock_issued:
                violations.append(
                    f"{company.letter}: players hold {held} shares, {company.stock_issued} issued"
                )
            if not company.on_map and cells:
                violations.append(f"{company.letter}: off the map but owns {cells} cells")
            if not company.on_map and held:
                violations.append(f"{company.letter}: off the map but players hold {held} shares")

        for company_id in self.galaxy.company_ids_on_map():
            if not self.companies[company_id].on_map:
                violations.append(f"map cell holds off-map company {company_id}")

        for player in self.players:
            if player.debt < 0:
                violations.append(f"{player.name}: negative debt {player.debt}")
            if any(count < 0 for count in player.stock_owned):
                violations.append(f"{player.name}: negative holding")

        return violations

    def _log_action(self, action_type: str, data: Dict[str, Any]) -> None:
        """Log a game action."""
        current = self.current_player
        action_entry = {
            "id": str(uuid.uuid4()),
            "timestamp": datetime.now().isoformat(),
            "turn": self.turn_number,
            "action_type": action_type,
            "current_player": current.name if current else None,
            "data": data
        }
        self.action_log.append(action_entry)

    def get_game_summary(self) -> Dict[str, Any]:
        """Get comprehensive game summary."""
        winner = self.winner if self.is_completed else None
        return {
            "game_id": self.game_id,
            "status": self.status.value,
            "turn_number": self.turn_number,
            "max_turns": self.settings.max_turns,
            "current_player": self.current_player.name if self.current_player else None,
            "interest_rate": round(self.interest_rate, 4),
            "companies_on_map": [c.to_dict() for c in self.companies_on_map],
            "active_players": len(self.active_players),
            "winner": winner.name if winner else None,
            "end_reason": self.end_reason,
            "total_actions": len(self.action_log),
            "player_values": {
                p.name: round(self.total_value(p), 2) for p in self.players
            }
        }

    def __str__(self) -> str:
        return (f"Game {self.game_id[:8]} - {self.status.value.title()} - "
                f"Turn {self.turn_number} - {len(self.active_players)} players")


def create_game(player_names: List[str], settings: Optional[GameSettings] = None,
                random_stream: Optional[RandomStream] = None) -> GameState:
    """Create and start a new game."""
    if settings is None:
        settings = GameSettings()

    settings.validate()
    GameValidator.validate_player_names(player_names)

    game_state = GameState(settings=settings, random_stream=random_stream)
    for name in player_names:
        game_state.add_player(name)

    game_state.start_game()
    return game_state


def validate_game_configuration(player_names: List[str], settings: GameSettings) -> List[str]:
    """Validate game configuration and return any errors."""
    errors = []

    try:
        settings.validate()
    except ValidationError as e:
        errors.append(f"Settings validation: {str(e)}")

    try:
        GameValidator.validate_player_names(player_names)
    except ValidationError as e:
        errors.append(f"Player validation: {str(e)}")

    return errors
