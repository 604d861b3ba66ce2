"""Shared fixtures: hand-built galaxies and deterministic random streams."""

from typing import Dict, Iterable, Optional

import pytest

from star_traders.core.enums import GameStatus
from star_traders.core.random_stream import FixedRandomStream, RandomStream, ScriptedRandomStream
from star_traders.game.board import GalaxyMap
from star_traders.game.game_state import GameState, GameSettings


@pytest.fixture
def quiet_stream() -> FixedRandomStream:
    """Stream on which no random economic event fires.

    Every share price increment multiplies by 1.475 and adds inc / 14.5
    to max_stock; merge damping divides by 2.45.
    """
    return FixedRandomStream(0.95)


@pytest.fixture
def scripted_stream():
    """Factory for a stream that replays exactly the given draws."""

    def _script(values) -> ScriptedRandomStream:
        return ScriptedRandomStream(list(values))

    return _script


@pytest.fixture
def make_game():
    """Factory for an in-progress game on a map drawn as text rows."""

    def _make(rows: Iterable[str], player_names=("Alice", "Bob"),
              random_stream: Optional[RandomStream] = None,
              number_moves: int = 1, current_player: int = 0) -> GameState:
        if random_stream is None:
            random_stream = FixedRandomStream(0.95)
        if isinstance(random_stream, FixedRandomStream) and number_moves > 1:
            raise ValueError("A fixed stream cannot draw more than one distinct move")

        galaxy = GalaxyMap.from_rows(list(rows))
        settings = GameSettings(width=galaxy.width, height=galaxy.height, number_moves=number_moves)
        game_state = GameState(settings=settings, random_stream=random_stream)
        for name in player_names:
            game_state.add_player(name)
        game_state.galaxy = galaxy
        game_state.status = GameStatus.IN_PROGRESS
        game_state.current_player_index = current_player
        game_state.first_player_index = current_player
        return game_state

    return _make


@pytest.fixture
def list_company():
    """Put a company on the map with the given holdings per player index."""

    def _list(game_state: GameState, company_id: int, holdings: Dict[int, int],
              price: float = 100.0, share_return: float = 0.05, max_stock: int = 100):
        company = game_state.companies[company_id]
        company.on_map = True
        company.share_price = price
        company.share_return = share_return
        company.stock_issued = sum(holdings.values())
        company.max_stock = max_stock
        for index, count in holdings.items():
            game_state.players[index].stock_owned[company_id] = count
        return company

    return _list
