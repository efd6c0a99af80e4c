"""
Pytest fixtures for NashMines tests.
"""

import random

import pytest

from ..engine_core.state import GameState, GameSettings, StrategyMode
from ..engine_core.grid import tiles_from_layout
from ..engine_core.reducer import start_new_game
from ..session import SessionManager, InMemoryWallet, InMemoryHistory

# Hazards in three corners; tile 12 (center) is safe
CORNER_HAZARDS = [0, 4, 20]


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def fresh_game() -> GameState:
    """Balanced game, bet 10, 3 corner hazards, nothing revealed."""
    return start_new_game(
        10.0,
        3,
        tiles=tiles_from_layout(CORNER_HAZARDS),
        game_id="test_game",
    )


@pytest.fixture
def quiet_game() -> GameState:
    """Same layout with the advisor turned off."""
    return start_new_game(
        10.0,
        3,
        enable_advisor=False,
        tiles=tiles_from_layout(CORNER_HAZARDS),
        game_id="quiet_game",
    )


@pytest.fixture
def one_safe_tile_game() -> GameState:
    """24 hazards; tile 12 is the only safe tile."""
    return start_new_game(
        10.0,
        24,
        tiles=tiles_from_layout([i for i in range(25) if i != 12]),
        game_id="one_safe",
    )


def make_game(
    hazards: list[int],
    bet: float = 10.0,
    mode: StrategyMode = StrategyMode.BALANCED,
) -> GameState:
    """Start a game on a fixed layout."""
    return start_new_game(
        bet,
        len(hazards),
        strategy_mode=mode,
        tiles=tiles_from_layout(hazards),
    )


@pytest.fixture
def wallet() -> InMemoryWallet:
    return InMemoryWallet(starting_balance=100.0)


@pytest.fixture
def history() -> InMemoryHistory:
    return InMemoryHistory()


@pytest.fixture
def manager(wallet, history) -> SessionManager:
    return SessionManager(balance_service=wallet, history_service=history)


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings(bet_amount=10.0, hazard_count=3)


def first_tile(state: GameState, hazard: bool) -> int:
    """Lowest tile id that is (or is not) a hazard."""
    return next(t.tile_id for t in state.tiles if t.is_hazard == hazard)
