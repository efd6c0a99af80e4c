"""
Engine Core - Authoritative Mines game state and transitions.

The engine is the system of record that:
1. Generates grids
2. Computes payout multipliers
3. Manages GameState
4. Applies reveals and cash-outs via the reducer
"""

from .errors import MinesError, InvalidTileError, InvalidBetError, InvalidHazardCountError
from .state import (
    GameState,
    GameSettings,
    GameStatus,
    StrategyMode,
    Tile,
    TileTag,
    GRID_SIZE,
    GRID_WIDTH,
)
from .grid import generate_tiles, tiles_from_layout
from .multiplier import PayoutConfig, DEFAULT_PAYOUT, calculate_multiplier, multiplier_table
from .action import Action, ActionType, ActionResult
from .reducer import (
    Reducer,
    apply_action,
    start_new_game,
    start_game_from_settings,
    reveal_tile,
    cash_out,
    commit_cash_out,
)

__all__ = [
    "MinesError",
    "InvalidTileError",
    "InvalidBetError",
    "InvalidHazardCountError",
    "GameState",
    "GameSettings",
    "GameStatus",
    "StrategyMode",
    "Tile",
    "TileTag",
    "GRID_SIZE",
    "GRID_WIDTH",
    "generate_tiles",
    "tiles_from_layout",
    "PayoutConfig",
    "DEFAULT_PAYOUT",
    "calculate_multiplier",
    "multiplier_table",
    "Action",
    "ActionType",
    "ActionResult",
    "Reducer",
    "apply_action",
    "start_new_game",
    "start_game_from_settings",
    "reveal_tile",
    "cash_out",
    "commit_cash_out",
]
