"""
Game State - Immutable containers for the Mines grid and game.

Design principles:
- Immutable: every transition returns a new GameState
- Position-indexed: tile ids are fixed row-major positions on a 5x5 grid
- Advisory fields are optional (None) until the advisor runs, so an
  unanalyzed tile is never mistaken for one with zero safety probability
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import InvalidBetError, InvalidHazardCountError, InvalidTileError


GRID_WIDTH = 5
GRID_SIZE = GRID_WIDTH * GRID_WIDTH
MIN_HAZARDS = 1
MAX_HAZARDS = GRID_SIZE - 1


class GameStatus(Enum):
    """Lifecycle of a single game."""
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class StrategyMode(Enum):
    """Risk appetite used by the advisor."""
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class TileTag(Enum):
    """Advisory tag attached to an unrevealed tile."""
    REVEAL = "reveal"
    AVOID = "avoid"
    NEUTRAL = "neutral"


def validate_hazard_count(hazard_count: int) -> None:
    """Raise InvalidHazardCountError unless 1 <= hazard_count <= 24."""
    if not MIN_HAZARDS <= hazard_count <= MAX_HAZARDS:
        raise InvalidHazardCountError(hazard_count, GRID_SIZE)


def validate_bet(bet_amount: float) -> None:
    """Raise InvalidBetError unless bet_amount > 0."""
    if not bet_amount > 0:
        raise InvalidBetError(bet_amount)


def tile_position(tile_id: int) -> tuple[int, int]:
    """Return (row, col) for a tile id."""
    return divmod(tile_id, GRID_WIDTH)


@dataclass(frozen=True)
class Tile:
    """
    One grid cell.

    is_hazard never changes once the grid is generated.
    is_revealed only ever goes from False to True.
    """
    tile_id: int
    is_hazard: bool = False
    is_revealed: bool = False
    is_exploded: bool = False

    # Advisory-only
    safety_probability: float | None = None
    recommendation_tag: TileTag | None = None

    @property
    def row(self) -> int:
        return tile_position(self.tile_id)[0]

    @property
    def col(self) -> int:
        return tile_position(self.tile_id)[1]

    @property
    def is_analyzed(self) -> bool:
        return self.safety_probability is not None

    def reveal(self) -> Tile:
        """Return the revealed tile, exploded if it is a hazard."""
        return Tile(
            tile_id=self.tile_id,
            is_hazard=self.is_hazard,
            is_revealed=True,
            is_exploded=self.is_hazard,
        )

    def with_advice(self, probability: float, tag: TileTag) -> Tile:
        """Return tile annotated with advisor output."""
        return Tile(
            tile_id=self.tile_id,
            is_hazard=self.is_hazard,
            is_revealed=self.is_revealed,
            is_exploded=self.is_exploded,
            safety_probability=probability,
            recommendation_tag=tag,
        )

    def without_advice(self) -> Tile:
        """Return tile with advisory fields cleared."""
        if not self.is_analyzed and self.recommendation_tag is None:
            return self
        return Tile(
            tile_id=self.tile_id,
            is_hazard=self.is_hazard,
            is_revealed=self.is_revealed,
            is_exploded=self.is_exploded,
        )


@dataclass(frozen=True)
class GameSettings:
    """
    Settings chosen before a game starts.

    grid_size is fixed; it is carried so callers can state it explicitly
    and get a clear error when they ask for something else.
    """
    bet_amount: float
    hazard_count: int
    enable_advisor: bool = True
    strategy_mode: StrategyMode = StrategyMode.BALANCED
    grid_size: int = GRID_SIZE

    def validate(self) -> None:
        if self.grid_size != GRID_SIZE:
            raise ValueError(f"Only a {GRID_SIZE}-tile grid is supported, got {self.grid_size}")
        validate_bet(self.bet_amount)
        validate_hazard_count(self.hazard_count)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the system of record. All changes go through the reducer,
    which always returns a new GameState.
    """
    game_id: str
    tiles: tuple[Tile, ...]
    hazard_count: int
    bet_amount: float

    status: GameStatus = GameStatus.IDLE
    revealed_count: int = 0
    current_multiplier: float = 1.0
    potential_payout: float = 0.0

    # Advisor configuration
    advisor_enabled: bool = True
    strategy_mode: StrategyMode = StrategyMode.BALANCED

    # PayoutConfig; None means the default curve
    payout_config: Any = None

    # Advisory snapshot (recomputed, never patched)
    strategy: Any | None = None  # EquilibriumStrategy
    recommendation: Any | None = None  # Recommendation
    risk_metrics: Any | None = None  # RiskMetrics

    @property
    def grid_size(self) -> int:
        return len(self.tiles)

    @property
    def safe_tiles(self) -> int:
        return self.grid_size - self.hazard_count

    @property
    def revealed_hazard_count(self) -> int:
        return sum(1 for t in self.tiles if t.is_revealed and t.is_hazard)

    @property
    def remaining_safe_tiles(self) -> int:
        return self.safe_tiles - self.revealed_count

    @property
    def remaining_tiles(self) -> int:
        return self.grid_size - self.revealed_count - self.revealed_hazard_count

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    @property
    def is_terminal(self) -> bool:
        return self.status in {GameStatus.WON, GameStatus.LOST}

    @property
    def unrevealed_tiles(self) -> list[Tile]:
        return [t for t in self.tiles if not t.is_revealed]

    @property
    def exploded_tile(self) -> Tile | None:
        for tile in self.tiles:
            if tile.is_exploded:
                return tile
        return None

    def get_tile(self, tile_id: int) -> Tile:
        """Get tile by id. Out-of-range ids raise InvalidTileError."""
        if not isinstance(tile_id, int) or not 0 <= tile_id < self.grid_size:
            raise InvalidTileError(tile_id, self.grid_size)
        return self.tiles[tile_id]

    def with_tile(self, tile: Tile) -> GameState:
        """Return new state with one tile replaced."""
        new_tiles = tuple(
            tile if t.tile_id == tile.tile_id else t
            for t in self.tiles
        )
        return self._copy_with(tiles=new_tiles)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            tiles=kwargs.get("tiles", self.tiles),
            hazard_count=kwargs.get("hazard_count", self.hazard_count),
            bet_amount=kwargs.get("bet_amount", self.bet_amount),
            status=kwargs.get("status", self.status),
            revealed_count=kwargs.get("revealed_count", self.revealed_count),
            current_multiplier=kwargs.get("current_multiplier", self.current_multiplier),
            potential_payout=kwargs.get("potential_payout", self.potential_payout),
            advisor_enabled=kwargs.get("advisor_enabled", self.advisor_enabled),
            strategy_mode=kwargs.get("strategy_mode", self.strategy_mode),
            payout_config=kwargs.get("payout_config", self.payout_config),
            strategy=kwargs.get("strategy", self.strategy),
            recommendation=kwargs.get("recommendation", self.recommendation),
            risk_metrics=kwargs.get("risk_metrics", self.risk_metrics),
        )
