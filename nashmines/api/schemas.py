"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Game does not exist or has been ended
- INVALID_TILE: Tile id outside 0..24
- INVALID_BET: Bet amount is not positive
- INVALID_HAZARD_COUNT: Hazard count outside 1..24
- INSUFFICIENT_BALANCE: Bet exceeds the player's balance
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatusValue(str, Enum):
    """Game status values."""
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class StrategyModeValue(str, Enum):
    """Advisor strategy modes."""
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_TILE = "INVALID_TILE"
    INVALID_BET = "INVALID_BET"
    INVALID_HAZARD_COUNT = "INVALID_HAZARD_COUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TileInfo(BaseModel):
    """
    Tile information for display.

    is_hazard is null for unrevealed tiles while the game is being played.
    """
    tile_id: int
    row: int
    col: int
    is_revealed: bool = False
    is_exploded: bool = False
    is_hazard: Optional[bool] = None
    safety_probability: Optional[float] = None
    recommendation_tag: Optional[str] = Field(None, description="reveal, avoid, neutral")

    model_config = {"from_attributes": True}


class StrategyInfo(BaseModel):
    """Equilibrium analysis summary."""
    mode: StrategyModeValue
    reveal_probabilities: list[float]
    cash_out_threshold: float
    player_expected_value: float
    house_edge: float
    house_optimal_multiplier: float
    house_expected_profit: float
    house_risk_adjustment: float
    is_equilibrium: bool
    stability_score: float = Field(..., ge=0.0, le=1.0)


class RecommendationInfo(BaseModel):
    """A single suggested move."""
    action: str = Field(..., description="reveal, cash_out, continue")
    tile_id: Optional[int] = None
    confidence: float
    reasoning: str
    expected_value: float
    risk_level: str = Field(..., description="low, medium, high")


class RiskMetricsInfo(BaseModel):
    """Summary risk figures."""
    current_risk: float
    optimal_risk: float
    deviation_from_equilibrium: float


class PlayerStatsInfo(BaseModel):
    """Aggregate statistics for one player."""
    total_games: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_wagered: float = 0.0
    total_won: float = 0.0
    net_profit: float = 0.0
    win_rate: float = 0.0
    biggest_win: float = 0.0
    longest_win_streak: int = 0
    current_win_streak: int = 0

    model_config = {"from_attributes": True}


class GameRecordInfo(BaseModel):
    """One finished game."""
    game_id: str
    bet_amount: float
    hazard_count: int
    revealed_tiles: int
    result: str = Field(..., description="win, loss")
    payout: float
    multiplier: float
    created_at: float


# =============================================================================
# Request Models
# =============================================================================

class StartGameRequest(BaseModel):
    """Request to start a new game."""
    player_id: str = Field(..., min_length=1, description="Player identity")
    bet_amount: float = Field(..., description="Stake, must be > 0")
    hazard_count: int = Field(3, description="Number of hazards (1-24)")
    enable_advisor: bool = Field(True, description="Attach advisory data to the state")
    strategy_mode: StrategyModeValue = Field(
        StrategyModeValue.BALANCED, description="Mode used for the attached advisory data"
    )
    random_seed: Optional[int] = Field(None, description="Seed for a reproducible grid")


class RevealRequest(BaseModel):
    """Request to reveal a tile."""
    tile_id: int = Field(..., description="Tile id, 0-24 row-major")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    player_id: str
    status: GameStatusValue
    bet_amount: float
    hazard_count: int
    revealed_count: int
    current_multiplier: float
    potential_payout: float
    advisor_enabled: bool
    strategy_mode: StrategyModeValue
    tiles: list[TileInfo] = Field(default_factory=list)
    recommendation: Optional[RecommendationInfo] = None
    risk_metrics: Optional[RiskMetricsInfo] = None
    balance: float
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Response after a reveal or cash-out."""
    game: GameStateResponse
    no_op: bool = False
    payout: float = 0.0
    changes: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class AdviceResponse(BaseModel):
    """Advisory report for one mode."""
    game_id: str
    strategy: StrategyInfo
    recommendation: RecommendationInfo
    tiles: list[TileInfo] = Field(default_factory=list)
    risk_metrics: RiskMetricsInfo
    api_version: str = "v1"


class BalanceResponse(BaseModel):
    """Player balance."""
    player_id: str
    balance: float
    api_version: str = "v1"


class HistoryResponse(BaseModel):
    """Recent games and aggregate stats."""
    player_id: str
    games: list[GameRecordInfo] = Field(default_factory=list)
    stats: PlayerStatsInfo
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing active games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
