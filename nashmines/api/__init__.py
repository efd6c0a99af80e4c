"""
API Module - HTTP interface.

Exposes the engine via REST API. A client:
1. Starts a game (the bet is debited)
2. Reveals tiles and asks the advisor for guidance
3. Cashes out or hits a hazard
4. Reads balance and history

Game state is session-scoped and in-memory. Identity is a plain player id.
"""

from .schemas import (
    # Requests
    StartGameRequest,
    RevealRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    AdviceResponse,
    BalanceResponse,
    HistoryResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    TileInfo,
    RecommendationInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "StartGameRequest",
    "RevealRequest",
    # Responses
    "GameStateResponse",
    "MoveResponse",
    "AdviceResponse",
    "BalanceResponse",
    "HistoryResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "TileInfo",
    "RecommendationInfo",
    # Service
    "APIService",
    "create_app",
]
