"""
Session Module - Settles games against balance and history services.

A session represents one game for one player:
- Created when the player starts a game (bet debited first)
- Holds the current game state
- Credits payouts and records history when the game ends
- Removed when ended

Sessions are EPHEMERAL: in-memory only.
"""

from .services import (
    BalanceService,
    HistoryService,
    InMemoryWallet,
    InMemoryHistory,
    InsufficientBalanceError,
    GameRecord,
    GameResult,
    PlayerStats,
)
from .manager import SessionManager, Session, SessionState, SessionNotFoundError, MoveResult

__all__ = [
    "BalanceService",
    "HistoryService",
    "InMemoryWallet",
    "InMemoryHistory",
    "InsufficientBalanceError",
    "GameRecord",
    "GameResult",
    "PlayerStats",
    "SessionManager",
    "Session",
    "SessionState",
    "SessionNotFoundError",
    "MoveResult",
]
