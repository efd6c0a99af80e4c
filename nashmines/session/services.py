"""
Collaborator Services - Balance and history contracts for the session layer.

The engine never touches money or storage. The session layer sequences
these services around engine calls:
- debit the bet before a game starts (reject if the balance is short)
- credit the payout after a win or cash-out
- record exactly one history row per finished game

The in-memory implementations are per-process and not thread-safe.
Swap in real services by implementing the ABCs.
"""

from __future__ import annotations
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ..config import STARTING_BALANCE
from ..engine_core.errors import MinesError


class InsufficientBalanceError(MinesError):
    """Raised when a debit exceeds the available balance."""

    error_code = "INSUFFICIENT_BALANCE"

    def __init__(self, player_id: str, requested: float, available: float):
        self.player_id = player_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient balance for {player_id}: requested {requested:.2f}, "
            f"available {available:.2f}"
        )


class GameResult(Enum):
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class GameRecord:
    """One finished game as stored by the history service."""
    game_id: str
    player_id: str
    bet_amount: float
    hazard_count: int
    revealed_tiles: int
    result: GameResult
    payout: float
    multiplier: float
    created_at: float = field(default_factory=time.time)


@dataclass
class PlayerStats:
    """Aggregate statistics for one player."""
    total_games: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_wagered: float = 0.0
    total_won: float = 0.0
    biggest_win: float = 0.0
    longest_win_streak: int = 0
    current_win_streak: int = 0

    @property
    def win_rate(self) -> float:
        if self.total_games == 0:
            return 0.0
        return self.total_wins / self.total_games

    @property
    def net_profit(self) -> float:
        return self.total_won - self.total_wagered

    def add(self, record: GameRecord) -> PlayerStats:
        """Return stats updated with one more finished game."""
        is_win = record.result == GameResult.WIN
        net_win = record.payout - record.bet_amount
        current_streak = self.current_win_streak + 1 if is_win else 0

        return PlayerStats(
            total_games=self.total_games + 1,
            total_wins=self.total_wins + (1 if is_win else 0),
            total_losses=self.total_losses + (0 if is_win else 1),
            total_wagered=self.total_wagered + record.bet_amount,
            total_won=self.total_won + record.payout,
            biggest_win=max(self.biggest_win, net_win),
            longest_win_streak=max(self.longest_win_streak, current_streak),
            current_win_streak=current_streak,
        )


# =============================================================================
# Contracts
# =============================================================================

class BalanceService(ABC):
    """Holds player balances."""

    @abstractmethod
    def get_balance(self, player_id: str) -> float:
        pass

    @abstractmethod
    def debit(self, player_id: str, amount: float) -> float:
        """
        Take amount from the player's balance.

        Raises InsufficientBalanceError if amount exceeds the balance.
        Returns the new balance.
        """
        pass

    @abstractmethod
    def credit(self, player_id: str, amount: float) -> float:
        """Add amount to the player's balance. Returns the new balance."""
        pass

    @abstractmethod
    def reset(self, player_id: str) -> float:
        """Restore the starting balance. Returns it."""
        pass


class HistoryService(ABC):
    """Stores finished games."""

    @abstractmethod
    def record(self, record: GameRecord) -> None:
        pass

    @abstractmethod
    def list_games(self, player_id: str, limit: int = 50) -> list[GameRecord]:
        """Most recent games first."""
        pass

    @abstractmethod
    def get_stats(self, player_id: str) -> PlayerStats:
        pass


# =============================================================================
# In-memory implementations
# =============================================================================

class InMemoryWallet(BalanceService):
    """
    Process-local balances.

    Players are created lazily at starting_balance.
    """

    def __init__(self, starting_balance: float = STARTING_BALANCE):
        if starting_balance < 0:
            raise ValueError("starting_balance must be >= 0")
        self.starting_balance = starting_balance
        self._balances: dict[str, float] = {}

    def get_balance(self, player_id: str) -> float:
        return self._balances.setdefault(player_id, self.starting_balance)

    def debit(self, player_id: str, amount: float) -> float:
        if amount < 0:
            raise ValueError("Debit amount must be >= 0")
        balance = self.get_balance(player_id)
        if amount > balance:
            raise InsufficientBalanceError(player_id, amount, balance)
        self._balances[player_id] = balance - amount
        return self._balances[player_id]

    def credit(self, player_id: str, amount: float) -> float:
        if amount < 0:
            raise ValueError("Credit amount must be >= 0")
        self._balances[player_id] = self.get_balance(player_id) + amount
        return self._balances[player_id]

    def reset(self, player_id: str) -> float:
        self._balances[player_id] = self.starting_balance
        return self.starting_balance


class InMemoryHistory(HistoryService):
    """Process-local game history with running stats."""

    def __init__(self):
        self._records: dict[str, list[GameRecord]] = {}
        self._stats: dict[str, PlayerStats] = {}

    def record(self, record: GameRecord) -> None:
        self._records.setdefault(record.player_id, []).append(record)
        stats = self._stats.get(record.player_id, PlayerStats())
        self._stats[record.player_id] = stats.add(record)

    def list_games(self, player_id: str, limit: int = 50) -> list[GameRecord]:
        records = self._records.get(player_id, [])
        return list(reversed(records))[:limit]

    def get_stats(self, player_id: str) -> PlayerStats:
        return self._stats.get(player_id, PlayerStats())
