"""
Session Manager - Runs Mines games against balance and history services.

LIFECYCLE:
1. Player starts a session -> bet is debited, then the game is created
   (a short balance is rejected before any state exists)
2. During the game:
   - Reveals go through the reducer
   - A lost reveal records a loss (payout 0)
   - A winning reveal (all safe tiles) credits the payout and records a win
   - A cash-out with progress credits the payout, marks the game won and
     records a win
3. Session ends -> removed from memory

Each finished game is recorded exactly once. Abandoning a game that is
still being played forfeits the bet and records nothing.

The engine stays pure; all I/O ordering lives here.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import time
import uuid

from ..engine_core.state import GameState, GameSettings, GameStatus, StrategyMode
from ..engine_core.errors import MinesError
from ..engine_core.action import Action, ActionResult
from ..engine_core.multiplier import PayoutConfig
from ..engine_core.reducer import Reducer, start_game_from_settings
from ..advisor import AdvisoryReport, analyze_game
from .services import (
    BalanceService,
    HistoryService,
    InMemoryWallet,
    InMemoryHistory,
    GameRecord,
    GameResult,
)

logger = logging.getLogger("nashmines.session")


class SessionNotFoundError(MinesError, KeyError):
    """Raised when a session id is unknown or already ended."""

    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    FINISHED = "finished"  # Won, lost or cashed out
    ABANDONED = "abandoned"  # Ended before the game finished


@dataclass
class MoveResult:
    """
    Result of one player move within a session.

    Carries the engine result plus what the session did around it.
    """
    action_result: ActionResult
    game_state: GameState
    balance: float
    payout: float = 0.0
    record: GameRecord | None = None

    @property
    def no_op(self) -> bool:
        return self.action_result.no_op

    @property
    def changes(self) -> list[str]:
        return self.action_result.state_changes


@dataclass
class Session:
    """
    One game for one player.

    Contains:
    - The current (immutable) game state, replaced after every move
    - The services used to settle the game
    """
    session_id: str
    player_id: str
    settings: GameSettings
    game_state: GameState
    balance_service: BalanceService
    history_service: HistoryService
    created_at: float

    state: SessionState = SessionState.ACTIVE
    reducer: Reducer = field(default_factory=Reducer)
    record: GameRecord | None = None

    def is_active(self) -> bool:
        """Check if the game can still take moves."""
        return self.state == SessionState.ACTIVE

    @property
    def balance(self) -> float:
        return self.balance_service.get_balance(self.player_id)

    def reveal(self, tile_id: int) -> MoveResult:
        """Reveal a tile and settle the game if it just ended."""
        result = self.reducer.apply(self.game_state, Action.reveal(tile_id))
        self.game_state = result.new_state

        payout = 0.0
        record = None
        if not result.no_op:
            if self.game_state.status == GameStatus.LOST:
                record = self._finish(GameResult.LOSS, 0.0)
            elif self.game_state.status == GameStatus.WON:
                payout = self.game_state.potential_payout
                self.balance_service.credit(self.player_id, payout)
                record = self._finish(GameResult.WIN, payout)

        return MoveResult(
            action_result=result,
            game_state=self.game_state,
            balance=self.balance,
            payout=payout,
            record=record,
        )

    def cash_out(self) -> MoveResult:
        """Cash out; a zero payout leaves everything unchanged."""
        result = self.reducer.apply(self.game_state, Action.cash_out())
        self.game_state = result.new_state

        record = None
        if result.payout > 0:
            self.balance_service.credit(self.player_id, result.payout)
            record = self._finish(GameResult.WIN, result.payout)

        return MoveResult(
            action_result=result,
            game_state=self.game_state,
            balance=self.balance,
            payout=result.payout,
            record=record,
        )

    def advise(self, mode: StrategyMode | str | None = None) -> AdvisoryReport:
        """Advisory report for any mode; the session's state is untouched."""
        return analyze_game(self.game_state, mode or self.settings.strategy_mode)

    def _finish(self, result: GameResult, payout: float) -> GameRecord | None:
        """Record the finished game; returns None if it was already recorded."""
        if self.record is not None:
            return None

        state = self.game_state
        self.record = GameRecord(
            game_id=state.game_id,
            player_id=self.player_id,
            bet_amount=state.bet_amount,
            hazard_count=state.hazard_count,
            revealed_tiles=state.revealed_count,
            result=result,
            payout=payout,
            multiplier=payout / state.bet_amount,
        )
        self.history_service.record(self.record)
        self.state = SessionState.FINISHED

        logger.info(
            "Game %s for %s finished: %s, payout %.2f after %d reveals",
            state.game_id, self.player_id, result.value, payout, state.revealed_count,
        )
        return self.record


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Debit bets and create sessions
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        balance_service: BalanceService | None = None,
        history_service: HistoryService | None = None,
        payout_config: PayoutConfig | None = None,
    ):
        self.balance_service = balance_service or InMemoryWallet()
        self.history_service = history_service or InMemoryHistory()
        self.payout_config = payout_config
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        player_id: str,
        settings: GameSettings,
        rng: random.Random | None = None,
    ) -> Session:
        """
        Debit the bet and start a new game.

        Raises:
            InvalidBetError / InvalidHazardCountError: bad settings (nothing debited)
            InsufficientBalanceError: bet exceeds balance (nothing created)
        """
        settings.validate()
        self.balance_service.debit(player_id, settings.bet_amount)

        session_id = str(uuid.uuid4())
        game_state = start_game_from_settings(
            settings,
            rng=rng,
            game_id=session_id,
            payout_config=self.payout_config,
        )

        session = Session(
            session_id=session_id,
            player_id=player_id,
            settings=settings,
            game_state=game_state,
            balance_service=self.balance_service,
            history_service=self.history_service,
            created_at=time.time(),
        )
        self._sessions[session_id] = session

        logger.info(
            "Started game %s for %s: bet %.2f, %d hazards",
            session_id, player_id, settings.bet_amount, settings.hazard_count,
        )
        return session

    def get_session(self, session_id: str) -> Session:
        """Get a session by ID. Raises SessionNotFoundError if unknown."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> bool:
        """
        Remove a session from memory.

        Returns False if it did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = SessionState.ABANDONED
            logger.info("Game %s abandoned by %s", session_id, session.player_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still taking moves."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished sessions older than max_age.

        Returns the number removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
