"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages sessions, balances and history
3. Formats responses (hiding hazards of unrevealed tiles mid-game)

Errors propagate as MinesError subclasses; the web layer maps them
to ErrorResponse bodies.

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

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
    # Shared
    TileInfo,
    StrategyInfo,
    RecommendationInfo,
    RiskMetricsInfo,
    GameRecordInfo,
    PlayerStatsInfo,
)
from ..config import HISTORY_LIMIT
from ..engine_core.state import GameSettings, GameState, StrategyMode, Tile
from ..advisor import EquilibriumStrategy, Recommendation, RiskMetrics
from ..session import SessionManager, Session, MoveResult

logger = logging.getLogger("nashmines.api")


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game (debits the bet)
        game = service.start_game(StartGameRequest(player_id="p1", bet_amount=10))

        # Play
        move = service.reveal(game.game_id, RevealRequest(tile_id=12))
        move = service.cash_out(game.game_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Games
    # =========================================================================

    def start_game(self, request: StartGameRequest) -> GameStateResponse:
        """Debit the bet and start a new game."""
        settings = GameSettings(
            bet_amount=request.bet_amount,
            hazard_count=request.hazard_count,
            enable_advisor=request.enable_advisor,
            strategy_mode=StrategyMode(request.strategy_mode.value),
        )
        rng = random.Random(request.random_seed) if request.random_seed is not None else None

        session = self.session_manager.create_session(request.player_id, settings, rng=rng)
        return self._build_game_state(session)

    def get_game(self, game_id: str) -> GameStateResponse:
        return self._build_game_state(self.session_manager.get_session(game_id))

    def reveal(self, game_id: str, request: RevealRequest) -> MoveResponse:
        session = self.session_manager.get_session(game_id)
        result = session.reveal(request.tile_id)
        return self._move_to_response(session, result)

    def cash_out(self, game_id: str) -> MoveResponse:
        session = self.session_manager.get_session(game_id)
        result = session.cash_out()
        return self._move_to_response(session, result)

    def get_advice(self, game_id: str, mode: StrategyMode | str | None = None) -> AdviceResponse:
        """
        Advisory report for any mode.

        Works with the advisor disabled too; nothing is stored on the game.
        """
        session = self.session_manager.get_session(game_id)
        report = session.advise(mode)
        return AdviceResponse(
            game_id=game_id,
            strategy=self._strategy_info(report.strategy),
            recommendation=self._recommendation_info(report.recommendation),
            tiles=[self._tile_info(t, session.game_state) for t in report.tiles],
            risk_metrics=self._risk_metrics_info(report.risk_metrics),
        )

    def end_game(self, game_id: str) -> bool:
        """End a game. A game still being played forfeits its bet."""
        return self.session_manager.end_session(game_id)

    def list_games(self) -> list[str]:
        """List active game IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Players
    # =========================================================================

    def get_balance(self, player_id: str) -> BalanceResponse:
        balance = self.session_manager.balance_service.get_balance(player_id)
        return BalanceResponse(player_id=player_id, balance=balance)

    def reset_balance(self, player_id: str) -> BalanceResponse:
        balance = self.session_manager.balance_service.reset(player_id)
        logger.info("Balance reset for %s", player_id)
        return BalanceResponse(player_id=player_id, balance=balance)

    def get_history(self, player_id: str, limit: int = HISTORY_LIMIT) -> HistoryResponse:
        history = self.session_manager.history_service
        stats = history.get_stats(player_id)
        return HistoryResponse(
            player_id=player_id,
            games=[
                GameRecordInfo(
                    game_id=record.game_id,
                    bet_amount=record.bet_amount,
                    hazard_count=record.hazard_count,
                    revealed_tiles=record.revealed_tiles,
                    result=record.result.value,
                    payout=record.payout,
                    multiplier=record.multiplier,
                    created_at=record.created_at,
                )
                for record in history.list_games(player_id, limit)
            ],
            stats=PlayerStatsInfo(
                total_games=stats.total_games,
                total_wins=stats.total_wins,
                total_losses=stats.total_losses,
                total_wagered=stats.total_wagered,
                total_won=stats.total_won,
                net_profit=stats.net_profit,
                win_rate=stats.win_rate,
                biggest_win=stats.biggest_win,
                longest_win_streak=stats.longest_win_streak,
                current_win_streak=stats.current_win_streak,
            ),
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _move_to_response(self, session: Session, result: MoveResult) -> MoveResponse:
        return MoveResponse(
            game=self._build_game_state(session),
            no_op=result.no_op,
            payout=result.payout,
            changes=result.changes,
        )

    def _build_game_state(self, session: Session) -> GameStateResponse:
        """Build the display state from a session."""
        state = session.game_state
        return GameStateResponse(
            game_id=state.game_id,
            player_id=session.player_id,
            status=state.status.value,
            bet_amount=state.bet_amount,
            hazard_count=state.hazard_count,
            revealed_count=state.revealed_count,
            current_multiplier=state.current_multiplier,
            potential_payout=state.potential_payout,
            advisor_enabled=state.advisor_enabled,
            strategy_mode=state.strategy_mode.value,
            tiles=[self._tile_info(t, state) for t in state.tiles],
            recommendation=(
                self._recommendation_info(state.recommendation)
                if state.recommendation else None
            ),
            risk_metrics=(
                self._risk_metrics_info(state.risk_metrics)
                if state.risk_metrics else None
            ),
            balance=session.balance,
        )

    def _tile_info(self, tile: Tile, state: GameState) -> TileInfo:
        # Hazards stay hidden until the tile is revealed or the game is over
        show_hazard = tile.is_revealed or state.is_terminal
        return TileInfo(
            tile_id=tile.tile_id,
            row=tile.row,
            col=tile.col,
            is_revealed=tile.is_revealed,
            is_exploded=tile.is_exploded,
            is_hazard=tile.is_hazard if show_hazard else None,
            safety_probability=tile.safety_probability,
            recommendation_tag=tile.recommendation_tag.value if tile.recommendation_tag else None,
        )

    def _strategy_info(self, strategy: EquilibriumStrategy) -> StrategyInfo:
        return StrategyInfo(
            mode=strategy.mode.value,
            reveal_probabilities=list(strategy.reveal_probabilities),
            cash_out_threshold=strategy.cash_out_threshold,
            player_expected_value=strategy.player_expected_value,
            house_edge=strategy.house.house_edge,
            house_optimal_multiplier=strategy.house.optimal_multiplier,
            house_expected_profit=strategy.house_expected_profit,
            house_risk_adjustment=strategy.house.risk_adjustment,
            is_equilibrium=strategy.is_equilibrium,
            stability_score=strategy.stability_score,
        )

    def _recommendation_info(self, recommendation: Recommendation) -> RecommendationInfo:
        return RecommendationInfo(
            action=recommendation.action.value,
            tile_id=recommendation.tile_id,
            confidence=recommendation.confidence,
            reasoning=recommendation.reasoning,
            expected_value=recommendation.expected_value,
            risk_level=recommendation.risk_level.value,
        )

    def _risk_metrics_info(self, metrics: RiskMetrics) -> RiskMetricsInfo:
        return RiskMetricsInfo(
            current_risk=metrics.current_risk,
            optimal_risk=metrics.optimal_risk,
            deviation_from_equilibrium=metrics.deviation_from_equilibrium,
        )
