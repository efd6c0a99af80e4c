"""
Recommendation Generator - Picks one suggested move from advisor output.

Decision order (first match wins):
1. Cash out when the potential payout meets the cash-out threshold
2. Reveal the safest unrevealed tile when it clears the reveal bar
3. Otherwise "continue" - an explicit no-strong-signal outcome
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from .equilibrium import EquilibriumStrategy


class RecommendedAction(Enum):
    """Moves the advisor can suggest."""
    REVEAL = "reveal"
    CASH_OUT = "cash_out"
    CONTINUE = "continue"


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Recommendation:
    """
    A single suggested move.

    tile_id is set only when action is REVEAL.
    """
    action: RecommendedAction
    confidence: float
    reasoning: str
    expected_value: float
    risk_level: RiskLevel
    tile_id: int | None = None


@dataclass(frozen=True)
class RecommendationThresholds:
    """Cut-offs used when picking and labelling a recommendation."""
    reveal_probability: float = 0.6
    low_risk_stability: float = 0.7
    medium_risk_stability: float = 0.4
    no_signal_confidence: float = 0.5


DEFAULT_THRESHOLDS = RecommendationThresholds()


class RecommendationGenerator:
    """
    Turns an EquilibriumStrategy into a Recommendation.

    Stateless; thresholds are fixed at construction.
    """

    def __init__(self, thresholds: RecommendationThresholds | None = None):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    def recommend(self, state: GameState, strategy: EquilibriumStrategy) -> Recommendation:
        """Select the suggested move for this state."""
        if state.potential_payout >= strategy.cash_out_threshold:
            return Recommendation(
                action=RecommendedAction.CASH_OUT,
                confidence=strategy.stability_score,
                reasoning=(
                    "Equilibrium analysis suggests cashing out. Current multiplier "
                    f"({state.current_multiplier:.2f}x) meets the optimal threshold."
                ),
                expected_value=state.potential_payout,
                risk_level=self.risk_level(strategy),
            )

        best_tile, best_probability = self.best_tile(state, strategy)
        if best_tile is not None and best_probability > self.thresholds.reveal_probability:
            return Recommendation(
                action=RecommendedAction.REVEAL,
                tile_id=best_tile,
                confidence=best_probability,
                reasoning=(
                    f"Tile {best_tile} has {best_probability * 100:.1f}% probability "
                    "of being safe according to equilibrium analysis."
                ),
                expected_value=state.bet_amount * state.current_multiplier * best_probability,
                risk_level=self.risk_level(strategy),
            )

        return Recommendation(
            action=RecommendedAction.CONTINUE,
            confidence=self.thresholds.no_signal_confidence,
            reasoning="No clear optimal move available",
            expected_value=state.potential_payout,
            risk_level=RiskLevel.MEDIUM,
        )

    def best_tile(
        self,
        state: GameState,
        strategy: EquilibriumStrategy,
    ) -> tuple[int | None, float]:
        """
        Highest-probability unrevealed tile.

        Scans in id order with a strict comparison, so ties go to the
        lowest id. Returns (None, 0.0) when no tile has positive probability.
        """
        best_tile: int | None = None
        best_probability = 0.0
        for tile in state.tiles:
            if tile.is_revealed:
                continue
            probability = strategy.reveal_probabilities[tile.tile_id]
            if probability > best_probability:
                best_probability = probability
                best_tile = tile.tile_id
        return best_tile, best_probability

    def risk_level(self, strategy: EquilibriumStrategy) -> RiskLevel:
        stability = strategy.stability_score
        if stability > self.thresholds.low_risk_stability:
            return RiskLevel.LOW
        if stability > self.thresholds.medium_risk_stability:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH


def recommend(state: GameState, strategy: EquilibriumStrategy) -> Recommendation:
    """Convenience function using default thresholds."""
    return RecommendationGenerator().recommend(state, strategy)
