"""
Risk Metrics - Summary risk figures shown next to the advisor.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from .equilibrium import EquilibriumAdvisor, EquilibriumStrategy


@dataclass(frozen=True)
class RiskMetrics:
    """
    current_risk: chance a uniformly chosen unrevealed tile is a hazard
    optimal_risk: 1 - mean advisor safety over unrevealed tiles
    deviation_from_equilibrium: |player EV - house profit|, capped at 1
    """
    current_risk: float
    optimal_risk: float
    deviation_from_equilibrium: float


def compute_risk_metrics(
    state: GameState,
    strategy: EquilibriumStrategy,
    advisor: EquilibriumAdvisor,
) -> RiskMetrics:
    unrevealed = [t.tile_id for t in state.tiles if not t.is_revealed]

    if unrevealed:
        current_risk = 1 - advisor.base_probability(state)
        mean_safety = sum(strategy.reveal_probabilities[i] for i in unrevealed) / len(unrevealed)
        optimal_risk = 1 - mean_safety
    else:
        current_risk = 0.0
        optimal_risk = 0.0

    return RiskMetrics(
        current_risk=current_risk,
        optimal_risk=optimal_risk,
        deviation_from_equilibrium=1 - strategy.stability_score,
    )
