"""
Advisory Report - Runs the full advisory pipeline for a state.

Pipeline:
1. EquilibriumAdvisor.analyze -> EquilibriumStrategy
2. RecommendationGenerator.recommend -> Recommendation
3. Tile annotation and risk metrics

refresh_advisory() writes the result into the state's optional advisory
fields. It always recomputes everything; nothing is patched in place.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.state import StrategyMode, Tile
from .equilibrium import EquilibriumAdvisor, EquilibriumStrategy
from .recommendation import Recommendation, RecommendationGenerator
from .metrics import RiskMetrics, compute_risk_metrics

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass(frozen=True)
class AdvisoryReport:
    """Everything the advisor produces for one snapshot."""
    strategy: EquilibriumStrategy
    recommendation: Recommendation
    tiles: tuple[Tile, ...]
    risk_metrics: RiskMetrics


def analyze_game(
    state: GameState,
    mode: StrategyMode | str = StrategyMode.BALANCED,
    advisor: EquilibriumAdvisor | None = None,
    generator: RecommendationGenerator | None = None,
) -> AdvisoryReport:
    """
    Analyze a game state.

    Usage:
        report = analyze_game(state, "aggressive")
        print(report.recommendation.reasoning)
    """
    advisor = advisor or EquilibriumAdvisor()
    generator = generator or RecommendationGenerator()

    strategy = advisor.analyze(state, mode)
    return AdvisoryReport(
        strategy=strategy,
        recommendation=generator.recommend(state, strategy),
        tiles=advisor.annotate_tiles(state, strategy),
        risk_metrics=compute_risk_metrics(state, strategy, advisor),
    )


def refresh_advisory(
    state: GameState,
    mode: StrategyMode | str | None = None,
) -> GameState:
    """Return the state with all advisory fields recomputed (default: state's own mode)."""
    report = analyze_game(state, mode or state.strategy_mode)
    return state._copy_with(
        tiles=report.tiles,
        strategy=report.strategy,
        recommendation=report.recommendation,
        risk_metrics=report.risk_metrics,
    )
