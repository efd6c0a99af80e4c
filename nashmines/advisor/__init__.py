"""
Advisor module - Strategy guidance for the player.

Provides:
- StrategyProfile: Conservative / balanced / aggressive risk appetites
- EquilibriumAdvisor: Per-tile safety, EVs and equilibrium verdict
- RecommendationGenerator: A single suggested move
- analyze_game / refresh_advisory: The full pipeline
"""

from .modes import StrategyProfile, PROFILES, get_profile
from .equilibrium import (
    AdvisorConstants,
    EquilibriumAdvisor,
    EquilibriumStrategy,
    EquilibriumPoint,
    HouseStrategy,
    PlayerStrategy,
    analyze,
)
from .recommendation import (
    Recommendation,
    RecommendationGenerator,
    RecommendationThresholds,
    RecommendedAction,
    RiskLevel,
    recommend,
)
from .metrics import RiskMetrics, compute_risk_metrics
from .report import AdvisoryReport, analyze_game, refresh_advisory

__all__ = [
    "StrategyProfile",
    "PROFILES",
    "get_profile",
    "AdvisorConstants",
    "EquilibriumAdvisor",
    "EquilibriumStrategy",
    "EquilibriumPoint",
    "HouseStrategy",
    "PlayerStrategy",
    "analyze",
    "Recommendation",
    "RecommendationGenerator",
    "RecommendationThresholds",
    "RecommendedAction",
    "RiskLevel",
    "recommend",
    "RiskMetrics",
    "compute_risk_metrics",
    "AdvisoryReport",
    "analyze_game",
    "refresh_advisory",
]
