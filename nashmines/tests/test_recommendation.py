"""
Tests for the recommendation generator.

Tests:
- Decision order: cash out, then reveal, then continue
- Tie-breaking on equal tile probabilities
- Risk labels from stability
"""

import pytest

from ..engine_core.state import StrategyMode
from ..engine_core.reducer import reveal_tile
from ..advisor import (
    EquilibriumPoint,
    EquilibriumStrategy,
    HouseStrategy,
    PlayerStrategy,
    RecommendationGenerator,
    RecommendedAction,
    RiskLevel,
    analyze,
    recommend,
)
from .conftest import make_game


def strategy_with(
    probabilities=(0.0,) * 25,
    threshold=1000.0,
    stability=0.5,
) -> EquilibriumStrategy:
    """Hand-built strategy for exercising the generator in isolation."""
    return EquilibriumStrategy(
        mode=StrategyMode.BALANCED,
        player=PlayerStrategy(
            reveal_probabilities=tuple(probabilities),
            cash_out_threshold=threshold,
            expected_value=0.0,
        ),
        house=HouseStrategy(
            house_edge=0.035,
            optimal_multiplier=1.0,
            expected_profit=0.0,
            risk_adjustment=0.0,
        ),
        equilibrium=EquilibriumPoint(
            is_equilibrium=False,
            player_expected_value=0.0,
            house_expected_value=0.0,
            stability_score=stability,
        ),
    )


class TestCashOut:
    """Tests for the cash-out branch."""

    def test_balanced_recommends_cash_out_at_start(self, fresh_game):
        """Payout (10) meets the balanced threshold (1 x 10 x 1.0)."""
        rec = fresh_game.recommendation

        assert rec.action == RecommendedAction.CASH_OUT
        assert rec.tile_id is None
        assert rec.expected_value == pytest.approx(10.0)
        assert rec.confidence == fresh_game.strategy.stability_score
        assert "(1.00x)" in rec.reasoning

    def test_conservative_recommends_cash_out(self):
        state = make_game([0, 4, 20], mode=StrategyMode.CONSERVATIVE)
        assert state.recommendation.action == RecommendedAction.CASH_OUT

    def test_cash_out_takes_precedence_over_reveal(self, fresh_game):
        probabilities = [0.0] * 25
        probabilities[12] = 0.99
        rec = recommend(fresh_game, strategy_with(probabilities, threshold=5.0))
        assert rec.action == RecommendedAction.CASH_OUT


class TestReveal:
    """Tests for the reveal branch."""

    def test_aggressive_picks_lowest_id_on_tie(self):
        """Tiles 7, 11, 12, 13, 17 all cap at 1.0; 7 comes first."""
        state = make_game([0, 4, 20], mode=StrategyMode.AGGRESSIVE)
        rec = state.recommendation

        assert rec.action == RecommendedAction.REVEAL
        assert rec.tile_id == 7
        assert rec.confidence == 1.0
        assert rec.reasoning == (
            "Tile 7 has 100.0% probability of being safe according to equilibrium analysis."
        )

    def test_reveal_expected_value(self):
        state = make_game([0, 4, 20], mode=StrategyMode.AGGRESSIVE)
        assert state.recommendation.expected_value == pytest.approx(10.0)

    def test_best_tile_skips_revealed(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        probabilities = [0.5] * 25
        probabilities[12] = 0.9
        probabilities[18] = 0.8
        best, p = RecommendationGenerator().best_tile(state, strategy_with(probabilities))
        assert (best, p) == (18, 0.8)

    def test_best_tile_none(self, fresh_game):
        best, p = RecommendationGenerator().best_tile(fresh_game, strategy_with())
        assert best is None
        assert p == 0.0

    def test_reveal_bar_is_strict(self, fresh_game):
        """A best probability of exactly 0.6 is not enough."""
        probabilities = [0.0] * 25
        probabilities[3] = 0.6
        rec = recommend(fresh_game, strategy_with(probabilities))
        assert rec.action == RecommendedAction.CONTINUE


class TestContinue:
    """Tests for the no-signal branch."""

    def test_many_hazards_aggressive(self):
        """20 hazards: best safety 0.26, threshold 13 above payout 10."""
        state = make_game(list(range(20)), mode=StrategyMode.AGGRESSIVE)
        rec = state.recommendation

        assert rec.action == RecommendedAction.CONTINUE
        assert rec.tile_id is None
        assert rec.confidence == 0.5
        assert rec.risk_level == RiskLevel.MEDIUM
        assert rec.reasoning == "No clear optimal move available"
        assert rec.expected_value == pytest.approx(10.0)

    def test_continue_risk_is_always_medium(self, fresh_game):
        rec = recommend(fresh_game, strategy_with(stability=0.0))
        assert rec.action == RecommendedAction.CONTINUE
        assert rec.risk_level == RiskLevel.MEDIUM


class TestRiskLevel:
    """Tests for risk labels."""

    @pytest.mark.parametrize("stability,expected", [
        (0.9, RiskLevel.LOW),
        (0.7, RiskLevel.MEDIUM),
        (0.5, RiskLevel.MEDIUM),
        (0.4, RiskLevel.HIGH),
        (0.0, RiskLevel.HIGH),
    ])
    def test_thresholds(self, stability, expected):
        generator = RecommendationGenerator()
        assert generator.risk_level(strategy_with(stability=stability)) == expected

    def test_cash_out_risk_from_stability(self, fresh_game):
        assert analyze(fresh_game).stability_score == 0.0
        assert fresh_game.recommendation.risk_level == RiskLevel.HIGH

    def test_low_risk_in_equilibrium(self):
        state = make_game([0, 4, 20], bet=0.01)
        assert state.recommendation.risk_level == RiskLevel.LOW
