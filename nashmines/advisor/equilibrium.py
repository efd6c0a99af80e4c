"""
Equilibrium Advisor - Heuristic "Nash-style" analysis of a game state.

The advisor estimates, from the player's information set only:
- Per-tile safety probabilities (never reads hazard placement of
  unrevealed tiles)
- An optimal cash-out threshold and the player's expected value
- The house's optimal multiplier, expected profit and risk adjustment
- An equilibrium verdict and stability score

The equilibrium check compares player EV directly to house profit. It
is a coarse proxy, not a solved minimax; the numbers downstream
(recommendations, risk labels) are tuned to this exact arithmetic.

Every call recomputes from scratch.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.state import GRID_WIDTH, StrategyMode, Tile, TileTag, tile_position
from .modes import get_profile

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass(frozen=True)
class AdvisorConstants:
    """
    Constants for the advisor.

    Kept together so they are tuned by name, never inline.
    """
    # Position heuristic: Manhattan distance from the grid center,
    # divided by 8 (corners score 0.5)
    center_row: int = GRID_WIDTH // 2
    center_col: int = GRID_WIDTH // 2
    max_center_distance: int = 8

    # House side
    base_house_edge: float = 0.02
    house_edge_per_hazard: float = 0.005
    house_multiplier_discount: float = 0.95

    # Equilibrium verdict
    equilibrium_tolerance: float = 0.1

    # Tile tags
    reveal_tag_threshold: float = 0.7
    avoid_tag_threshold: float = 0.3


DEFAULT_CONSTANTS = AdvisorConstants()


@dataclass(frozen=True)
class PlayerStrategy:
    """Player side of the analysis."""
    # Index-aligned with the grid; revealed tiles carry 0.0
    reveal_probabilities: tuple[float, ...]
    cash_out_threshold: float
    expected_value: float


@dataclass(frozen=True)
class HouseStrategy:
    """House side of the analysis."""
    house_edge: float
    optimal_multiplier: float
    expected_profit: float
    risk_adjustment: float


@dataclass(frozen=True)
class EquilibriumPoint:
    """Where the two sides meet."""
    is_equilibrium: bool
    player_expected_value: float
    house_expected_value: float
    stability_score: float


@dataclass(frozen=True)
class EquilibriumStrategy:
    """
    Complete advisor output for one state snapshot.

    Derived and never persisted.
    """
    mode: StrategyMode
    player: PlayerStrategy
    house: HouseStrategy
    equilibrium: EquilibriumPoint

    @property
    def reveal_probabilities(self) -> tuple[float, ...]:
        return self.player.reveal_probabilities

    @property
    def cash_out_threshold(self) -> float:
        return self.player.cash_out_threshold

    @property
    def player_expected_value(self) -> float:
        return self.player.expected_value

    @property
    def house_expected_profit(self) -> float:
        return self.house.expected_profit

    @property
    def stability_score(self) -> float:
        return self.equilibrium.stability_score

    @property
    def is_equilibrium(self) -> bool:
        return self.equilibrium.is_equilibrium


class EquilibriumAdvisor:
    """
    Computes EquilibriumStrategy objects for game states.

    Usage:
        advisor = EquilibriumAdvisor()
        strategy = advisor.analyze(state, StrategyMode.CONSERVATIVE)
        tiles = advisor.annotate_tiles(state, strategy)
    """

    def __init__(self, constants: AdvisorConstants | None = None):
        self.constants = constants or DEFAULT_CONSTANTS

    def analyze(
        self,
        state: GameState,
        mode: StrategyMode | str = StrategyMode.BALANCED,
    ) -> EquilibriumStrategy:
        """Analyze a state snapshot under the given mode."""
        profile = get_profile(mode)
        player = self._player_strategy(state, profile.strategy_multiplier)
        house = self._house_strategy(state)
        equilibrium = self._equilibrium_point(player, house)

        return EquilibriumStrategy(
            mode=profile.mode,
            player=player,
            house=house,
            equilibrium=equilibrium,
        )

    def base_probability(self, state: GameState) -> float:
        """Remaining safe tiles over remaining tiles; 0 when nothing remains."""
        remaining_tiles = state.remaining_tiles
        if remaining_tiles <= 0:
            return 0.0
        return state.remaining_safe_tiles / remaining_tiles

    def position_risk(self, tile_id: int) -> float:
        """Normalized Manhattan distance from the center: 0 at center, 1 at corners."""
        row, col = tile_position(tile_id)
        distance = abs(row - self.constants.center_row) + abs(col - self.constants.center_col)
        return distance / self.constants.max_center_distance

    def tile_tag(self, probability: float) -> TileTag:
        if probability > self.constants.reveal_tag_threshold:
            return TileTag.REVEAL
        if probability < self.constants.avoid_tag_threshold:
            return TileTag.AVOID
        return TileTag.NEUTRAL

    def annotate_tiles(
        self,
        state: GameState,
        strategy: EquilibriumStrategy,
    ) -> tuple[Tile, ...]:
        """
        Attach probabilities and tags to unrevealed tiles.

        Revealed tiles come back with their advisory fields cleared.
        """
        annotated = []
        for tile in state.tiles:
            if tile.is_revealed:
                annotated.append(tile.without_advice())
                continue
            probability = strategy.reveal_probabilities[tile.tile_id]
            annotated.append(tile.with_advice(probability, self.tile_tag(probability)))
        return tuple(annotated)

    # =========================================================================
    # Player side
    # =========================================================================

    def _player_strategy(self, state: GameState, strategy_multiplier: float) -> PlayerStrategy:
        base_probability = self.base_probability(state)

        probabilities = []
        for tile in state.tiles:
            if tile.is_revealed:
                probabilities.append(0.0)
                continue
            position_risk = self.position_risk(tile.tile_id)
            probabilities.append(
                min(1.0, base_probability * strategy_multiplier * (1 - position_risk))
            )

        cash_out_threshold = state.current_multiplier * state.bet_amount * strategy_multiplier
        expected_value = self._player_expected_value(state, probabilities)

        return PlayerStrategy(
            reveal_probabilities=tuple(probabilities),
            cash_out_threshold=cash_out_threshold,
            expected_value=expected_value,
        )

    def _player_expected_value(self, state: GameState, probabilities: list[float]) -> float:
        # Mean over the whole grid, revealed tiles included at 0
        win_probability = sum(probabilities) / len(probabilities)
        return (
            state.bet_amount * state.current_multiplier * win_probability
            - state.bet_amount * (1 - win_probability)
        )

    # =========================================================================
    # House side
    # =========================================================================

    def _house_strategy(self, state: GameState) -> HouseStrategy:
        house_edge = (
            self.constants.base_house_edge
            + self.constants.house_edge_per_hazard * state.hazard_count
        )

        base_probability = self.base_probability(state)
        if state.remaining_tiles > 0 and base_probability > 0:
            optimal_multiplier = (1 / base_probability) * self.constants.house_multiplier_discount
        else:
            optimal_multiplier = 1.0

        return HouseStrategy(
            house_edge=house_edge,
            optimal_multiplier=optimal_multiplier,
            expected_profit=state.bet_amount * house_edge,
            risk_adjustment=min(1.0, state.revealed_count / state.safe_tiles),
        )

    # =========================================================================
    # Equilibrium
    # =========================================================================

    def _equilibrium_point(self, player: PlayerStrategy, house: HouseStrategy) -> EquilibriumPoint:
        deviation = abs(player.expected_value - house.expected_profit)
        return EquilibriumPoint(
            is_equilibrium=deviation < self.constants.equilibrium_tolerance,
            player_expected_value=player.expected_value,
            house_expected_value=house.expected_profit,
            stability_score=max(0.0, 1 - deviation),
        )


def analyze(
    state: GameState,
    mode: StrategyMode | str = StrategyMode.BALANCED,
) -> EquilibriumStrategy:
    """Convenience function to analyze a state with default constants."""
    return EquilibriumAdvisor().analyze(state, mode)
