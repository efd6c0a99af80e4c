"""
Multiplier Calculator - Payout curve for safe reveals.

Each safe reveal is riskier than the last (fewer safe tiles remain
proportionally). The multiplier compounds a fixed share of that
incremental risk instead of paying the fair-odds multiplier outright;
the share is the house's lever and lives in PayoutConfig.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GRID_SIZE, validate_hazard_count


@dataclass(frozen=True)
class PayoutConfig:
    """Tunable payout constants."""
    # Fraction of incremental risk captured per safe reveal
    risk_capture: float = 0.08


DEFAULT_PAYOUT = PayoutConfig()


def step_probability(step: int, hazard_count: int) -> float:
    """Probability that the step-th reveal (1-based) is safe, given all earlier ones were."""
    safe_tiles = GRID_SIZE - hazard_count
    remaining_safe = safe_tiles - step + 1
    remaining_tiles = GRID_SIZE - step + 1
    return remaining_safe / remaining_tiles


def calculate_multiplier(
    revealed_count: int,
    hazard_count: int,
    config: PayoutConfig | None = None,
) -> float:
    """
    Payout multiplier after revealed_count safe tiles.

    Returns 1.0 for zero reveals; never returns less than 1.
    """
    validate_hazard_count(hazard_count)
    safe_tiles = GRID_SIZE - hazard_count
    if revealed_count < 0 or revealed_count > safe_tiles:
        raise ValueError(
            f"revealed_count must be in 0..{safe_tiles}, got {revealed_count}"
        )
    if revealed_count == 0:
        return 1.0

    config = config or DEFAULT_PAYOUT
    multiplier = 1.0

    for i in range(1, revealed_count + 1):
        probability = step_probability(i, hazard_count)
        risk_factor = 1 / probability
        multiplier *= 1 + (risk_factor - 1) * config.risk_capture

    return max(1.0, multiplier)


def multiplier_table(
    hazard_count: int,
    config: PayoutConfig | None = None,
) -> list[tuple[int, float]]:
    """Full curve as (revealed_count, multiplier) pairs, 0 through all safe tiles."""
    validate_hazard_count(hazard_count)
    return [
        (n, calculate_multiplier(n, hazard_count, config))
        for n in range(GRID_SIZE - hazard_count + 1)
    ]
