"""
Strategy Modes - Configurable risk appetites for the advisor.

A mode scales:
- Per-tile safety estimates (how optimistic the advisor is)
- The cash-out threshold (how much payout is "enough")
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.state import StrategyMode


@dataclass(frozen=True)
class StrategyProfile:
    """
    A named risk appetite.

    strategy_multiplier < 1 is pessimistic about tile safety and
    happier to cash out; > 1 is the reverse.
    """
    mode: StrategyMode
    name: str
    description: str = ""
    strategy_multiplier: float = 1.0


# ============================================================================
# Predefined Profiles
# ============================================================================

CONSERVATIVE = StrategyProfile(
    mode=StrategyMode.CONSERVATIVE,
    name="Conservative",
    description="Discounts tile safety, takes profit early",
    strategy_multiplier=0.7,
)


BALANCED = StrategyProfile(
    mode=StrategyMode.BALANCED,
    name="Balanced",
    description="Uses raw probability estimates",
    strategy_multiplier=1.0,
)


AGGRESSIVE = StrategyProfile(
    mode=StrategyMode.AGGRESSIVE,
    name="Aggressive",
    description="Inflates tile safety, pushes for bigger multipliers",
    strategy_multiplier=1.3,
)


PROFILES: dict[StrategyMode, StrategyProfile] = {
    StrategyMode.CONSERVATIVE: CONSERVATIVE,
    StrategyMode.BALANCED: BALANCED,
    StrategyMode.AGGRESSIVE: AGGRESSIVE,
}


def get_profile(mode: StrategyMode | str) -> StrategyProfile:
    """Look up a profile by mode or mode name ("conservative", ...)."""
    if isinstance(mode, str):
        mode = StrategyMode(mode.lower())
    return PROFILES[mode]
