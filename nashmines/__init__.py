"""
NashMines - Mines Game Engine with an Equilibrium Advisor

A deterministic, side-effect-free engine for the 5x5 "Mines" wagering game.
The engine provides:
- Grid generation with an injectable random source
- Multiplier/payout math
- Immutable game state transitions (reveal, cash out)
- A heuristic "Nash-style" advisor with per-tile guidance and recommendations
"""

__version__ = "0.1.0"
