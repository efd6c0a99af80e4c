"""
Grid Generator - Builds a randomized 5x5 tile layout.

Hazard positions are drawn uniformly without replacement from an
injected random source, so a fixed seed gives a reproducible grid.
"""

from __future__ import annotations
import random

from .state import GRID_SIZE, Tile, validate_hazard_count


def generate_tiles(
    hazard_count: int,
    rng: random.Random | None = None,
) -> tuple[Tile, ...]:
    """
    Generate a fresh grid.

    Args:
        hazard_count: Number of hazard tiles (1-24)
        rng: Random source (a new unseeded Random if not provided)

    Returns:
        Tuple of 25 unrevealed tiles, exactly hazard_count of them hazards
    """
    validate_hazard_count(hazard_count)
    rng = rng or random.Random()

    hazard_positions = set(rng.sample(range(GRID_SIZE), hazard_count))

    return tuple(
        Tile(tile_id=i, is_hazard=i in hazard_positions)
        for i in range(GRID_SIZE)
    )


def tiles_from_layout(hazard_positions: list[int] | set[int]) -> tuple[Tile, ...]:
    """
    Build a grid with hazards at known positions.

    Used for replays and tests where the layout must be fixed.
    """
    positions = set(hazard_positions)
    if len(positions) != len(list(hazard_positions)):
        raise ValueError("Duplicate hazard positions")
    for position in positions:
        if not 0 <= position < GRID_SIZE:
            raise ValueError(f"Hazard position {position} is outside the grid")
    validate_hazard_count(len(positions))

    return tuple(
        Tile(tile_id=i, is_hazard=i in positions)
        for i in range(GRID_SIZE)
    )
