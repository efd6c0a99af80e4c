"""
Engine Errors - Caller contract violations.

Only contract violations raise. Benign no-ops (revealing an already
revealed tile, acting on a finished game, cashing out with no progress)
are plain return values, never exceptions.
"""

from __future__ import annotations


class MinesError(Exception):
    """Base class for all engine and session errors."""

    error_code: str = "INTERNAL_ERROR"


class InvalidTileError(MinesError, IndexError):
    """Raised when a tile id falls outside the grid."""

    error_code = "INVALID_TILE"

    def __init__(self, tile_id: int, grid_size: int):
        self.tile_id = tile_id
        self.grid_size = grid_size
        super().__init__(f"Tile id {tile_id} is outside 0..{grid_size - 1}")


class InvalidBetError(MinesError, ValueError):
    """Raised when a bet amount is not strictly positive."""

    error_code = "INVALID_BET"

    def __init__(self, bet_amount: float):
        self.bet_amount = bet_amount
        super().__init__(f"Bet amount must be > 0, got {bet_amount}")


class InvalidHazardCountError(MinesError, ValueError):
    """Raised when a hazard count would make the game trivial or unwinnable."""

    error_code = "INVALID_HAZARD_COUNT"

    def __init__(self, hazard_count: int, grid_size: int):
        self.hazard_count = hazard_count
        self.grid_size = grid_size
        super().__init__(
            f"Hazard count must be in 1..{grid_size - 1}, got {hazard_count}"
        )
