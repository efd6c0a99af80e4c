"""
Tests for grid generation, the payout curve and core validation.

Tests:
- Seeded grids are reproducible
- Fixed layouts
- Multiplier formula and monotonicity
- Bet / hazard / tile validation
"""

import random

import pytest

from ..engine_core.errors import (
    MinesError,
    InvalidTileError,
    InvalidBetError,
    InvalidHazardCountError,
)
from ..engine_core.state import GameSettings, GRID_SIZE
from ..engine_core.grid import generate_tiles, tiles_from_layout
from ..engine_core.multiplier import (
    PayoutConfig,
    calculate_multiplier,
    multiplier_table,
    step_probability,
)
from ..engine_core.reducer import start_new_game


class TestGridGeneration:
    """Tests for grid generation."""

    def test_exact_hazard_count(self, rng):
        """A grid has exactly the requested number of hazards."""
        for hazard_count in (1, 3, 12, 24):
            tiles = generate_tiles(hazard_count, rng)
            assert len(tiles) == GRID_SIZE
            assert sum(1 for t in tiles if t.is_hazard) == hazard_count

    def test_tiles_start_unrevealed(self, rng):
        """New tiles are unrevealed, unexploded and unanalyzed."""
        for tile in generate_tiles(5, rng):
            assert not tile.is_revealed
            assert not tile.is_exploded
            assert tile.safety_probability is None
            assert tile.recommendation_tag is None

    def test_tile_ids_are_positions(self, rng):
        """Tile ids run 0..24 in row-major order."""
        tiles = generate_tiles(3, rng)
        assert [t.tile_id for t in tiles] == list(range(GRID_SIZE))
        assert (tiles[7].row, tiles[7].col) == (1, 2)
        assert (tiles[24].row, tiles[24].col) == (4, 4)

    def test_seeded_grid_is_reproducible(self):
        """Same seed, same layout."""
        first = generate_tiles(6, random.Random(1234))
        second = generate_tiles(6, random.Random(1234))
        assert first == second

    def test_invalid_hazard_count_rejected(self, rng):
        """Hazard counts outside 1..24 raise."""
        for bad in (0, 25, -1):
            with pytest.raises(InvalidHazardCountError):
                generate_tiles(bad, rng)


class TestFixedLayout:
    """Tests for tiles_from_layout."""

    def test_hazards_at_positions(self):
        tiles = tiles_from_layout([0, 4, 20])
        assert [t.tile_id for t in tiles if t.is_hazard] == [0, 4, 20]

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError):
            tiles_from_layout([3, 3])

    def test_out_of_grid_rejected(self):
        with pytest.raises(ValueError):
            tiles_from_layout([0, 25])

    def test_empty_layout_rejected(self):
        with pytest.raises(InvalidHazardCountError):
            tiles_from_layout([])


class TestMultiplier:
    """Tests for the payout curve."""

    def test_zero_reveals_is_one(self):
        for hazard_count in (1, 3, 24):
            assert calculate_multiplier(0, hazard_count) == 1.0

    def test_first_reveal_formula(self):
        """One reveal with 3 hazards: 1 + (25/22 - 1) * 0.08."""
        expected = 1 + (25 / 22 - 1) * 0.08
        assert calculate_multiplier(1, 3) == pytest.approx(expected)

    def test_second_reveal_compounds(self):
        expected = (1 + (25 / 22 - 1) * 0.08) * (1 + (24 / 21 - 1) * 0.08)
        assert calculate_multiplier(2, 3) == pytest.approx(expected)

    def test_five_hazards_first_reveal(self):
        """p_1 = 20/25, so the first reveal pays 1 + (1/0.8 - 1) * 0.08."""
        expected = 1 + (1 / (20 / 25) - 1) * 0.08
        assert calculate_multiplier(1, 5) == pytest.approx(expected)

    def test_single_safe_tile(self):
        """24 hazards: the only safe reveal pays 1 + 24 * 0.08."""
        assert calculate_multiplier(1, 24) == pytest.approx(2.92)

    def test_step_probability(self):
        assert step_probability(1, 3) == pytest.approx(22 / 25)
        assert step_probability(2, 3) == pytest.approx(21 / 24)

    def test_monotonic_in_reveals(self):
        """Each safe reveal strictly increases the multiplier."""
        for hazard_count in (1, 3, 10, 24):
            values = [m for _, m in multiplier_table(hazard_count)]
            assert all(b > a for a, b in zip(values, values[1:]))
            assert all(m >= 1.0 for m in values)

    def test_more_hazards_pay_more(self):
        """For a fixed number of reveals, more hazards means a larger multiplier."""
        assert calculate_multiplier(3, 5) > calculate_multiplier(3, 3)

    def test_table_covers_all_safe_tiles(self):
        table = multiplier_table(3)
        assert [n for n, _ in table] == list(range(23))

    def test_custom_risk_capture(self):
        config = PayoutConfig(risk_capture=0.5)
        expected = 1 + (25 / 22 - 1) * 0.5
        assert calculate_multiplier(1, 3, config) == pytest.approx(expected)

    def test_revealed_count_out_of_range(self):
        with pytest.raises(ValueError):
            calculate_multiplier(23, 3)
        with pytest.raises(ValueError):
            calculate_multiplier(-1, 3)


class TestValidation:
    """Tests for caller contract checks."""

    def test_bet_must_be_positive(self):
        for bad in (0, -5):
            with pytest.raises(InvalidBetError):
                start_new_game(bad, 3)

    def test_hazard_count_bounds(self):
        with pytest.raises(InvalidHazardCountError):
            start_new_game(10, 0)
        with pytest.raises(InvalidHazardCountError):
            start_new_game(10, 25)

    def test_errors_share_a_root(self):
        """All contract errors are MinesErrors with stable codes."""
        assert issubclass(InvalidTileError, MinesError)
        assert issubclass(InvalidTileError, IndexError)
        assert issubclass(InvalidBetError, ValueError)
        assert InvalidBetError(0).error_code == "INVALID_BET"
        assert InvalidHazardCountError(30, 25).error_code == "INVALID_HAZARD_COUNT"
        assert InvalidTileError(30, 25).error_code == "INVALID_TILE"

    def test_settings_validate(self):
        GameSettings(bet_amount=1, hazard_count=1).validate()
        with pytest.raises(InvalidBetError):
            GameSettings(bet_amount=0, hazard_count=1).validate()
        with pytest.raises(ValueError):
            GameSettings(bet_amount=1, hazard_count=1, grid_size=36).validate()

    def test_layout_must_match_hazard_count(self):
        with pytest.raises(ValueError):
            start_new_game(10, 2, tiles=tiles_from_layout([0, 1, 2]))
