"""
Tests for the reducer (state transitions).

Tests:
- Reveal transitions (safe, hazard, last safe tile)
- Cash-out query and commit
- No-ops return the input state
- Action/ActionResult wrapper
"""

import pytest

from ..engine_core.state import GameStatus
from ..engine_core.errors import InvalidTileError
from ..engine_core.action import Action, ActionType
from ..engine_core.multiplier import calculate_multiplier
from ..engine_core.reducer import (
    Reducer,
    apply_action,
    reveal_tile,
    cash_out,
    commit_cash_out,
)


class TestStartGame:
    """Tests for a freshly started game."""

    def test_initial_values(self, fresh_game):
        assert fresh_game.status == GameStatus.PLAYING
        assert fresh_game.revealed_count == 0
        assert fresh_game.current_multiplier == 1.0
        assert fresh_game.potential_payout == 10.0
        assert fresh_game.safe_tiles == 22

    def test_advisory_attached(self, fresh_game):
        assert fresh_game.strategy is not None
        assert fresh_game.recommendation is not None
        assert fresh_game.risk_metrics is not None
        assert all(t.is_analyzed for t in fresh_game.tiles)

    def test_advisor_disabled(self, quiet_game):
        assert quiet_game.strategy is None
        assert quiet_game.recommendation is None
        assert quiet_game.risk_metrics is None
        assert not any(t.is_analyzed for t in quiet_game.tiles)

    def test_generated_id(self):
        from ..engine_core.reducer import start_new_game
        a = start_new_game(1, 3)
        b = start_new_game(1, 3)
        assert a.game_id != b.game_id


class TestRevealSafe:
    """Tests for revealing a safe tile."""

    def test_reveal_updates_progress(self, fresh_game):
        state = reveal_tile(fresh_game, 12)

        assert state.status == GameStatus.PLAYING
        assert state.revealed_count == 1
        assert state.get_tile(12).is_revealed
        assert not state.get_tile(12).is_exploded
        assert state.current_multiplier == pytest.approx(calculate_multiplier(1, 3))
        assert state.potential_payout == pytest.approx(10.0 * state.current_multiplier)

    def test_input_state_untouched(self, fresh_game):
        reveal_tile(fresh_game, 12)
        assert fresh_game.revealed_count == 0
        assert not fresh_game.get_tile(12).is_revealed

    def test_advisory_recomputed(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        assert state.strategy is not fresh_game.strategy
        assert state.strategy.reveal_probabilities[12] == 0.0
        assert state.get_tile(12).safety_probability is None
        assert state.get_tile(12).recommendation_tag is None

    def test_multiplier_never_decreases(self, fresh_game):
        state = fresh_game
        last = state.current_multiplier
        for tile_id in (12, 7, 11, 13, 17):
            state = reveal_tile(state, tile_id)
            assert state.current_multiplier > last
            last = state.current_multiplier

    def test_last_safe_tile_wins(self, one_safe_tile_game):
        state = reveal_tile(one_safe_tile_game, 12)

        assert state.status == GameStatus.WON
        assert state.revealed_count == 1
        assert state.current_multiplier == pytest.approx(2.92)
        assert state.potential_payout == pytest.approx(29.2)

    def test_clearing_every_safe_tile_wins(self, fresh_game):
        state = fresh_game
        for tile in fresh_game.tiles:
            if not tile.is_hazard:
                assert state.status == GameStatus.PLAYING
                state = reveal_tile(state, tile.tile_id)

        assert state.status == GameStatus.WON
        assert state.revealed_count == 22
        assert state.current_multiplier == pytest.approx(calculate_multiplier(22, 3))

    def test_win_keeps_previous_advisory(self, one_safe_tile_game):
        state = reveal_tile(one_safe_tile_game, 12)
        assert state.strategy is one_safe_tile_game.strategy


class TestRevealHazard:
    """Tests for revealing a hazard."""

    def test_hazard_loses(self, fresh_game):
        state = reveal_tile(fresh_game, 0)

        assert state.status == GameStatus.LOST
        assert state.get_tile(0).is_exploded
        assert state.exploded_tile.tile_id == 0

    def test_loss_keeps_pre_reveal_values(self, fresh_game):
        state = reveal_tile(reveal_tile(fresh_game, 12), 4)

        assert state.status == GameStatus.LOST
        assert state.revealed_count == 1
        assert state.current_multiplier == pytest.approx(calculate_multiplier(1, 3))

    def test_only_clicked_hazard_exploded(self, fresh_game):
        state = reveal_tile(fresh_game, 0)
        assert [t.tile_id for t in state.tiles if t.is_exploded] == [0]
        assert not state.get_tile(4).is_revealed

    def test_remaining_tiles_exclude_exploded(self, fresh_game):
        state = reveal_tile(fresh_game, 0)
        assert state.remaining_tiles == 24
        assert state.remaining_safe_tiles == 22


class TestRevealNoOps:
    """Tests for benign no-op reveals."""

    def test_already_revealed(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        assert reveal_tile(state, 12) is state

    def test_after_loss(self, fresh_game):
        lost = reveal_tile(fresh_game, 0)
        assert reveal_tile(lost, 12) is lost

    def test_after_win(self, one_safe_tile_game):
        won = reveal_tile(one_safe_tile_game, 12)
        assert reveal_tile(won, 0) is won

    def test_out_of_range_raises(self, fresh_game):
        for bad in (-1, 25, 100):
            with pytest.raises(InvalidTileError):
                reveal_tile(fresh_game, bad)

    def test_out_of_range_raises_on_finished_game(self, fresh_game):
        lost = reveal_tile(fresh_game, 0)
        with pytest.raises(InvalidTileError):
            reveal_tile(lost, 25)


class TestCashOut:
    """Tests for cash-out query and commit."""

    def test_nothing_revealed_pays_nothing(self, fresh_game):
        assert cash_out(fresh_game) == 0.0
        assert commit_cash_out(fresh_game) is fresh_game

    def test_pays_potential_payout(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        assert cash_out(state) == state.potential_payout

    def test_query_is_idempotent(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        assert cash_out(state) == cash_out(state) == state.potential_payout

    def test_query_does_not_change_state(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        cash_out(state)
        assert state.status == GameStatus.PLAYING

    def test_commit_wins(self, fresh_game):
        state = commit_cash_out(reveal_tile(fresh_game, 12))
        assert state.status == GameStatus.WON
        assert cash_out(state) == 0.0

    def test_lost_game_pays_nothing(self, fresh_game):
        lost = reveal_tile(reveal_tile(fresh_game, 12), 0)
        assert cash_out(lost) == 0.0


class TestReducerActions:
    """Tests for the Action / ActionResult wrapper."""

    def test_reveal_action(self, fresh_game):
        result = apply_action(fresh_game, Action.reveal(12))

        assert result.success
        assert not result.no_op
        assert result.new_state.revealed_count == 1
        assert "Tile 12 was safe" in result.state_changes

    def test_reveal_no_op_flagged(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        result = apply_action(state, Action.reveal(12))

        assert result.success
        assert result.no_op
        assert result.new_state is state

    def test_cash_out_action(self, fresh_game):
        state = reveal_tile(fresh_game, 12)
        result = Reducer().apply(state, Action.cash_out())

        assert result.payout == pytest.approx(state.potential_payout)
        assert result.new_state.status == GameStatus.WON

    def test_empty_cash_out_is_no_op(self, fresh_game):
        result = apply_action(fresh_game, Action.cash_out())
        assert result.no_op
        assert result.payout == 0.0
        assert result.new_state is fresh_game

    def test_reveal_without_tile_fails(self, fresh_game):
        result = apply_action(fresh_game, Action(action_type=ActionType.REVEAL))
        assert not result.success
        assert result.error_code == "INVALID_TILE"

    def test_hazard_action_reports_loss(self, fresh_game):
        result = apply_action(fresh_game, Action.reveal(0))
        assert result.new_state.status == GameStatus.LOST
        assert "hazard" in result.state_changes[0]
