"""
Reducer - Applies moves to game state.

The reducer is the single point of state change.
All transitions are pure: (state, move) -> new_state.

Design principles:
- Never mutates: a new GameState is returned for every real transition
- Benign no-ops return the input state unchanged (duplicate clicks,
  moves on a finished game)
- Contract violations (bad tile id, bet, hazard count) raise immediately
- The advisory snapshot is recomputed from scratch after a transition,
  never patched
"""

from __future__ import annotations
import random
import uuid
from dataclasses import dataclass

from .state import (
    GameState,
    GameSettings,
    GameStatus,
    StrategyMode,
    Tile,
    GRID_SIZE,
    validate_bet,
    validate_hazard_count,
)
from .grid import generate_tiles
from .multiplier import PayoutConfig, calculate_multiplier
from .action import Action, ActionType, ActionResult


def _with_advisory(state: GameState) -> GameState:
    """Attach a freshly computed advisory snapshot when the advisor is on."""
    if not state.advisor_enabled:
        return state
    from ..advisor import refresh_advisory
    return refresh_advisory(state)


def start_new_game(
    bet_amount: float,
    hazard_count: int,
    *,
    enable_advisor: bool = True,
    strategy_mode: StrategyMode = StrategyMode.BALANCED,
    rng: random.Random | None = None,
    game_id: str | None = None,
    payout_config: PayoutConfig | None = None,
    tiles: tuple[Tile, ...] | None = None,
) -> GameState:
    """
    Start a new game in the playing state.

    Args:
        bet_amount: Stake, must be > 0
        hazard_count: Number of hazards (1-24)
        enable_advisor: Attach advisory data now and after each move
        strategy_mode: Mode used for the automatic advisory refresh
        rng: Random source for grid generation
        game_id: Explicit id (a uuid4 is generated if not provided)
        payout_config: Payout curve constants (default curve if not provided)
        tiles: Fixed layout (from tiles_from_layout) instead of a random grid

    Returns:
        GameState with status=playing, multiplier 1 and payout = bet
    """
    validate_bet(bet_amount)
    validate_hazard_count(hazard_count)

    if tiles is None:
        tiles = generate_tiles(hazard_count, rng)
    else:
        if len(tiles) != GRID_SIZE:
            raise ValueError(f"Expected {GRID_SIZE} tiles, got {len(tiles)}")
        if sum(1 for t in tiles if t.is_hazard) != hazard_count:
            raise ValueError("Tile layout does not match hazard_count")

    state = GameState(
        game_id=game_id or str(uuid.uuid4()),
        tiles=tuple(tiles),
        hazard_count=hazard_count,
        bet_amount=bet_amount,
        status=GameStatus.PLAYING,
        revealed_count=0,
        current_multiplier=1.0,
        potential_payout=bet_amount,
        advisor_enabled=enable_advisor,
        strategy_mode=strategy_mode,
        payout_config=payout_config,
    )
    return _with_advisory(state)


def start_game_from_settings(
    settings: GameSettings,
    *,
    rng: random.Random | None = None,
    game_id: str | None = None,
    payout_config: PayoutConfig | None = None,
) -> GameState:
    """Start a new game from a GameSettings bundle."""
    settings.validate()
    return start_new_game(
        settings.bet_amount,
        settings.hazard_count,
        enable_advisor=settings.enable_advisor,
        strategy_mode=settings.strategy_mode,
        rng=rng,
        game_id=game_id,
        payout_config=payout_config,
    )


def reveal_tile(state: GameState, tile_id: int) -> GameState:
    """
    Reveal one tile.

    Returns the input state unchanged if the tile is already revealed or
    the game is not being played. A hazard ends the game as lost and
    leaves multiplier and payout at their pre-reveal values. Revealing
    the last safe tile wins the game without a cash-out.
    """
    tile = state.get_tile(tile_id)

    if tile.is_revealed or state.status != GameStatus.PLAYING:
        return state

    revealed = state.with_tile(tile.reveal())

    if tile.is_hazard:
        lost = revealed._copy_with(status=GameStatus.LOST)
        return _with_advisory(lost)

    new_revealed_count = state.revealed_count + 1
    new_multiplier = calculate_multiplier(
        new_revealed_count, state.hazard_count, state.payout_config
    )
    game_won = new_revealed_count == state.safe_tiles

    new_state = revealed._copy_with(
        revealed_count=new_revealed_count,
        current_multiplier=new_multiplier,
        potential_payout=state.bet_amount * new_multiplier,
        status=GameStatus.WON if game_won else GameStatus.PLAYING,
    )

    # A won game is fully resolved; its payout is fixed
    if game_won:
        return new_state
    return _with_advisory(new_state)


def cash_out(state: GameState) -> float:
    """
    Payout the player would realize by cashing out now.

    Returns 0 when the game is not being played or nothing has been
    revealed. Does not change the state; see commit_cash_out.
    """
    if state.status != GameStatus.PLAYING or state.revealed_count == 0:
        return 0.0
    return state.potential_payout


def commit_cash_out(state: GameState) -> GameState:
    """
    Finish a game by cashing out.

    Returns the state with status=won, or the input unchanged when
    cash_out would pay nothing.
    """
    if cash_out(state) <= 0:
        return state
    return state._copy_with(status=GameStatus.WON)


@dataclass
class Reducer:
    """
    Reducer applies Actions to game state.

    Stateless - all state is in GameState.
    Wraps the pure transitions in ActionResults for callers that want
    a uniform, loggable result per move.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Contract violations propagate as exceptions; no-ops come back as
        successful results flagged no_op.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )
        return handler(state, action)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.REVEAL: self._handle_reveal,
            ActionType.CASH_OUT: self._handle_cash_out,
        }
        return handlers.get(action_type)

    def _handle_reveal(self, state: GameState, action: Action) -> ActionResult:
        """Handle reveal action."""
        if action.tile_id is None:
            return ActionResult.failure("Reveal requires a tile_id", error_code="INVALID_TILE")

        new_state = reveal_tile(state, action.tile_id)
        if new_state is state:
            if not state.is_playing:
                return ActionResult.unchanged(state, f"Game is {state.status.value}")
            return ActionResult.unchanged(state, f"Tile {action.tile_id} already revealed")

        if new_state.status == GameStatus.LOST:
            changes = [f"Tile {action.tile_id} was a hazard - game lost"]
        elif new_state.status == GameStatus.WON:
            changes = [
                f"Tile {action.tile_id} was safe",
                f"All safe tiles found - won {new_state.potential_payout:.2f}",
            ]
        else:
            changes = [
                f"Tile {action.tile_id} was safe",
                f"Multiplier now {new_state.current_multiplier:.4f}x",
            ]

        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_cash_out(self, state: GameState, action: Action) -> ActionResult:
        """Handle cash-out action."""
        payout = cash_out(state)
        if payout <= 0:
            return ActionResult.unchanged(state, "Nothing to cash out")

        new_state = commit_cash_out(state)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Cashed out {payout:.2f} at {state.current_multiplier:.4f}x"],
            payout=payout,
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    reducer = Reducer()
    return reducer.apply(state, action)
