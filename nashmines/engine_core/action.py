"""
Action System - Actions and results for the Mines reducer.

Actions represent the two player moves:
1. Reveal a tile
2. Cash out

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    REVEAL = "reveal"
    CASH_OUT = "cash_out"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    tile_id: int | None = None
    timestamp: float | None = None

    @classmethod
    def reveal(cls, tile_id: int) -> Action:
        """Factory for reveal action."""
        return cls(action_type=ActionType.REVEAL, tile_id=tile_id)

    @classmethod
    def cash_out(cls) -> Action:
        """Factory for cash-out action."""
        return cls(action_type=ActionType.CASH_OUT)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - The new state (the input state itself for no-ops)
    - Payout realized by a cash-out
    - Human-readable changes (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # GameState
    payout: float = 0.0
    no_op: bool = False
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def unchanged(cls, state: Any, reason: str) -> ActionResult:
        """Create a successful no-op result carrying the untouched state."""
        return cls(success=True, new_state=state, no_op=True, state_changes=[reason])

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        payout: float = 0.0,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            payout=payout,
            state_changes=changes or [],
        )
