"""
NashMines CLI - Command-line interface for the engine.

Usage:
    nashmines play [--bet 10] [--hazards 3] [--mode balanced] [--seed N] [--no-advisor]
    nashmines table --hazards 3
    nashmines serve [--host 127.0.0.1] [--port 8000]

In `play`, enter a tile id (0-24) to reveal it, `c` to cash out,
`a` for advice or `q` to quit.
"""

import argparse
import random
import sys

from .config import STARTING_BALANCE, configure_logging
from .engine_core import (
    GameSettings,
    GameState,
    GameStatus,
    MinesError,
    StrategyMode,
    GRID_WIDTH,
    multiplier_table,
)
from .session import SessionManager


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="NashMines - Mines game engine with an equilibrium advisor",
        prog="nashmines",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--bet", type=float, default=10.0, help="Bet amount")
    play_parser.add_argument("--hazards", type=int, default=3, help="Number of hazards (1-24)")
    play_parser.add_argument(
        "--mode",
        choices=[m.value for m in StrategyMode],
        default=StrategyMode.BALANCED.value,
        help="Advisor mode",
    )
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible grid")
    play_parser.add_argument("--no-advisor", action="store_true", help="Hide advisor output")

    # Table command
    table_parser = subparsers.add_parser("table", help="Print the multiplier curve")
    table_parser.add_argument("--hazards", type=int, default=3, help="Number of hazards (1-24)")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "table":
        cmd_table(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_table(args):
    """Print the multiplier for every number of safe reveals."""
    try:
        table = multiplier_table(args.hazards)
    except MinesError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Multipliers with {args.hazards} hazard(s):")
    for revealed, multiplier in table:
        print(f"  {revealed:>2} safe  {multiplier:8.4f}x")


def cmd_serve(args):
    """Run the API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install nashmines[api]")
        sys.exit(1)

    uvicorn.run("nashmines.api.app:app", host=args.host, port=args.port)


def cmd_play(args):
    """Interactive game against an in-memory wallet."""
    configure_logging("WARNING")

    manager = SessionManager()
    player_id = "cli"
    settings = GameSettings(
        bet_amount=args.bet,
        hazard_count=args.hazards,
        enable_advisor=not args.no_advisor,
        strategy_mode=StrategyMode(args.mode),
    )
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        session = manager.create_session(player_id, settings, rng=rng)
    except MinesError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Starting balance {STARTING_BALANCE:.2f}, bet {args.bet:.2f}, {args.hazards} hazard(s)")

    while session.game_state.is_playing:
        print()
        print(render_grid(session.game_state))
        _print_status(session.game_state, show_advice=not args.no_advisor)

        command = input("tile / c / a / q > ").strip().lower()
        if command == "q":
            manager.end_session(session.session_id)
            print("Game abandoned, bet forfeited.")
            break
        if command == "c":
            result = session.cash_out()
            if result.no_op:
                print("Reveal at least one tile before cashing out.")
            continue
        if command == "a":
            report = session.advise()
            print(f"  {report.recommendation.reasoning}")
            print(
                f"  Stability {report.strategy.stability_score:.2f}, "
                f"cash-out threshold {report.strategy.cash_out_threshold:.2f}"
            )
            continue

        try:
            tile_id = int(command)
            result = session.reveal(tile_id)
        except ValueError:
            print("Enter a tile id, c, a or q.")
            continue
        except MinesError as e:
            print(f"Error: {e}")
            continue
        for change in result.changes:
            print(f"  {change}")

    state = session.game_state
    if state.is_terminal:
        print()
        print(render_grid(state, show_hazards=True))
        if state.status == GameStatus.WON:
            print(f"You won {state.potential_payout:.2f} ({state.current_multiplier:.4f}x)")
        else:
            print("You hit a hazard.")
    print(f"Balance: {session.balance:.2f}")


def render_grid(state: GameState, show_hazards: bool = False) -> str:
    """
    Text rendering of the grid.

    Unrevealed tiles show their id; safe reveals show '*', the exploded
    tile 'X' and (when show_hazards) other hazards 'x'.
    """
    lines = []
    for row in range(GRID_WIDTH):
        cells = []
        for col in range(GRID_WIDTH):
            tile = state.tiles[row * GRID_WIDTH + col]
            if tile.is_exploded:
                cells.append(" X")
            elif tile.is_revealed:
                cells.append(" *")
            elif show_hazards and tile.is_hazard:
                cells.append(" x")
            else:
                cells.append(f"{tile.tile_id:2d}")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def _print_status(state: GameState, show_advice: bool):
    print(
        f"Revealed {state.revealed_count}/{state.safe_tiles}, "
        f"multiplier {state.current_multiplier:.4f}x, payout {state.potential_payout:.2f}"
    )
    if show_advice and state.recommendation:
        rec = state.recommendation
        target = f" tile {rec.tile_id}" if rec.tile_id is not None else ""
        print(
            f"Advisor: {rec.action.value}{target} "
            f"(confidence {rec.confidence:.2f}, risk {rec.risk_level.value})"
        )


if __name__ == "__main__":
    main()
