"""
Main CLI for Sheep Battle.
"""

import argparse
import logging
import sys

from rich.prompt import IntPrompt

from ..ai import DEFAULT_DEPTH
from ..core.board import stack_of
from ..core.levels import UnknownLevelError, list_levels, load_level
from ..game import GameSession, play_match
from ..utils.rich_display import GameDisplay, render_board, setup_rich_logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def levels_command(args):
    """List the level catalogue."""
    setup_logging(args.log_level)

    rows = []
    for key, name in list_levels():
        level = load_level(key)
        rows.append((key, name, level.width, level.height, len(level.start_tiles)))

    GameDisplay().show_levels(rows)


def play_command(args):
    """Play an interactive game against the engine."""
    setup_rich_logging(args.log_level)
    logger = logging.getLogger(__name__)
    display = GameDisplay()

    session = GameSession.from_level(args.level, depth=args.depth)
    display.show_header(session.static, args.depth)

    while not session.info.game_ended:
        state = session.state

        if state.selecting_start:
            display.show_board(state, highlights=state.start_tiles)
            index = IntPrompt.ask("Claim start tile", console=display.console)
            if not session.place_start(index):
                display.log_warning(f"Tile {index} is not an open start tile")
                continue
        else:
            display.show_board(state)
            source = IntPrompt.ask("Move sheep from tile", console=display.console)
            destinations = session.moves_from(source)
            if not destinations:
                display.log_warning(f"No moves from tile {source}")
                continue

            display.show_board(state, highlights=destinations)
            target = IntPrompt.ask(
                "Move to tile",
                choices=[str(d) for d in destinations],
                console=display.console,
            )
            max_amount = stack_of(state.board[source]) - 1
            amount = IntPrompt.ask(
                f"How many sheep (1-{max_amount})",
                default=max(1, (max_amount + 1) // 2),
                console=display.console,
            )
            if not session.commit_move(source, target, amount):
                display.log_warning(f"Cannot move {amount} sheep from tile {source}")
                continue

        with display.console.status("Engine is thinking..."):
            decision = session.advance_ai()

        if decision is not None and decision.placed is not None:
            display.log_info(f"Engine claimed start tile {decision.placed}")
        elif decision is not None and decision.move is not None:
            display.log_info(
                f"Engine moved {decision.amount} sheep "
                f"{decision.move.from_index} -> {decision.move.to_index}"
            )
        logger.debug(f"Plies so far: {session.plies}")

    display.show_board(session.state)
    display.show_result(session.info, session.board)


def match_command(args):
    """Play the engine against itself."""
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    logger.info(
        f"Match on level {args.level!r}: human seat depth {args.human_depth}, "
        f"AI depth {args.ai_depth}"
    )
    result = play_match(
        args.level,
        human_depth=args.human_depth,
        ai_depth=args.ai_depth,
        progress=not args.no_progress,
    )

    display = GameDisplay()
    state = result.state
    display.console.print(render_board(state.board, state.width, state.height))
    display.show_result(state.info, state.board)
    logger.info(f"Plies: {result.plies}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sheep Battle against a minimax engine")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Levels command
    levels_parser = subparsers.add_parser("levels", help="List available levels")
    levels_parser.set_defaults(func=levels_command)

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the engine")
    play_parser.add_argument("--level", default="one", help="Level key")
    play_parser.add_argument(
        "--depth", type=int, default=DEFAULT_DEPTH, help="Engine search depth in plies"
    )
    play_parser.set_defaults(func=play_command)

    # Match command
    match_parser = subparsers.add_parser("match", help="Engine vs engine")
    match_parser.add_argument("--level", default="one", help="Level key")
    match_parser.add_argument(
        "--human-depth", type=int, default=2, help="Search depth for the human seat"
    )
    match_parser.add_argument(
        "--ai-depth", type=int, default=DEFAULT_DEPTH, help="Search depth for the AI side"
    )
    match_parser.add_argument(
        "--no-progress", action="store_true", help="Hide the progress bar"
    )
    match_parser.set_defaults(func=match_command)

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except UnknownLevelError as e:
        print(f"error: {e.args[0]}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
