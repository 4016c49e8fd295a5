"""
Rich-based terminal display for games.

Provides:
- Hex board rendering with tile indices
- Status line and result panel
- Level catalogue table
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.board import EMPTY, MISSING, TIE, Side, count_tiles, owner_of, stack_of
from ..core.game_state import GameInfo, GameState, GameStatic

console = Console()
logger = logging.getLogger(__name__)

SIDE_STYLES = {Side.HUMAN: "bold green", Side.AI: "bold dark_green"}
SIDE_NAMES = {Side.HUMAN: "Human", Side.AI: "AI"}
CELL_WIDTH = 4  # Characters per cell; rows are offset by half a cell


def render_board(
    board: Sequence[int], width: int, height: int, highlights: Iterable[int] = ()
) -> Text:
    """
    Render a board as hex rows.

    Neighbours along (1, 1) sit diagonally, so each row is shifted half a
    cell to the left of the row above it. Empty tiles show their index;
    occupied tiles show the owner's initial and the stack size.
    """
    highlighted = set(highlights)
    half = CELL_WIDTH // 2
    text = Text()

    for y in range(height):
        cells: List[Tuple[int, str, str]] = []
        for x in range(width):
            index = y * width + x
            value = board[index]
            if value == MISSING:
                continue
            # Column in half-cells, always >= 0
            column = (2 * x - y + height - 1) * half
            if value == EMPTY:
                style = "bold yellow reverse" if index in highlighted else "yellow"
                cells.append((column, f"{index:>3}", style))
            else:
                side = Side(owner_of(value))
                label = f"{SIDE_NAMES[side][0]}{stack_of(value):>2}"
                style = SIDE_STYLES[side]
                if index in highlighted:
                    style += " reverse"
                cells.append((column, label, style))

        cursor = 0
        for column, label, style in cells:
            text.append(" " * (column - cursor))
            text.append(label.rjust(CELL_WIDTH - 1), style=style)
            cursor = column + CELL_WIDTH - 1
        text.append("\n")

    return text


class GameDisplay:
    """
    Rich-based display for an interactive game.

    Shows:
    - Level header
    - The board, with selectable tiles highlighted
    - Phase and tile counts
    - Final result
    """

    def __init__(self, out: Console = None):
        self.console = out if out is not None else console

    def log_info(self, message: str):
        """Log info message."""
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def log_warning(self, message: str):
        """Log warning message."""
        self.console.print(f"[yellow]⚠[/yellow]  {message}")

    def show_header(self, static: GameStatic, depth: int):
        """Show game header."""
        self.console.rule(f"[bold blue]Sheep Battle - {static.level_name}[/bold blue]")
        self.console.print(f"Board: {static.width}x{static.height}")
        self.console.print(f"Engine depth: {depth}")
        self.console.print()

    def show_board(self, state: GameState, highlights: Iterable[int] = ()):
        """Print the board and a status line."""
        self.console.print(render_board(state.board, state.width, state.height, highlights))
        self.console.print(self.status_line(state.info, state.board))

    def status_line(self, info: GameInfo, board: Sequence[int]) -> str:
        human, ai = count_tiles(board)
        if info.game_ended:
            phase = "[bold]Game over[/bold]"
        elif info.selecting_start:
            phase = f"Start phase, {len(info.start_tiles)} start tiles open"
        else:
            phase = "Playing"
        return f"{phase} | Human tiles: {human} | AI tiles: {ai}"

    def show_result(self, info: GameInfo, board: Sequence[int]):
        """Show final result panel."""
        human, ai = count_tiles(board)
        if info.winner == TIE:
            message = f"The game is a tie, {human} tiles each"
            style = "yellow"
        else:
            side = Side(info.winner)
            message = f"Winner is: {SIDE_NAMES[side]} ({human} - {ai})"
            style = "green" if side == Side.HUMAN else "red"
        self.console.print(Panel(message, title="Game ended!", style=style))

    def show_levels(self, levels: Sequence[Tuple[str, str, int, int, int]]) -> Table:
        """Print the level catalogue."""
        table = Table(title="Levels")
        table.add_column("Key", style="cyan")
        table.add_column("Name")
        table.add_column("Size", justify="right")
        table.add_column("Start tiles", justify="right")

        for key, name, width, height, start_tiles in levels:
            table.add_row(key, name, f"{width}x{height}", str(start_tiles))

        self.console.print(table)
        return table


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add rich handler
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
