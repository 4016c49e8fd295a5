"""
Game state representation.

A Sheep Battle game consists of:
- Static level information (name, board size)
- The board (flat tuple of packed tile values)
- Phase metadata: start-tile selection, game over, winner
- The side the game is waiting on

All states are immutable; every transition builds a new GameState.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .board import TIE, Board, Side, count_tiles, format_board, is_valid_value
from .levels import Level, load_level


@dataclass(frozen=True)
class GameStatic:
    """Level information that never changes during a game."""

    level_name: str
    width: int
    height: int


@dataclass(frozen=True)
class GameInfo:
    """Status record handed to the front end after every operation."""

    selecting_start: bool
    game_ended: bool
    winner: Optional[int]  # Side, TIE, or None while the game runs
    start_tiles: Tuple[int, ...]


@dataclass(frozen=True)
class GameState:
    """
    Immutable game state representation.

    Board layout for a 4x3 level:
        [0] [1] [2] [3]     y = 0
        [4] [5] [6] [7]     y = 1
        [8] [9] [10][11]    y = 2

    Index i is the cell at x = i % width, y = i // width.
    """

    board: Board
    width: int
    height: int
    start_tiles: Tuple[int, ...] = ()  # Open start tiles, catalogue order
    selecting_start: bool = True
    game_ended: bool = False
    winner: Optional[int] = None
    to_move: Side = Side.HUMAN

    def __post_init__(self) -> None:
        """Validate state invariants."""
        expected_size = self.width * self.height
        if len(self.board) != expected_size:
            raise ValueError(
                f"Board size {len(self.board)} doesn't match expected {expected_size}"
            )
        bad = [value for value in self.board if not is_valid_value(value)]
        if bad:
            raise ValueError(f"Invalid tile values {bad}")
        if any(not 0 <= tile < expected_size for tile in self.start_tiles):
            raise ValueError(f"Start tile out of range: {self.start_tiles}")
        if self.winner is not None and not self.game_ended:
            raise ValueError("Winner set on a running game")
        if self.winner not in (None, TIE, Side.HUMAN, Side.AI):
            raise ValueError(f"Invalid winner {self.winner}")
        if self.to_move not in (Side.HUMAN, Side.AI):
            raise ValueError(f"Invalid side to move {self.to_move}")

    @property
    def info(self) -> GameInfo:
        return GameInfo(
            selecting_start=self.selecting_start,
            game_ended=self.game_ended,
            winner=self.winner,
            start_tiles=self.start_tiles,
        )

    @property
    def tile_counts(self) -> Tuple[int, int]:
        """Tiles controlled by (human, AI)."""
        return count_tiles(self.board)

    def evolve(self, **changes) -> "GameState":
        """Copy with the given fields replaced."""
        return replace(self, **changes)

    def __str__(self) -> str:
        """Human-readable board representation."""
        if self.game_ended:
            status = "Game over"
        elif self.selecting_start:
            status = f"Selecting start tiles ({len(self.start_tiles)} open)"
        else:
            status = "Playing"
        side = "Human" if self.to_move == Side.HUMAN else "AI"
        return f"\n{format_board(self.board, self.width)}\n\n{status}, {side} to move\n"


def initialize_game(level_key: str) -> Tuple[GameStatic, GameState]:
    """
    Create a fresh game from the level catalogue.

    Args:
        level_key: Level identifier

    Returns:
        (static info, starting state)

    Raises:
        UnknownLevelError: if the level does not exist
    """
    return initialize_from_level(load_level(level_key))


def initialize_from_level(level: Level) -> Tuple[GameStatic, GameState]:
    """Create a fresh game from an already loaded level."""
    static = GameStatic(level_name=level.name, width=level.width, height=level.height)
    state = GameState(
        board=level.to_board(),
        width=level.width,
        height=level.height,
        start_tiles=level.start_indices(),
        selecting_start=True,
    )
    return static, state
