"""
Board representation and tile codec.

A board is a flat tuple of integers, one per cell of the level's bounding
rectangle. Each value packs the tile's existence, owner and stack size:

- 0: missing tile (outside the playable region, acts as a wall)
- 1: existing, empty tile
- >= 2: occupied tile, value = stack + owner * 16 + 1

    stack = ((value - 2) % 16) + 1
    owner = (value - 2) // 16

Index i maps to (x, y) with x = i % width, y = i // width.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Sequence, Tuple

MISSING = 0
EMPTY = 1
MAX_STACK = 16  # Stack sizes live in [1, MAX_STACK]
SEED_STACK = 16  # Sheep placed on a claimed start tile

Board = Tuple[int, ...]
Coordinate = Tuple[int, int]


class Side(IntEnum):
    """The two competing sides."""

    HUMAN = 0
    AI = 1

    @property
    def opponent(self) -> "Side":
        return Side(1 - self)


TIE = -1  # Winner sentinel for equal tile counts


class TileKind(Enum):
    MISSING = "missing"
    EMPTY = "empty"
    OCCUPIED = "occupied"


@dataclass(frozen=True)
class Tile:
    """Decoded tile value."""

    kind: TileKind
    owner: Optional[Side] = None
    stack: Optional[int] = None

    @property
    def exists(self) -> bool:
        return self.kind is not TileKind.MISSING

    @property
    def is_empty(self) -> bool:
        return self.kind is TileKind.EMPTY


def encode(stack: int, owner: int) -> int:
    """
    Pack a stack into a board value.

    Args:
        stack: Number of sheep on the tile, 1..16
        owner: Owning side, 0 or 1

    Returns:
        Board value >= 2
    """
    if not 1 <= stack <= MAX_STACK:
        raise ValueError(f"Stack size {stack} out of range [1, {MAX_STACK}]")
    if owner not in (0, 1):
        raise ValueError(f"Invalid owner {owner}, must be 0 or 1")
    return stack + owner * MAX_STACK + 1


# Name used by the front end and the tests
to_board_value = encode


def has_sheep(value: int) -> bool:
    return value > EMPTY


def stack_of(value: int) -> int:
    """Stack size of an occupied value."""
    return ((value - 2) % MAX_STACK) + 1


def owner_of(value: int) -> int:
    """Owner index of an occupied value."""
    return (value - 2) // MAX_STACK


def is_valid_value(value: int) -> bool:
    """True if value decodes to a missing, empty or legally occupied tile."""
    return 0 <= value <= encode(MAX_STACK, 1)


def decode(value: int) -> Tuple[bool, Optional[int], Optional[int]]:
    """
    Unpack a board value.

    Returns:
        (exists, owner, stack) with owner and stack None for empty or missing tiles
    """
    if value == MISSING:
        return False, None, None
    if value == EMPTY:
        return True, None, None
    return True, owner_of(value), stack_of(value)


def decode_tile(value: int) -> Tile:
    """Unpack a board value into a Tile."""
    if not is_valid_value(value):
        raise ValueError(f"Invalid board value {value}")
    if value == MISSING:
        return Tile(TileKind.MISSING)
    if value == EMPTY:
        return Tile(TileKind.EMPTY)
    return Tile(TileKind.OCCUPIED, owner=Side(owner_of(value)), stack=stack_of(value))


def coordinate_to_index(x: int, y: int, width: int) -> int:
    return y * width + x


def index_to_coordinate(index: int, width: int) -> Coordinate:
    x = index % width
    y = (index - x) // width
    return x, y


def count_tiles(board: Sequence[int]) -> Tuple[int, int]:
    """
    Count tiles controlled by each side.

    Stack size does not matter, a tile with one sheep counts the same as
    a tile with sixteen.

    Returns:
        (side 0 tiles, side 1 tiles)
    """
    counts = [0, 0]
    for value in board:
        if has_sheep(value):
            counts[owner_of(value)] += 1
    return counts[0], counts[1]


def simplify_board(board: Sequence[int]) -> Board:
    """
    Drop stack sizes, keeping only ownership.

    0 = no sheep (missing or empty), 1 = side 0, 2 = side 1
    """
    return tuple(owner_of(value) + 1 if has_sheep(value) else 0 for value in board)


def format_board(board: Sequence[int], width: int) -> str:
    """Plain-text grid used in log messages and error output."""
    rows = []
    for start in range(0, len(board), width):
        cells = []
        for value in board[start : start + width]:
            if value == MISSING:
                cells.append("  .")
            elif value == EMPTY:
                cells.append("  _")
            else:
                cells.append(f"{'ab'[owner_of(value)]}{stack_of(value):>2}")
        rows.append(" ".join(cells))
    return "\n".join(rows)
