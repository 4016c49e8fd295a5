"""
Sheep Battle rules implementation.

Implements the movement and placement rules:
- A stack slides in one of six hex directions until blocked
- Blocked by missing tiles, occupied tiles and the ends of the board
- A move must leave at least one sheep behind
- Game ends when neither side can move; most tiles wins
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .board import (
    EMPTY,
    SEED_STACK,
    TIE,
    Board,
    Side,
    count_tiles,
    decode_tile,
    encode,
    has_sheep,
    owner_of,
    stack_of,
)

# Axial hex directions folded onto the rectangular grid, (dx, dy)
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),  # north
    (1, 0),  # east
    (1, 1),  # southeast
    (0, -1),  # south
    (-1, 0),  # west
    (-1, -1),  # northwest
)


class IllegalMoveError(ValueError):
    """Raised when a placement or move violates the rules."""


@dataclass(frozen=True)
class Move:
    """A legal slide: any amount in [1, max_stack] may travel."""

    from_index: int
    to_index: int
    max_stack: int


def moves_from(board: Sequence[int], width: int, source: int) -> List[int]:
    """
    Get tiles a stack on source can slide to.

    Each direction is a fixed step (dx + dy * width) through the flat board.
    A slide continues while the next index is in [0, len(board)) and empty,
    so a slide off the end of a row continues on the next one. The last
    empty cell reached is the destination for that direction.

    Args:
        board: Game board
        width: Board width
        source: Index of the tile to move from

    Returns:
        Distinct destination indices, in order of first reaching direction
    """
    destinations = []

    for dx, dy in DIRECTIONS:
        step = dx + dy * width
        index = source + step
        last = None
        while 0 <= index < len(board) and board[index] == EMPTY:
            last = index
            index += step
        if last is not None and last not in destinations:
            destinations.append(last)

    return destinations


def movable_tiles(board: Sequence[int], side: int) -> List[Tuple[int, int]]:
    """
    Get tiles of side that can split.

    Returns:
        (index, stack) pairs for tiles owned by side with more than one sheep
    """
    tiles = []
    for index, value in enumerate(board):
        if has_sheep(value) and owner_of(value) == side:
            stack = stack_of(value)
            if stack > 1:
                tiles.append((index, stack))
    return tiles


def all_moves_for_side(
    board: Sequence[int], width: int, height: int, side: int
) -> List[Move]:
    """
    Generate all legal moves for a side.

    Args:
        board: Game board
        width: Board width
        height: Board height
        side: Side to generate moves for

    Returns:
        Moves ordered by source index, then direction
    """
    if len(board) != width * height:
        raise ValueError(f"Board size {len(board)} doesn't match {width}x{height}")

    moves = []
    for index, stack in movable_tiles(board, side):
        for destination in moves_from(board, width, index):
            moves.append(Move(from_index=index, to_index=destination, max_stack=stack - 1))
    return moves


def has_moves(board: Sequence[int], width: int, height: int, side: int) -> bool:
    """True if side has at least one legal move."""
    for index, _ in movable_tiles(board, side):
        if moves_from(board, width, index):
            return True
    return False


def place_start(
    board: Sequence[int],
    start_tiles: Sequence[int],
    index: int,
    side: int,
    stack: int = SEED_STACK,
) -> Tuple[Board, Tuple[int, ...]]:
    """
    Claim a start tile for side.

    Args:
        board: Game board
        start_tiles: Open start tile indices
        index: Tile to claim
        side: Claiming side
        stack: Sheep to place

    Returns:
        (new board, remaining start tiles)
    """
    if index not in start_tiles:
        raise IllegalMoveError(f"Tile {index} is not an open start tile")
    if not 0 <= index < len(board) or board[index] != EMPTY:
        raise IllegalMoveError(f"Start tile {index} is not empty")

    new_board = list(board)
    new_board[index] = encode(stack, side)
    remaining = tuple(tile for tile in start_tiles if tile != index)
    return tuple(new_board), remaining


def move_stack(
    board: Sequence[int], from_index: int, to_index: int, amount: int, side: int
) -> Board:
    """
    Split a stack and move part of it.

    Does not check that to_index is reachable by sliding; callers restrict
    destinations with moves_from().

    Args:
        board: Game board
        from_index: Source tile, owned by side
        to_index: Destination tile, must be empty
        amount: Sheep to move, 1 <= amount < stack on source
        side: Moving side

    Returns:
        New board
    """
    for index in (from_index, to_index):
        if not 0 <= index < len(board):
            raise IllegalMoveError(f"Tile {index} is off the board")
    if from_index == to_index:
        raise IllegalMoveError("Source and destination are the same tile")

    source = decode_tile(board[from_index])
    if source.owner is None or source.owner != side:
        raise IllegalMoveError(f"Tile {from_index} is not owned by side {side}")
    if not 1 <= amount < source.stack:
        raise IllegalMoveError(
            f"Cannot move {amount} sheep from a stack of {source.stack}"
        )
    if board[to_index] != EMPTY:
        raise IllegalMoveError(f"Destination {to_index} is not an empty tile")

    new_board = list(board)
    new_board[from_index] = encode(source.stack - amount, side)
    new_board[to_index] = encode(amount, side)
    return tuple(new_board)


def get_winner(board: Sequence[int]) -> int:
    """
    Decide the winner by controlled tiles.

    Only meaningful when neither side can move.

    Returns:
        Side with strictly more tiles, or TIE
    """
    side0, side1 = count_tiles(board)
    if side0 == side1:
        return TIE
    return Side.HUMAN if side0 > side1 else Side.AI


def is_terminal(board: Sequence[int], width: int, height: int) -> bool:
    """True if neither side has a legal move."""
    return not has_moves(board, width, height, Side.HUMAN) and not has_moves(
        board, width, height, Side.AI
    )


def get_game_result(board: Sequence[int], width: int, height: int) -> Optional[str]:
    """
    Get human-readable game result.

    Returns:
        Result string or None if not terminal
    """
    if not is_terminal(board, width, height):
        return None

    side0, side1 = count_tiles(board)
    winner = get_winner(board)
    if winner == TIE:
        return f"Tie game ({side0} tiles each)"
    name = "Human" if winner == Side.HUMAN else "AI"
    return f"{name} wins, {max(side0, side1)} tiles to {min(side0, side1)}"
