"""
Static position evaluation for the search engine.

Scores are from the point of view of one side: positive is good for that
side. Tiles decide the game, so they dominate; mobility breaks ties between
positions with equal tile counts.
"""

from typing import Sequence

from ..core.board import count_tiles
from ..core.rules import movable_tiles, moves_from

TILE_WEIGHT = 100
WIN_SCORE = 100_000


def mobility(board: Sequence[int], width: int, side: int) -> int:
    """Number of legal (from, to) slides for side."""
    return sum(len(moves_from(board, width, index)) for index, _ in movable_tiles(board, side))


def terminal_score(board: Sequence[int], side: int) -> int:
    """
    Score a finished game.

    Args:
        board: Board where neither side can move
        side: Side to score for

    Returns:
        WIN_SCORE plus the tile margin for a win, the margin alone for a tie
    """
    tiles = count_tiles(board)
    margin = tiles[side] - tiles[1 - side]
    if margin > 0:
        return WIN_SCORE + margin
    if margin < 0:
        return -WIN_SCORE + margin
    return 0


def evaluate(board: Sequence[int], width: int, side: int) -> int:
    """Heuristic score of a non-terminal board for side."""
    tiles = count_tiles(board)
    own_moves = mobility(board, width, side)
    other_moves = mobility(board, width, 1 - side)
    return TILE_WEIGHT * (tiles[side] - tiles[1 - side]) + own_moves - other_moves
