"""
Depth-limited minimax search for the computer-controlled side.

Explores moves forward from the current board, alternating between the
engine's side (maximizing) and its opponent (minimizing), and scores the
leaves with the static evaluation. Alpha-beta pruning and a transposition
cache keep the search fast; neither changes which move is chosen.

Amounts are sampled, not enumerated: a split tries one sheep, half the
stack and all but one (see split_amounts). The search is therefore not
exhaustive over amounts, and a winning split of another size can be missed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.board import EMPTY, Board, Side
from ..core.hash import zobrist_hash
from ..core.rules import (
    Move,
    all_moves_for_side,
    has_moves,
    is_terminal,
    move_stack,
    place_start,
)
from .evaluation import evaluate, terminal_score

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 6

# Transposition entry flags
EXACT = 0
LOWER = 1  # Value is a lower bound (search failed high)
UPPER = 2  # Value is an upper bound (search failed low)


@dataclass(frozen=True)
class Decision:
    """Outcome of one engine turn."""

    board: Board
    moved: bool  # False when the engine had no legal action
    start_tiles: Tuple[int, ...]
    move: Optional[Move] = None
    amount: Optional[int] = None
    placed: Optional[int] = None
    score: Optional[int] = None


@dataclass(frozen=True)
class _CacheEntry:
    board: Board
    value: int
    flag: int


def split_amounts(max_stack: int) -> List[int]:
    """
    Candidate amounts to move for a stack that can give up max_stack sheep.

    The search considers a single sheep, half the stack and all but one.
    """
    stack = max_stack + 1
    return sorted({1, stack // 2, max_stack})


class SearchEngine:
    """
    Minimax player for one side.

    Deterministic: the same board always yields the same decision. Among
    equally scored moves the first in generation order wins (source index,
    then direction, then amount ascending).
    """

    def __init__(self, depth: int = DEFAULT_DEPTH, side: Side = Side.AI):
        """
        Initialize search engine.

        Args:
            depth: Plies to look ahead, including the engine's own move
            side: Side the engine plays
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.side = Side(side)
        self.nodes = 0
        self.cache_hits = 0
        self._cache: Dict[Tuple[int, int], _CacheEntry] = {}

    def simulate(
        self,
        board: Sequence[int],
        width: int,
        height: int,
        selecting_start: bool,
        start_tiles: Sequence[int] = (),
    ) -> Decision:
        """
        Play one turn for the engine's side.

        During the start phase one open start tile is claimed; otherwise one
        move is made. The input board is never modified.

        Args:
            board: Current board
            width: Board width
            height: Board height
            selecting_start: True while start tiles are being claimed
            start_tiles: Open start tile indices

        Returns:
            Decision with the resulting board and whether an action was taken
        """
        board = tuple(board)
        start_tiles = tuple(start_tiles)

        if selecting_start:
            index = self.choose_start_tile(board, width, height, start_tiles)
            if index is None:
                return Decision(board=board, moved=False, start_tiles=start_tiles)
            new_board, remaining = place_start(board, start_tiles, index, self.side)
            logger.debug(f"Side {int(self.side)} claims start tile {index}")
            return Decision(
                board=new_board, moved=True, start_tiles=remaining, placed=index
            )

        choice = self.choose_move(board, width, height)
        if choice is None:
            logger.debug(f"Side {int(self.side)} has no legal move")
            return Decision(board=board, moved=False, start_tiles=start_tiles)

        move, amount, score = choice
        new_board = move_stack(board, move.from_index, move.to_index, amount, self.side)
        return Decision(
            board=new_board,
            moved=True,
            start_tiles=start_tiles,
            move=move,
            amount=amount,
            score=score,
        )

    def choose_start_tile(
        self,
        board: Sequence[int],
        width: int,
        height: int,
        start_tiles: Sequence[int],
    ) -> Optional[int]:
        """
        Pick the open start tile with the best static score.

        Returns:
            Board index, or None if no open start tile is left
        """
        best_index = None
        best_score = None

        for index in start_tiles:
            if not 0 <= index < len(board) or board[index] != EMPTY:
                continue
            placed, _ = place_start(board, start_tiles, index, self.side)
            score = evaluate(placed, width, self.side)
            if best_score is None or score > best_score:
                best_score = score
                best_index = index

        return best_index

    def choose_move(
        self, board: Sequence[int], width: int, height: int
    ) -> Optional[Tuple[Move, int, int]]:
        """
        Search for the best move.

        Args:
            board: Current board
            width: Board width
            height: Board height

        Returns:
            (move, amount, score) or None if the engine's side cannot move
        """
        board = tuple(board)
        self.nodes = 0
        self.cache_hits = 0
        self._cache = {}

        children = self._expand(board, width, height, self.side)
        if not children:
            return None

        opponent = self.side.opponent
        best = None
        best_value = float("-inf")
        alpha = float("-inf")

        for move, amount in children:
            child = move_stack(board, move.from_index, move.to_index, amount, self.side)
            value = self._minimax(
                child, width, height, opponent, self.depth - 1, alpha, float("inf")
            )
            # Strict comparison keeps the first of equally scored moves
            if value > best_value:
                best_value = value
                best = (move, amount)
            alpha = max(alpha, best_value)

        logger.debug(
            f"Side {int(self.side)} depth {self.depth}: {best[0].from_index}->"
            f"{best[0].to_index} x{best[1]} score={best_value} "
            f"nodes={self.nodes:,} cache_hits={self.cache_hits:,}"
        )
        return best[0], best[1], int(best_value)

    def _expand(
        self, board: Board, width: int, height: int, side: int
    ) -> List[Tuple[Move, int]]:
        """All (move, amount) pairs the search considers for side."""
        return [
            (move, amount)
            for move in all_moves_for_side(board, width, height, side)
            for amount in split_amounts(move.max_stack)
        ]

    def _minimax(
        self,
        board: Board,
        width: int,
        height: int,
        to_move: int,
        depth: int,
        alpha: float,
        beta: float,
    ) -> int:
        """
        Minimax value of board from the engine's point of view.

        A side without moves passes, which uses up a ply. When both sides
        are stuck the position is scored as a finished game.
        """
        self.nodes += 1

        if depth == 0:
            if is_terminal(board, width, height):
                return terminal_score(board, self.side)
            return evaluate(board, width, self.side)

        key = (zobrist_hash(board, to_move), depth)
        entry = self._cache.get(key)
        if entry is not None and entry.board == board:
            if (
                entry.flag == EXACT
                or (entry.flag == LOWER and entry.value >= beta)
                or (entry.flag == UPPER and entry.value <= alpha)
            ):
                self.cache_hits += 1
                return entry.value

        children = self._expand(board, width, height, to_move)
        opponent = 1 - to_move

        if not children:
            if not has_moves(board, width, height, opponent):
                return terminal_score(board, self.side)
            return self._minimax(board, width, height, opponent, depth - 1, alpha, beta)

        alpha_orig, beta_orig = alpha, beta
        maximizing = to_move == self.side

        if maximizing:
            value = float("-inf")
            for move, amount in children:
                child = move_stack(board, move.from_index, move.to_index, amount, to_move)
                value = max(
                    value,
                    self._minimax(child, width, height, opponent, depth - 1, alpha, beta),
                )
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
        else:
            value = float("inf")
            for move, amount in children:
                child = move_stack(board, move.from_index, move.to_index, amount, to_move)
                value = min(
                    value,
                    self._minimax(child, width, height, opponent, depth - 1, alpha, beta),
                )
                beta = min(beta, value)
                if alpha >= beta:
                    break

        if value <= alpha_orig:
            flag = UPPER
        elif value >= beta_orig:
            flag = LOWER
        else:
            flag = EXACT
        self._cache[key] = _CacheEntry(board=board, value=value, flag=flag)

        return value
