"""
Game session: the interface a front end drives.

Holds the current GameState and enforces turn order:

    SelectingStart -> Playing -> Ended

Start tiles are claimed one at a time, human first, until none are left.
During play a side without legal moves passes. The game ends when neither
side can move.

Human actions are validated and rejected with a False result (and a
warning) instead of raising, so a front end can feed raw clicks straight in.
"""

import logging
from typing import List, Optional

from ..ai import DEFAULT_DEPTH, Decision, SearchEngine
from ..core.board import EMPTY, Board, Side, has_sheep, owner_of, stack_of
from ..core.game_state import GameInfo, GameState, GameStatic, initialize_game
from ..core.rules import (
    IllegalMoveError,
    get_game_result,
    get_winner,
    has_moves,
    move_stack,
    moves_from,
    place_start,
)

logger = logging.getLogger(__name__)


class GameSession:
    """One game between a human and the search engine."""

    def __init__(
        self,
        static: GameStatic,
        state: GameState,
        engine: Optional[SearchEngine] = None,
    ):
        """
        Initialize session.

        Args:
            static: Level information
            state: Starting state
            engine: Engine playing the AI side (default: depth 6)
        """
        self.static = static
        self.state = state
        self.engine = engine if engine is not None else SearchEngine(DEFAULT_DEPTH)
        if self.engine.side != Side.AI:
            raise ValueError("Session engine must play the AI side")
        self.plies = 0  # Placements and moves made by either side

    @classmethod
    def from_level(cls, level_key: str, depth: int = DEFAULT_DEPTH) -> "GameSession":
        """
        Start a new game on a catalogue level.

        Raises:
            UnknownLevelError: if the level does not exist
        """
        static, state = initialize_game(level_key)
        logger.info(
            f"New game on level {static.level_name!r} "
            f"({static.width}x{static.height}, search depth {depth})"
        )
        return cls(static, state, SearchEngine(depth=depth, side=Side.AI))

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def info(self) -> GameInfo:
        return self.state.info

    def winner(self) -> int:
        """Tile-count winner of the current board (Side or TIE)."""
        return get_winner(self.state.board)

    def moves_from(self, index: int) -> List[int]:
        """
        Destinations for a human stack.

        Returns:
            Empty list unless the game is in play and index holds a human
            stack of more than one sheep
        """
        state = self.state
        if state.game_ended or state.selecting_start:
            return []
        if not 0 <= index < len(state.board):
            return []
        value = state.board[index]
        if not has_sheep(value) or owner_of(value) != Side.HUMAN or stack_of(value) < 2:
            return []
        return moves_from(state.board, state.width, index)

    def place_start(self, index: int) -> bool:
        """
        Claim a start tile for the human.

        Returns:
            True if the tile was claimed, False if the action was rejected
        """
        if not self._check_human_turn("place a start tile"):
            return False
        if not self.state.selecting_start:
            logger.warning("Start tiles can only be placed during the start phase")
            return False

        try:
            board, remaining = place_start(
                self.state.board, self.state.start_tiles, index, Side.HUMAN
            )
        except IllegalMoveError as e:
            logger.warning(f"Rejected start tile {index}: {e}")
            return False

        self.state = self.state.evolve(
            board=board,
            start_tiles=remaining,
            selecting_start=bool(remaining),
            to_move=Side.AI,
        )
        self.plies += 1
        if not remaining:
            logger.info("All start tiles claimed, play begins")
        return True

    def commit_move(self, from_index: int, to_index: int, amount: int) -> bool:
        """
        Move part of a human stack.

        Returns:
            True if the move was made, False if it was rejected
        """
        if not self._check_human_turn("move"):
            return False
        if self.state.selecting_start:
            logger.warning("Cannot move sheep during the start phase")
            return False
        if to_index not in self.moves_from(from_index):
            logger.warning(f"Rejected move {from_index}->{to_index}: not a legal slide")
            return False

        try:
            board = move_stack(self.state.board, from_index, to_index, amount, Side.HUMAN)
        except IllegalMoveError as e:
            logger.warning(f"Rejected move {from_index}->{to_index} x{amount}: {e}")
            return False

        self.state = self.state.evolve(board=board, to_move=Side.AI)
        self.plies += 1
        return True

    def advance_ai(self) -> Optional[Decision]:
        """
        Let the engine play until the human is to move or the game is over.

        The engine claims one start tile per turn during the start phase and
        makes one move per turn afterwards. It keeps moving while the human
        is stuck. Every engine move fills an empty tile, so the loop is
        bounded by the number of empty tiles.

        Returns:
            The engine's last decision, or None if it was not the engine's turn
        """
        if self.state.game_ended:
            logger.warning("Game is over, engine not advanced")
            return None
        if self.state.to_move != Side.AI:
            logger.warning("Not the engine's turn")
            return None

        decision = None
        limit = sum(1 for value in self.state.board if value == EMPTY) + 2

        for _ in range(limit):
            state = self.state
            decision = self.engine.simulate(
                state.board,
                state.width,
                state.height,
                state.selecting_start,
                state.start_tiles,
            )
            if decision.moved:
                self.plies += 1

            selecting = state.selecting_start and bool(decision.start_tiles)
            if state.selecting_start and not selecting:
                logger.info("All start tiles claimed, play begins")

            self.state = state.evolve(
                board=decision.board,
                start_tiles=decision.start_tiles,
                selecting_start=selecting,
            )

            if selecting or has_moves(
                self.state.board, state.width, state.height, Side.HUMAN
            ):
                self.state = self.state.evolve(to_move=Side.HUMAN)
                return decision

            if not has_moves(self.state.board, state.width, state.height, Side.AI):
                self._end_game()
                return decision

            # Human is stuck, the engine moves again
            logger.debug("Human has no legal move, passing back to the engine")

        raise RuntimeError(f"Engine did not yield the turn after {limit} iterations")

    def _end_game(self) -> None:
        state = self.state
        winner = get_winner(state.board)
        self.state = state.evolve(
            game_ended=True,
            selecting_start=False,
            start_tiles=(),
            winner=winner,
        )
        logger.info(f"Game over: {get_game_result(state.board, state.width, state.height)}")

    def _check_human_turn(self, action: str) -> bool:
        if self.state.game_ended:
            logger.warning(f"Cannot {action}: the game is over")
            return False
        if self.state.to_move != Side.HUMAN:
            logger.warning(f"Cannot {action}: waiting for the engine")
            return False
        return True
