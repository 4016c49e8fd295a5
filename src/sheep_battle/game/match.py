"""
Engine-vs-engine matches.

A second SearchEngine stands in for the human and plays through the same
GameSession calls a front end would make.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from tqdm import tqdm

from ..ai import DEFAULT_DEPTH, SearchEngine
from ..core.board import Side
from ..core.game_state import GameState
from .session import GameSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    level_name: str
    state: GameState
    plies: int
    winner: int  # Side or TIE
    tiles: Tuple[int, int]


def play_match(
    level_key: str,
    human_depth: int = 2,
    ai_depth: int = DEFAULT_DEPTH,
    progress: bool = True,
) -> MatchResult:
    """
    Play a full game with engines on both sides.

    Args:
        level_key: Level to play
        human_depth: Search depth for the engine in the human seat
        ai_depth: Search depth for the AI side
        progress: Show a tqdm progress bar

    Returns:
        MatchResult for the finished game
    """
    session = GameSession.from_level(level_key, depth=ai_depth)
    stand_in = SearchEngine(depth=human_depth, side=Side.HUMAN)

    with tqdm(
        desc=f"Match on {session.static.level_name}",
        unit=" ply",
        disable=not progress,
    ) as pbar:
        while not session.info.game_ended:
            state = session.state
            before = session.plies

            decision = stand_in.simulate(
                state.board,
                state.width,
                state.height,
                state.selecting_start,
                state.start_tiles,
            )
            if decision.placed is not None:
                accepted = session.place_start(decision.placed)
            elif decision.move is not None:
                accepted = session.commit_move(
                    decision.move.from_index, decision.move.to_index, decision.amount
                )
            else:
                raise RuntimeError("Human seat has no legal action on its turn")

            if not accepted:
                raise RuntimeError(f"Session rejected the human seat's action: {decision}")

            session.advance_ai()
            pbar.update(session.plies - before)

    state = session.state
    logger.info(
        f"Match finished after {session.plies} plies, "
        f"tiles {state.tile_counts[0]}-{state.tile_counts[1]}"
    )
    return MatchResult(
        level_name=session.static.level_name,
        state=state,
        plies=session.plies,
        winner=state.winner,
        tiles=state.tile_counts,
    )
