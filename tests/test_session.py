"""Tests for the game session and turn order."""

from sheep_battle.ai import SearchEngine
from sheep_battle.core import (
    EMPTY,
    TIE,
    GameState,
    GameStatic,
    Side,
    decode,
    encode,
    get_winner,
    has_moves,
    load_level,
)
from sheep_battle.game import GameSession


def session_for(board, width, height, to_move=Side.HUMAN, depth=2):
    """Session already past the start phase."""
    static = GameStatic(level_name="Custom", width=width, height=height)
    state = GameState(
        board=tuple(board),
        width=width,
        height=height,
        selecting_start=False,
        to_move=to_move,
    )
    return GameSession(static, state, SearchEngine(depth=depth))


def test_single_tile_level():
    """Test the 1x1 level: human claims the only tile and wins."""
    session = GameSession.from_level("two")

    assert session.place_start(0)
    assert session.board == (17,)
    assert decode(session.board[0]) == (True, 0, 16)
    assert session.info.selecting_start is False

    decision = session.advance_ai()

    assert decision is not None and not decision.moved
    assert session.info.game_ended
    assert session.info.winner == Side.HUMAN
    assert session.winner() == Side.HUMAN


def test_rejects_non_start_tile():
    """Test invalid claims leave the game untouched."""
    session = GameSession.from_level("one", depth=2)
    before = session.state

    assert not session.place_start(6)  # (2, 1) is not a tile
    assert not session.place_start(99)
    assert session.state == before


def test_start_tiles_alternate():
    """Test human and engine claim start tiles in turn."""
    session = GameSession.from_level("one", depth=2)
    first = session.state.start_tiles[0]

    assert session.place_start(first)
    # Engine's turn now
    assert not session.place_start(session.state.start_tiles[0])

    decision = session.advance_ai()

    assert decision.placed is not None
    assert decision.placed != first
    assert decode(session.board[decision.placed]) == (True, Side.AI, 16)
    assert len(session.info.start_tiles) == 12
    assert session.info.selecting_start
    assert session.state.to_move == Side.HUMAN
    assert session.plies == 2


def test_advance_ai_only_on_engine_turn():
    """Test the engine does not move out of turn."""
    session = GameSession.from_level("one", depth=2)
    assert session.advance_ai() is None
    assert session.plies == 0


def test_no_moves_during_start_phase():
    """Test moves are unavailable until all start tiles are claimed."""
    session = GameSession.from_level("one", depth=2)
    start = session.state.start_tiles[0]
    session.place_start(start)
    session.advance_ai()

    assert session.moves_from(start) == []
    assert not session.commit_move(start, 1, 1)


def test_commit_move_validation():
    """Test moves must be legal slides with a legal amount."""
    session = session_for([encode(3, 0), 1, 1], 3, 1)

    assert session.moves_from(0) == [2]
    assert session.moves_from(1) == []
    assert not session.commit_move(0, 1, 1)  # Not the end of the slide
    assert not session.commit_move(0, 2, 3)  # Would empty the source
    assert not session.commit_move(0, 2, 0)

    assert session.commit_move(0, 2, 2)
    assert session.board == (2, 1, 3)
    assert session.state.to_move == Side.AI


def test_engine_passes_when_stuck():
    """Test a side without moves is skipped."""
    session = session_for([encode(3, 0), 1, 1], 3, 1)
    session.commit_move(0, 2, 2)

    decision = session.advance_ai()

    assert not decision.moved
    assert not session.info.game_ended
    assert session.state.to_move == Side.HUMAN

    assert session.commit_move(2, 1, 1)
    session.advance_ai()

    assert session.board == (2, 2, 2)
    assert session.info.game_ended
    assert session.info.winner == Side.HUMAN


def test_engine_keeps_moving_while_human_stuck():
    """Test the engine moves again when the human has no move."""
    # Human stack walled in by the engine's stack on its east side
    board = [encode(2, 0), encode(5, 1), 1, 1]
    session = session_for(board, 4, 1, to_move=Side.AI)

    session.advance_ai()

    assert EMPTY not in session.board
    assert session.plies == 2
    assert session.info.game_ended
    assert session.info.winner == Side.AI


def test_full_board_ends_in_tie():
    """Test a board with no empty tiles ends by tile count."""
    session = session_for([encode(3, 0), encode(3, 1)], 2, 1, to_move=Side.AI)

    session.advance_ai()

    assert session.info.game_ended
    assert session.info.winner == TIE
    assert session.info.start_tiles == ()


def test_actions_rejected_after_game_end():
    """Test the Ended phase is terminal."""
    session = GameSession.from_level("two")
    session.place_start(0)
    session.advance_ai()
    before = session.state

    assert not session.place_start(0)
    assert not session.commit_move(0, 0, 1)
    assert session.advance_ai() is None
    assert session.moves_from(0) == []
    assert session.state == before


def test_full_game_on_level_one():
    """Test a complete game reaches the Ended phase with a consistent winner."""
    session = GameSession.from_level("one", depth=2)
    level = load_level("one")

    for _ in range(100):
        if session.info.game_ended:
            break
        state = session.state
        if state.selecting_start:
            assert session.place_start(state.start_tiles[0])
        else:
            source, destination = next(
                (index, session.moves_from(index)[0])
                for index in range(len(state.board))
                if session.moves_from(index)
            )
            assert session.commit_move(source, destination, 1)
        session.advance_ai()

    board = session.board
    assert session.info.game_ended
    assert not has_moves(board, level.width, level.height, Side.HUMAN)
    assert not has_moves(board, level.width, level.height, Side.AI)
    assert session.info.winner == get_winner(board)
