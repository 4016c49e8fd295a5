"""Tests for engine-vs-engine matches."""

from sheep_battle.core import Side, get_winner, is_terminal
from sheep_battle.game import play_match


def test_match_on_single_tile_level():
    """Test the human seat wins the 1x1 level by claiming first."""
    result = play_match("two", human_depth=1, ai_depth=1, progress=False)

    assert result.level_name == "Two"
    assert result.plies == 1
    assert result.winner == Side.HUMAN
    assert result.tiles == (1, 0)


def test_match_runs_to_completion():
    """Test a full match ends in a terminal position."""
    result = play_match("one", human_depth=1, ai_depth=2, progress=False)
    state = result.state

    assert state.game_ended
    assert is_terminal(state.board, state.width, state.height)
    assert result.winner == get_winner(state.board)
    # Every start tile is claimed before any move
    assert result.plies >= 14


def test_match_is_reproducible():
    """Test matches are deterministic."""
    first = play_match("one", human_depth=2, ai_depth=2, progress=False)
    second = play_match("one", human_depth=2, ai_depth=2, progress=False)

    assert first == second
