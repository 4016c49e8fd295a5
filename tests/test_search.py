"""Tests for the search engine."""

import pytest
from sheep_battle.ai import SearchEngine, evaluate, split_amounts, terminal_score
from sheep_battle.ai.evaluation import TILE_WEIGHT, WIN_SCORE
from sheep_battle.core import EMPTY, Move, Side, encode, load_level, moves_from


def midgame_board():
    """Level "one" with a few stacks on it."""
    level = load_level("one")
    board = list(level.to_board())
    board[0] = encode(16, 0)
    board[3] = encode(16, 1)
    board[8] = encode(16, 1)
    board[14] = encode(9, 0)
    return tuple(board), level.width, level.height


def test_split_amounts():
    """Test candidate amounts are one, half and all but one."""
    assert split_amounts(15) == [1, 8, 15]
    assert split_amounts(3) == [1, 2, 3]
    assert split_amounts(2) == [1, 2]
    assert split_amounts(1) == [1]


def test_depth_must_be_positive():
    """Test invalid depth is rejected."""
    with pytest.raises(ValueError):
        SearchEngine(depth=0)


def test_claims_start_tile():
    """Test the engine places a full stack on an open start tile."""
    engine = SearchEngine(depth=6)
    decision = engine.simulate((1,), 1, 1, selecting_start=True, start_tiles=(0,))

    assert decision.moved
    assert decision.placed == 0
    assert decision.board == (encode(16, Side.AI),)
    assert decision.start_tiles == ()


def test_start_tile_comes_from_open_set():
    """Test claimed and non-start tiles are never chosen."""
    level = load_level("one")
    board = list(level.to_board())
    starts = level.start_indices()
    board[starts[0]] = encode(16, 0)
    open_tiles = starts[1:]

    engine = SearchEngine(depth=2)
    decision = engine.simulate(tuple(board), level.width, level.height, True, open_tiles)

    assert decision.placed in open_tiles
    assert decision.placed not in decision.start_tiles
    assert len(decision.start_tiles) == len(open_tiles) - 1


def test_no_open_start_tile():
    """Test nothing happens when every start tile is taken."""
    engine = SearchEngine()
    board = (encode(16, 0),)
    decision = engine.simulate(board, 1, 1, selecting_start=True, start_tiles=())

    assert not decision.moved
    assert decision.board == board


def test_no_legal_move():
    """Test an immobile side returns the board unchanged."""
    engine = SearchEngine()
    board = (encode(1, 1), 1, encode(5, 0))
    decision = engine.simulate(board, 3, 1, selecting_start=False)

    assert not decision.moved
    assert decision.board == board
    assert engine.choose_move(board, 3, 1) is None


def test_move_is_legal():
    """Test the chosen move is a legal split of an AI stack."""
    board, width, height = midgame_board()
    engine = SearchEngine(depth=3)
    decision = engine.simulate(board, width, height, selecting_start=False)

    assert decision.moved
    move = decision.move
    assert board[move.from_index] > EMPTY
    assert move.to_index in moves_from(board, width, move.from_index)
    assert 1 <= decision.amount <= move.max_stack
    assert decision.board[move.to_index] == encode(decision.amount, Side.AI)
    assert engine.nodes > 0


def test_search_is_deterministic():
    """Test identical inputs give identical decisions."""
    board, width, height = midgame_board()

    first = SearchEngine(depth=3).simulate(board, width, height, False)
    second = SearchEngine(depth=3).simulate(board, width, height, False)
    engine = SearchEngine(depth=3)
    third = engine.simulate(board, width, height, False)
    fourth = engine.simulate(board, width, height, False)

    assert first == second == third == fourth


def test_input_board_untouched():
    """Test the caller's board is not modified."""
    board, width, height = midgame_board()
    caller_board = list(board)
    SearchEngine(depth=2).simulate(caller_board, width, height, False)
    assert caller_board == list(board)


def test_finds_winning_block():
    """Test the engine walls in the human stack when that ends the game."""
    # [empty, empty, AI x3, empty, human x2]
    board = (1, 1, encode(3, 1), 1, encode(2, 0))
    engine = SearchEngine(depth=2)

    move, amount, score = engine.choose_move(board, 5, 1)

    assert move == Move(from_index=2, to_index=3, max_stack=2)
    # Moving both spare sheep leaves neither side a move, AI wins 2 tiles to 1
    assert amount == 2
    assert score == WIN_SCORE + 1


def test_evaluation_perspective():
    """Test scores flip sign with the side."""
    board = (encode(3, 0), 1, 1, encode(1, 1), encode(1, 1))
    assert evaluate(board, 5, Side.AI) == -evaluate(board, 5, Side.HUMAN)

    # Two AI tiles to one, and the human's single slide is the only mobility
    board = (encode(2, 0), 1, encode(1, 1), encode(1, 1))
    assert evaluate(board, 4, Side.AI) == TILE_WEIGHT - 1


def test_terminal_score():
    """Test finished games outweigh any heuristic score."""
    board = (encode(2, 0), encode(1, 1), encode(1, 1))
    assert terminal_score(board, Side.AI) == WIN_SCORE + 1
    assert terminal_score(board, Side.HUMAN) == -WIN_SCORE - 1
    assert terminal_score((encode(2, 0), encode(1, 1)), Side.AI) == 0


def test_engine_can_play_human_side():
    """Test the engine works for side 0."""
    board = (encode(4, 0), 1, 1)
    engine = SearchEngine(depth=2, side=Side.HUMAN)
    decision = engine.simulate(board, 3, 1, selecting_start=False)

    assert decision.moved
    assert decision.move.from_index == 0
    assert decision.move.to_index == 2


def test_equal_scores_keep_first_move():
    """Test ties go to the first move in generation order."""
    # [empty, empty, AI x3, empty, empty, missing, human x1]
    board = (1, 1, encode(3, 1), 1, 1, 0, encode(1, 0))
    engine = SearchEngine(depth=2)

    move, amount, score = engine.choose_move(board, 7, 1)

    # Moving one sheep east (to 4) or west (to 0) scores the same; east is generated first
    assert move == Move(from_index=2, to_index=4, max_stack=2)
    assert amount == 1
    assert score == TILE_WEIGHT + 2
