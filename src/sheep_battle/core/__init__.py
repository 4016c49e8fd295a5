"""Core board representation, levels and rules."""

from .board import (
    EMPTY,
    MAX_STACK,
    MISSING,
    SEED_STACK,
    TIE,
    Side,
    Tile,
    TileKind,
    coordinate_to_index,
    count_tiles,
    decode,
    decode_tile,
    encode,
    index_to_coordinate,
    simplify_board,
    to_board_value,
)
from .game_state import GameInfo, GameState, GameStatic, initialize_game
from .hash import init_zobrist_table, zobrist_hash
from .levels import Level, UnknownLevelError, list_levels, load_level
from .rules import (
    IllegalMoveError,
    Move,
    all_moves_for_side,
    get_game_result,
    get_winner,
    has_moves,
    is_terminal,
    move_stack,
    moves_from,
    place_start,
)

__all__ = [
    "EMPTY",
    "MAX_STACK",
    "MISSING",
    "SEED_STACK",
    "TIE",
    "Side",
    "Tile",
    "TileKind",
    "coordinate_to_index",
    "count_tiles",
    "decode",
    "decode_tile",
    "encode",
    "index_to_coordinate",
    "simplify_board",
    "to_board_value",
    "GameInfo",
    "GameState",
    "GameStatic",
    "initialize_game",
    "init_zobrist_table",
    "zobrist_hash",
    "Level",
    "UnknownLevelError",
    "list_levels",
    "load_level",
    "IllegalMoveError",
    "Move",
    "all_moves_for_side",
    "get_game_result",
    "get_winner",
    "has_moves",
    "is_terminal",
    "move_stack",
    "moves_from",
    "place_start",
]
