"""
Zobrist hashing for fast board hashing and transposition table lookups.

Zobrist hashing uses pre-generated random numbers to create unique hashes
for board positions. The table is seeded, so hashes are reproducible.
"""

import random
from typing import Dict, Sequence, Tuple

from .board import EMPTY, MAX_STACK, MISSING

# Largest value a tile can hold: a full stack owned by side 1
MAX_VALUE = MAX_STACK * 2 + 1

# Global Zobrist table, grown on demand as larger boards are hashed
_zobrist_table: Dict[Tuple[int, int], int] = {}
_zobrist_side: Tuple[int, int] = (0, 0)
_table_size = 0
_seed = 42


def init_zobrist_table(num_tiles: int, seed: int = 42) -> None:
    """
    Initialize Zobrist hash table with random 64-bit numbers.

    Args:
        num_tiles: Number of cells on the board
        seed: Random seed for reproducibility
    """
    global _zobrist_table, _zobrist_side, _table_size, _seed

    rng = random.Random(seed)
    _zobrist_table = {}

    # Random numbers for side to move come first so they don't depend on board size
    _zobrist_side = (rng.getrandbits(64), rng.getrandbits(64))

    # One random number for each (cell, occupied value) pair
    for index in range(num_tiles):
        for value in range(EMPTY + 1, MAX_VALUE + 1):
            _zobrist_table[(index, value)] = rng.getrandbits(64)

    _table_size = num_tiles
    _seed = seed


def zobrist_hash(board: Sequence[int], side_to_move: int) -> int:
    """
    Compute Zobrist hash for a board and side to move.

    Args:
        board: Game board
        side_to_move: Side whose turn it is at this node

    Returns:
        64-bit hash value
    """
    if len(board) > _table_size:
        # Auto-initialize (or grow) for this board size
        init_zobrist_table(len(board), _seed)

    h = 0

    # Cells without sheep contribute nothing
    for index, value in enumerate(board):
        if value not in (MISSING, EMPTY):
            h ^= _zobrist_table[(index, value)]

    h ^= _zobrist_side[side_to_move]

    return h
