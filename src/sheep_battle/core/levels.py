"""
Level catalogue.

Each level is a rectangular grid given as rows (y) of cells (x). Rows may be
shorter than the widest row; missing cells on the right are padded with 0.

Cell values in the raw data:
- 0 or -1: no tile at this position
- anything else: an existing tile, empty at game start

Start tiles are (x, y) coordinates where sheep may be placed during the
start phase.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .board import EMPTY, MISSING, Board, Coordinate, coordinate_to_index

logger = logging.getLogger(__name__)


class UnknownLevelError(KeyError):
    """Raised when a level key is not in the catalogue."""


@dataclass(frozen=True)
class Level:
    """Normalized, immutable level template."""

    key: str
    name: str
    rows: Tuple[Tuple[int, ...], ...]  # Normalized to 0/1, padded
    start_tiles: Tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        """Validate level invariants."""
        if not self.rows or not self.rows[0]:
            raise ValueError(f"Level {self.key!r} has an empty board")
        widths = {len(row) for row in self.rows}
        if len(widths) != 1:
            raise ValueError(f"Level {self.key!r} rows are not padded to one width")
        if not self.start_tiles:
            raise ValueError(f"Level {self.key!r} has no start tiles")
        seen = set()
        for x, y in self.start_tiles:
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise ValueError(f"Start tile ({x}, {y}) outside level {self.key!r}")
            if self.rows[y][x] != EMPTY:
                raise ValueError(f"Start tile ({x}, {y}) is not a tile in level {self.key!r}")
            if (x, y) in seen:
                raise ValueError(f"Duplicate start tile ({x}, {y}) in level {self.key!r}")
            seen.add((x, y))

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def to_board(self) -> Board:
        """Flatten the rows into a fresh board tuple."""
        return tuple(value for row in self.rows for value in row)

    def start_indices(self) -> Tuple[int, ...]:
        """Start tiles as board indices, in catalogue order."""
        return tuple(coordinate_to_index(x, y, self.width) for x, y in self.start_tiles)


def normalize_rows(raw_rows: Sequence[Sequence[int]]) -> Tuple[Tuple[int, ...], ...]:
    """
    Pad rows to the widest row and map raw cell values to MISSING/EMPTY.

    Args:
        raw_rows: Rows of raw level data

    Returns:
        Rectangular tuple of rows holding only 0 and 1
    """
    width = max((len(row) for row in raw_rows), default=0)
    rows = []
    for row in raw_rows:
        cells = [MISSING if value in (0, -1) else EMPTY for value in row]
        cells.extend([MISSING] * (width - len(row)))
        rows.append(tuple(cells))
    return tuple(rows)


# Raw level data. Kept as plain literals, never mutated.
LEVEL_DATA: Dict[str, dict] = {
    "one": {
        "name": "One",
        "board": [
            [1, 1, 1, 1],
            [1, 1, -1, 1],
            [1, 1, 1, 1],
            [1, 1, 1, -1],
            [0, 1, 1, -1],
            [0, 0, 0, 1],
        ],
        "start_tiles": [
            (0, 0), (1, 0), (2, 0), (3, 0), (0, 1), (0, 2), (0, 3),
            (1, 4), (2, 4), (3, 5), (2, 3), (2, 2), (3, 2), (3, 1),
        ],
    },
    "two": {
        "name": "Two",
        "board": [[1]],
        "start_tiles": [(0, 0)],
    },
    "test": {
        "name": "Test level",
        "board": [
            [-1, 1, 1, 1, -1, -1, 1, -1],
            [1, 1, 1, -1, 1, -1, 1, -1],
            [0, 1, -1, -1, -1, 1, 1, -1],
            [0, 1, 1, 1, 1, -1, 1, -1],
            [0, 0, 0, 1, 1, 1, 1, 1],
            [0, 0, 0, 1, 1, 1, 1],
            [0, 0, 0, 1, 1],
            [0, 0, 0, 0, 1],
        ],
        "start_tiles": [
            (0, 1), (1, 0), (1, 1), (1, 2), (1, 3), (2, 0), (2, 3), (3, 0),
            (3, 4), (3, 5), (3, 6), (4, 1), (4, 5), (4, 6), (4, 7), (5, 2),
            (5, 5), (6, 0), (6, 1), (6, 2), (6, 3), (6, 4), (6, 5), (7, 4),
        ],
    },
}


def load_level(key: str) -> Level:
    """
    Build a normalized Level from the catalogue.

    Args:
        key: Level identifier, e.g. "one"

    Returns:
        Fresh Level; the catalogue itself is left untouched

    Raises:
        UnknownLevelError: if key is not in the catalogue
    """
    try:
        data = LEVEL_DATA[key]
    except KeyError:
        raise UnknownLevelError(
            f"Unknown level {key!r} (available: {', '.join(sorted(LEVEL_DATA))})"
        ) from None

    level = Level(
        key=key,
        name=data["name"],
        rows=normalize_rows(data["board"]),
        start_tiles=tuple((int(x), int(y)) for x, y in data["start_tiles"]),
    )
    logger.debug(
        f"Loaded level {key!r}: {level.width}x{level.height}, "
        f"{len(level.start_tiles)} start tiles"
    )
    return level


def list_levels() -> List[Tuple[str, str]]:
    """(key, name) pairs in catalogue order."""
    return [(key, data["name"]) for key, data in LEVEL_DATA.items()]
