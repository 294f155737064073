"""
Radar grid parser.

Input is a pipe-delimited string of 3-character cells, e.g. ``"a1X|b2$c3#|"``: a
column letter a-h followed by a row digit 1-8 and a single value character. The
legacy layout with the value before the row digit (``"aX1"``) is also accepted.
Row 1 is drawn at the bottom, so row r is stored at grid index 8 - r.
"""
import logging
from typing import List, Optional, Tuple

log = logging.getLogger(__name__)

GRID_SIZE = 8
EMPTY = "0"
CELL_WIDTH = 3
DIGITS = "0123456789"


def _row_of(char: str) -> Optional[int]:
    # ASCII only; str.isdigit() also accepts superscripts that int() rejects
    if char in DIGITS:
        return int(char) - 1
    return None


def parse_cell(cell: str) -> Optional[Tuple[int, int, str]]:
    """Return (row, column, value) for a cell, or None when it is not a valid cell."""
    if len(cell) != CELL_WIDTH:
        return None
    column = ord(cell[0].lower()) - ord("a")
    row, value = _row_of(cell[2]), cell[1]
    if row is None:
        row, value = _row_of(cell[1]), cell[2]
    if row is None or not (0 <= column < GRID_SIZE and 0 <= row < GRID_SIZE):
        return None
    return row, column, value


def parse_radar(coordinates: str) -> List[List[str]]:
    grid = [[EMPTY] * GRID_SIZE for _ in range(GRID_SIZE)]
    for chunk in (c for c in coordinates.split("|") if c):
        for i in range(0, len(chunk), CELL_WIDTH):
            cell = chunk[i:i + CELL_WIDTH]
            parsed = parse_cell(cell)
            if parsed is None:
                continue
            row, column, value = parsed
            log.debug(f"Processing cell: {cell}, Column: {column}, Row: {row}, Value: {value}")
            grid[GRID_SIZE - 1 - row][column] = value
    return grid


def format_grid(grid: List[List[str]]) -> str:
    line = "-" * (GRID_SIZE * 2)
    return "\n".join([line] + [" ".join(row) for row in grid] + [line])
