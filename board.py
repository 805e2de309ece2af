"""Grid representation and row/column/box constraint checks."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

Grid = List[List[int]]
Cell = Tuple[int, int]

SIZE = 9
BOX = 3
DIGITS = range(1, SIZE + 1)


def empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Sequence[Sequence[int]]) -> Grid:
    return [list(row) for row in grid]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def box_origin(row: int, col: int) -> Cell:
    return (row // BOX) * BOX, (col // BOX) * BOX


def is_valid_placement(grid: Sequence[Sequence[int]], row: int, col: int, digit: int) -> bool:
    """Return True if ``digit`` does not already occur in the row, column or box of (row, col).

    The cell itself is skipped, so a filled grid can be re-checked in place.
    """
    for c in range(SIZE):
        if c != col and grid[row][c] == digit:
            return False
    for r in range(SIZE):
        if r != row and grid[r][col] == digit:
            return False
    start_row, start_col = box_origin(row, col)
    for r in range(start_row, start_row + BOX):
        for c in range(start_col, start_col + BOX):
            if (r, c) != (row, col) and grid[r][c] == digit:
                return False
    return True


def empty_cells(grid: Sequence[Sequence[int]]) -> List[Cell]:
    """Row-major list of empty cell addresses."""
    return [(row, col) for row in range(SIZE) for col in range(SIZE) if grid[row][col] == 0]


def count_empty(grid: Sequence[Sequence[int]]) -> int:
    return sum(1 for row in grid for value in row if value == 0)


def find_empty(grid: Sequence[Sequence[int]]) -> Optional[Cell]:
    for row in range(SIZE):
        for col in range(SIZE):
            if grid[row][col] == 0:
                return row, col
    return None


def grids_equal(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> bool:
    return all(a[row][col] == b[row][col] for row in range(SIZE) for col in range(SIZE))


def _unit_complete(values: Sequence[int]) -> bool:
    return sorted(values) == list(DIGITS)


def is_solved(grid: Sequence[Sequence[int]]) -> bool:
    """True when every row, column and box holds each digit 1..9 exactly once."""
    for row in range(SIZE):
        if not _unit_complete(grid[row]):
            return False
    for col in range(SIZE):
        if not _unit_complete([grid[row][col] for row in range(SIZE)]):
            return False
    for start_row in range(0, SIZE, BOX):
        for start_col in range(0, SIZE, BOX):
            box = [
                grid[r][c]
                for r in range(start_row, start_row + BOX)
                for c in range(start_col, start_col + BOX)
            ]
            if not _unit_complete(box):
                return False
    return True
