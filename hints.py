"""Hint cell selection."""
from __future__ import annotations

import random
from typing import Optional, Sequence

from board import Cell, empty_cells


def pick_hint_cell(grid: Sequence[Sequence[int]], rng: random.Random) -> Optional[Cell]:
    """Uniformly pick one empty cell of the player grid, or None when the grid is full."""
    candidates = empty_cells(grid)
    if not candidates:
        return None
    return rng.choice(candidates)
