"""Turn a solved grid into a playable puzzle by clearing random cells."""
from __future__ import annotations

import logging
import random
from typing import Mapping, Optional, Sequence

from board import SIZE, Grid, copy_grid
from config import DEFAULT_REMOVALS, Difficulty

logger = logging.getLogger(__name__)


def carve_puzzle(solution: Sequence[Sequence[int]], cells_to_remove: int, rng: random.Random) -> Grid:
    """Clear exactly ``cells_to_remove`` uniformly chosen cells of a copy of ``solution``.

    Already-cleared picks are rejected and resampled. No uniqueness or
    solvability check is made on the result.
    """
    if not 0 <= cells_to_remove <= SIZE * SIZE:
        raise ValueError(f"cells_to_remove must be within 0..{SIZE * SIZE}, got {cells_to_remove}")
    puzzle = copy_grid(solution)
    remaining = cells_to_remove
    while remaining > 0:
        row = rng.randrange(SIZE)
        col = rng.randrange(SIZE)
        if puzzle[row][col] != 0:
            puzzle[row][col] = 0
            remaining -= 1
    return puzzle


class PuzzleCarver:
    def __init__(self, removals: Optional[Mapping[Difficulty, int]] = None, rng: Optional[random.Random] = None) -> None:
        self.removals = dict(removals) if removals is not None else dict(DEFAULT_REMOVALS)
        self.rng = rng if rng is not None else random.Random()

    def carve(self, solution: Sequence[Sequence[int]], difficulty: Difficulty) -> Grid:
        count = self.removals[difficulty]
        logger.debug("Carving %d cells for %s puzzle", count, difficulty.value)
        return carve_puzzle(solution, count, self.rng)
