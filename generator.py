"""Randomized backtracking generator for complete Sudoku grids."""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from board import SIZE, Grid, copy_grid, empty_grid, is_valid_placement
from config import MAX_GENERATION_NODES

logger = logging.getLogger(__name__)

Frame = Tuple[int, List[int]]


class GenerationError(RuntimeError):
    """The search could not fill the grid; never expected for an empty 9x9 board."""


class SudokuGenerator:
    """Depth-first search with an explicit stack and a shuffled candidate order per cell."""

    def __init__(self, rng: Optional[random.Random] = None, max_nodes: Optional[int] = MAX_GENERATION_NODES) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.max_nodes = max_nodes
        self.last_status: str = "idle"
        self.last_nodes = 0

    def _reset_state(self) -> None:
        self.last_status = "idle"
        self.last_nodes = 0

    def _candidates(self) -> List[int]:
        digits = list(range(1, SIZE + 1))
        self.rng.shuffle(digits)
        return digits

    def generate(self) -> Grid:
        self._reset_state()
        board = empty_grid()
        total = SIZE * SIZE
        # Each frame holds a row-major position and the digits still untried there.
        stack: List[Frame] = [(0, self._candidates())]
        nodes = 0

        while stack:
            position, remaining = stack[-1]
            row, col = divmod(position, SIZE)
            board[row][col] = 0
            placed = False
            while remaining:
                digit = remaining.pop()
                if not is_valid_placement(board, row, col, digit):
                    continue
                if self.max_nodes is not None and nodes >= self.max_nodes:
                    self.last_status = "cutoff"
                    self.last_nodes = nodes
                    raise GenerationError(f"Node limit of {self.max_nodes} reached before the grid was filled")
                board[row][col] = digit
                nodes += 1
                placed = True
                break
            if not placed:
                stack.pop()
                continue
            if position + 1 == total:
                self.last_status = "generated"
                self.last_nodes = nodes
                logger.debug("Generated full grid after %d placements", nodes)
                return copy_grid(board)
            stack.append((position + 1, self._candidates()))

        self.last_status = "exhausted"
        self.last_nodes = nodes
        raise GenerationError("Backtracking exhausted every candidate at the root")
