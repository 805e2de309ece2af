"""Game session: player grid, notes, mistakes, hints and win/loss."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Union

from board import SIZE, Cell, Grid, copy_grid, empty_cells, empty_grid, grids_equal, in_bounds
from carver import PuzzleCarver
from config import Difficulty, GameConfig
from generator import SudokuGenerator
from hints import pick_hint_cell
from scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class CellView:
    row: int
    col: int
    value: int
    notes: FrozenSet[int]
    is_error: bool
    is_fixed: bool


class GameListener:
    """Notification surface for a front end; every hook defaults to a no-op."""

    def on_cells_changed(self, cells: List[CellView]) -> None:
        pass

    def on_stats_changed(self, mistakes: int, max_mistakes: int, hints_remaining: int) -> None:
        pass

    def on_timer_tick(self, elapsed_seconds: int) -> None:
        pass

    def on_game_ended(self, won: bool, elapsed_seconds: int) -> None:
        pass


class GameSession:
    """One player's game.

    The solution and player grids plus the notes are the only model; every
    ``CellView`` is derived from them. Invalid input (no selection, fixed
    cell, finished game, no hints left) is ignored and the mutator returns a
    falsy value instead of raising.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listener: Optional[GameListener] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        generator: Optional[SudokuGenerator] = None,
        carver: Optional[PuzzleCarver] = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.listener = listener if listener is not None else GameListener()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.rng = rng if rng is not None else random.Random()
        self.generator = generator or SudokuGenerator(self.rng, self.config.max_generation_nodes)
        self.carver = carver or PuzzleCarver(self.config.removals, self.rng)
        self.difficulty = _coerce_difficulty(difficulty)

        self.solution: Grid = empty_grid()
        self.puzzle: Grid = empty_grid()
        self.player: Grid = empty_grid()
        self.notes: Dict[Cell, Set[int]] = {}
        self.selected: Optional[Cell] = None
        self.notes_mode = False
        self.mistakes = 0
        self.hints_remaining = self.config.initial_hints
        self.elapsed_seconds = 0
        self.state = GameState.ACTIVE

        self._errors: Dict[Cell, int] = {}
        self._reverts: Dict[Cell, TimerHandle] = {}
        self._clock: Optional[TimerHandle] = None

        self.start_new_game()

    # --- queries ---

    @property
    def is_game_over(self) -> bool:
        return self.state is not GameState.ACTIVE

    @property
    def max_mistakes(self) -> int:
        return self.config.max_mistakes

    def is_fixed(self, row: int, col: int) -> bool:
        return self.puzzle[row][col] != 0

    def cell_view(self, row: int, col: int) -> CellView:
        cell = (row, col)
        error = self._errors.get(cell)
        value = error if error is not None else self.player[row][col]
        notes = frozenset(self.notes.get(cell, ())) if value == 0 else frozenset()
        return CellView(row, col, value, notes, error is not None, self.is_fixed(row, col))

    def board_view(self) -> List[CellView]:
        return [self.cell_view(row, col) for row in range(SIZE) for col in range(SIZE)]

    # --- lifecycle ---

    def start_new_game(self, difficulty: Union[Difficulty, str, None] = None) -> None:
        if difficulty is not None:
            self.difficulty = _coerce_difficulty(difficulty)
        self._cancel_timers()
        self.state = GameState.ACTIVE
        self.mistakes = 0
        self.hints_remaining = self.config.initial_hints
        self.selected = None
        self.elapsed_seconds = 0
        self._errors.clear()

        self.solution = self.generator.generate()
        self.puzzle = self.carver.carve(self.solution, self.difficulty)
        self.player = copy_grid(self.puzzle)
        self.notes = {cell: set() for cell in empty_cells(self.puzzle)}

        self._clock = self.scheduler.call_every(self.config.tick_seconds, self._tick)
        logger.info(
            "New %s game: %d clues, %d empty cells",
            self.difficulty.value,
            SIZE * SIZE - len(self.notes),
            len(self.notes),
        )
        self.listener.on_cells_changed(self.board_view())
        self._emit_stats()
        self.listener.on_timer_tick(self.elapsed_seconds)

    # --- player input ---

    def select_cell(self, row: int, col: int) -> bool:
        if self.is_game_over or not in_bounds(row, col):
            return False
        if self.is_fixed(row, col):
            logger.debug("Ignoring selection of fixed cell (%d, %d)", row, col)
            return False
        self.selected = (row, col)
        return True

    def toggle_notes_mode(self) -> bool:
        if self.is_game_over:
            return False
        self.notes_mode = not self.notes_mode
        return True

    def submit_digit(self, digit: int) -> bool:
        if self.is_game_over or self.selected is None:
            return False
        if not 1 <= digit <= SIZE:
            logger.debug("Ignoring out-of-range digit %r", digit)
            return False
        row, col = self.selected
        if self.player[row][col] != 0:
            logger.debug("Cell (%d, %d) already holds %d", row, col, self.player[row][col])
            return False
        if self.notes_mode:
            return self._toggle_note(self.selected, digit)
        if self.solution[row][col] == digit:
            self._commit(self.selected, digit)
        else:
            self._reject(self.selected, digit)
        self._emit_stats()
        if self.mistakes >= self.config.max_mistakes and not self.is_game_over:
            self._end_game(won=False)
        return True

    def erase_selected(self) -> bool:
        if self.is_game_over or self.selected is None:
            return False
        row, col = self.selected
        if self.player[row][col] != 0:
            return False
        self._cancel_revert(self.selected)
        self._errors.pop(self.selected, None)
        self.notes[self.selected].clear()
        self._emit_cells([self.selected])
        return True

    def give_hint(self) -> Optional[Cell]:
        if self.is_game_over or self.hints_remaining <= 0:
            return None
        cell = pick_hint_cell(self.player, self.rng)
        if cell is None:
            return None
        row, col = cell
        self._commit(cell, self.solution[row][col])
        self.hints_remaining = max(0, self.hints_remaining - 1)
        logger.debug("Hint revealed (%d, %d); %d left", row, col, self.hints_remaining)
        self._emit_stats()
        return cell

    request_hint = give_hint

    # --- internals ---

    def _toggle_note(self, cell: Cell, digit: int) -> bool:
        notes = self.notes[cell]
        if digit in notes:
            notes.remove(digit)
        else:
            notes.add(digit)
        self._emit_cells([cell])
        return True

    def _commit(self, cell: Cell, value: int) -> None:
        row, col = cell
        self._cancel_revert(cell)
        self._errors.pop(cell, None)
        self.player[row][col] = value
        self.notes[cell].clear()
        self._emit_cells([cell])
        if grids_equal(self.player, self.solution):
            self._end_game(won=True)

    def _reject(self, cell: Cell, digit: int) -> None:
        self.mistakes = min(self.mistakes + 1, self.config.max_mistakes)
        self._cancel_revert(cell)
        self._errors[cell] = digit
        self._emit_cells([cell])
        logger.debug("Wrong digit %d at %s (%d/%d mistakes)", digit, cell, self.mistakes, self.config.max_mistakes)
        if self.mistakes < self.config.max_mistakes:
            self._reverts[cell] = self.scheduler.call_later(
                self.config.error_display_seconds, lambda: self._revert(cell)
            )

    def _revert(self, cell: Cell) -> None:
        self._reverts.pop(cell, None)
        row, col = cell
        # A hint or a correct digit may have filled the cell since.
        if self.player[row][col] != 0 or cell not in self._errors:
            return
        del self._errors[cell]
        self._emit_cells([cell])

    def _tick(self) -> None:
        if self.is_game_over:
            return
        self.elapsed_seconds += 1
        self.listener.on_timer_tick(self.elapsed_seconds)

    def _end_game(self, won: bool) -> None:
        self.state = GameState.WON if won else GameState.LOST
        self._cancel_timers()
        logger.info("Game %s after %d seconds", "won" if won else "lost", self.elapsed_seconds)
        self.listener.on_game_ended(won, self.elapsed_seconds)

    def _cancel_revert(self, cell: Cell) -> None:
        handle = self._reverts.pop(cell, None)
        if handle is not None:
            handle.cancel()

    def _cancel_timers(self) -> None:
        if self._clock is not None:
            self._clock.cancel()
            self._clock = None
        for handle in self._reverts.values():
            handle.cancel()
        self._reverts.clear()

    def _emit_cells(self, cells: Iterable[Cell]) -> None:
        self.listener.on_cells_changed([self.cell_view(row, col) for row, col in cells])

    def _emit_stats(self) -> None:
        self.listener.on_stats_changed(self.mistakes, self.config.max_mistakes, self.hints_remaining)


def _coerce_difficulty(value: Union[Difficulty, str]) -> Difficulty:
    if isinstance(value, Difficulty):
        return value
    return Difficulty.parse(value)
