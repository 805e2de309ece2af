"""Difficulty tiers and session limits."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping

from board import SIZE


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, name: str) -> "Difficulty":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(f"Unknown difficulty {name!r} (expected one of: {choices})") from None


# Cells cleared from the solution, i.e. 81 minus the clues given.
DEFAULT_REMOVALS: Dict[Difficulty, int] = {
    Difficulty.EASY: 35,
    Difficulty.MEDIUM: 45,
    Difficulty.HARD: 55,
}

MAX_MISTAKES = 3
INITIAL_HINTS = 3
ERROR_DISPLAY_SECONDS = 1.0
TICK_SECONDS = 1.0
MAX_GENERATION_NODES = 200_000


@dataclass
class GameConfig:
    removals: Mapping[Difficulty, int] = field(default_factory=lambda: dict(DEFAULT_REMOVALS))
    max_mistakes: int = MAX_MISTAKES
    initial_hints: int = INITIAL_HINTS
    error_display_seconds: float = ERROR_DISPLAY_SECONDS
    tick_seconds: float = TICK_SECONDS
    max_generation_nodes: int = MAX_GENERATION_NODES

    def __post_init__(self) -> None:
        for level in Difficulty:
            if level not in self.removals:
                raise ValueError(f"No removal count configured for {level.value}")
        for level, count in self.removals.items():
            if not 0 <= count <= SIZE * SIZE:
                raise ValueError(f"Removal count for {Difficulty(level).value} must be within 0..{SIZE * SIZE}, got {count}")
        if self.max_mistakes < 1:
            raise ValueError("max_mistakes must be at least 1")
        if self.initial_hints < 0:
            raise ValueError("initial_hints cannot be negative")
        if self.error_display_seconds < 0 or self.tick_seconds <= 0:
            raise ValueError("Timer intervals must be positive")
        if self.max_generation_nodes < SIZE * SIZE:
            raise ValueError("max_generation_nodes is too small to fill a grid")

    def cells_to_remove(self, difficulty: Difficulty) -> int:
        return self.removals[difficulty]
