"""Tests for puzzle carving."""
import random

import pytest

from board import count_empty
from carver import PuzzleCarver, carve_puzzle
from config import DEFAULT_REMOVALS, Difficulty
from generator import SudokuGenerator


@pytest.fixture
def solution():
    return SudokuGenerator(random.Random(11)).generate()


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_carved_puzzle_matches_tier(solution, difficulty):
    carver = PuzzleCarver(rng=random.Random(2))
    puzzle = carver.carve(solution, difficulty)
    assert count_empty(puzzle) == DEFAULT_REMOVALS[difficulty]
    for row in range(9):
        for col in range(9):
            if puzzle[row][col]:
                assert puzzle[row][col] == solution[row][col]


def test_easy_leaves_46_clues(solution):
    puzzle = PuzzleCarver(rng=random.Random(8)).carve(solution, Difficulty.EASY)
    clues = sum(1 for row in puzzle for value in row if value)
    assert clues == 46


def test_solution_is_not_mutated(solution):
    before = [row[:] for row in solution]
    carve_puzzle(solution, 55, random.Random(4))
    assert solution == before


def test_edge_counts(solution):
    assert carve_puzzle(solution, 0, random.Random(1)) == solution
    assert count_empty(carve_puzzle(solution, 81, random.Random(1))) == 81


@pytest.mark.parametrize("count", [-1, 82])
def test_out_of_range_count_raises(solution, count):
    with pytest.raises(ValueError):
        carve_puzzle(solution, count, random.Random(1))


def test_custom_removal_table(solution):
    carver = PuzzleCarver({Difficulty.EASY: 10, Difficulty.MEDIUM: 20, Difficulty.HARD: 30}, random.Random(6))
    assert count_empty(carver.carve(solution, Difficulty.MEDIUM)) == 20


def test_cleared_cells_spread_over_the_board(solution):
    rng = random.Random(21)
    hits = [[0] * 9 for _ in range(9)]
    for _ in range(200):
        puzzle = carve_puzzle(solution, 45, rng)
        for row in range(9):
            for col in range(9):
                if puzzle[row][col] == 0:
                    hits[row][col] += 1
    # Every cell should be cleared sometimes and kept sometimes.
    assert all(0 < count < 200 for row in hits for count in row)
