# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so the top-level modules import without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from game import GameListener, GameSession  # noqa: E402
from scheduler import Scheduler  # noqa: E402


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.cells = []
        self.stats = []
        self.ticks = []
        self.endings = []

    def on_cells_changed(self, cells):
        self.cells.append(cells)

    def on_stats_changed(self, mistakes, max_mistakes, hints_remaining):
        self.stats.append((mistakes, max_mistakes, hints_remaining))

    def on_timer_tick(self, elapsed_seconds):
        self.ticks.append(elapsed_seconds)

    def on_game_ended(self, won, elapsed_seconds):
        self.endings.append((won, elapsed_seconds))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock=clock)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def session(scheduler, rng, listener):
    return GameSession(listener=listener, scheduler=scheduler, rng=rng)


@pytest.fixture
def advance(clock, scheduler):
    """Move the fake clock forward and fire what became due."""

    def _advance(seconds):
        clock.now += seconds
        return scheduler.run_pending()

    return _advance
