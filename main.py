"""Play Sudoku in an OpenCV window."""
from __future__ import annotations

import argparse
import logging
import random
from typing import Dict, Optional

import cv2
import imutils
import numpy as np

from config import Difficulty, GameConfig
from game import CellView, GameListener, GameSession
from renderer import BoardRenderer, format_elapsed

logger = logging.getLogger(__name__)

WINDOW_NAME = "Zen Sudoku"
FRAME_WIDTH = 640
FRAME_DELAY_MS = 30
KEY_NONE = 0xFF
KEY_BACKSPACE = 8
KEY_ESCAPE = 27
KEY_DELETE = 127
QUIT_KEYS = (ord("q"), KEY_ESCAPE)
DIFFICULTY_KEYS: Dict[int, Difficulty] = {
    ord("e"): Difficulty.EASY,
    ord("m"): Difficulty.MEDIUM,
    ord("d"): Difficulty.HARD,
}


class RedrawListener(GameListener):
    """Marks the frame stale whenever the engine reports a change."""

    def __init__(self) -> None:
        self.dirty = True

    def on_cells_changed(self, cells: list[CellView]) -> None:
        self.dirty = True

    def on_stats_changed(self, mistakes: int, max_mistakes: int, hints_remaining: int) -> None:
        self.dirty = True

    def on_timer_tick(self, elapsed_seconds: int) -> None:
        self.dirty = True

    def on_game_ended(self, won: bool, elapsed_seconds: int) -> None:
        self.dirty = True
        if won:
            print(f"Solved in {format_elapsed(elapsed_seconds)}")
        else:
            print("Game over: too many mistakes")


def handle_key(session: GameSession, key: int) -> bool:
    """Dispatch one key press; return True when the view needs a redraw."""
    if key in DIFFICULTY_KEYS:
        session.start_new_game(DIFFICULTY_KEYS[key])
        return True
    if key == ord("r"):
        session.start_new_game()
        return True
    if session.is_game_over:
        return False
    if ord("1") <= key <= ord("9"):
        return session.submit_digit(key - ord("0"))
    if key in (KEY_BACKSPACE, KEY_DELETE):
        return session.erase_selected()
    if key == ord("n"):
        return session.toggle_notes_mode()
    if key == ord("h"):
        return session.request_hint() is not None
    return False


def run(
    difficulty: Difficulty,
    seed: Optional[int] = None,
    width: int = FRAME_WIDTH,
    config: Optional[GameConfig] = None,
) -> None:
    listener = RedrawListener()
    session = GameSession(
        config=config,
        listener=listener,
        rng=random.Random(seed),
        difficulty=difficulty,
    )
    renderer = BoardRenderer()
    scale = width / float(renderer.board_size)
    display: Optional[np.ndarray] = None

    def on_mouse(event: int, x: int, y: int, flags: int, param: object) -> None:
        if event != cv2.EVENT_LBUTTONDOWN:
            return
        cell = renderer.cell_at(x / scale, y / scale)
        if cell is not None and session.select_cell(*cell):
            listener.dirty = True

    cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(WINDOW_NAME, on_mouse)
    try:
        while True:
            session.scheduler.run_pending()
            if listener.dirty or display is None:
                display = imutils.resize(renderer.render(session), width=width)
                listener.dirty = False
            cv2.imshow(WINDOW_NAME, display)

            key = cv2.waitKey(FRAME_DELAY_MS) & 0xFF
            if key == KEY_NONE:
                continue
            if key in QUIT_KEYS:
                break
            if handle_key(session, key):
                listener.dirty = True
    finally:
        cv2.destroyAllWindows()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sudoku with notes, hints and a mistake limit")
    parser.add_argument(
        "--difficulty",
        type=str,
        default=Difficulty.EASY.value,
        choices=[level.value for level in Difficulty],
        help="Starting difficulty (default: easy)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible puzzles")
    parser.add_argument("--width", type=int, default=FRAME_WIDTH, help=f"Window width in pixels (default: {FRAME_WIDTH})")
    parser.add_argument("--log-level", type=str, default="warning", help="Logging level (default: warning)")
    args = parser.parse_args()
    if args.width < 200:
        parser.error("--width must be at least 200 pixels")
    if not isinstance(logging.getLevelName(args.log_level.upper()), int):
        parser.error(f"Unknown log level {args.log_level!r}")
    return args


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s game (seed=%s)", args.difficulty, args.seed)
    run(Difficulty.parse(args.difficulty), seed=args.seed, width=args.width)


if __name__ == "__main__":
    main()
