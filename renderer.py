"""Draw a game session into an OpenCV image."""
from __future__ import annotations

from typing import Optional, Tuple

import cv2
import numpy as np
from matplotlib import colormaps

from board import BOX, SIZE, Cell
from game import CellView, GameSession, GameState

# Soft-blue palette for player-entered digits, converted to BGR for OpenCV.
_DIGIT_COLORS = (colormaps["Blues"](np.linspace(0.55, 0.95, SIZE + 1))[:, :3] * 255).astype("uint8")[:, ::-1]

Color = Tuple[int, int, int]

BACKGROUND: Color = (255, 255, 255)
STATUS_BACKGROUND: Color = (245, 240, 236)
GUIDE: Color = (246, 236, 226)
SAME_NUMBER: Color = (230, 205, 180)
SELECTED: Color = (215, 175, 140)
ERROR_BACKGROUND: Color = (222, 222, 255)
FIXED_TEXT: Color = (45, 45, 45)
ERROR_TEXT: Color = (40, 40, 210)
NOTE_TEXT: Color = (120, 120, 120)
THIN_LINE: Color = (200, 200, 200)
THICK_LINE: Color = (60, 60, 60)
STATUS_TEXT: Color = (70, 70, 70)
WIN_TEXT: Color = (60, 150, 40)

FONT = cv2.FONT_HERSHEY_SIMPLEX


def format_elapsed(seconds: int) -> str:
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"


def _draw_centered(
    canvas: np.ndarray,
    text: str,
    center: Tuple[float, float],
    scale: float,
    color: Color,
    thickness: int,
) -> None:
    text_size, _ = cv2.getTextSize(text, FONT, scale, thickness)
    text_x = int(center[0] - text_size[0] / 2)
    text_y = int(center[1] + text_size[1] / 2)
    cv2.putText(canvas, text, (text_x, text_y), FONT, scale, color, thickness, cv2.LINE_AA)


class BoardRenderer:
    def __init__(self, cell_size: int = 64, status_height: int = 56) -> None:
        self.cell_size = cell_size
        self.status_height = status_height

    @property
    def board_size(self) -> int:
        return self.cell_size * SIZE

    @property
    def shape(self) -> Tuple[int, int]:
        return self.status_height + self.board_size, self.board_size

    def cell_origin(self, row: int, col: int) -> Tuple[int, int]:
        """Top-left pixel (x, y) of a cell."""
        return col * self.cell_size, self.status_height + row * self.cell_size

    def cell_at(self, x: float, y: float) -> Optional[Cell]:
        """Map canvas pixels back to a cell address, or None outside the board."""
        board_y = y - self.status_height
        if x < 0 or board_y < 0:
            return None
        row = int(board_y // self.cell_size)
        col = int(x // self.cell_size)
        if row >= SIZE or col >= SIZE:
            return None
        return row, col

    def render(self, session: GameSession) -> np.ndarray:
        height, width = self.shape
        canvas = np.full((height, width, 3), BACKGROUND, dtype="uint8")
        selected = session.selected
        selected_value = session.player[selected[0]][selected[1]] if selected else 0

        for view in session.board_view():
            self._draw_cell(canvas, view, selected, selected_value)
        self._draw_grid(canvas)
        self._draw_status(canvas, session)
        if session.is_game_over:
            self._draw_banner(canvas, session)
        return canvas

    def _cell_background(self, view: CellView, selected: Optional[Cell], selected_value: int) -> Color:
        if view.is_error:
            return ERROR_BACKGROUND
        if selected is None:
            return BACKGROUND
        row, col = selected
        if (view.row, view.col) == selected:
            return SELECTED
        if selected_value and view.value == selected_value:
            return SAME_NUMBER
        same_box = view.row // BOX == row // BOX and view.col // BOX == col // BOX
        if view.row == row or view.col == col or same_box:
            return GUIDE
        return BACKGROUND

    def _draw_cell(self, canvas: np.ndarray, view: CellView, selected: Optional[Cell], selected_value: int) -> None:
        x, y = self.cell_origin(view.row, view.col)
        size = self.cell_size
        background = self._cell_background(view, selected, selected_value)
        if background != BACKGROUND:
            cv2.rectangle(canvas, (x, y), (x + size - 1, y + size - 1), background, -1)

        center = (x + size / 2, y + size / 2)
        scale = size / 64.0
        if view.value:
            if view.is_error:
                color = ERROR_TEXT
            elif view.is_fixed:
                color = FIXED_TEXT
            else:
                color = tuple(int(channel) for channel in _DIGIT_COLORS[view.value])
            _draw_centered(canvas, str(view.value), center, 1.1 * scale, color, 2)
            return

        third = size / BOX
        for digit in sorted(view.notes):
            note_row, note_col = divmod(digit - 1, BOX)
            note_center = (x + (note_col + 0.5) * third, y + (note_row + 0.5) * third)
            _draw_centered(canvas, str(digit), note_center, 0.4 * scale, NOTE_TEXT, 1)

    def _draw_grid(self, canvas: np.ndarray) -> None:
        top = self.status_height
        bottom = top + self.board_size - 1
        right = self.board_size - 1
        for index in range(SIZE + 1):
            offset = min(index * self.cell_size, self.board_size - 1)
            thick = index % BOX == 0
            color = THICK_LINE if thick else THIN_LINE
            width = 2 if thick else 1
            cv2.line(canvas, (offset, top), (offset, bottom), color, width)
            cv2.line(canvas, (0, top + offset), (right, top + offset), color, width)

    def _draw_status(self, canvas: np.ndarray, session: GameSession) -> None:
        width = self.board_size
        cv2.rectangle(canvas, (0, 0), (width - 1, self.status_height - 1), STATUS_BACKGROUND, -1)
        fields = (
            session.difficulty.value.capitalize(),
            f"Mistakes: {session.mistakes}/{session.max_mistakes}",
            f"Hint ({session.hints_remaining})",
            f"Notes: {'ON' if session.notes_mode else 'OFF'}",
            format_elapsed(session.elapsed_seconds),
        )
        slot = width / len(fields)
        for index, text in enumerate(fields):
            _draw_centered(canvas, text, ((index + 0.5) * slot, self.status_height / 2), 0.45, STATUS_TEXT, 1)

    def _draw_banner(self, canvas: np.ndarray, session: GameSession) -> None:
        top = self.status_height + self.board_size // 2 - self.cell_size
        bottom = top + 2 * self.cell_size
        overlay = canvas.copy()
        cv2.rectangle(overlay, (0, top), (self.board_size - 1, bottom), (255, 255, 255), -1)
        cv2.addWeighted(overlay, 0.85, canvas, 0.15, 0, dst=canvas)
        if session.state is GameState.WON:
            title, color = "Solved!", WIN_TEXT
            message = f"Finished in {format_elapsed(session.elapsed_seconds)}"
        else:
            title, color = "Game Over!", ERROR_TEXT
            message = "Too many mistakes"
        middle = self.board_size / 2
        _draw_centered(canvas, title, (middle, top + self.cell_size * 0.6), 1.2, color, 2)
        _draw_centered(canvas, f"{message} - press R to restart", (middle, top + self.cell_size * 1.4), 0.55, STATUS_TEXT, 1)
