# src/tetris_arcade/game/core/board.py
from __future__ import annotations

from typing import Sequence

import numpy as np

from tetris_arcade.game.core.constants import BOARD_HEIGHT, BOARD_WIDTH, EMPTY_CELL, FILLED_CELL
from tetris_arcade.game.core.types import Position, Tetromino

# Boards are plain (h, w) uint8 arrays: 0=empty, 1=locked. Row 0 is the top.
Board = np.ndarray


def create_empty_board(*, height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH) -> Board:
    return np.zeros((int(height), int(width)), dtype=np.uint8)


def board_from_rows(rows: Sequence[Sequence[int]], *, height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH) -> Board:
    """
    Build a board from nested lists (e.g. a saved snapshot).

    Any non-zero cell becomes FILLED_CELL; the shape must match exactly.
    """
    arr = np.asarray(rows)
    if arr.ndim != 2 or arr.shape != (int(height), int(width)):
        raise ValueError(f"board must have shape ({height}, {width}), got {arr.shape}")
    return np.where(arr != EMPTY_CELL, FILLED_CELL, EMPTY_CELL).astype(np.uint8)


def board_to_rows(board: Board) -> list[list[int]]:
    return [[int(c) for c in row] for row in board]


def merge_piece(board: Board, piece: Tetromino, pos: Position) -> Board:
    """
    Lock `piece` at `pos` into a copy of `board`.

    Cells above the top edge (y < 0) are dropped; the input board is untouched.
    """
    out = board.copy()
    for dx, dy in piece.cells():
        x = pos.x + dx
        y = pos.y + dy
        if y >= 0:
            out[y, x] = FILLED_CELL
    return out


def clear_lines(board: Board) -> tuple[Board, int]:
    """
    Remove every full row at once and pad the top with as many empty rows.

    Returns (new_board, lines_cleared); height and row order are preserved.
    """
    full = np.all(board != EMPTY_CELL, axis=1)
    cleared = int(full.sum())
    if cleared <= 0:
        return board.copy(), 0
    kept = board[~full]
    new_rows = np.zeros((cleared, board.shape[1]), dtype=board.dtype)
    return np.vstack([new_rows, kept]), cleared


def filled_count(board: Board) -> int:
    return int(np.count_nonzero(board))


__all__ = [
    "Board",
    "create_empty_board",
    "board_from_rows",
    "board_to_rows",
    "merge_piece",
    "clear_lines",
    "filled_count",
]
