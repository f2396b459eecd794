# src/tetris_arcade/game/core/rotation.py
from __future__ import annotations

import numpy as np

from tetris_arcade.game.core.board import Board
from tetris_arcade.game.core.types import Position, Tetromino


def rotate_shape(shape: np.ndarray) -> np.ndarray:
    """
    Rotate a square occupancy matrix 90 degrees clockwise.

    new[r, c] = old[n - 1 - c, r]: column r of the input, read bottom-up,
    becomes row r of the output. Returns a fresh read-only array.
    """
    src = np.asarray(shape)
    n = src.shape[0]
    rows = [src[::-1, c] for c in range(src.shape[1])]
    out = np.array(rows, dtype=src.dtype).reshape(src.shape[1], n)
    out.setflags(write=False)
    return out


def rotated(piece: Tetromino, *, turns: int = 1) -> Tetromino:
    """
    Clockwise quarter-turns; turns=3 is one counter-clockwise turn.
    """
    shape = piece.shape
    for _ in range(int(turns) % 4):
        shape = rotate_shape(shape)
    return Tetromino(kind=piece.kind, shape=shape, color=piece.color)


def is_valid_move(board: Board, piece: Tetromino, pos: Position) -> bool:
    """
    True iff every occupied cell of `piece` at `pos` lies in [0, w) x (-inf, h)
    and does not overlap a locked cell. Rows above the top (y < 0) are free.
    """
    h, w = board.shape
    for dx, dy in piece.cells():
        x = pos.x + dx
        y = pos.y + dy
        if x < 0 or x >= w or y >= h:
            return False
        if y >= 0 and board[y, x] != 0:
            return False
    return True


def try_rotate(board: Board, piece: Tetromino, pos: Position, *, turns: int = 1) -> Tetromino:
    """
    Minimal rotation rule: rotate in place, no wall kicks.
    Returns the original piece when the rotated one does not fit.
    """
    cand = rotated(piece, turns=turns)
    if not is_valid_move(board, cand, pos):
        return piece
    return cand


def drop_distance(board: Board, piece: Tetromino, pos: Position) -> int:
    """Number of rows the piece can fall from `pos` before resting."""
    d = 0
    while is_valid_move(board, piece, pos.moved(dy=d + 1)):
        d += 1
    return d


__all__ = ["rotate_shape", "rotated", "is_valid_move", "try_rotate", "drop_distance"]
