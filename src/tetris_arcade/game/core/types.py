# src/tetris_arcade/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

import numpy as np


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    SOFT_DROP = auto()
    HARD_DROP = auto()
    ROT_CW = auto()
    ROT_CCW = auto()
    PAUSE = auto()


class Phase(Enum):
    SPAWNING = auto()
    FALLING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def moved(self, *, dx: int = 0, dy: int = 0) -> "Position":
        return Position(x=self.x + int(dx), y=self.y + int(dy))


@dataclass(frozen=True, eq=False)
class Tetromino:
    """
    One piece instance in a given rotation state.

    shape is a read-only 0/1 uint8 matrix; rotating yields a new Tetromino.
    """

    kind: str
    shape: np.ndarray
    color: str

    def cells(self) -> list[tuple[int, int]]:
        """Occupied (dx, dy) offsets relative to the anchor, row-major."""
        ys, xs = np.nonzero(self.shape)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]


@dataclass(frozen=True, eq=False)
class ActivePiece:
    piece: Tetromino
    pos: Position
