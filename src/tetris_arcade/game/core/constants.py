# src/tetris_arcade/game/core/constants.py
from __future__ import annotations

# Board geometry
BOARD_WIDTH: int = 10
BOARD_HEIGHT: int = 20

# Board / cell encoding
EMPTY_CELL: int = 0
FILLED_CELL: int = 1

# Classic tetromino set size
CLASSIC_NUM_PIECES: int = 7

# Base points per lock, indexed by lines cleared (0..4); multiplied by level
LINE_CLEAR_BASE_SCORES: tuple[int, ...] = (0, 100, 300, 500, 800)

LINES_PER_LEVEL: int = 10

# Gravity timer
BASE_DROP_INTERVAL_MS: int = 1000
DROP_INTERVAL_STEP_MS: int = 100
MIN_DROP_INTERVAL_MS: int = 100
