# src/tetris_arcade/game/core/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tetris_arcade.game.core.constants import (
    BASE_DROP_INTERVAL_MS,
    DROP_INTERVAL_STEP_MS,
    LINE_CLEAR_BASE_SCORES,
    LINES_PER_LEVEL,
    MIN_DROP_INTERVAL_MS,
)


@dataclass(frozen=True)
class ScoreConfig:
    single: int = LINE_CLEAR_BASE_SCORES[1]
    double: int = LINE_CLEAR_BASE_SCORES[2]
    triple: int = LINE_CLEAR_BASE_SCORES[3]
    tetris: int = LINE_CLEAR_BASE_SCORES[4]

    def base_for(self, cleared: int) -> int:
        if cleared == 1:
            return self.single
        if cleared == 2:
            return self.double
        if cleared == 3:
            return self.triple
        if cleared >= 4:
            return self.tetris
        return 0


def calculate_score(lines_cleared: int, level: int, cfg: Optional[ScoreConfig] = None) -> int:
    """Points for one lock: base[lines_cleared] * level (0 lines -> 0)."""
    base = (cfg or ScoreConfig()).base_for(int(lines_cleared))
    return int(base) * int(level)


def next_level(level: int, total_lines: int, cleared: int) -> int:
    """
    Level rule: a lock that clears at least one line bumps the level by one
    once cumulative lines reach level * 10.
    """
    if int(cleared) > 0 and int(total_lines) >= int(level) * LINES_PER_LEVEL:
        return int(level) + 1
    return int(level)


def drop_interval_ms(level: int) -> int:
    return max(MIN_DROP_INTERVAL_MS, BASE_DROP_INTERVAL_MS - (int(level) - 1) * DROP_INTERVAL_STEP_MS)


__all__ = ["ScoreConfig", "calculate_score", "next_level", "drop_interval_ms"]
