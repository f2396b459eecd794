# tests/test_rules.py
from __future__ import annotations

import pytest

from tetris_arcade.game.core.rules import ScoreConfig, calculate_score, drop_interval_ms, next_level


@pytest.mark.parametrize(
    "lines,level,expected",
    [
        (1, 3, 300),
        (4, 1, 800),
        (0, 5, 0),
        (2, 1, 300),
        (3, 2, 1000),
    ],
)
def test_calculate_score(lines: int, level: int, expected: int) -> None:
    assert calculate_score(lines, level) == expected


def test_custom_score_table() -> None:
    cfg = ScoreConfig(single=40, double=100, triple=300, tetris=1200)
    assert calculate_score(4, 2, cfg) == 2400
    assert calculate_score(0, 9, cfg) == 0


def test_level_advances_only_on_a_clearing_lock() -> None:
    assert next_level(1, 10, 1) == 2
    assert next_level(1, 9, 1) == 1
    assert next_level(1, 12, 0) == 1
    assert next_level(2, 19, 4) == 2
    assert next_level(2, 20, 2) == 3


@pytest.mark.parametrize("level,ms", [(1, 1000), (2, 900), (5, 600), (10, 100), (15, 100)])
def test_drop_interval(level: int, ms: int) -> None:
    assert drop_interval_ms(level) == ms
