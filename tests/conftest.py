# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

import numpy as np
import pytest

from tetris_arcade.game.core.piece_rules import SequencePieceRule
from tetris_arcade.game.core.pieceset import PieceSet, classic7


@pytest.fixture
def pieces() -> PieceSet:
    return classic7()


@pytest.fixture
def seq_rule() -> Callable[..., SequencePieceRule]:
    """Factory for a reset, deterministic piece rule over the given kinds."""

    def _make(*kinds: str) -> SequencePieceRule:
        rule = SequencePieceRule(sequence=tuple(kinds))
        rule.reset(rng=np.random.default_rng(0), kinds=classic7().kinds())
        return rule

    return _make


@pytest.fixture
def ticking_clock() -> Callable[[], datetime]:
    """Clock returning strictly increasing timestamps, one minute apart."""
    start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def _gen() -> Iterator[datetime]:
        i = 0
        while True:
            yield start + timedelta(minutes=i)
            i += 1

    it = _gen()
    return lambda: next(it)
