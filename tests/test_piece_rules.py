# tests/test_piece_rules.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_arcade.game.core.piece_rules import (
    BagPieceRule,
    SequencePieceRule,
    UniformPieceRule,
    make_piece_rule,
)

KINDS = ("I", "O", "T", "S", "Z", "J", "L")


def _draw(rule, n: int) -> list[str]:
    return [rule.next_piece() for _ in range(n)]


def test_uniform_is_reproducible_for_a_seed() -> None:
    a = UniformPieceRule()
    b = UniformPieceRule()
    a.reset(rng=np.random.default_rng(7), kinds=KINDS)
    b.reset(rng=np.random.default_rng(7), kinds=KINDS)
    seq = _draw(a, 200)
    assert seq == _draw(b, 200)
    assert set(seq) == set(KINDS)


def test_uniform_requires_reset() -> None:
    with pytest.raises(RuntimeError, match="reset"):
        UniformPieceRule().next_piece()


def test_bag7_deals_each_kind_once_per_bag() -> None:
    rule = BagPieceRule()
    rule.reset(rng=np.random.default_rng(3), kinds=KINDS)
    for _ in range(3):
        assert sorted(_draw(rule, 7)) == sorted(KINDS)


def test_sequence_rule_cycles() -> None:
    rule = SequencePieceRule(sequence=("O", "I"))
    rule.reset(rng=np.random.default_rng(0), kinds=KINDS)
    assert _draw(rule, 5) == ["O", "I", "O", "I", "O"]


def test_sequence_rule_rejects_unknown_kinds() -> None:
    with pytest.raises(ValueError, match="unknown kinds"):
        SequencePieceRule(sequence=("O", "Q")).reset(rng=np.random.default_rng(0), kinds=KINDS)


def test_make_piece_rule() -> None:
    assert isinstance(make_piece_rule("uniform"), UniformPieceRule)
    assert isinstance(make_piece_rule(" Bag7 "), BagPieceRule)
    with pytest.raises(ValueError, match="unknown piece_rule"):
        make_piece_rule("gameboy")
