# tests/test_pieceset.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from tetris_arcade.game.core.pieceset import PieceSet


def test_classic7_table(pieces) -> None:
    assert pieces.kinds() == ("I", "O", "T", "S", "Z", "J", "L")
    assert pieces.color_of("I") == "#00f0f0"
    assert pieces.color_of("L") == "#f0a000"
    for k in pieces.kinds():
        d = pieces.get(k)
        assert d.shape.shape[0] == d.shape.shape[1]
        assert d.cell_count() == 4


def test_spawned_pieces_share_the_read_only_canonical_shape(pieces) -> None:
    t = pieces.spawn("T")
    assert t.kind == "T"
    assert t.shape.tolist() == [[0, 1, 0], [1, 1, 1], [0, 0, 0]]
    with pytest.raises(ValueError):
        t.shape[0, 0] = 1
    assert np.array_equal(pieces.spawn("T").shape, t.shape)


def test_unknown_kind(pieces) -> None:
    with pytest.raises(KeyError, match="unknown piece kind"):
        pieces.spawn("X")


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "pieces.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_rejects_non_square_shape(tmp_path: Path) -> None:
    p = _write(tmp_path, 'pieces:\n  I:\n    color: "#00f0f0"\n    shape: ["####"]\n')
    with pytest.raises(ValueError, match="square"):
        PieceSet.from_yaml(p)


def test_rejects_wrong_cell_count(tmp_path: Path) -> None:
    p = _write(
        tmp_path,
        'expected_cells: 4\npieces:\n  X:\n    color: "#ffffff"\n    shape: ["##.", "#..", "..."]\n',
    )
    with pytest.raises(ValueError, match="expected 4 filled cells"):
        PieceSet.from_yaml(p)


def test_rejects_bad_color(tmp_path: Path) -> None:
    p = _write(tmp_path, 'pieces:\n  O:\n    color: red\n    shape: ["##", "##"]\n')
    with pytest.raises(ValueError, match="color"):
        PieceSet.from_yaml(p)


def test_rejects_empty_piece_mapping(tmp_path: Path) -> None:
    p = _write(tmp_path, "pieces: {}\n")
    with pytest.raises(ValueError, match="non-empty mapping"):
        PieceSet.from_yaml(p)
