# src/tetris_arcade/game/core/pieceset.py
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from tetris_arcade.game.core.types import Tetromino
from tetris_arcade.utils.paths import pieces_dir

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _parse_color(v: object) -> str:
    if not isinstance(v, str) or not _HEX_COLOR.match(v.strip()):
        raise ValueError(f"color must be a '#rrggbb' string, got {v!r}")
    return v.strip().lower()


def _parse_shape(rows: Sequence[str]) -> np.ndarray:
    if not isinstance(rows, (list, tuple)) or len(rows) == 0:
        raise ValueError("shape must be a non-empty list of strings")

    out: List[List[int]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) == 0:
            raise ValueError(f"shape rows must be non-empty strings, got {r!r}")
        if len(r) != len(rows):
            raise ValueError(f"shape must be square, got {len(rows)} rows of width {len(r)}")
        out.append([1 if ch == "#" else 0 for ch in r])

    arr = np.asarray(out, dtype=np.uint8)
    if int(arr.sum()) <= 0:
        raise ValueError("shape must have at least one filled cell ('#')")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class PieceDef:
    kind: str
    shape: np.ndarray  # canonical (spawn) rotation, read-only
    color: str

    def cell_count(self) -> int:
        return int(self.shape.sum())

    def instantiate(self) -> Tetromino:
        return Tetromino(kind=self.kind, shape=self.shape, color=self.color)


@dataclass(frozen=True)
class PieceSet:
    """
    Canonical shape table + colors, loaded from YAML.

    Provides:
      - stable ordering of kinds (uniform draws, bag contents)
      - spawn(kind) -> fresh Tetromino in its canonical rotation
    """

    pieces: Dict[str, PieceDef]
    kind_order: Tuple[str, ...]

    @staticmethod
    def default_classic7_path() -> Path:
        return pieces_dir() / "classic7.yaml"

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "PieceSet":
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        if expected_cells is None:
            v = data.get("expected_cells", None)
            if isinstance(v, int):
                expected_cells = v
            elif isinstance(v, str):
                expected_cells = int(v)
            elif v is not None:
                raise TypeError(f"expected_cells must be int or str, got {type(v)!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("piece YAML must contain non-empty mapping 'pieces:'")

        pieces: Dict[str, PieceDef] = {}
        kind_order: List[str] = []

        for kind, spec in pieces_node.items():
            if not isinstance(kind, str) or not kind:
                raise ValueError(f"piece key must be a non-empty string, got {kind!r}")
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {kind!r} must be a mapping, got {type(spec)!r}")

            try:
                shape = _parse_shape(spec.get("shape"))
            except ValueError as e:
                raise ValueError(f"{kind!r}: {e}") from e

            cells = int(shape.sum())
            if expected_cells is not None and cells != int(expected_cells):
                raise ValueError(f"{kind!r}: expected {expected_cells} filled cells, got {cells}")

            pieces[kind] = PieceDef(kind=kind, shape=shape, color=_parse_color(spec.get("color")))
            kind_order.append(kind)

        return cls(pieces=pieces, kind_order=tuple(kind_order))

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: str) -> bool:
        return kind in self.pieces

    def get(self, kind: str) -> PieceDef:
        try:
            return self.pieces[kind]
        except KeyError as e:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}") from e

    def spawn(self, kind: str) -> Tetromino:
        return self.get(kind).instantiate()

    def color_of(self, kind: str) -> str:
        return self.get(kind).color


@lru_cache(maxsize=1)
def classic7() -> PieceSet:
    return PieceSet.from_yaml(PieceSet.default_classic7_path(), expected_cells=4)


__all__ = ["PieceDef", "PieceSet", "classic7"]
