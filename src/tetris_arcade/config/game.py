# src/tetris_arcade/config/game.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator

from tetris_arcade.config.base import ConfigBase
from tetris_arcade.game.core.constants import BOARD_HEIGHT, BOARD_WIDTH

PieceRuleName = Literal["uniform", "bag7"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise TypeError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except Exception as e:
        raise TypeError(f"{where} must be an int-like value, got {type(value)!r}") from e


class GameConfig(ConfigBase):
    """
    Engine-facing settings.

    seed=None draws the piece stream from OS entropy.
    """

    seed: Optional[int] = Field(default=12345, ge=0)
    piece_rule: PieceRuleName = "uniform"
    width: int = Field(default=BOARD_WIDTH, ge=5)
    height: int = Field(default=BOARD_HEIGHT, ge=4)
    start_level: int = Field(default=1, ge=1)

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return _as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()


__all__ = ["GameConfig", "PieceRuleName"]
