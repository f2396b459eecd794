# src/tetris_arcade/config/records.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from tetris_arcade.config.base import ConfigBase


class RecordsConfig(ConfigBase):
    path: Optional[str] = None
    leaderboard_limit: int = Field(default=10, ge=1)
    history_limit: int = Field(default=10, ge=1)

    @field_validator("path", mode="before")
    @classmethod
    def _blank_path_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


__all__ = ["RecordsConfig"]
