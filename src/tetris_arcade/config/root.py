# src/tetris_arcade/config/root.py
from __future__ import annotations

from pydantic import field_validator

from tetris_arcade.config.base import ConfigBase
from tetris_arcade.config.game import GameConfig
from tetris_arcade.config.records import RecordsConfig

_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


class AppConfig(ConfigBase):
    log_level: str = "info"
    game: GameConfig = GameConfig()
    records: RecordsConfig = RecordsConfig()

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, v: object) -> str:
        s = str(v).strip().lower()
        if s not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return s


__all__ = ["AppConfig"]
