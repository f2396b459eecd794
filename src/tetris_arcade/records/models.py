# src/tetris_arcade/records/models.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field, StrictBool, StrictInt, field_validator

from tetris_arcade.config.base import ConfigBase


def display_name(name: Optional[str], email: Optional[str]) -> str:
    """Leaderboard label: name, else the email local part, else 'Anonymous'."""
    if name and name.strip():
        return name.strip()
    if email and email.strip():
        local = email.strip().split("@")[0]
        if local:
            return local
    return "Anonymous"


class ScoreEntry(ConfigBase):
    id: int = Field(ge=1)
    user_id: str = Field(min_length=1)
    user_name: str = "Anonymous"
    score: StrictInt = Field(ge=0)
    level: StrictInt = Field(ge=1)
    lines: StrictInt = Field(ge=0)
    created_at: datetime


class LeaderboardEntry(ConfigBase):
    rank: int = Field(ge=1)
    score_id: int
    user_id: str
    user_name: str
    score: int
    level: int
    lines: int
    created_at: datetime


class SavedGame(ConfigBase):
    """
    In-progress snapshot, one per user. The falling piece is not stored;
    a fresh one spawns on resume.
    """

    user_id: str = Field(min_length=1)
    board: List[List[int]]
    score: StrictInt = Field(ge=0)
    level: StrictInt = Field(ge=1)
    lines: StrictInt = Field(ge=0)
    paused: StrictBool = False
    updated_at: datetime

    @field_validator("board")
    @classmethod
    def _rectangular_binary(cls, v: List[List[int]]) -> List[List[int]]:
        if not v or not v[0]:
            raise ValueError("board must be a non-empty grid")
        w = len(v[0])
        for i, row in enumerate(v):
            if len(row) != w:
                raise ValueError(f"board row {i} has width {len(row)}, expected {w}")
            for c in row:
                if c not in (0, 1):
                    raise ValueError(f"board cells must be 0 or 1, got {c!r} in row {i}")
        return v


class RecordFile(ConfigBase):
    """On-disk layout of a RecordStore."""

    version: int = 1
    next_id: int = Field(default=1, ge=1)
    scores: List[ScoreEntry] = []
    saved_games: Dict[str, SavedGame] = {}


__all__ = ["display_name", "ScoreEntry", "LeaderboardEntry", "SavedGame", "RecordFile"]
