# src/tetris_arcade/records/store.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

from tetris_arcade.records.models import LeaderboardEntry, RecordFile, SavedGame, ScoreEntry
from tetris_arcade.utils.file_io import read_json, write_json

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """
    Score history, leaderboard and saved games.

    With a path, the JSON file is loaded once on construction and rewritten
    after every mutation; without one the store lives in memory only.
    """

    def __init__(
            self,
            path: Optional[Path] = None,
            *,
            clock: Optional[Clock] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.clock: Clock = clock or utc_now
        self.logger = logger

        self._scores: List[ScoreEntry] = []
        self._saved: Dict[str, SavedGame] = {}
        self._next_id = 1

        if self.path is not None:
            self._load(self.path)

    # ---- scores --------------------------------------------------------------------

    def add_score(self, *, user_id: str, user_name: str, score: int, level: int, lines: int) -> ScoreEntry:
        entry = ScoreEntry(
            id=self._next_id,
            user_id=user_id,
            user_name=user_name,
            score=score,
            level=level,
            lines=lines,
            created_at=self.clock(),
        )
        self._next_id += 1
        self._scores.append(entry)
        self._flush()
        self._log(f"[records] score saved id={entry.id} user={entry.user_id} score={entry.score}")
        return entry

    def user_scores(self, user_id: str, *, limit: int = 10) -> List[ScoreEntry]:
        """The user's entries, highest score first (ties: oldest first)."""
        mine = [e for e in self._scores if e.user_id == user_id]
        mine.sort(key=lambda e: (-e.score, e.id))
        return mine[: max(0, int(limit))]

    def leaderboard(self, *, limit: int = 10) -> List[LeaderboardEntry]:
        """
        Top `limit` players by personal best. Each user appears once; on a
        tie between users the earlier entry ranks first.
        """
        best: Dict[str, ScoreEntry] = {}
        for e in self._scores:
            cur = best.get(e.user_id)
            if cur is None or e.score > cur.score:
                best[e.user_id] = e

        ranked = sorted(best.values(), key=lambda e: (-e.score, e.id))[: max(0, int(limit))]
        return [
            LeaderboardEntry(
                rank=i + 1,
                score_id=e.id,
                user_id=e.user_id,
                user_name=e.user_name,
                score=e.score,
                level=e.level,
                lines=e.lines,
                created_at=e.created_at,
            )
            for i, e in enumerate(ranked)
        ]

    # ---- saved games ---------------------------------------------------------------

    def save_game(self, saved: SavedGame) -> SavedGame:
        """Store `saved`, replacing any earlier snapshot of the same user."""
        replaced = saved.user_id in self._saved
        self._saved[saved.user_id] = saved
        self._flush()
        self._log(f"[records] game saved user={saved.user_id} replaced={replaced}")
        return saved

    def load_game(self, user_id: str) -> Optional[SavedGame]:
        return self._saved.get(user_id)

    def delete_game(self, user_id: str) -> bool:
        existed = self._saved.pop(user_id, None) is not None
        if existed:
            self._flush()
            self._log(f"[records] game deleted user={user_id}")
        return existed

    # ---- persistence ---------------------------------------------------------------

    def _load(self, path: Path) -> None:
        data = read_json(path)
        if data is None:
            return
        rf = RecordFile.model_validate(data)
        self._scores = list(rf.scores)
        self._saved = dict(rf.saved_games)
        self._next_id = max([rf.next_id] + [e.id + 1 for e in rf.scores])
        self._log(f"[records] loaded {path} scores={len(self._scores)} saved_games={len(self._saved)}")

    def _flush(self) -> None:
        if self.path is None:
            return
        rf = RecordFile(next_id=self._next_id, scores=self._scores, saved_games=self._saved)
        write_json(self.path, rf.model_dump(mode="json"))

    def _log(self, msg: str) -> None:
        if self.logger is not None:
            self.logger.info(msg)


__all__ = ["RecordStore", "Clock", "utc_now"]
