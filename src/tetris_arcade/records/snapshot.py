# src/tetris_arcade/records/snapshot.py
from __future__ import annotations

from typing import Callable, Optional

from tetris_arcade.game.core.board import board_from_rows, board_to_rows
from tetris_arcade.game.core.constants import BOARD_HEIGHT, BOARD_WIDTH
from tetris_arcade.game.core.session import GameSession
from tetris_arcade.records.models import SavedGame, ScoreEntry
from tetris_arcade.records.store import Clock, RecordStore, utc_now


def snapshot_from_session(session: GameSession, *, user_id: str, clock: Optional[Clock] = None) -> SavedGame:
    return SavedGame(
        user_id=user_id,
        board=board_to_rows(session.board),
        score=int(session.score),
        level=int(session.level),
        lines=int(session.lines),
        paused=bool(session.paused),
        updated_at=(clock or utc_now)(),
    )


def session_from_snapshot(
        saved: SavedGame,
        *,
        height: int = BOARD_HEIGHT,
        width: int = BOARD_WIDTH,
) -> GameSession:
    """
    Rebuild a SPAWNING-phase session; TetrisGame.resume() spawns the next piece.
    """
    return GameSession(
        board=board_from_rows(saved.board, height=height, width=width),
        score=int(saved.score),
        level=int(saved.level),
        lines=int(saved.lines),
        paused=bool(saved.paused),
    )


def make_score_submitter(
        store: RecordStore,
        *,
        user_id: str,
        user_name: str,
) -> Callable[[GameSession], ScoreEntry]:
    """
    Game-over hook for TetrisGame: records the final score and drops the
    user's saved game, which no longer has anything to resume.
    """

    def _submit(session: GameSession) -> ScoreEntry:
        entry = store.add_score(
            user_id=user_id,
            user_name=user_name,
            score=int(session.score),
            level=int(session.level),
            lines=int(session.lines),
        )
        store.delete_game(user_id)
        return entry

    return _submit


__all__ = ["snapshot_from_session", "session_from_snapshot", "make_score_submitter"]
