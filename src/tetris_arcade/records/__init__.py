from tetris_arcade.records.models import LeaderboardEntry, SavedGame, ScoreEntry, display_name
from tetris_arcade.records.snapshot import make_score_submitter, session_from_snapshot, snapshot_from_session
from tetris_arcade.records.store import RecordStore

__all__ = [
    "LeaderboardEntry",
    "RecordStore",
    "SavedGame",
    "ScoreEntry",
    "display_name",
    "make_score_submitter",
    "session_from_snapshot",
    "snapshot_from_session",
]
