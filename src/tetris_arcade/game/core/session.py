# src/tetris_arcade/game/core/session.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tetris_arcade.game.core.board import Board, clear_lines, create_empty_board, merge_piece
from tetris_arcade.game.core.constants import BOARD_HEIGHT, BOARD_WIDTH
from tetris_arcade.game.core.piece_rules import PieceRule
from tetris_arcade.game.core.pieceset import PieceSet
from tetris_arcade.game.core.rotation import drop_distance, is_valid_move, try_rotate
from tetris_arcade.game.core.rules import ScoreConfig, calculate_score, next_level
from tetris_arcade.game.core.types import ActivePiece, Phase, Position, Tetromino

ACTIVE_OVERLAY_CELL: int = 2


@dataclass(frozen=True, eq=False)
class GameSession:
    """
    Immutable snapshot of one game.

    Contracts:
      - board holds LOCKED cells only (0/1); the active piece is kept separately.
      - next_piece is a single-slot look-ahead, refilled on every spawn.
      - score/lines/level never decrease within a game.
    """

    board: Board
    active: Optional[ActivePiece] = None
    next_piece: Optional[Tetromino] = None
    score: int = 0
    level: int = 1
    lines: int = 0
    paused: bool = False
    game_over: bool = False

    @property
    def height(self) -> int:
        return int(self.board.shape[0])

    @property
    def width(self) -> int:
        return int(self.board.shape[1])

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if self.paused:
            return Phase.PAUSED
        if self.active is None:
            return Phase.SPAWNING
        return Phase.FALLING

    def replace(self, **changes: object) -> "GameSession":
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True, eq=False)
class StepResult:
    session: GameSession
    lines_cleared: int = 0
    locked: bool = False


def random_tetromino(rule: PieceRule, piece_set: PieceSet) -> Tetromino:
    return piece_set.spawn(rule.next_piece())


def spawn_position(width: int) -> Position:
    return Position(x=int(width) // 2 - 1, y=0)


def empty_session(*, height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH, start_level: int = 1) -> GameSession:
    """Fresh SPAWNING-phase session: empty board, no pieces yet."""
    return GameSession(board=create_empty_board(height=height, width=width), level=int(start_level))


def new_session(
        rule: PieceRule,
        piece_set: PieceSet,
        *,
        height: int = BOARD_HEIGHT,
        width: int = BOARD_WIDTH,
        start_level: int = 1,
) -> GameSession:
    return spawn(empty_session(height=height, width=width, start_level=start_level), rule, piece_set)


def spawn(session: GameSession, rule: PieceRule, piece_set: PieceSet) -> GameSession:
    """
    Promote the preview piece (drawing one if the slot is empty) to the top
    center. An invalid spawn position ends the game.
    """
    if session.game_over:
        return session

    piece = session.next_piece if session.next_piece is not None else random_tetromino(rule, piece_set)
    pos = spawn_position(session.width)

    if not is_valid_move(session.board, piece, pos):
        return session.replace(active=None, next_piece=piece, game_over=True)

    return session.replace(
        active=ActivePiece(piece=piece, pos=pos),
        next_piece=random_tetromino(rule, piece_set),
    )


def _can_act(session: GameSession) -> bool:
    return session.active is not None and not session.paused and not session.game_over


def move(session: GameSession, dx: int) -> GameSession:
    if not _can_act(session):
        return session
    ap = session.active
    assert ap is not None
    pos = ap.pos.moved(dx=dx)
    if not is_valid_move(session.board, ap.piece, pos):
        return session
    return session.replace(active=ActivePiece(piece=ap.piece, pos=pos))


def rotate(session: GameSession, *, turns: int = 1) -> GameSession:
    if not _can_act(session):
        return session
    ap = session.active
    assert ap is not None
    piece = try_rotate(session.board, ap.piece, ap.pos, turns=turns)
    if piece is ap.piece:
        return session
    return session.replace(active=ActivePiece(piece=piece, pos=ap.pos))


def toggle_pause(session: GameSession) -> GameSession:
    if session.game_over:
        return session
    return session.replace(paused=not session.paused)


def lock(
        session: GameSession,
        rule: PieceRule,
        piece_set: PieceSet,
        *,
        score_cfg: Optional[ScoreConfig] = None,
) -> StepResult:
    """
    Merge the active piece, clear lines, update counters, then spawn the next piece.

    Score uses the level in force before this lock's level-up.
    """
    ap = session.active
    if ap is None or session.game_over:
        return StepResult(session=session)

    merged = merge_piece(session.board, ap.piece, ap.pos)
    board, cleared = clear_lines(merged)

    lines = int(session.lines + cleared)
    score = int(session.score + calculate_score(cleared, session.level, score_cfg))
    level = next_level(session.level, lines, cleared)

    locked = session.replace(board=board, active=None, score=score, lines=lines, level=level)
    return StepResult(session=spawn(locked, rule, piece_set), lines_cleared=int(cleared), locked=True)


def soft_drop(
        session: GameSession,
        rule: PieceRule,
        piece_set: PieceSet,
        *,
        score_cfg: Optional[ScoreConfig] = None,
) -> StepResult:
    """
    One gravity step (also the timer tick): fall one row, lock when blocked.
    In the SPAWNING phase this spawns the next piece instead.
    """
    if session.paused or session.game_over:
        return StepResult(session=session)
    if session.active is None:
        return StepResult(session=spawn(session, rule, piece_set))

    ap = session.active
    pos = ap.pos.moved(dy=1)
    if is_valid_move(session.board, ap.piece, pos):
        return StepResult(session=session.replace(active=ActivePiece(piece=ap.piece, pos=pos)))
    return lock(session, rule, piece_set, score_cfg=score_cfg)


def hard_drop(
        session: GameSession,
        rule: PieceRule,
        piece_set: PieceSet,
        *,
        score_cfg: Optional[ScoreConfig] = None,
) -> StepResult:
    if not _can_act(session):
        return StepResult(session=session)
    ap = session.active
    assert ap is not None
    d = drop_distance(session.board, ap.piece, ap.pos)
    dropped = session.replace(active=ActivePiece(piece=ap.piece, pos=ap.pos.moved(dy=d)))
    return lock(dropped, rule, piece_set, score_cfg=score_cfg)


def overlay_active(session: GameSession) -> Board:
    """
    Locked board plus the active piece drawn as ACTIVE_OVERLAY_CELL
    (cells above the top edge are skipped).
    """
    out = np.array(session.board, copy=True)
    ap = session.active
    if ap is None:
        return out
    for dx, dy in ap.piece.cells():
        x = ap.pos.x + dx
        y = ap.pos.y + dy
        if 0 <= y < session.height and 0 <= x < session.width:
            out[y, x] = ACTIVE_OVERLAY_CELL
    return out


__all__ = [
    "ACTIVE_OVERLAY_CELL",
    "GameSession",
    "StepResult",
    "random_tetromino",
    "spawn_position",
    "empty_session",
    "new_session",
    "spawn",
    "move",
    "rotate",
    "toggle_pause",
    "lock",
    "soft_drop",
    "hard_drop",
    "overlay_active",
]
