# src/tetris_arcade/game/core/game.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from tetris_arcade.game.core.board import create_empty_board
from tetris_arcade.game.core.constants import BOARD_HEIGHT, BOARD_WIDTH
from tetris_arcade.game.core.piece_rules import PieceRule, UniformPieceRule
from tetris_arcade.game.core.pieceset import PieceSet, classic7
from tetris_arcade.game.core.rotation import is_valid_move
from tetris_arcade.game.core.rules import ScoreConfig, drop_interval_ms
from tetris_arcade.game.core.session import (
    GameSession,
    StepResult,
    empty_session,
    hard_drop,
    move,
    new_session,
    rotate,
    soft_drop,
    spawn,
    spawn_position,
    toggle_pause,
)
from tetris_arcade.game.core.types import Action

GameOverHook = Callable[[GameSession], None]

_ACTION_ALIASES: Dict[str, Action] = {
    "left": Action.LEFT,
    "arrowleft": Action.LEFT,
    "right": Action.RIGHT,
    "arrowright": Action.RIGHT,
    "soft_drop": Action.SOFT_DROP,
    "down": Action.SOFT_DROP,
    "arrowdown": Action.SOFT_DROP,
    "tick": Action.SOFT_DROP,
    "hard_drop": Action.HARD_DROP,
    "drop": Action.HARD_DROP,
    "space": Action.HARD_DROP,
    " ": Action.HARD_DROP,
    "rot_cw": Action.ROT_CW,
    "rotate": Action.ROT_CW,
    "rotate_cw": Action.ROT_CW,
    "up": Action.ROT_CW,
    "arrowup": Action.ROT_CW,
    "cw": Action.ROT_CW,
    "rot_ccw": Action.ROT_CCW,
    "rotate_ccw": Action.ROT_CCW,
    "ccw": Action.ROT_CCW,
    "pause": Action.PAUSE,
    "p": Action.PAUSE,
}


def normalize_action(action: Any) -> Action:
    if isinstance(action, Action):
        return action
    raw = str(action)
    key = raw if raw == " " else raw.strip().lower()
    try:
        return _ACTION_ALIASES[key]
    except KeyError as e:
        raise ValueError(f"unknown action {action!r}") from e


class TetrisGame:
    """
    Single-player session driver.

    Contracts:

      - The engine functions in session.py are pure; this class only owns the
        current GameSession, the piece rule and the injected RNG.
      - step() returns (session, cleared_lines, game_over, info).
      - Callers must serialize step()/tick(); one transition at a time.
      - on_game_over fires exactly once per finished game (final score submission).
    """

    def __init__(
            self,
            *,
            height: int = BOARD_HEIGHT,
            width: int = BOARD_WIDTH,
            start_level: int = 1,
            piece_set: Optional[PieceSet] = None,
            piece_rule: PieceRule | None = None,
            score_cfg: Optional[ScoreConfig] = None,
            on_game_over: Optional[GameOverHook] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.h = int(height)
        self.w = int(width)
        if self.h <= 0:
            raise ValueError(f"height must be positive, got {self.h}")
        if self.w <= 0:
            raise ValueError(f"width must be positive, got {self.w}")
        self.start_level = int(start_level)
        if self.start_level < 1:
            raise ValueError(f"start_level must be >= 1, got {self.start_level}")

        self.pieces = piece_set or classic7()
        if not self.pieces.kinds():
            raise ValueError("PieceSet has no kinds (empty pieceset is invalid).")
        blank = create_empty_board(height=self.h, width=self.w)
        origin = spawn_position(self.w)
        for kind in self.pieces.kinds():
            if not is_valid_move(blank, self.pieces.spawn(kind), origin):
                raise ValueError(f"piece {kind!r} does not fit at spawn on a {self.w}x{self.h} board")

        self.score_cfg = score_cfg or ScoreConfig()
        self.on_game_over = on_game_over
        self.logger = logger

        # Caller-owned RNG; a placeholder generator covers standalone usage.
        self._rng: np.random.Generator = np.random.default_rng()
        self._piece_rule: PieceRule = piece_rule or UniformPieceRule()

        self._game_over_reported = False
        self.session: GameSession = empty_session(height=self.h, width=self.w, start_level=self.start_level)

    def set_rng(self, rng: np.random.Generator) -> None:
        self._rng = rng

    @property
    def drop_interval_ms(self) -> int:
        return drop_interval_ms(self.session.level)

    def reset(self) -> GameSession:
        self._piece_rule.reset(rng=self._rng, kinds=self.pieces.kinds())
        self._game_over_reported = False
        self.session = new_session(
            self._piece_rule,
            self.pieces,
            height=self.h,
            width=self.w,
            start_level=self.start_level,
        )
        self._log(f"[game] reset w={self.w} h={self.h} level={self.start_level}")
        self._maybe_report_game_over()
        return self.session

    def resume(self, session: GameSession) -> GameSession:
        """
        Continue from a restored session (e.g. a saved game): the piece rule is
        reset and, unless the game is over, a fresh piece is spawned.
        """
        if session.board.shape != (self.h, self.w):
            raise ValueError(f"session board shape {session.board.shape} != ({self.h}, {self.w})")
        self._piece_rule.reset(rng=self._rng, kinds=self.pieces.kinds())
        self._game_over_reported = bool(session.game_over)
        s = session
        if s.active is None and not s.game_over:
            s = spawn(s, self._piece_rule, self.pieces)
        self.session = s
        self._log(f"[game] resumed score={s.score} level={s.level} lines={s.lines} paused={s.paused}")
        self._maybe_report_game_over()
        return self.session

    def tick(self) -> Tuple[GameSession, int, bool, Dict[str, object]]:
        """Timer-driven gravity step."""
        return self.step(Action.SOFT_DROP)

    def step(self, action: Any) -> Tuple[GameSession, int, bool, Dict[str, object]]:
        """
        Apply one input event and return:

          (session, cleared_lines, game_over, info)
        """
        a = normalize_action(action)
        s = self.session
        info: Dict[str, object] = {}

        if s.game_over:
            return s, 0, True, info

        result: Optional[StepResult] = None

        if a == Action.LEFT:
            s = move(s, -1)
        elif a == Action.RIGHT:
            s = move(s, +1)
        elif a == Action.ROT_CW:
            s = rotate(s, turns=1)
        elif a == Action.ROT_CCW:
            s = rotate(s, turns=3)
        elif a == Action.PAUSE:
            s = toggle_pause(s)
            info["paused"] = bool(s.paused)
        elif a == Action.SOFT_DROP:
            result = soft_drop(s, self._piece_rule, self.pieces, score_cfg=self.score_cfg)
        elif a == Action.HARD_DROP:
            result = hard_drop(s, self._piece_rule, self.pieces, score_cfg=self.score_cfg)

        cleared = 0
        if result is not None:
            s = result.session
            cleared = int(result.lines_cleared)
            info["locked"] = bool(result.locked)
            if result.locked:
                self._log(
                    f"[game] lock cleared={cleared} score={s.score} lines={s.lines} level={s.level}",
                    level=logging.DEBUG,
                )

        self.session = s
        self._maybe_report_game_over()
        return s, cleared, bool(s.game_over), info

    def _maybe_report_game_over(self) -> None:
        s = self.session
        if not s.game_over or self._game_over_reported:
            return
        self._game_over_reported = True
        self._log(f"[game] game over score={s.score} level={s.level} lines={s.lines}")
        if self.on_game_over is not None:
            self.on_game_over(s)

    def _log(self, msg: str, *, level: int = logging.INFO) -> None:
        if self.logger is not None:
            self.logger.log(level, msg)


__all__ = ["TetrisGame", "GameOverHook", "normalize_action"]
