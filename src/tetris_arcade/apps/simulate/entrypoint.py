# src/tetris_arcade/apps/simulate/entrypoint.py
from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Optional

import numpy as np

from tetris_arcade.config.io import load_app_config
from tetris_arcade.config.root import AppConfig
from tetris_arcade.game.core.game import TetrisGame
from tetris_arcade.game.core.piece_rules import make_piece_rule
from tetris_arcade.game.core.session import GameSession, overlay_active
from tetris_arcade.game.core.types import Action
from tetris_arcade.records.models import display_name
from tetris_arcade.records.snapshot import make_score_submitter
from tetris_arcade.records.store import RecordStore
from tetris_arcade.utils.logging import setup_logger

# Random policy: mostly shuffle sideways/rotate, then commit with a drop.
POLICY_ACTIONS: tuple[Action, ...] = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROT_CW,
    Action.SOFT_DROP,
    Action.HARD_DROP,
)
POLICY_WEIGHTS: tuple[float, ...] = (0.25, 0.25, 0.2, 0.2, 0.1)

_CELL_CHARS = {0: ".", 1: "#", 2: "@"}


def render_text(session: GameSession) -> str:
    grid = overlay_active(session)
    return "\n".join("".join(_CELL_CHARS.get(int(c), "?") for c in row) for row in grid)


def play_random_game(game: TetrisGame, *, rng: np.random.Generator, max_steps: int) -> tuple[GameSession, int]:
    """Reset `game` and drive it with the random policy; returns (final session, steps)."""
    game.reset()
    p = np.asarray(POLICY_WEIGHTS, dtype=np.float64)
    p = p / p.sum()
    steps = 0
    while steps < int(max_steps):
        a = POLICY_ACTIONS[int(rng.choice(len(POLICY_ACTIONS), p=p))]
        _, _, over, _ = game.step(a)
        steps += 1
        if over:
            break
    return game.session, steps


def run_simulation(args: argparse.Namespace, cfg: Optional[AppConfig] = None) -> int:
    cfg = cfg or load_app_config(Path(args.config) if args.config else None)
    logger = setup_logger(name="tetris_arcade.simulate", use_rich=not bool(args.no_rich), level=cfg.log_level)

    game_cfg = cfg.game
    seed = int(args.seed) if args.seed is not None else game_cfg.seed
    piece_rule = str(args.piece_rule or game_cfg.piece_rule)

    records_path = args.records or cfg.records.path
    store: Optional[RecordStore] = None
    on_game_over = None
    if records_path:
        store = RecordStore(Path(records_path), logger=logger)
        on_game_over = make_score_submitter(
            store,
            user_id=str(args.user_id),
            user_name=display_name(args.user_name, args.user_email),
        )

    game = TetrisGame(
        height=game_cfg.height,
        width=game_cfg.width,
        start_level=game_cfg.start_level,
        piece_rule=make_piece_rule(piece_rule),
        on_game_over=on_game_over,
        logger=logger,
    )
    game.set_rng(np.random.default_rng(seed))
    policy_rng = np.random.default_rng(None if seed is None else seed + 1)

    logger.info(f"[simulate] games={args.games} seed={seed} piece_rule={piece_rule} records={records_path}")

    t0 = time.perf_counter()
    total_steps = 0
    best = 0
    for i in range(int(args.games)):
        final, steps = play_random_game(game, rng=policy_rng, max_steps=int(args.max_steps))
        total_steps += steps
        best = max(best, int(final.score))
        logger.info(
            f"[simulate] game={i + 1} steps={steps} score={final.score} level={final.level} "
            f"lines={final.lines} over={final.game_over}"
        )
        if args.show_board:
            logger.info("\n" + render_text(final))

    elapsed = time.perf_counter() - t0
    sps = total_steps / max(elapsed, 1e-12)
    logger.info(f"[simulate] done steps={total_steps} elapsed={elapsed:.3f}s steps/s={sps:.1f} best={best}")

    if store is not None:
        for e in store.leaderboard(limit=cfg.records.leaderboard_limit):
            logger.info(f"[leaderboard] #{e.rank} {e.user_name} score={e.score} level={e.level} lines={e.lines}")
    return 0


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play headless random-policy games with the falling-block engine.")
    ap.add_argument("--config", type=str, default=None, help="YAML app config (defaults if omitted)")
    ap.add_argument("--games", type=int, default=1)
    ap.add_argument("--seed", type=int, default=None, help="overrides game.seed")
    ap.add_argument("--piece-rule", type=str, default=None, choices=["uniform", "bag7"])
    ap.add_argument("--max-steps", type=int, default=10_000, help="cap on input events per game")
    ap.add_argument("--records", type=str, default=None, help="JSON record file (overrides records.path)")
    ap.add_argument("--user-id", type=str, default="simulator")
    ap.add_argument("--user-name", type=str, default=None)
    ap.add_argument("--user-email", type=str, default=None)
    ap.add_argument("--show-board", action="store_true", help="log the final board of each game")
    ap.add_argument("--no-rich", action="store_true")
    return ap.parse_args(argv)


__all__ = ["parse_args", "run_simulation", "play_random_game", "render_text"]
