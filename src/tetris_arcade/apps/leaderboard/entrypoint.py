# src/tetris_arcade/apps/leaderboard/entrypoint.py
from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from tetris_arcade.config.io import load_app_config
from tetris_arcade.records.store import RecordStore


def _fmt_time(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M")


def build_leaderboard_table(store: RecordStore, *, limit: int) -> Table:
    table = Table(title="Leaderboard")
    table.add_column("#", justify="right")
    table.add_column("player")
    table.add_column("score", justify="right")
    table.add_column("level", justify="right")
    table.add_column("lines", justify="right")
    table.add_column("when")
    for e in store.leaderboard(limit=limit):
        table.add_row(str(e.rank), e.user_name, str(e.score), str(e.level), str(e.lines), _fmt_time(e.created_at))
    return table


def build_history_table(store: RecordStore, *, user_id: str, limit: int) -> Table:
    table = Table(title=f"Scores for {user_id}")
    table.add_column("score", justify="right")
    table.add_column("level", justify="right")
    table.add_column("lines", justify="right")
    table.add_column("when")
    for e in store.user_scores(user_id, limit=limit):
        table.add_row(str(e.score), str(e.level), str(e.lines), _fmt_time(e.created_at))
    return table


def show_leaderboard(args: argparse.Namespace, console: Optional[Console] = None) -> int:
    cfg = load_app_config(Path(args.config) if args.config else None)
    path = args.records or cfg.records.path
    if not path:
        raise ValueError("no record file: pass --records or set records.path in the config")
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"record file not found: {p}")

    store = RecordStore(p)
    out = console or Console()
    if args.user_id:
        limit = int(args.limit) if args.limit is not None else cfg.records.history_limit
        out.print(build_history_table(store, user_id=str(args.user_id), limit=limit))
    else:
        limit = int(args.limit) if args.limit is not None else cfg.records.leaderboard_limit
        out.print(build_leaderboard_table(store, limit=limit))
    return 0


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Print the leaderboard or one player's score history.")
    ap.add_argument("--config", type=str, default=None)
    ap.add_argument("--records", type=str, default=None, help="JSON record file (overrides records.path)")
    ap.add_argument("--limit", type=int, default=None)
    ap.add_argument("--user-id", type=str, default=None, help="show this user's history instead")
    return ap.parse_args(argv)


__all__ = ["parse_args", "show_leaderboard", "build_leaderboard_table", "build_history_table"]
