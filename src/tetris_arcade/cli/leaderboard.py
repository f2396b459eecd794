# src/tetris_arcade/cli/leaderboard.py
from __future__ import annotations

from tetris_arcade.apps.leaderboard.entrypoint import parse_args, show_leaderboard


def main() -> int:
    return show_leaderboard(parse_args())


if __name__ == "__main__":
    raise SystemExit(main())
