# tests/test_session.py
from __future__ import annotations

import numpy as np

from tetris_arcade.game.core.board import create_empty_board, filled_count
from tetris_arcade.game.core.session import (
    ACTIVE_OVERLAY_CELL,
    empty_session,
    hard_drop,
    move,
    new_session,
    overlay_active,
    rotate,
    soft_drop,
    spawn,
    toggle_pause,
)
from tetris_arcade.game.core.types import Phase, Position


def test_new_session_spawns_top_center_with_preview(pieces, seq_rule) -> None:
    s = new_session(seq_rule("O", "T"), pieces)

    assert s.phase == Phase.FALLING
    assert s.active is not None
    assert s.active.piece.kind == "O"
    assert s.active.pos == Position(4, 0)
    assert s.next_piece is not None and s.next_piece.kind == "T"
    assert (s.score, s.level, s.lines) == (0, 1, 0)


def test_horizontal_moves_stop_at_the_wall(pieces, seq_rule) -> None:
    s = new_session(seq_rule("O"), pieces)
    for _ in range(10):
        s = move(s, -1)
    assert s.active.pos == Position(0, 0)

    for _ in range(20):
        s = move(s, +1)
    assert s.active.pos == Position(8, 0)


def test_rotation_applies_when_it_fits(pieces, seq_rule) -> None:
    s = new_session(seq_rule("T"), pieces)
    r = rotate(s)
    assert r.active.piece.shape.tolist() == [[0, 1, 0], [0, 1, 1], [0, 1, 0]]
    assert r.active.pos == s.active.pos
    # original session is untouched
    assert s.active.piece.shape.tolist() == [[0, 1, 0], [1, 1, 1], [0, 0, 0]]


def test_blocked_rotation_keeps_the_session(pieces, seq_rule) -> None:
    s = new_session(seq_rule("I"), pieces)
    board = create_empty_board()
    board[2, 6] = 1
    s = s.replace(board=board)
    assert rotate(s) is s


def test_soft_drop_falls_then_locks_and_spawns_next(pieces, seq_rule) -> None:
    s = new_session(seq_rule("O", "T", "I"), pieces)
    for _ in range(18):
        res = soft_drop(s, seq_rule("O"), pieces)
        assert not res.locked
        s = res.session
    assert s.active.pos == Position(4, 18)

    before = s.board
    res = soft_drop(s, seq_rule("I"), pieces)
    assert res.locked
    assert res.lines_cleared == 0
    after = res.session
    assert filled_count(before) == 0
    assert after.board[18:, 4:6].tolist() == [[1, 1], [1, 1]]
    assert after.active.piece.kind == "T"
    assert after.active.pos == Position(4, 0)
    assert after.next_piece.kind == "I"


def test_hard_drop_double_clear_scores_at_current_level(pieces, seq_rule) -> None:
    rule = seq_rule("O")
    s = new_session(rule, pieces)
    board = create_empty_board()
    board[18:, :] = 1
    board[18:, 4:6] = 0
    board[10, 0] = 1
    s = s.replace(board=board, level=2)

    res = hard_drop(s, rule, pieces)

    assert res.locked
    assert res.lines_cleared == 2
    assert res.session.score == 600
    assert res.session.lines == 2
    assert res.session.level == 2
    assert filled_count(res.session.board) == 1
    assert res.session.board[12, 0] == 1


def test_level_up_after_ten_lines_uses_pre_lock_level_for_score(pieces, seq_rule) -> None:
    rule = seq_rule("O")
    s = new_session(rule, pieces)
    board = create_empty_board()
    board[19, :] = 1
    board[19, 4:6] = 0
    s = s.replace(board=board, lines=9)

    res = hard_drop(s, rule, pieces)

    assert res.lines_cleared == 1
    assert res.session.score == 100
    assert res.session.lines == 10
    assert res.session.level == 2


def test_stacking_to_the_top_ends_the_game(pieces, seq_rule) -> None:
    rule = seq_rule("O")
    s = new_session(rule, pieces)
    for i in range(9):
        s = hard_drop(s, rule, pieces).session
        assert not s.game_over, i

    res = hard_drop(s, rule, pieces)
    s = res.session
    assert res.locked
    assert s.game_over
    assert s.phase == Phase.GAME_OVER
    assert s.active is None
    assert s.board[:, 4:6].all()

    # terminal: nothing moves any more
    assert hard_drop(s, rule, pieces).session is s
    assert soft_drop(s, rule, pieces).session is s
    assert move(s, 1) is s
    assert toggle_pause(s) is s


def test_invalid_spawn_is_game_over(pieces, seq_rule) -> None:
    board = create_empty_board()
    board[1, 5] = 1
    s = empty_session().replace(board=board)
    out = spawn(s, seq_rule("O"), pieces)
    assert out.game_over
    assert out.active is None


def test_pause_freezes_moves_and_gravity(pieces, seq_rule) -> None:
    rule = seq_rule("O")
    s = toggle_pause(new_session(rule, pieces))
    assert s.phase == Phase.PAUSED

    assert move(s, -1) is s
    assert rotate(s) is s
    assert soft_drop(s, rule, pieces).session is s
    assert hard_drop(s, rule, pieces).session is s

    resumed = toggle_pause(s)
    assert resumed.phase == Phase.FALLING
    assert soft_drop(resumed, rule, pieces).session.active.pos == Position(4, 1)


def test_tick_in_spawning_phase_spawns(pieces, seq_rule) -> None:
    s = empty_session()
    assert s.phase == Phase.SPAWNING
    res = soft_drop(s, seq_rule("L", "J"), pieces)
    assert not res.locked
    assert res.session.active.piece.kind == "L"
    assert res.session.next_piece.kind == "J"


def test_overlay_draws_the_active_piece(pieces, seq_rule) -> None:
    s = new_session(seq_rule("O"), pieces)
    grid = overlay_active(s)
    assert grid[0:2, 4:6].tolist() == [[ACTIVE_OVERLAY_CELL] * 2] * 2
    assert not np.any(s.board)
