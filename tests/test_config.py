# tests/test_config.py
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tetris_arcade.config.io import load_app_config, to_plain_dict
from tetris_arcade.config.root import AppConfig


def test_defaults_without_a_file() -> None:
    cfg = load_app_config(None)
    assert cfg.log_level == "info"
    assert cfg.game.width == 10 and cfg.game.height == 20
    assert cfg.game.piece_rule == "uniform"
    assert cfg.records.path is None
    assert cfg.records.leaderboard_limit == 10


def test_yaml_with_interpolation(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text(
        "log_level: DEBUG\n"
        "root: /tmp/arcade\n"
        "game:\n"
        "  seed: null\n"
        "  piece_rule: BAG7\n"
        "  start_level: 3\n"
        "records:\n"
        "  path: ${root}/records.json\n",
        encoding="utf-8",
    )
    with pytest.raises(ValidationError, match="root"):
        load_app_config(p)

    p.write_text(
        "log_level: DEBUG\n"
        "game:\n"
        "  seed: null\n"
        "  piece_rule: BAG7\n"
        "  start_level: 3\n"
        "records:\n"
        "  path: /tmp/arcade/records.json\n"
        "  history_limit: ${records.leaderboard_limit}\n"
        "  leaderboard_limit: 25\n",
        encoding="utf-8",
    )
    cfg = load_app_config(p)
    assert cfg.log_level == "debug"
    assert cfg.game.seed is None
    assert cfg.game.piece_rule == "bag7"
    assert cfg.game.start_level == 3
    assert cfg.records.path == "/tmp/arcade/records.json"
    assert cfg.records.history_limit == 25


def test_rejects_unknown_piece_rule_and_extra_keys() -> None:
    with pytest.raises(ValidationError):
        AppConfig.model_validate({"game": {"piece_rule": "gameboy"}})
    with pytest.raises(ValidationError):
        AppConfig.model_validate({"game": {"gravity": 2}})
    with pytest.raises(ValidationError, match="log_level"):
        AppConfig.model_validate({"log_level": "loud"})
    with pytest.raises(TypeError, match="game.seed"):
        AppConfig.model_validate({"game": {"seed": True}})


def test_plain_dict_round_trip() -> None:
    cfg = AppConfig.model_validate({"records": {"path": "  "}})
    assert cfg.records.path is None
    data = to_plain_dict(cfg)
    assert AppConfig.model_validate(data) == cfg


def test_rejects_boards_narrower_than_the_i_piece_at_spawn() -> None:
    with pytest.raises(ValidationError, match="width"):
        AppConfig.model_validate({"game": {"width": 4}})
    assert AppConfig.model_validate({"game": {"width": 5}}).game.width == 5
