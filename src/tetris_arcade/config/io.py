# src/tetris_arcade/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_arcade.config.root import AppConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def load_app_config(path: Optional[Path] = None) -> AppConfig:
    """
    path=None yields the defaults (no file needed for a quick game).
    """
    if path is None:
        return AppConfig()
    return AppConfig.model_validate(load_yaml(path))


__all__ = ["to_plain_dict", "load_yaml", "load_app_config"]
