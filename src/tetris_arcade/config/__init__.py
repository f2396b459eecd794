from tetris_arcade.config.game import GameConfig
from tetris_arcade.config.io import load_app_config, load_yaml
from tetris_arcade.config.records import RecordsConfig
from tetris_arcade.config.root import AppConfig

__all__ = ["AppConfig", "GameConfig", "RecordsConfig", "load_app_config", "load_yaml"]
