"""Falling-block engine: pure board/piece/rule functions plus the TetrisGame driver."""

from tetris_arcade.game.core.board import clear_lines, create_empty_board, merge_piece
from tetris_arcade.game.core.game import TetrisGame
from tetris_arcade.game.core.pieceset import PieceSet, classic7
from tetris_arcade.game.core.rotation import is_valid_move, rotate_shape
from tetris_arcade.game.core.rules import calculate_score, drop_interval_ms
from tetris_arcade.game.core.session import GameSession, StepResult, random_tetromino
from tetris_arcade.game.core.types import Action, ActivePiece, Phase, Position, Tetromino

__all__ = [
    "Action",
    "ActivePiece",
    "GameSession",
    "Phase",
    "PieceSet",
    "Position",
    "StepResult",
    "Tetromino",
    "TetrisGame",
    "calculate_score",
    "classic7",
    "clear_lines",
    "create_empty_board",
    "drop_interval_ms",
    "is_valid_move",
    "merge_piece",
    "random_tetromino",
    "rotate_shape",
]
