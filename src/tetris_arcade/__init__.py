"""Falling-block puzzle engine with score history, leaderboard and saved games."""

__version__ = "0.1.0"
