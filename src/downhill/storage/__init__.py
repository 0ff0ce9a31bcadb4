"""High score persistence."""

from .highscore import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore

__all__ = ["HighScoreStore", "JsonHighScoreStore", "MemoryHighScoreStore"]
