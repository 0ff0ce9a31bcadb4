"""
All-time high score persistence.

A tiny get/set contract; the simulation never depends on more than that.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import json
import logging

from downhill.core.errors import PersistenceUnavailable

logger = logging.getLogger(__name__)

KEY = "allTimeHighScore"


class HighScoreStore(ABC):
    """Key-value contract for the all-time high score."""

    @abstractmethod
    def get(self) -> Optional[int]:
        """Stored score, or None if nothing has been saved yet."""
        ...

    @abstractmethod
    def set(self, value: int) -> None:
        """Persist a new score. Raises PersistenceUnavailable on failure."""
        ...


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the score for the lifetime of the process."""

    def __init__(self, value: Optional[int] = None) -> None:
        self.value = value

    def get(self) -> Optional[int]:
        return self.value

    def set(self, value: int) -> None:
        self.value = int(value)


class JsonHighScoreStore(HighScoreStore):
    """Stores `{"allTimeHighScore": n}` in a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get(self) -> Optional[int]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = data.get(KEY)
            return None if value is None else int(value)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise PersistenceUnavailable(f"{self.path}: {e}") from e

    def set(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps({KEY: int(value)}), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            raise PersistenceUnavailable(f"{self.path}: {e}") from e
        logger.debug(f"Saved all-time high score {value} to {self.path}")
