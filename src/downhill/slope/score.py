"""Points, session high score and persisted all-time high score."""

from typing import Optional
import logging

from downhill.core.errors import PersistenceUnavailable
from downhill.slope.models import Direction, Skier
from downhill.storage.highscore import HighScoreStore

logger = logging.getLogger(__name__)


class ScoreTracker:
    """
    Awards one point per `cadence` downhill ticks, or one per tick while
    airborne. The store is only written when the all-time best moves.
    """

    def __init__(self, store: Optional[HighScoreStore] = None, cadence: int = 3) -> None:
        self.store = store
        self.cadence = cadence

    def load_all_time(self) -> int:
        """Stored all-time high score, 0 if absent or unreadable."""
        if self.store is None:
            return 0
        try:
            value = self.store.get()
        except PersistenceUnavailable as e:
            logger.warning(f"Could not read all-time high score: {e}")
            return 0
        return max(0, value or 0)

    def record_movement(self, skier: Skier) -> bool:
        """Count one tick of downhill progress. Returns True if a point was awarded."""
        if skier.is_jumping:
            skier.movement_credit = 0
            self.award_point(skier)
            return True

        skier.movement_credit += 1
        if skier.movement_credit >= self.cadence:
            skier.movement_credit = 0
            self.award_point(skier)
            return True
        return False

    def award_point(self, skier: Skier) -> None:
        skier.points += 1
        skier.high_score = max(skier.high_score, skier.points)

        if skier.points > skier.all_time_high_score:
            skier.all_time_high_score = skier.points
            self._persist(skier.all_time_high_score)

    def crash(self, skier: Skier) -> None:
        """Stop the skier and throw away the current run's points."""
        skier.direction = Direction.CRASHED
        skier.points = 0

    def _persist(self, value: int) -> None:
        if self.store is None:
            return
        try:
            self.store.set(value)
        except PersistenceUnavailable as e:
            # In-memory value stays authoritative for this session
            logger.warning(f"Could not save all-time high score {value}: {e}")
