"""
Jump sequencing.

A jump runs on its own fixed-interval timer rather than on frame ticks. The
timer never touches the skier: each firing hands a jump id to `on_fire`,
which is expected to queue it for the next tick. The tick then calls
`advance()` so frame changes are ordered with everything else.
"""

from typing import Callable, Optional
import logging

from downhill.slope.models import Skier
from downhill.slope.timers import Cancellable, Scheduler

logger = logging.getLogger(__name__)


class JumpSequencer:

    def __init__(
        self,
        scheduler: Scheduler,
        on_fire: Callable[[int], None],
        interval_ms: float = 250.0,
        frame_count: int = 5,
    ) -> None:
        self._scheduler = scheduler
        self._on_fire = on_fire
        self.interval_ms = interval_ms
        self.frame_count = frame_count
        self._jump_id = 0
        self._handle: Optional[Cancellable] = None

    @property
    def jump_id(self) -> int:
        return self._jump_id

    @property
    def active(self) -> bool:
        """True while a timer is scheduled."""
        return self._handle is not None

    def start(self, skier: Skier) -> Optional[int]:
        """
        Launch the skier. Restarts from frame 1 if already airborne.

        Returns:
            The new jump id, or None if the timer could not be scheduled
            (the skier is left on the ground)
        """
        self.cancel()
        try:
            self._schedule(self._jump_id)
        except RuntimeError as e:
            skier.is_jumping = False
            skier.jump_frame = None
            logger.warning(f"Jump not started, no timer available: {e}")
            return None

        skier.is_jumping = True
        skier.jump_frame = 1
        logger.info(f"Jump {self._jump_id} started")
        return self._jump_id

    def advance(self, skier: Skier, jump_id: int) -> bool:
        """
        Apply one timer firing.

        Returns:
            True if the skier changed, False for a stale or foreign firing
        """
        if jump_id != self._jump_id or not skier.is_jumping:
            return False

        if skier.jump_frame is not None and skier.jump_frame < self.frame_count:
            skier.jump_frame += 1
            logger.debug(f"Jump {jump_id} frame {skier.jump_frame}")
            return True

        skier.is_jumping = False
        skier.jump_frame = None
        self.cancel()
        logger.info(f"Jump {jump_id} landed")
        return True

    def cancel(self) -> None:
        """Stop the timer. Firings already queued become stale."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._jump_id += 1

    def _schedule(self, jump_id: int) -> None:
        self._handle = self._scheduler.call_later(
            self.interval_ms, lambda: self._fire(jump_id)
        )

    def _fire(self, jump_id: int) -> None:
        if jump_id != self._jump_id:
            return
        # Re-arm first so the cadence does not depend on tick timing
        self._schedule(jump_id)
        self._on_fire(jump_id)
