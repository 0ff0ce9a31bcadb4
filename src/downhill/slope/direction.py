"""
Skier facing and movement.

Commands turn the skier one step at a time along LEFT(1)..RIGHT(5). Pressing
toward a side the skier already faces sidesteps instead of turning. Every tick
the skier then slides according to its resting direction.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import math

from downhill.slope.models import Command, Direction, Skier

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round half up; round() would go half-to-even."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class Movement:
    """Outcome of a command or tick: where the skier went, if anywhere."""
    spawn_direction: Optional[Direction] = None
    award_points: bool = False

    @property
    def moved(self) -> bool:
        return self.spawn_direction is not None


NO_MOVEMENT = Movement()


class DirectionStateMachine:
    """Pure transitions on a Skier; spawning is left to the caller."""

    def __init__(self, movement_ratio: float = 1.4142) -> None:
        self.movement_ratio = movement_ratio

    def apply_command(self, skier: Skier, command: Command) -> Movement:
        if command is Command.LEFT:
            return self._turn_left(skier)
        if command is Command.RIGHT:
            return self._turn_right(skier)
        if command is Command.UP:
            return self._climb(skier)
        if command is Command.DOWN:
            skier.direction = Direction.DOWN
            return NO_MOVEMENT
        raise ValueError(f"Unknown command: {command!r}")

    def _turn_left(self, skier: Skier) -> Movement:
        if skier.direction == Direction.LEFT:
            skier.map_x -= skier.speed
            return Movement(spawn_direction=Direction.LEFT)
        if skier.direction == Direction.CRASHED:
            skier.direction = Direction.DOWN_LEFT
        else:
            skier.direction = Direction(max(Direction.LEFT, skier.direction - 1))
        return NO_MOVEMENT

    def _turn_right(self, skier: Skier) -> Movement:
        if skier.direction == Direction.RIGHT:
            skier.map_x += skier.speed
            return Movement(spawn_direction=Direction.RIGHT)
        if skier.direction == Direction.CRASHED:
            skier.direction = Direction.DOWN_RIGHT
        else:
            skier.direction = Direction(min(Direction.RIGHT, skier.direction + 1))
        return NO_MOVEMENT

    def _climb(self, skier: Skier) -> Movement:
        # Only possible while standing sideways to the fall line
        if skier.direction not in (Direction.LEFT, Direction.RIGHT):
            return NO_MOVEMENT
        skier.map_y -= skier.speed
        return Movement(spawn_direction=Direction.UP)

    def integrate(self, skier: Skier) -> Movement:
        """Per-tick slide for the resting direction."""
        direction = skier.direction
        if direction == Direction.DOWN_LEFT:
            step = round_half_up(skier.speed / self.movement_ratio)
            skier.map_x -= step
            skier.map_y += step
        elif direction == Direction.DOWN:
            skier.map_y += skier.speed
        elif direction == Direction.DOWN_RIGHT:
            # Not rounded, unlike DOWN_LEFT
            step = skier.speed / self.movement_ratio
            skier.map_x += step
            skier.map_y += step
        else:
            return NO_MOVEMENT
        return Movement(spawn_direction=direction, award_points=True)
