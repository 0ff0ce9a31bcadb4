"""
Obstacle field: procedural placement, spawning and viewport culling.

Positions are obstacle centers in map coordinates. The viewport in map
coordinates spans [map_x, map_x + width] x [map_y, map_y + height].
"""

from typing import Iterator, List, Optional, Sequence, Tuple
import logging
import math
import random

from downhill.core.errors import InvalidPlacementRegion, MissingSpriteDimensions
from downhill.settings import SlopeSettings
from downhill.slope.models import Direction, Obstacle, ObstacleType, PlacedSprite, SpriteSizes

logger = logging.getLogger(__name__)

Region = Tuple[float, float, float, float]  # min_x, max_x, min_y, max_y


class ObstacleField:
    """Owns every obstacle currently on the slope."""

    def __init__(
        self,
        width: float,
        height: float,
        sprites: SpriteSizes,
        settings: Optional[SlopeSettings] = None,
        rng: Optional[random.Random] = None,
        types: Sequence[ObstacleType] = tuple(ObstacleType),
    ) -> None:
        self.width = width
        self.height = height
        self.sprites = sprites
        self.settings = settings or SlopeSettings()
        self.types = tuple(types)
        self._rng = rng or random.Random()
        self.obstacles: List[Obstacle] = []

    @property
    def buffer(self) -> int:
        return self.settings.placement_buffer

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    def clear(self) -> None:
        self.obstacles = []

    def add(self, obstacle: Obstacle) -> None:
        """Insert an obstacle as-is, without a spacing check."""
        self.obstacles.append(obstacle)

    # Placement

    def populate(self) -> int:
        """Scatter the opening obstacles below the skier. Returns how many were placed."""
        low = self.settings.initial_multiplier_low
        high = self.settings.initial_multiplier_high
        count = math.ceil(self.width / self.height) * self._rng.randint(low, high)

        min_x = -self.buffer
        max_x = self.width + self.buffer
        min_y = self.height / 2 + self.settings.placement_constant * 2
        max_y = self.height + self.buffer

        placed = 0
        for _ in range(count):
            if self.place_random_obstacle(min_x, max_x, min_y, max_y) is not None:
                placed += 1

        self.sort_by_y()
        logger.info(f"Placed {placed}/{count} initial obstacles")
        return placed

    def sort_by_y(self) -> None:
        self.obstacles.sort(key=lambda obstacle: obstacle.y)

    def place_random_obstacle(
        self, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> Optional[Obstacle]:
        """
        Place an obstacle of a random type somewhere open in the rectangle.

        Returns:
            The new obstacle, or None if no open spot was found in time

        Raises:
            InvalidPlacementRegion: The rectangle is inverted or empty
        """
        obstacle_type = self._rng.choice(self.types)
        position = self.find_open_position(min_x, max_x, min_y, max_y)
        if position is None:
            return None

        obstacle = Obstacle(position[0], position[1], obstacle_type)
        self.obstacles.append(obstacle)
        return obstacle

    def find_open_position(
        self, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> Optional[Tuple[float, float]]:
        """Rejection-sample a point not within the buffer of any obstacle center."""
        if min_x >= max_x or min_y >= max_y:
            raise InvalidPlacementRegion(min_x, max_x, min_y, max_y)

        for _ in range(self.settings.max_placement_attempts):
            x = self._random_between(min_x, max_x)
            y = self._random_between(min_y, max_y)
            if not self.is_crowded(x, y):
                return x, y

        logger.warning(
            f"No open position in x=[{min_x}, {max_x}] y=[{min_y}, {max_y}] "
            f"after {self.settings.max_placement_attempts} attempts"
        )
        return None

    def is_crowded(self, x: float, y: float) -> bool:
        buffer = self.buffer
        return any(
            obstacle.x - buffer < x < obstacle.x + buffer
            and obstacle.y - buffer < y < obstacle.y + buffer
            for obstacle in self.obstacles
        )

    def _random_between(self, low: float, high: float) -> float:
        # Whole-number bounds give whole-number positions
        if float(low).is_integer() and float(high).is_integer():
            return self._rng.randint(int(low), int(high))
        return self._rng.uniform(low, high)

    # Spawning

    def spawn_regions(self, direction: Direction, map_x: float, map_y: float) -> List[Region]:
        """Strips just outside the viewport edges the skier is heading toward."""
        buffer = self.buffer
        left = map_x
        right = map_x + self.width
        top = map_y
        bottom = map_y + self.height

        left_strip = (left - buffer, left, top, bottom)
        right_strip = (right, right + buffer, top, bottom)
        bottom_strip = (left, right, bottom, bottom + buffer)
        top_strip = (left, right, top - buffer, top)

        return {
            Direction.LEFT: [left_strip],
            Direction.DOWN_LEFT: [left_strip, bottom_strip],
            Direction.DOWN: [bottom_strip],
            Direction.DOWN_RIGHT: [right_strip, bottom_strip],
            Direction.RIGHT: [right_strip],
            Direction.UP: [top_strip],
        }.get(direction, [])

    def maybe_spawn(self, direction: Direction, map_x: float, map_y: float) -> List[Obstacle]:
        """Roll the spawn die after a movement; place new obstacles on a hit."""
        constant = self.settings.placement_constant
        if self._rng.randint(1, constant) != constant:
            return []

        spawned: List[Obstacle] = []
        for region in self.spawn_regions(direction, map_x, map_y):
            try:
                obstacle = self.place_random_obstacle(*region)
            except InvalidPlacementRegion as e:
                logger.warning(f"Skipping spawn: {e}")
                continue
            if obstacle is not None:
                spawned.append(obstacle)
                logger.debug(f"Spawned {obstacle.type.value} at ({obstacle.x}, {obstacle.y})")
        return spawned

    # Viewport

    def cull(self, map_x: float, map_y: float) -> List[PlacedSprite]:
        """
        Drop obstacles that have left the viewport and return the rest.

        Obstacles whose sprite size is unknown are culled on their center
        and never returned.
        """
        visible: List[PlacedSprite] = []
        kept: List[Obstacle] = []

        for obstacle in self.obstacles:
            try:
                width, height = self.sprites.size_of(obstacle.sprite)
            except MissingSpriteDimensions:
                if not self._off_screen(obstacle.x - map_x, obstacle.y - map_y):
                    kept.append(obstacle)
                continue

            x = obstacle.x - map_x - width / 2
            y = obstacle.y - map_y - height / 2
            if self._off_screen(x, y):
                continue

            kept.append(obstacle)
            visible.append(PlacedSprite(obstacle.sprite, x, y))

        removed = len(self.obstacles) - len(kept)
        if removed:
            logger.debug(f"Culled {removed} obstacles, {len(kept)} remain")
        self.obstacles = kept
        return visible

    def _off_screen(self, x: float, y: float) -> bool:
        buffer = self.buffer
        return (x < -2 * buffer or x > self.width + buffer
                or y < -2 * buffer or y > self.height + buffer)
