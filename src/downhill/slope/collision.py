"""Skier/obstacle overlap test.

Both rectangles only keep a thin slab at their bottom edge, so the skier
collides feet-first rather than with the top of a tree.
"""

from typing import Iterable, Optional
import logging

from downhill.core.errors import MissingSpriteDimensions
from downhill.slope.models import Obstacle, Rect, Skier, SpriteSizes

logger = logging.getLogger(__name__)


def overlaps(skier: Rect, obstacle: Rect) -> bool:
    return not (obstacle.left > skier.right
                or obstacle.right < skier.left
                or obstacle.top > skier.bottom
                or obstacle.bottom < skier.top)


class CollisionDetector:

    def __init__(self, width: float, height: float, sprites: SpriteSizes, margin: int = 5):
        self.width = width
        self.height = height
        self.sprites = sprites
        self.margin = margin

    def skier_rect(self, skier: Skier) -> Rect:
        """Map-space rectangle of the on-screen skier. May raise MissingSpriteDimensions."""
        width, height = self.sprites.size_of(skier.sprite)
        left = skier.map_x + self.width / 2
        bottom = skier.map_y + height + self.height / 2
        return Rect(left=left, right=left + width, top=bottom - self.margin, bottom=bottom)

    def obstacle_rect(self, obstacle: Obstacle) -> Rect:
        width, height = self.sprites.size_of(obstacle.sprite)
        bottom = obstacle.y + height
        return Rect(left=obstacle.x, right=obstacle.x + width, top=bottom - self.margin, bottom=bottom)

    def find_collision(self, skier: Skier, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
        """First obstacle, in field order, touching the skier's feet."""
        try:
            skier_rect = self.skier_rect(skier)
        except MissingSpriteDimensions:
            return None

        for obstacle in obstacles:
            try:
                rect = self.obstacle_rect(obstacle)
            except MissingSpriteDimensions:
                continue
            if overlaps(skier_rect, rect):
                return obstacle
        return None
