"""Rasterises simulation frames into an RGB numpy buffer.

Sprites are drawn as flat coloured blocks of their reported size; the
pixel ratio scales map units to device pixels.
"""

from typing import Dict, Optional
import logging

from downhill.core.errors import MissingSpriteDimensions
from downhill.graphics.primitives import Buffer, Color, dim, draw_rect, fill, new_buffer
from downhill.slope.models import Frame, PlacedSprite, SpriteId, SpriteSizes

logger = logging.getLogger(__name__)

SNOW: Color = (244, 248, 252)
CRASH_OUTLINE: Color = (220, 40, 40)

SPRITE_COLORS: Dict[SpriteId, Color] = {
    SpriteId.SKIER_CRASH: (200, 60, 60),
    SpriteId.SKIER_LEFT: (40, 60, 160),
    SpriteId.SKIER_LEFT_DOWN: (40, 60, 160),
    SpriteId.SKIER_DOWN: (40, 60, 160),
    SpriteId.SKIER_RIGHT_DOWN: (40, 60, 160),
    SpriteId.SKIER_RIGHT: (40, 60, 160),
    SpriteId.SKIER_JUMP_1: (90, 110, 220),
    SpriteId.SKIER_JUMP_2: (100, 120, 230),
    SpriteId.SKIER_JUMP_3: (110, 130, 240),
    SpriteId.SKIER_JUMP_4: (100, 120, 230),
    SpriteId.SKIER_JUMP_5: (90, 110, 220),
    SpriteId.TREE: (40, 120, 60),
    SpriteId.TREE_CLUSTER: (30, 95, 50),
    SpriteId.ROCK_1: (120, 120, 125),
    SpriteId.ROCK_2: (100, 100, 105),
    SpriteId.JUMP_RAMP: (170, 120, 70),
}


class SlopeRenderer:
    """Draws one Frame at a time into a reusable buffer."""

    def __init__(self, width: int, height: int, sprites: SpriteSizes, pixel_ratio: float = 1.0):
        self.width = width
        self.height = height
        self.sprites = sprites
        self.pixel_ratio = pixel_ratio
        self.buffer: Buffer = new_buffer(
            round(width * pixel_ratio), round(height * pixel_ratio)
        )

    def render(self, frame: Frame) -> Buffer:
        fill(self.buffer, SNOW)

        if frame.skier is not None:
            self._draw(frame.skier)
            if frame.crashed:
                self._draw(frame.skier, outline=CRASH_OUTLINE)
        for placed in frame.obstacles:
            self._draw(placed)

        if frame.paused:
            dim(self.buffer, 0.6)
        return self.buffer

    def _draw(self, placed: PlacedSprite, outline: Optional[Color] = None) -> None:
        try:
            width, height = self.sprites.size_of(placed.sprite)
        except MissingSpriteDimensions:
            return

        ratio = self.pixel_ratio
        x = round(placed.x * ratio)
        y = round(placed.y * ratio)
        w = max(1, round(width * ratio))
        h = max(1, round(height * ratio))

        if outline is not None:
            draw_rect(self.buffer, x - 1, y - 1, w + 2, h + 2, outline, filled=False)
        else:
            draw_rect(self.buffer, x, y, w, h, SPRITE_COLORS.get(placed.sprite, (0, 0, 0)))
