"""Data types shared by the slope simulation."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from downhill.core.errors import MissingSpriteDimensions

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    """Skier facing. LEFT..RIGHT are ordered so turning is +/- 1."""

    CRASHED = 0
    LEFT = 1
    DOWN_LEFT = 2
    DOWN = 3
    DOWN_RIGHT = 4
    RIGHT = 5
    UP = 6  # movement impulse only, never a resting state

    @property
    def is_downhill(self) -> bool:
        return self in DOWNHILL


DOWNHILL = frozenset({Direction.DOWN_LEFT, Direction.DOWN, Direction.DOWN_RIGHT})


class Command(Enum):
    """Decoded direction command delivered by the input layer."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class SpriteId(Enum):
    """Every image the renderer may be asked to draw."""

    SKIER_CRASH = "skier_crash"
    SKIER_LEFT = "skier_left"
    SKIER_LEFT_DOWN = "skier_left_down"
    SKIER_DOWN = "skier_down"
    SKIER_RIGHT_DOWN = "skier_right_down"
    SKIER_RIGHT = "skier_right"
    SKIER_JUMP_1 = "skier_jump_1"
    SKIER_JUMP_2 = "skier_jump_2"
    SKIER_JUMP_3 = "skier_jump_3"
    SKIER_JUMP_4 = "skier_jump_4"
    SKIER_JUMP_5 = "skier_jump_5"
    TREE = "tree_1"
    TREE_CLUSTER = "tree_cluster"
    ROCK_1 = "rock_1"
    ROCK_2 = "rock_2"
    JUMP_RAMP = "jump_ramp"

    @classmethod
    def jump(cls, frame: int) -> "SpriteId":
        return _JUMP_SPRITES[frame - 1]


_JUMP_SPRITES = (
    SpriteId.SKIER_JUMP_1,
    SpriteId.SKIER_JUMP_2,
    SpriteId.SKIER_JUMP_3,
    SpriteId.SKIER_JUMP_4,
    SpriteId.SKIER_JUMP_5,
)

_SKIER_SPRITES: Dict[Direction, SpriteId] = {
    Direction.CRASHED: SpriteId.SKIER_CRASH,
    Direction.LEFT: SpriteId.SKIER_LEFT,
    Direction.DOWN_LEFT: SpriteId.SKIER_LEFT_DOWN,
    Direction.DOWN: SpriteId.SKIER_DOWN,
    Direction.DOWN_RIGHT: SpriteId.SKIER_RIGHT_DOWN,
    Direction.RIGHT: SpriteId.SKIER_RIGHT,
}


class ObstacleType(Enum):
    TREE = "tree"
    TREE_CLUSTER = "tree_cluster"
    ROCK_1 = "rock_1"
    ROCK_2 = "rock_2"
    JUMP_RAMP = "jump_ramp"

    @property
    def sprite(self) -> SpriteId:
        return _OBSTACLE_SPRITES[self]


_OBSTACLE_SPRITES: Dict[ObstacleType, SpriteId] = {
    ObstacleType.TREE: SpriteId.TREE,
    ObstacleType.TREE_CLUSTER: SpriteId.TREE_CLUSTER,
    ObstacleType.ROCK_1: SpriteId.ROCK_1,
    ObstacleType.ROCK_2: SpriteId.ROCK_2,
    ObstacleType.JUMP_RAMP: SpriteId.JUMP_RAMP,
}


@dataclass(frozen=True)
class Obstacle:
    """An obstacle centered at (x, y) in map coordinates."""
    x: float
    y: float
    type: ObstacleType

    @property
    def sprite(self) -> SpriteId:
        return self.type.sprite


@dataclass
class Skier:
    """The single player-controlled skier. Mutated every tick."""
    direction: Direction = Direction.RIGHT
    map_x: float = 0
    map_y: float = 0
    speed: int = 8
    is_jumping: bool = False
    jump_frame: Optional[int] = None
    points: int = 0
    high_score: int = 0
    all_time_high_score: int = 0
    movement_credit: int = 0

    @property
    def is_crashed(self) -> bool:
        return self.direction == Direction.CRASHED

    @property
    def sprite(self) -> SpriteId:
        """Jump frame wins over facing while airborne."""
        if self.jump_frame:
            return SpriteId.jump(self.jump_frame)
        return _SKIER_SPRITES[self.direction]


@dataclass(frozen=True)
class Rect:
    left: float
    right: float
    top: float
    bottom: float


@dataclass(frozen=True)
class PlacedSprite:
    """A sprite at a screen position (top-left corner)."""
    sprite: SpriteId
    x: float
    y: float


@dataclass
class Frame:
    """Everything a renderer needs for one tick."""
    skier: Optional[PlacedSprite]
    obstacles: List[PlacedSprite] = field(default_factory=list)
    points: int = 0
    high_score: int = 0
    all_time_high_score: int = 0
    paused: bool = False
    crashed: bool = False


# Half-size dimensions of the stock artwork, as the asset loader reports them
DEFAULT_SPRITE_SIZES: Dict[SpriteId, Tuple[int, int]] = {
    SpriteId.SKIER_CRASH: (26, 17),
    SpriteId.SKIER_LEFT: (17, 17),
    SpriteId.SKIER_LEFT_DOWN: (12, 19),
    SpriteId.SKIER_DOWN: (9, 20),
    SpriteId.SKIER_RIGHT_DOWN: (12, 19),
    SpriteId.SKIER_RIGHT: (17, 17),
    SpriteId.SKIER_JUMP_1: (16, 21),
    SpriteId.SKIER_JUMP_2: (16, 22),
    SpriteId.SKIER_JUMP_3: (19, 17),
    SpriteId.SKIER_JUMP_4: (16, 20),
    SpriteId.SKIER_JUMP_5: (16, 19),
    SpriteId.TREE: (24, 34),
    SpriteId.TREE_CLUSTER: (45, 48),
    SpriteId.ROCK_1: (23, 15),
    SpriteId.ROCK_2: (28, 16),
    SpriteId.JUMP_RAMP: (32, 11),
}


class SpriteSizes:
    """
    Width/height lookup filled in by the asset layer.

    A sprite without dimensions is not drawable or collidable yet; lookups
    raise MissingSpriteDimensions so callers can skip it.
    """

    def __init__(self, sizes: Optional[Dict[SpriteId, Tuple[int, int]]] = None):
        self._sizes: Dict[SpriteId, Tuple[int, int]] = dict(
            DEFAULT_SPRITE_SIZES if sizes is None else sizes
        )
        self._warned: set[SpriteId] = set()

    def set(self, sprite: SpriteId, width: int, height: int) -> None:
        self._sizes[sprite] = (width, height)
        self._warned.discard(sprite)

    def remove(self, sprite: SpriteId) -> None:
        self._sizes.pop(sprite, None)

    def has(self, sprite: SpriteId) -> bool:
        return sprite in self._sizes

    def size_of(self, sprite: SpriteId) -> Tuple[int, int]:
        try:
            return self._sizes[sprite]
        except KeyError:
            if sprite not in self._warned:
                self._warned.add(sprite)
                logger.warning(f"Sprite {sprite.value} has no dimensions, skipping it")
            raise MissingSpriteDimensions(sprite) from None

    def sprites(self) -> Iterable[SpriteId]:
        return self._sizes.keys()
