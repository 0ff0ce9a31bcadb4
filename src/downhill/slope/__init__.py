"""Slope simulation: skier, obstacles, collisions, jumps and scoring."""

from .models import Command, Direction, Frame, Obstacle, ObstacleType, Skier, SpriteId, SpriteSizes
from .simulation import Simulation

__all__ = [
    "Command",
    "Direction",
    "Frame",
    "Obstacle",
    "ObstacleType",
    "Simulation",
    "Skier",
    "SpriteId",
    "SpriteSizes",
]
