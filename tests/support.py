"""Shared builders for the test suite."""

import random
from pathlib import Path

from downhill.settings import DisplaySettings, Settings
from downhill.slope.models import Direction, Obstacle, ObstacleType, SpriteSizes
from downhill.slope.simulation import Simulation
from downhill.slope.timers import ManualScheduler

WIDTH = 800
HEIGHT = 600


class ScriptedRandom(random.Random):
    """Random whose next randint()/choice() results can be fixed in advance."""

    def __init__(self, ints=(), choices=(), seed=0):
        super().__init__(seed)
        self.ints = list(ints)
        self.choices = list(choices)

    def randint(self, a, b):
        if self.ints:
            value = self.ints.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)

    def choice(self, seq):
        if self.choices:
            return self.choices.pop(0)
        return super().choice(seq)


def make_settings(tmp_path=None, **display) -> Settings:
    display.setdefault("width", WIDTH)
    display.setdefault("height", HEIGHT)
    path = Path(tmp_path or ".") / "highscore.json"
    return Settings(display=DisplaySettings(**display), highscore_path=path)


def make_simulation(store=None, rng=None, sprites=None, settings=None):
    """A started simulation on an empty slope driven by a manual clock."""
    scheduler = ManualScheduler()
    sim = Simulation(
        settings=settings or make_settings(),
        store=store,
        scheduler=scheduler,
        rng=rng or ScriptedRandom(seed=1234),
        sprites=sprites or SpriteSizes(),
    )
    sim.start()
    sim.field.clear()
    return sim, scheduler


def obstacle_under_feet(sim, obstacle_type: ObstacleType, map_x: float, map_y: float) -> Obstacle:
    """An obstacle whose bottom edge lines up with the skier's feet at (map_x, map_y)."""
    skier_h = sim.sprites.size_of(sim.skier.sprite)[1]
    obstacle_h = sim.sprites.size_of(obstacle_type.sprite)[1]
    x = map_x + sim.width / 2
    y = map_y + skier_h + sim.height / 2 - obstacle_h
    return Obstacle(x, y, obstacle_type)


def head_downhill(sim) -> None:
    sim.skier.direction = Direction.DOWN
