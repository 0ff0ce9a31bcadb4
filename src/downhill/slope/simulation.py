"""
The per-tick orchestrator.

One `step()` call is one displayed frame: drain queued input and timer
events, slide the skier, resolve collisions, cull the obstacle field and
hand back a Frame for the renderer.
"""

from dataclasses import replace
from typing import Callable, List, Optional
import logging
import random

from downhill.core.events import Event, EventBus, EventType
from downhill.core.state import State, StateMachine
from downhill.core.errors import MissingSpriteDimensions
from downhill.settings import Settings, get_settings
from downhill.slope.collision import CollisionDetector
from downhill.slope.direction import DirectionStateMachine, Movement
from downhill.slope.jump import JumpSequencer
from downhill.slope.models import (
    Command,
    Direction,
    Frame,
    ObstacleType,
    PlacedSprite,
    Skier,
    SpriteSizes,
)
from downhill.slope.obstacles import ObstacleField
from downhill.slope.score import ScoreTracker
from downhill.slope.timers import AsyncioScheduler, Scheduler
from downhill.storage.highscore import HighScoreStore

logger = logging.getLogger(__name__)


class Simulation:
    """Owns the skier and obstacle field and advances them once per tick."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[HighScoreStore] = None,
        event_bus: Optional[EventBus] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        sprites: Optional[SpriteSizes] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.width = self.settings.display.width
        self.height = self.settings.display.height

        self.event_bus = event_bus or EventBus()
        self.state_machine = StateMachine()
        self.sprites = sprites or SpriteSizes()
        self._rng = rng or random.Random(self.settings.seed)

        slope = self.settings.slope
        scoring = self.settings.scoring
        jump = self.settings.jump

        self.directions = DirectionStateMachine(slope.movement_ratio)
        self.field = ObstacleField(self.width, self.height, self.sprites, slope, self._rng)
        self.collisions = CollisionDetector(
            self.width, self.height, self.sprites, scoring.collision_margin
        )
        self.scores = ScoreTracker(store, scoring.points_cadence)
        self.jumps = JumpSequencer(
            scheduler or AsyncioScheduler(),
            on_fire=self._queue_jump_frame,
            interval_ms=jump.frame_interval_ms,
            frame_count=jump.frame_count,
        )

        self.skier = self._new_skier(high_score=0, all_time=self.scores.load_all_time())
        self.ticks = 0
        self._last_frame: Optional[Frame] = None

        self._unsubscribers: List[Callable[[], None]] = [
            self.event_bus.subscribe(EventType.STEER, self._on_steer),
            self.event_bus.subscribe(EventType.RESET, lambda event: self.reset()),
            self.event_bus.subscribe(EventType.PAUSE, lambda event: self.toggle_pause()),
            self.event_bus.subscribe(EventType.JUMP_FRAME, self._on_jump_frame),
        ]

    def _new_skier(self, high_score: int, all_time: int) -> Skier:
        return Skier(
            direction=Direction.RIGHT,
            speed=self.settings.slope.initial_speed,
            high_score=high_score,
            all_time_high_score=all_time,
        )

    # Lifecycle

    @property
    def state(self) -> State:
        return self.state_machine.state

    def start(self) -> None:
        """Populate the slope and begin accepting ticks."""
        if self.state_machine.state != State.READY:
            return
        self.field.populate()
        self.state_machine.transition(State.RUNNING)
        logger.info(f"Simulation started on a {self.width}x{self.height} viewport")

    def reset(self) -> None:
        """Fresh run: new skier and slope, high scores carried over."""
        self.jumps.cancel()
        self.skier = self._new_skier(
            high_score=self.skier.high_score,
            all_time=self.skier.all_time_high_score,
        )
        self.field.clear()
        self.field.populate()
        self._last_frame = None
        self.state_machine.reset()
        logger.info("Simulation reset")

    def toggle_pause(self) -> bool:
        """Suspend or resume ticks. Returns True if now paused."""
        if self.state_machine.state == State.READY:
            return False
        return self.state_machine.toggle_pause()

    def close(self) -> None:
        """Cancel the jump timer and detach from the event bus."""
        self.jumps.cancel()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # Input

    def command(self, command: Command) -> None:
        """Apply a decoded direction command right away."""
        if self.state_machine.state != State.RUNNING:
            return
        movement = self.directions.apply_command(self.skier, command)
        self._after_movement(movement)

    def _on_steer(self, event: Event) -> None:
        command = event.data.get("command")
        if not isinstance(command, Command):
            logger.warning(f"Ignoring steer event without a command: {event.data}")
            return
        self.command(command)

    def _on_jump_frame(self, event: Event) -> None:
        jump_id = event.data.get("jump_id", -1)
        if self.jumps.advance(self.skier, jump_id) and not self.skier.is_jumping:
            self.event_bus.emit(Event(EventType.JUMP_ENDED, source="simulation"))

    def _queue_jump_frame(self, jump_id: int) -> None:
        self.event_bus.queue_event(
            Event(EventType.JUMP_FRAME, data={"jump_id": jump_id}, source="jump_timer")
        )

    # Tick

    def step(self) -> Frame:
        """Advance one tick and describe the result."""
        if self.state_machine.state == State.READY:
            self.start()

        self.event_bus.dispatch_pending()

        if self.state_machine.state != State.RUNNING:
            return self._paused_frame()

        movement = self.directions.integrate(self.skier)
        self._after_movement(movement)
        self._resolve_collision()

        visible = self.field.cull(self.skier.map_x, self.skier.map_y)
        frame = self._build_frame(visible)
        self._last_frame = frame
        self.ticks += 1
        return frame

    def _after_movement(self, movement: Movement) -> None:
        if not movement.moved:
            return

        skier = self.skier
        self.field.maybe_spawn(movement.spawn_direction, skier.map_x, skier.map_y)

        if not movement.award_points:
            return
        previous_best = skier.all_time_high_score
        if self.scores.record_movement(skier):
            self.event_bus.emit(Event(
                EventType.POINTS_AWARDED, data={"points": skier.points}, source="simulation"
            ))
            if skier.all_time_high_score > previous_best:
                self.event_bus.emit(Event(
                    EventType.HIGH_SCORE,
                    data={"score": skier.all_time_high_score},
                    source="simulation",
                ))

    def _resolve_collision(self) -> None:
        skier = self.skier
        hit = self.collisions.find_collision(skier, self.field)
        if hit is None:
            return

        if hit.type is ObstacleType.JUMP_RAMP:
            # Crossing a ramp sideways does nothing
            if skier.direction.is_downhill and self.jumps.start(skier) is not None:
                self.event_bus.emit(Event(EventType.JUMP_STARTED, source="simulation"))
        elif not skier.is_jumping:
            already_down = skier.is_crashed
            self.scores.crash(skier)
            if not already_down:
                logger.info(f"Skier crashed into {hit.type.value} at ({hit.x}, {hit.y})")
                self.event_bus.emit(Event(
                    EventType.SKIER_CRASHED,
                    data={"obstacle": hit.type},
                    source="simulation",
                ))

    # Frames

    def _build_frame(self, visible: List[PlacedSprite]) -> Frame:
        skier = self.skier
        return Frame(
            skier=self._place_skier(),
            obstacles=visible,
            points=skier.points,
            high_score=skier.high_score,
            all_time_high_score=skier.all_time_high_score,
            paused=False,
            crashed=skier.is_crashed,
        )

    def _place_skier(self) -> Optional[PlacedSprite]:
        sprite = self.skier.sprite
        try:
            width, height = self.sprites.size_of(sprite)
        except MissingSpriteDimensions:
            return None
        return PlacedSprite(sprite, (self.width - width) / 2, (self.height - height) / 2)

    def _paused_frame(self) -> Frame:
        if self._last_frame is None:
            self._last_frame = self._build_frame([])
        return replace(self._last_frame, paused=True)
