"""
Run-state machine for a downhill session.

States:
    READY: Created, obstacle field not yet populated
    RUNNING: Ticks advance the simulation
    PAUSED: Ticks are suspended, state is kept as-is
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session run states."""
    READY = auto()
    RUNNING = auto()
    PAUSED = auto()


Listener = Callable[[State, State], None]


class StateMachine:
    """
    Manages session run state and transitions.

    Reset is always allowed and lands in RUNNING; every other move must be
    listed in VALID_TRANSITIONS.
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.READY, State.RUNNING),
        (State.RUNNING, State.PAUSED),
        (State.PAUSED, State.RUNNING),
    ]

    def __init__(self, initial_state: State = State.READY) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == State.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state == State.PAUSED

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        self._set(to_state)
        return True

    def toggle_pause(self) -> bool:
        """Flip between RUNNING and PAUSED. Returns True if now paused."""
        if self._state == State.RUNNING:
            self.transition(State.PAUSED)
        elif self._state == State.PAUSED:
            self.transition(State.RUNNING)
        return self.is_paused

    def reset(self) -> None:
        """Return to RUNNING from any state."""
        self._set(State.RUNNING)
        logger.info("StateMachine reset to RUNNING")

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _set(self, to_state: State) -> None:
        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
