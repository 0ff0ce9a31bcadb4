"""
Keyboard decoding for the simulator.

Raw pygame key codes never reach the simulation; they are turned into
queued events here.
"""

from typing import Optional

import pygame

from downhill.core.events import Event, pause_event, reset_event, steer_event
from downhill.slope.models import Command

KEY_COMMANDS: dict[int, Command] = {
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_UP: Command.UP,
    pygame.K_DOWN: Command.DOWN,
}

RESET_KEYS = frozenset({pygame.K_r, pygame.K_F2})
PAUSE_KEYS = frozenset({pygame.K_p, pygame.K_SPACE})
QUIT_KEYS = frozenset({pygame.K_ESCAPE, pygame.K_q})


def decode_key(key: int) -> Optional[Event]:
    """Map a key press to a simulation event, or None if it means nothing."""
    command = KEY_COMMANDS.get(key)
    if command is not None:
        return steer_event(command)
    if key in RESET_KEYS:
        return reset_event()
    if key in PAUSE_KEYS:
        return pause_event()
    return None


def is_quit_key(key: int) -> bool:
    return key in QUIT_KEYS
