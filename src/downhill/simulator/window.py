"""
Desktop window using pygame.

Keyboard Mapping:
    ARROWS: Steer (left/right turn, down points downhill, up climbs)
    P / SPACE: Pause
    R: Reset
    ESC / Q: Exit
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from downhill.graphics.renderer import SlopeRenderer
from downhill.simulator.input import decode_key, is_quit_key
from downhill.slope.models import Frame
from downhill.slope.simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    title: str = "Downhill"
    fps: int = 60
    hud_color: tuple[int, int, int] = (30, 40, 70)
    hud_font_size: int = 18


class SimulatorWindow:
    """Runs the simulation loop and draws each frame."""

    def __init__(self, simulation: Simulation, config: WindowConfig | None = None) -> None:
        self.simulation = simulation
        self.config = config or WindowConfig(fps=simulation.settings.display.fps)
        display = simulation.settings.display
        self.renderer = SlopeRenderer(
            display.width, display.height, simulation.sprites, display.pixel_ratio
        )

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)

        height, width = self.renderer.buffer.shape[:2]
        self._screen = pygame.display.set_mode((width, height), pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, round(self.config.hud_font_size * self.renderer.pixel_ratio))
        logger.info(f"Pygame initialized: {width}x{height}")

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                if is_quit_key(event.key):
                    self._running = False
                    continue
                decoded = decode_key(event.key)
                if decoded is not None:
                    self.simulation.event_bus.queue_event(decoded)

    def _render(self, frame: Frame) -> None:
        if not self._screen:
            return

        buffer = self.renderer.render(frame)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))
        self._render_hud(frame)
        pygame.display.flip()

    def _render_hud(self, frame: Frame) -> None:
        if not self._font:
            return

        lines = [
            f"Points: {frame.points}",
            f"High Score: {frame.high_score}",
            f"All Time High Score: {frame.all_time_high_score}",
        ]
        if frame.paused:
            lines.append("PAUSED")

        x = 10
        y = 10
        for line in lines:
            text_surface = self._font.render(line, True, self.config.hud_color)
            self._screen.blit(text_surface, (x, y))
            y += text_surface.get_height() + 2

    async def run(self) -> None:
        """Main loop: one simulation tick per displayed frame."""
        self._init_pygame()
        self._running = True
        loop = asyncio.get_running_loop()
        frame_s = 1.0 / self.config.fps
        next_frame = loop.time()

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()
                frame = self.simulation.step()
                self._render(frame)
                self._frame_count += 1

                # Yield to the loop between frames; the jump timer runs on it
                next_frame += frame_s
                await asyncio.sleep(max(0.0, next_frame - loop.time()))
                if self._clock:
                    self._clock.tick()
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        self.simulation.close()
        pygame.quit()
        logger.info(f"Simulator stopped after {self._frame_count} frames")

    def stop(self) -> None:
        self._running = False
