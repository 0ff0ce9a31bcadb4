"""
Main entry point for downhill.

Runs the pygame window by default, or a fixed number of ticks on a
virtual clock with --headless.
"""

import argparse
import asyncio
import logging
import random
from pathlib import Path

from dotenv import load_dotenv

from downhill.settings import Settings, get_settings
from downhill.slope.models import Command
from downhill.slope.simulation import Simulation
from downhill.slope.timers import ManualScheduler
from downhill.storage.highscore import JsonHighScoreStore

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console and file logging."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Reduce noise
    logging.getLogger("downhill.graphics").setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="downhill", description="Top-down skiing arcade game")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--ticks", type=int, default=600, help="ticks to run when headless")
    parser.add_argument("--seed", type=int, default=None, help="obstacle RNG seed")
    parser.add_argument(
        "--command",
        choices=[c.value for c in Command],
        default=Command.DOWN.value,
        help="direction command applied before a headless run",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", type=Path, default=Path("downhill.log"))
    return parser


def run_headless(settings: Settings, ticks: int, command: Command) -> Simulation:
    """Run `ticks` frames on a virtual clock and return the finished simulation."""
    scheduler = ManualScheduler()
    simulation = Simulation(
        settings=settings,
        store=JsonHighScoreStore(settings.highscore_path),
        scheduler=scheduler,
        rng=random.Random(settings.seed),
    )
    frame_ms = 1000.0 / settings.display.fps

    simulation.start()
    simulation.command(command)
    for _ in range(ticks):
        scheduler.advance(frame_ms)
        simulation.step()

    skier = simulation.skier
    logger.info(
        f"Headless run finished: {ticks} ticks, points={skier.points}, "
        f"high={skier.high_score}, all-time={skier.all_time_high_score}, "
        f"position=({skier.map_x:.1f}, {skier.map_y:.1f}), direction={skier.direction.name}"
    )
    simulation.close()
    return simulation


async def run_window(settings: Settings) -> None:
    from downhill.simulator.window import SimulatorWindow

    simulation = Simulation(
        settings=settings,
        store=JsonHighScoreStore(settings.highscore_path),
    )
    await SimulatorWindow(simulation).run()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.seed is not None:
        settings = settings.model_copy(update={"seed": args.seed})

    setup_logging(debug=args.debug or settings.debug, log_file=args.log_file)

    try:
        if args.headless:
            run_headless(settings, args.ticks, Command(args.command))
        else:
            asyncio.run(run_window(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
