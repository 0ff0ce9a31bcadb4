import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from downhill.main import build_parser, main, run_headless
from downhill.settings import DisplaySettings, Settings, SlopeSettings, get_settings
from downhill.slope.models import Command, Direction


class TestHeadless(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.settings = Settings(
            _env_file=None,
            seed=5,
            highscore_path=self.dir / "highscore.json",
            display=DisplaySettings(width=800, height=600),
            # Empty opening slope; spawns stay below the viewport for 30 ticks
            slope=SlopeSettings(initial_multiplier_low=0, initial_multiplier_high=0),
        )

    def tearDown(self):
        self._tmp.cleanup()

    def test_given_downhill_run_then_points_and_all_time_score_saved(self):
        sim = run_headless(self.settings, ticks=30, command=Command.DOWN)
        self.assertEqual(sim.ticks, 30)
        self.assertEqual(sim.skier.map_y, 240)
        self.assertEqual(sim.skier.points, 10)
        data = json.loads((self.dir / "highscore.json").read_text())
        self.assertEqual(data, {"allTimeHighScore": 10})

        again = run_headless(self.settings, ticks=3, command=Command.DOWN)
        self.assertEqual(again.skier.all_time_high_score, 10)
        self.assertEqual(again.skier.points, 1)

    def test_given_left_command_then_skier_turns_from_right(self):
        sim = run_headless(self.settings, ticks=1, command=Command.LEFT)
        self.assertEqual(sim.skier.direction, Direction.DOWN_RIGHT)

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        self.assertFalse(args.headless)
        self.assertEqual(args.command, "down")
        self.assertIsNone(args.seed)


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level
        get_settings.cache_clear()

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            if handler not in self._handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(self._level)
        get_settings.cache_clear()
        self._tmp.cleanup()

    def test_given_headless_flags_then_runs_and_logs_to_file(self):
        log_file = self.dir / "downhill.log"
        env = {"DOWNHILL_HIGHSCORE_PATH": str(self.dir / "highscore.json")}
        with mock.patch.dict(os.environ, env):
            code = main([
                "--headless", "--ticks", "5", "--seed", "3",
                "--log-file", str(log_file),
            ])
        self.assertEqual(code, 0)
        self.assertIn("Headless run finished: 5 ticks", log_file.read_text())


if __name__ == "__main__":
    unittest.main()
