import asyncio
import unittest

from downhill.slope.jump import JumpSequencer
from downhill.slope.models import Direction, Skier, SpriteId
from downhill.slope.timers import AsyncioScheduler, ManualScheduler, Scheduler


class TestJumpSequencer(unittest.TestCase):
    def setUp(self):
        self.scheduler = ManualScheduler()
        self.fired = []
        self.jumps = JumpSequencer(self.scheduler, on_fire=self.fired.append)
        self.skier = Skier(direction=Direction.DOWN)

    def test_given_start_then_airborne_on_first_frame(self):
        jump_id = self.jumps.start(self.skier)
        self.assertTrue(self.skier.is_jumping)
        self.assertEqual(self.skier.jump_frame, 1)
        self.assertEqual(self.skier.sprite, SpriteId.SKIER_JUMP_1)
        self.assertTrue(self.jumps.active)
        self.assertEqual(self.jumps.jump_id, jump_id)

    def test_given_timer_not_due_then_nothing_fires(self):
        self.jumps.start(self.skier)
        self.assertEqual(self.scheduler.advance(249), 0)
        self.assertEqual(self.fired, [])

    def test_given_full_sequence_then_frames_advance_and_skier_lands(self):
        jump_id = self.jumps.start(self.skier)
        frames = [self.skier.jump_frame]
        for _ in range(4):
            self.scheduler.advance(250)
            self.assertTrue(self.jumps.advance(self.skier, self.fired.pop()))
            frames.append(self.skier.jump_frame)
        self.assertEqual(frames, [1, 2, 3, 4, 5])
        self.assertEqual(self.skier.sprite, SpriteId.SKIER_JUMP_5)

        self.scheduler.advance(250)
        self.assertEqual(self.fired, [jump_id])
        self.assertTrue(self.jumps.advance(self.skier, self.fired.pop()))
        self.assertFalse(self.skier.is_jumping)
        self.assertIsNone(self.skier.jump_frame)
        self.assertEqual(self.skier.sprite, SpriteId.SKIER_DOWN)
        self.assertFalse(self.jumps.active)

        # Timer is gone for good
        self.assertEqual(self.scheduler.advance(10_000), 0)

    def test_given_cancel_then_queued_firing_is_stale(self):
        jump_id = self.jumps.start(self.skier)
        self.scheduler.advance(250)
        self.jumps.cancel()
        self.assertFalse(self.jumps.advance(self.skier, jump_id))
        self.assertEqual(self.skier.jump_frame, 1)
        self.assertEqual(self.scheduler.pending, 0)

    def test_given_restart_mid_air_then_back_to_first_frame(self):
        first = self.jumps.start(self.skier)
        self.scheduler.advance(250)
        self.jumps.advance(self.skier, self.fired.pop())
        self.assertEqual(self.skier.jump_frame, 2)

        second = self.jumps.start(self.skier)
        self.assertNotEqual(first, second)
        self.assertEqual(self.skier.jump_frame, 1)
        self.assertFalse(self.jumps.advance(self.skier, first))
        self.assertEqual(self.scheduler.pending, 1)

    def test_given_grounded_skier_then_firing_ignored(self):
        jump_id = self.jumps.start(self.skier)
        self.skier.is_jumping = False
        self.assertFalse(self.jumps.advance(self.skier, jump_id))


class TestJumpOnEventLoop(unittest.IsolatedAsyncioTestCase):
    async def test_given_event_loop_timer_then_exactly_five_firings(self):
        skier = Skier(direction=Direction.DOWN)
        fired = []
        landed = asyncio.Event()

        def on_fire(jump_id):
            fired.append(jump_id)
            jumps.advance(skier, jump_id)
            if not skier.is_jumping:
                landed.set()

        jumps = JumpSequencer(AsyncioScheduler(), on_fire=on_fire, interval_ms=5)
        jumps.start(skier)

        await asyncio.wait_for(landed.wait(), timeout=2.0)
        self.assertEqual(len(fired), 5)
        self.assertIsNone(skier.jump_frame)

        await asyncio.sleep(0.05)
        self.assertEqual(len(fired), 5)


class UnavailableScheduler(Scheduler):
    def call_later(self, delay_ms, callback):
        raise RuntimeError("no running event loop")


class TestJumpWithoutTimer(unittest.TestCase):
    def test_given_scheduler_fails_then_skier_stays_grounded(self):
        jumps = JumpSequencer(UnavailableScheduler(), on_fire=lambda jump_id: None)
        skier = Skier(direction=Direction.DOWN)
        with self.assertLogs("downhill.slope.jump", level="WARNING"):
            self.assertIsNone(jumps.start(skier))
        self.assertFalse(skier.is_jumping)
        self.assertIsNone(skier.jump_frame)
        self.assertFalse(jumps.active)

    def test_given_scheduler_fails_mid_air_then_jump_dropped(self):
        jumps = JumpSequencer(UnavailableScheduler(), on_fire=lambda jump_id: None)
        skier = Skier(direction=Direction.DOWN, is_jumping=True, jump_frame=3)
        with self.assertLogs("downhill.slope.jump", level="WARNING"):
            jumps.start(skier)
        self.assertFalse(skier.is_jumping)
        self.assertIsNone(skier.jump_frame)


if __name__ == "__main__":
    unittest.main()
