import asyncio
import unittest

from ludo_universe.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler(unittest.TestCase):
    def setUp(self):
        self.scheduler = ManualScheduler()
        self.fired = []

    def test_nothing_runs_before_due(self):
        self.scheduler.call_later(1.0, lambda: self.fired.append("a"))
        self.assertEqual(self.scheduler.advance(0.5), 0)
        self.assertEqual(self.fired, [])
        self.assertEqual(self.scheduler.advance(0.5), 1)
        self.assertEqual(self.fired, ["a"])
        self.assertEqual(self.scheduler.now, 1.0)

    def test_fires_in_due_order(self):
        self.scheduler.call_later(2.0, lambda: self.fired.append("late"))
        self.scheduler.call_later(1.0, lambda: self.fired.append("early"))
        self.scheduler.call_later(1.0, lambda: self.fired.append("early-2"))
        self.scheduler.run_until_idle()
        self.assertEqual(self.fired, ["early", "early-2", "late"])

    def test_cancelled_timer_never_fires(self):
        handle = self.scheduler.call_later(1.0, lambda: self.fired.append("x"))
        handle.cancel()
        self.assertEqual(self.scheduler.pending(), 0)
        self.assertEqual(self.scheduler.run_until_idle(), 0)
        self.assertEqual(self.fired, [])

    def test_callbacks_can_schedule_more(self):
        def first():
            self.fired.append(self.scheduler.now)
            self.scheduler.call_later(0.5, lambda: self.fired.append(self.scheduler.now))

        self.scheduler.call_later(1.0, first)
        self.scheduler.advance(2.0)
        self.assertEqual(self.fired, [1.0, 1.5])

    def test_runaway_loop_is_reported(self):
        scheduler = ManualScheduler(max_steps=10)

        def again():
            scheduler.call_later(0.1, again)

        scheduler.call_later(0.1, again)
        with self.assertRaises(RuntimeError):
            scheduler.run_until_idle()

    def test_negative_delay(self):
        with self.assertRaises(ValueError):
            self.scheduler.call_later(-1, lambda: None)


class TestAsyncioScheduler(unittest.TestCase):
    def test_runs_on_event_loop(self):
        async def scenario():
            fired = []
            scheduler = AsyncioScheduler()
            scheduler.call_later(0.01, lambda: fired.append("kept"))
            scheduler.call_later(0.01, lambda: fired.append("dropped")).cancel()
            await asyncio.sleep(0.05)
            return fired

        self.assertEqual(asyncio.run(scenario()), ["kept"])


if __name__ == "__main__":
    unittest.main()
