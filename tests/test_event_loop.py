import threading
import unittest

from pocketmode.app.simulated import ManualClock
from pocketmode.core.event_loop import PocketEventLoop
from pocketmode.domain.models import ScreenOff, ScreenOn, TimerExpired


class TestPocketEventLoop(unittest.TestCase):
    def setUp(self):
        self.clock = ManualClock()
        self.seen = []
        self.loop = PocketEventLoop(self.seen.append, clock=self.clock)

    def test_events_processed_in_arrival_order(self):
        a, b, c = ScreenOn(1), ScreenOff(2), ScreenOn(3)
        for ev in (a, b, c):
            self.loop.post(ev)
        self.assertEqual(self.loop.run_pending(), 3)
        self.assertEqual(self.seen, [a, b, c])

    def test_timer_fires_once_when_due(self):
        handle = self.loop.schedule(3000, "display_off")
        self.clock.advance(2999)
        self.loop.run_pending()
        self.assertEqual(self.seen, [])
        self.assertTrue(self.loop.is_pending(handle))

        self.clock.advance(1)
        self.loop.run_pending()
        self.assertEqual(len(self.seen), 1)
        self.assertIsInstance(self.seen[0], TimerExpired)
        self.assertEqual(self.seen[0].handle_id, handle.id)
        self.assertEqual(self.seen[0].name, "display_off")

        self.clock.advance(10000)
        self.loop.run_pending()
        self.assertEqual(len(self.seen), 1)
        self.assertFalse(self.loop.is_pending(handle))

    def test_cancelled_timer_never_fires(self):
        handle = self.loop.schedule(100, "t")
        self.loop.cancel(handle)
        self.assertEqual(self.loop.pending_timers(), 0)
        self.clock.advance(500)
        self.loop.run_pending()
        self.assertEqual(self.seen, [])

    def test_cancel_none_is_noop(self):
        self.loop.cancel(None)
        self.assertFalse(self.loop.is_pending(None))

    def test_timer_ordered_after_already_queued_events(self):
        self.loop.schedule(0, "t")
        first = ScreenOn(0)
        self.loop.post(first)
        self.loop.run_pending()
        self.assertEqual(len(self.seen), 2)
        self.assertIsInstance(self.seen[1], TimerExpired)

    def test_events_posted_by_handler_are_drained(self):
        loop = PocketEventLoop(clock=self.clock)
        seen = []

        def handler(ev):
            seen.append(ev)
            if isinstance(ev, ScreenOn):
                loop.post(ScreenOff(ev.timestamp))

        loop.set_handler(handler)
        loop.post(ScreenOn(5))
        self.assertEqual(loop.run_pending(), 2)
        self.assertIsInstance(seen[1], ScreenOff)

    def test_handler_error_does_not_stop_loop(self):
        seen = []

        def handler(ev):
            if isinstance(ev, ScreenOn):
                raise RuntimeError("boom")
            seen.append(ev)

        loop = PocketEventLoop(handler, clock=self.clock)
        loop.post(ScreenOn(0))
        loop.post(ScreenOff(1))
        with self.assertLogs("pocketmode.core.event_loop", level="ERROR"):
            loop.run_pending()
        self.assertEqual(len(seen), 1)

    def test_run_forever_on_thread(self):
        seen = []
        got = threading.Event()

        def handler(ev):
            seen.append(ev)
            got.set()

        loop = PocketEventLoop(handler)
        stop = threading.Event()
        t = threading.Thread(target=loop.run_forever, args=(stop,), kwargs={"idle_timeout": 0.01})
        t.start()
        try:
            loop.schedule(5, "quick")
            self.assertTrue(got.wait(2.0))
        finally:
            stop.set()
            t.join(2.0)
        self.assertFalse(t.is_alive())
        self.assertIsInstance(seen[0], TimerExpired)


if __name__ == '__main__':
    unittest.main()
