import unittest

from pocketmode.app.config import PocketConfig
from pocketmode.app.simulated import ManualClock, SimulatedPlatform
from pocketmode.core.event_loop import PocketEventLoop
from pocketmode.core.overlay_controller import OverlayController


class OverlayTestCase(unittest.TestCase):
    def setUp(self):
        self.platform = SimulatedPlatform()
        self.clock = ManualClock()
        self.loop = PocketEventLoop(clock=self.clock)
        self.cfg = PocketConfig()
        self.overlay = OverlayController(self.platform.collaborators(), self.loop, self.cfg)
        self.loop.set_handler(self.overlay.on_timer)

    def advance(self, ms):
        self.clock.advance(ms)
        self.loop.run_pending()


class TestShowHide(OverlayTestCase):
    def test_show_twice_has_one_effect_and_one_timer(self):
        self.assertTrue(self.overlay.show())
        self.assertFalse(self.overlay.show())
        self.assertEqual(self.platform.overlay.show_calls, 1)
        self.assertEqual(self.loop.pending_timers(), 1)
        self.assertEqual(len(self.platform.broadcaster.sent), 1)

    def test_hide_when_hidden_is_noop(self):
        self.assertFalse(self.overlay.hide())
        self.assertEqual(self.platform.overlay.remove_calls, 0)
        self.assertEqual(self.platform.broadcaster.sent, [])

    def test_hide_cancels_timer_and_broadcasts(self):
        self.overlay.show()
        self.overlay.hide()
        self.assertFalse(self.overlay.showing)
        self.assertIsNone(self.overlay.timer)
        self.assertEqual(self.loop.pending_timers(), 0)
        cfg = self.cfg
        self.assertEqual(self.platform.broadcaster.sent, [
            (cfg.broadcast_action, cfg.broadcast_target, {"in_pocket": True}),
            (cfg.broadcast_action, cfg.broadcast_target, {"in_pocket": False}),
        ])
        self.advance(5000)
        self.assertEqual(self.platform.power.sleep_requests, [])

    def test_layout_passed_to_surface(self):
        self.overlay.show()
        layout = self.platform.overlay.layout
        self.assertTrue(layout.show_when_locked)
        self.assertFalse(layout.focusable)
        self.assertEqual(layout.background_argb, (224, 0, 0, 0))

    def test_show_suppressed_while_dozing(self):
        self.platform.power.dozing = True
        self.assertFalse(self.overlay.show())
        self.assertEqual(self.platform.overlay.show_calls, 0)

    def test_show_suppressed_during_call(self):
        self.platform.telecom.ringing = True
        self.assertFalse(self.overlay.show())
        self.platform.telecom.ringing = False
        self.platform.telecom.in_call = True
        self.assertFalse(self.overlay.show())
        self.assertEqual(self.loop.pending_timers(), 0)

    def test_show_requires_keyguard(self):
        self.platform.keyguard.locked = False
        self.assertFalse(self.overlay.show())

    def test_ui_dispatch_used_for_surface_calls(self):
        deferred = []
        collabs = self.platform.collaborators()
        collabs.ui_dispatch = deferred.append
        overlay = OverlayController(collabs, self.loop, self.cfg)
        overlay.show()
        self.assertTrue(overlay.showing)
        self.assertEqual(self.platform.overlay.show_calls, 0)
        deferred.pop()()
        self.assertEqual(self.platform.overlay.show_calls, 1)


class TestDisplayOffTimer(OverlayTestCase):
    def test_expiry_hides_and_sleeps(self):
        self.overlay.show()
        self.advance(2999)
        self.assertTrue(self.overlay.showing)
        self.advance(1)
        self.assertFalse(self.overlay.showing)
        self.assertEqual(self.platform.power.sleep_requests, [3000])

    def test_call_started_before_expiry_makes_it_noop(self):
        self.overlay.show()
        self.advance(1000)
        self.platform.telecom.in_call = True
        self.advance(2000)
        self.assertTrue(self.overlay.showing)
        self.assertEqual(self.platform.power.sleep_requests, [])
        self.assertIsNone(self.overlay.timer)

    def test_unlocked_before_expiry_makes_it_noop(self):
        self.overlay.show()
        self.platform.keyguard.locked = False
        self.advance(3000)
        self.assertTrue(self.overlay.showing)
        self.assertEqual(self.platform.power.sleep_requests, [])

    def test_reshow_rearms_a_fresh_timer(self):
        self.overlay.show()
        self.advance(2000)
        self.overlay.hide()
        self.overlay.show()
        self.advance(2000)
        self.assertTrue(self.overlay.showing)
        self.advance(1000)
        self.assertFalse(self.overlay.showing)
        self.assertEqual(len(self.platform.power.sleep_requests), 1)

    def test_custom_delay(self):
        cfg = PocketConfig(display_off_delay_ms=500)
        overlay = OverlayController(self.platform.collaborators(), self.loop, cfg)
        self.loop.set_handler(overlay.on_timer)
        overlay.show()
        self.advance(500)
        self.assertFalse(overlay.showing)


if __name__ == '__main__':
    unittest.main()
