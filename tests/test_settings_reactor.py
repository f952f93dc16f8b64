import unittest

from pocketmode.app.config import PocketConfig
from pocketmode.app.simulated import InMemorySettings, SimulatedPlatform
from pocketmode.core.settings_reactor import SettingsReactor, resolve_mode
from pocketmode.domain.enums import Mode
from pocketmode.domain.models import SettingsChanged


class BrokenSettings(InMemorySettings):
    def get_bool(self, key, user):
        raise OSError("settings provider unavailable")


class TestResolveMode(unittest.TestCase):
    def test_priority(self):
        self.assertIs(resolve_mode(False, False, False), Mode.DISABLED)
        self.assertIs(resolve_mode(True, False, False), Mode.STANDARD)
        self.assertIs(resolve_mode(True, False, True), Mode.BATTERY_FRIENDLY)
        self.assertIs(resolve_mode(False, False, True), Mode.BATTERY_FRIENDLY)
        self.assertIs(resolve_mode(True, True, True), Mode.ALWAYS_ON)
        self.assertIs(resolve_mode(False, True, True), Mode.ALWAYS_ON)


class TestSettingsReactor(unittest.TestCase):
    def setUp(self):
        self.cfg = PocketConfig()
        self.platform = SimulatedPlatform()
        self.posted = []
        self.reactor = SettingsReactor(self.platform.collaborators(), self.posted.append, self.cfg)

    def test_reads_mode_for_current_user(self):
        self.platform.settings.put_bool(self.cfg.standard_key, True, user=10)
        self.assertIs(self.reactor.read_mode(), Mode.DISABLED)
        self.platform.user = 10
        self.assertIs(self.reactor.read_mode(), Mode.STANDARD)

    def test_change_notification_posts_event(self):
        self.reactor.observe()
        self.platform.settings.put_bool(self.cfg.battery_friendly_key, True)
        self.assertEqual(len(self.posted), 1)
        self.assertIsInstance(self.posted[0], SettingsChanged)
        self.assertEqual(self.posted[0].key, self.cfg.battery_friendly_key)

    def test_close_removes_observers(self):
        self.reactor.observe()
        self.reactor.close()
        for key in self.cfg.setting_keys:
            self.assertEqual(self.platform.settings.observer_count(key), 0)
        self.platform.settings.put_bool(self.cfg.standard_key, True)
        self.assertEqual(self.posted, [])

    def test_read_failure_means_disabled(self):
        self.platform.settings = BrokenSettings()
        reactor = SettingsReactor(self.platform.collaborators(), self.posted.append, self.cfg)
        with self.assertLogs("pocketmode.core.settings_reactor", level="WARNING"):
            self.assertIs(reactor.read_mode(), Mode.DISABLED)


if __name__ == '__main__':
    unittest.main()
