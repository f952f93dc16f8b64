import itertools
import unittest

from pocketmode.app.config import PocketConfig
from pocketmode.core.pocket_detector import PocketDetector
from pocketmode.domain.enums import RuleSet

# (value, predicate) per channel; None is "unknown"
PROX = [(0.5, True), (5.0, False), (None, False)]
LIGHT = [(0.5, True), (120.0, False), (None, False)]
GRAVITY = [((0.0, -0.99, 0.12), True), ((0.0, 0.0, 1.0), False), (None, False)]
INCLINATION_BF = [(90, True), (10, False), (None, False)]


class TestBatteryFriendlyRules(unittest.TestCase):
    def setUp(self):
        self.d = PocketDetector()

    def test_verdict_is_or_of_predicates(self):
        for (p, pp), (l, lp), (g, gp), (i, ip) in itertools.product(PROX, LIGHT, GRAVITY, INCLINATION_BF):
            verdict = self.d.evaluate(p, l, g, i, RuleSet.BATTERY_FRIENDLY)
            self.assertEqual(verdict, pp or lp or gp or ip, (p, l, g, i))

    def test_monotonic_in_each_predicate(self):
        channels = [PROX, LIGHT, GRAVITY, INCLINATION_BF]
        for combo in itertools.product(*channels):
            values = [v for v, _ in combo]
            before = self.d.evaluate(*values, RuleSet.BATTERY_FRIENDLY)
            for idx, options in enumerate(channels):
                flipped = list(values)
                flipped[idx] = options[0][0]  # the positive reading
                after = self.d.evaluate(*flipped, RuleSet.BATTERY_FRIENDLY)
                self.assertGreaterEqual(after, before)
                self.assertTrue(after)

    def test_inclination_interval_is_open(self):
        self.assertFalse(self.d.evaluate(None, None, None, 75, RuleSet.BATTERY_FRIENDLY))
        self.assertTrue(self.d.evaluate(None, None, None, 76, RuleSet.BATTERY_FRIENDLY))
        self.assertTrue(self.d.evaluate(None, None, None, 99, RuleSet.BATTERY_FRIENDLY))
        self.assertFalse(self.d.evaluate(None, None, None, 100, RuleSet.BATTERY_FRIENDLY))

    def test_all_unknown_is_not_in_pocket(self):
        self.assertFalse(self.d.evaluate(None, None, None, None, RuleSet.BATTERY_FRIENDLY))


class TestStandardRules(unittest.TestCase):
    def setUp(self):
        self.d = PocketDetector()

    def test_inclination_predicate_always_true_for_known_angles(self):
        # Degenerate comparator (angle > 75 or angle < 100) kept on purpose.
        for angle in range(0, 181):
            p = self.d.predicates(None, None, None, angle, RuleSet.STANDARD)
            self.assertTrue(p.inclination, angle)
        self.assertFalse(self.d.predicates(None, None, None, None, RuleSet.STANDARD).inclination)

    def test_proximity_alone_is_sufficient(self):
        self.assertTrue(self.d.evaluate(0.5, None, None, None, RuleSet.STANDARD))

    def test_light_alone_is_not_sufficient(self):
        self.assertFalse(self.d.evaluate(None, 0.5, None, None, RuleSet.STANDARD))
        self.assertFalse(self.d.evaluate(5.0, 0.5, (0.0, 0.0, 1.0), 0, RuleSet.STANDARD))

    def test_gravity_with_inclination_is_sufficient(self):
        # Any known angle satisfies the standard inclination predicate.
        self.assertTrue(self.d.evaluate(5.0, 120.0, (0.0, -0.99, 0.12), 0, RuleSet.STANDARD))
        self.assertTrue(self.d.evaluate(None, 0.5, (0.0, -0.99, 0.12), 170, RuleSet.STANDARD))

    def test_gravity_without_inclination_is_not_sufficient(self):
        self.assertFalse(self.d.evaluate(None, 0.5, (0.0, -0.99, 0.12), None, RuleSet.STANDARD))

    def test_thresholds_are_strict(self):
        self.assertFalse(self.d.evaluate(1.0, None, None, None, RuleSet.STANDARD))
        self.assertFalse(self.d.evaluate(None, 2.0, None, None, RuleSet.BATTERY_FRIENDLY))
        self.assertFalse(self.d.evaluate(None, None, (0.0, -0.6, 0.8), None, RuleSet.BATTERY_FRIENDLY))

    def test_thresholds_follow_config(self):
        d = PocketDetector(PocketConfig(proximity_threshold=5.0))
        self.assertTrue(d.evaluate(4.0, None, None, None, RuleSet.STANDARD))


if __name__ == '__main__':
    unittest.main()
