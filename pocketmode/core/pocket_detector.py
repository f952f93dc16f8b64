"""
PocketDetector — fuses the latest proximity, light and tilt values into a
single "in pocket" verdict.

Stateless: every call works only on the values passed in. Two rule sets are
supported because the battery-friendly and standard policies combine the
same per-channel predicates differently.

Note on the standard rule set: its inclination predicate is
``angle > MIN or angle < MAX``, which holds for every known angle. Callers
rely on that, so it is kept as is.
"""
from __future__ import annotations
from typing import NamedTuple, Optional

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.domain.enums import RuleSet
from pocketmode.domain.models import ChannelValues, Vector3


class ChannelPredicates(NamedTuple):
    proximity: bool
    light: bool
    gravity: bool
    inclination: bool


class PocketDetector:
    """
    Parameters
    ----------
    config : PocketConfig
        Source of the thresholds and inclination bounds.
    """

    def __init__(self, config: PocketConfig = default_config) -> None:
        self._cfg = config

    # ------------------------------------------------------------------
    def predicates(
        self,
        prox: Optional[float],
        light: Optional[float],
        gravity: Optional[Vector3],
        inclination: Optional[int],
        rule_set: RuleSet,
    ) -> ChannelPredicates:
        """Per-channel booleans. Unknown (None) channels are always False."""
        cfg = self._cfg
        is_prox = prox is not None and prox < cfg.proximity_threshold
        is_light = light is not None and light < cfg.light_threshold
        is_gravity = (
            gravity is not None
            and len(gravity) == 3
            and gravity[1] < cfg.gravity_threshold
        )
        if inclination is None:
            is_inclination = False
        elif rule_set is RuleSet.BATTERY_FRIENDLY:
            is_inclination = cfg.min_inclination < inclination < cfg.max_inclination
        else:
            is_inclination = (
                inclination > cfg.min_inclination or inclination < cfg.max_inclination
            )
        return ChannelPredicates(is_prox, is_light, is_gravity, is_inclination)

    def evaluate(
        self,
        prox: Optional[float],
        light: Optional[float],
        gravity: Optional[Vector3],
        inclination: Optional[int],
        rule_set: RuleSet,
    ) -> bool:
        """
        Returns
        -------
        bool
            Battery-friendly: any single positive predicate.
            Standard: proximity alone, else light+gravity+inclination,
            else gravity+inclination.
        """
        p = self.predicates(prox, light, gravity, inclination, rule_set)

        if rule_set is RuleSet.BATTERY_FRIENDLY:
            return p.proximity or p.light or p.gravity or p.inclination

        if p.proximity:
            return True
        if p.light and p.gravity and p.inclination:
            return True
        return p.gravity and p.inclination

    def evaluate_values(self, values: ChannelValues, rule_set: RuleSet) -> bool:
        """Convenience wrapper over a ChannelValues snapshot."""
        return self.evaluate(
            values.proximity, values.light, values.gravity, values.inclination, rule_set
        )
