"""
SettingsReactor — turns the three pocket-mode settings into a Mode and
forwards change notifications onto the event loop.
"""
from __future__ import annotations
import logging
from typing import Callable, Dict, List

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.core.ports import Collaborators
from pocketmode.domain.enums import Mode
from pocketmode.domain.models import SettingsChanged

logger = logging.getLogger(__name__)


def resolve_mode(standard: bool, always_on: bool, battery_friendly: bool) -> Mode:
    """Highest-priority enabled setting wins: always-on, battery-friendly, standard."""
    if always_on:
        return Mode.ALWAYS_ON
    if battery_friendly:
        return Mode.BATTERY_FRIENDLY
    if standard:
        return Mode.STANDARD
    return Mode.DISABLED


class SettingsReactor:
    """
    Parameters
    ----------
    collaborators : Collaborators
        Supplies the settings store and the current-user lookup.
    post : callable
        Where SettingsChanged events go (normally PocketEventLoop.post).
    config : PocketConfig
        Setting key names.
    """

    def __init__(
        self,
        collaborators: Collaborators,
        post: Callable[[SettingsChanged], None],
        config: PocketConfig = default_config,
    ) -> None:
        self._c = collaborators
        self._post = post
        self._cfg = config
        self._observers: List[tuple] = []

    # ------------------------------------------------------------------
    def read_bool(self, key: str) -> bool:
        """Read one setting for the current user. Failures read as disabled."""
        try:
            return bool(self._c.settings.get_bool(key, self._c.current_user()))
        except Exception as e:
            logger.warning(f"Reading setting {key!r} failed, treating as disabled: {e}")
            return False

    def snapshot(self) -> Dict[str, bool]:
        return {key: self.read_bool(key) for key in self._cfg.setting_keys}

    def read_mode(self) -> Mode:
        cfg = self._cfg
        values = self.snapshot()
        return resolve_mode(
            standard=values[cfg.standard_key],
            always_on=values[cfg.always_on_key],
            battery_friendly=values[cfg.battery_friendly_key],
        )

    # ---- change notification -----------------------------------------
    def _on_change(self, key: str) -> None:
        self._post(SettingsChanged(key))

    def observe(self) -> None:
        for key in self._cfg.setting_keys:
            self._c.settings.observe(key, self._on_change)
            self._observers.append((key, self._on_change))

    def close(self) -> None:
        for key, callback in self._observers:
            self._c.settings.remove_observer(key, callback)
        self._observers.clear()
