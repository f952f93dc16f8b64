"""
Collaborator contracts the coordinator talks to.

Everything platform-specific (settings storage, sensor hardware, the overlay
window, keyguard/telecom state, power, broadcasts, haptics) sits behind one
of these. The in-memory host in pocketmode.app.simulated implements all of
them.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Sequence

from pocketmode.domain.enums import HapticEffect, SensorChannel
from pocketmode.domain.models import OverlayLayout

SensorCallback = Callable[[SensorChannel, Sequence[float], float], None]
SettingsCallback = Callable[[str], None]


class SettingsStore(ABC):
    """Persisted boolean settings with change notification."""

    @abstractmethod
    def get_bool(self, key: str, user: int) -> bool:
        """Current value for ``user``; False when unset."""

    @abstractmethod
    def observe(self, key: str, callback: SettingsCallback) -> None:
        """Call ``callback(key)`` on every write to ``key``, for any user."""

    @abstractmethod
    def remove_observer(self, key: str, callback: SettingsCallback) -> None:
        ...


class SensorProvider(ABC):

    @abstractmethod
    def has_sensor(self, channel: SensorChannel) -> bool:
        ...

    @abstractmethod
    def subscribe(self, channel: SensorChannel, rate_us: int, callback: SensorCallback) -> None:
        """Start delivering ``callback(channel, values, timestamp_ms)`` asynchronously."""

    @abstractmethod
    def unsubscribe(self, channel: SensorChannel) -> None:
        ...


class KeyguardQuery(ABC):

    @abstractmethod
    def is_locked(self) -> bool:
        ...


class TelecomQuery(ABC):

    @abstractmethod
    def is_ringing(self) -> bool:
        ...

    @abstractmethod
    def is_in_call(self) -> bool:
        ...


class OverlaySurface(ABC):
    """The full-screen blackout view. Expected to tolerate redundant calls."""

    @abstractmethod
    def show(self, layout: OverlayLayout) -> None:
        ...

    @abstractmethod
    def remove(self) -> None:
        ...


class PowerController(ABC):

    @abstractmethod
    def go_to_sleep(self, uptime_ms: float) -> None:
        ...

    @abstractmethod
    def is_dozing(self) -> bool:
        ...


class Broadcaster(ABC):

    @abstractmethod
    def send(self, action: str, target: str, extras: Dict[str, Any]) -> None:
        ...


class Haptics(ABC):

    @abstractmethod
    def vibrate(self, effect: HapticEffect) -> None:
        ...


def run_inline(fn: Callable[[], None]) -> None:
    fn()


@dataclass
class Collaborators:
    """
    Everything the coordinator needs from the platform, injected at
    construction.

    ui_dispatch runs overlay surface calls in whatever context the UI layer
    requires; the default runs them inline on the loop thread.
    """
    settings: SettingsStore
    sensors: SensorProvider
    keyguard: KeyguardQuery
    telecom: TelecomQuery
    overlay: OverlaySurface
    power: PowerController
    broadcaster: Broadcaster
    haptics: Haptics
    current_user: Callable[[], int] = field(default=lambda: 0)
    ui_dispatch: Callable[[Callable[[], None]], None] = field(default=run_inline)
