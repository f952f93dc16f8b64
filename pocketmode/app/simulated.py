"""
In-memory platform — every collaborator port backed by plain Python state.

Used by the demo entry point to run pocket mode off-device, and by the test
suite to drive and observe the coordinator.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from pocketmode.core.ports import (
    Broadcaster,
    Collaborators,
    Haptics,
    KeyguardQuery,
    OverlaySurface,
    PowerController,
    SensorCallback,
    SensorProvider,
    SettingsCallback,
    SettingsStore,
    TelecomQuery,
)
from pocketmode.domain.enums import HapticEffect, SensorChannel
from pocketmode.domain.models import OverlayLayout

logger = logging.getLogger(__name__)


class InMemorySettings(SettingsStore):
    def __init__(self, values: Optional[Dict[str, bool]] = None, user: int = 0) -> None:
        self._values: Dict[Tuple[int, str], bool] = {}
        self._observers: Dict[str, List[SettingsCallback]] = defaultdict(list)
        for key, value in (values or {}).items():
            self._values[(user, key)] = bool(value)

    def get_bool(self, key: str, user: int) -> bool:
        return self._values.get((user, key), False)

    def put_bool(self, key: str, value: bool, user: int = 0) -> None:
        self._values[(user, key)] = bool(value)
        for callback in list(self._observers[key]):
            callback(key)

    def observe(self, key: str, callback: SettingsCallback) -> None:
        self._observers[key].append(callback)

    def remove_observer(self, key: str, callback: SettingsCallback) -> None:
        if callback in self._observers[key]:
            self._observers[key].remove(callback)

    def observer_count(self, key: str) -> int:
        return len(self._observers[key])


class SimulatedSensors(SensorProvider):
    """
    Sensors that only report when emit() is called, and only while someone
    is subscribed to the channel.
    """

    def __init__(self, present: Sequence[SensorChannel] = tuple(SensorChannel)) -> None:
        self._present: Set[SensorChannel] = set(present)
        self._subs: Dict[SensorChannel, Tuple[int, SensorCallback]] = {}
        self.calls: List[Tuple[str, SensorChannel]] = []

    def has_sensor(self, channel: SensorChannel) -> bool:
        return channel in self._present

    def subscribe(self, channel: SensorChannel, rate_us: int, callback: SensorCallback) -> None:
        if channel not in self._present:
            raise ValueError(f"No {channel.value} sensor")
        self._subs[channel] = (rate_us, callback)
        self.calls.append(("subscribe", channel))

    def unsubscribe(self, channel: SensorChannel) -> None:
        self._subs.pop(channel, None)
        self.calls.append(("unsubscribe", channel))

    @property
    def active(self) -> Set[SensorChannel]:
        return set(self._subs)

    def rate(self, channel: SensorChannel) -> Optional[int]:
        sub = self._subs.get(channel)
        return sub[0] if sub else None

    def emit(self, channel: SensorChannel, values: Sequence[float], timestamp: float = 0.0) -> bool:
        """Deliver a raw reading. Returns False when nobody listens."""
        sub = self._subs.get(channel)
        if sub is None:
            return False
        sub[1](channel, list(values), timestamp)
        return True


@dataclass
class FakeKeyguard(KeyguardQuery):
    locked: bool = True

    def is_locked(self) -> bool:
        return self.locked


@dataclass
class FakeTelecom(TelecomQuery):
    ringing: bool = False
    in_call: bool = False

    def is_ringing(self) -> bool:
        return self.ringing

    def is_in_call(self) -> bool:
        return self.in_call


@dataclass
class RecordingOverlay(OverlaySurface):
    visible: bool = False
    show_calls: int = 0
    remove_calls: int = 0
    layout: Optional[OverlayLayout] = None

    def show(self, layout: OverlayLayout) -> None:
        self.show_calls += 1
        self.visible = True
        self.layout = layout

    def remove(self) -> None:
        self.remove_calls += 1
        self.visible = False


@dataclass
class RecordingPower(PowerController):
    dozing: bool = False
    sleep_requests: List[float] = field(default_factory=list)

    def go_to_sleep(self, uptime_ms: float) -> None:
        self.sleep_requests.append(uptime_ms)
        logger.info("Display asked to sleep")

    def is_dozing(self) -> bool:
        return self.dozing


@dataclass
class RecordingBroadcaster(Broadcaster):
    sent: List[Tuple[str, str, Dict[str, Any]]] = field(default_factory=list)

    def send(self, action: str, target: str, extras: Dict[str, Any]) -> None:
        self.sent.append((action, target, dict(extras)))


@dataclass
class RecordingHaptics(Haptics):
    effects: List[HapticEffect] = field(default_factory=list)

    def vibrate(self, effect: HapticEffect) -> None:
        self.effects.append(effect)


@dataclass
class SimulatedPlatform:
    """All in-memory collaborators in one place."""
    settings: InMemorySettings = field(default_factory=InMemorySettings)
    sensors: SimulatedSensors = field(default_factory=SimulatedSensors)
    keyguard: FakeKeyguard = field(default_factory=FakeKeyguard)
    telecom: FakeTelecom = field(default_factory=FakeTelecom)
    overlay: RecordingOverlay = field(default_factory=RecordingOverlay)
    power: RecordingPower = field(default_factory=RecordingPower)
    broadcaster: RecordingBroadcaster = field(default_factory=RecordingBroadcaster)
    haptics: RecordingHaptics = field(default_factory=RecordingHaptics)
    user: int = 0

    def collaborators(self) -> Collaborators:
        return Collaborators(
            settings=self.settings,
            sensors=self.sensors,
            keyguard=self.keyguard,
            telecom=self.telecom,
            overlay=self.overlay,
            power=self.power,
            broadcaster=self.broadcaster,
            haptics=self.haptics,
            current_user=lambda: self.user,
        )


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms

    def __call__(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        self._now += ms
