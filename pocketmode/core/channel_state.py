"""
SensorChannels — holds the most recent value of each sensor channel.

Only the latest sample per channel is kept. Channels whose hardware is
missing stay unknown forever.
"""
from __future__ import annotations
import logging
from typing import FrozenSet, Iterable, Union

from pocketmode.domain.enums import SensorChannel
from pocketmode.domain.models import ChannelValues, LightSample, ProximitySample, TiltSample
from pocketmode.utils.geometry import inclination, normalise

logger = logging.getLogger(__name__)

SensorSample = Union[ProximitySample, LightSample, TiltSample]

SAMPLE_CHANNELS = {
    ProximitySample: SensorChannel.PROXIMITY,
    LightSample:     SensorChannel.LIGHT,
    TiltSample:      SensorChannel.ACCELEROMETER,
}


def to_sample(channel: SensorChannel, values, timestamp: float) -> SensorSample:
    """Convert a raw provider callback payload into a typed sample."""
    if channel is SensorChannel.PROXIMITY:
        return ProximitySample(float(values[0]), timestamp)
    if channel is SensorChannel.LIGHT:
        return LightSample(float(values[0]), timestamp)
    return TiltSample(tuple(float(v) for v in values), timestamp)


class SensorChannels:
    """
    Parameters
    ----------
    available : iterable of SensorChannel
        Channels backed by hardware, probed once at start.
    """

    def __init__(self, available: Iterable[SensorChannel] = tuple(SensorChannel)) -> None:
        self._available: FrozenSet[SensorChannel] = frozenset(available)
        self._values = ChannelValues()

    # ------------------------------------------------------------------
    @property
    def available(self) -> FrozenSet[SensorChannel]:
        return self._available

    def set_available(self, available: Iterable[SensorChannel]) -> None:
        self._available = frozenset(available)

    def apply(self, sample: SensorSample) -> bool:
        """
        Record a sample. Returns False when the sample was ignored
        (channel unavailable or malformed payload).
        """
        channel = SAMPLE_CHANNELS[type(sample)]
        if channel not in self._available:
            return False

        if isinstance(sample, ProximitySample):
            self._values.proximity = sample.distance
        elif isinstance(sample, LightSample):
            self._values.light = sample.illuminance
        else:
            unit = normalise(sample.values)
            if unit is None:
                logger.debug("Dropping malformed accelerometer sample %r", sample.values)
                return False
            self._values.gravity = unit
            self._values.inclination = inclination(unit)
        return True

    def snapshot(self) -> ChannelValues:
        """Copy of the current values, unavailable channels forced to unknown."""
        v = self._values
        tilt_ok = SensorChannel.ACCELEROMETER in self._available
        return ChannelValues(
            proximity=v.proximity if SensorChannel.PROXIMITY in self._available else None,
            light=v.light if SensorChannel.LIGHT in self._available else None,
            gravity=v.gravity if tilt_ok else None,
            inclination=v.inclination if tilt_ok else None,
        )

    def reset(self) -> None:
        self._values = ChannelValues()
