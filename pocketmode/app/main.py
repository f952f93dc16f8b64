"""
main.py — off-device demo entry point.

Replays a short pocket scenario against the in-memory platform:

    screen on → sensors report "in pocket" → overlay shown
              → display-off timer expires → overlay hidden, display asleep

Run with:  python -m pocketmode.app.main --mode standard
"""
from __future__ import annotations
import argparse
import logging

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.app.service import PocketModeService
from pocketmode.app.simulated import ManualClock, SimulatedPlatform
from pocketmode.domain.enums import SensorChannel

log = logging.getLogger("pocketmode")

_MODES = {
    "standard":         lambda cfg: cfg.standard_key,
    "always-on":        lambda cfg: cfg.always_on_key,
    "battery-friendly": lambda cfg: cfg.battery_friendly_key,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pocket mode scenario replay")
    parser.add_argument("--mode", choices=sorted(_MODES), default="standard")
    parser.add_argument("--log-level", default=default_config.log_level)
    return parser.parse_args(argv)


def run(mode: str = "standard", config: PocketConfig = default_config) -> SimulatedPlatform:
    platform = SimulatedPlatform()
    platform.settings.put_bool(_MODES[mode](config), True)
    clock = ManualClock()
    service = PocketModeService(platform.collaborators(), config, clock=clock)

    print("=" * 55)
    print("  POCKET MODE — scenario replay")
    print("=" * 55)
    print(f"  Mode          : {mode}")
    print(f"  Display-off   : {config.display_off_delay_ms} ms")
    print("=" * 55 + "\n")

    service.start()
    service.screen_on()
    service.run_pending()

    # Phone slides into a pocket: covered, dark, upside down.
    platform.sensors.emit(SensorChannel.PROXIMITY, [0.0], clock())
    platform.sensors.emit(SensorChannel.LIGHT, [0.5], clock())
    platform.sensors.emit(SensorChannel.ACCELEROMETER, [0.0, -9.6, 1.2], clock())
    service.run_pending()
    print(f"[STATE] in pocket={service.is_in_pocket()} overlay={service.is_overlay_showing()}")

    clock.advance(config.display_off_delay_ms)
    service.run_pending()
    print(f"[STATE] in pocket={service.is_in_pocket()} overlay={service.is_overlay_showing()}")

    service.stop()
    print(f"\n  Overlay shown   : {platform.overlay.show_calls}x")
    print(f"  Sleep requests  : {len(platform.power.sleep_requests)}")
    print(f"  Broadcasts      : {len(platform.broadcaster.sent)}")
    return platform


def main(argv=None) -> None:
    args = parse_args(argv)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s: %(name)s: %(message)s")
    run(args.mode)


if __name__ == "__main__":
    main()
