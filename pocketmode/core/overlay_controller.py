"""
OverlayController — shows and hides the blackout overlay and owns the
display-off safety timer.

The ``showing`` flag is the guard against duplicate surface calls: show()
while shown and hide() while hidden are no-ops. Surface calls go through the
UI dispatch callable; the flag itself is only touched on the loop thread.
"""
from __future__ import annotations
import logging
from typing import Optional

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.core.event_loop import PocketEventLoop, TimerHandle
from pocketmode.core.ports import Collaborators
from pocketmode.domain.models import OverlayLayout, TimerExpired

logger = logging.getLogger(__name__)

DISPLAY_OFF_TIMER = "display_off"


class OverlayController:
    """
    Parameters
    ----------
    collaborators : Collaborators
        Overlay surface, power, keyguard/telecom queries and broadcaster.
    loop : PocketEventLoop
        Owns the safety timer.
    config : PocketConfig
    """

    def __init__(
        self,
        collaborators: Collaborators,
        loop: PocketEventLoop,
        config: PocketConfig = default_config,
        layout: Optional[OverlayLayout] = None,
    ) -> None:
        self._c = collaborators
        self._loop = loop
        self._cfg = config
        self._layout = layout or OverlayLayout()
        self._showing = False
        self._timer: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    @property
    def showing(self) -> bool:
        return self._showing

    @property
    def timer(self) -> Optional[TimerHandle]:
        return self._timer

    def on_keyguard(self) -> bool:
        return self._c.keyguard.is_locked()

    def call_in_progress(self) -> bool:
        telecom = self._c.telecom
        return telecom.is_ringing() or telecom.is_in_call()

    # ------------------------------------------------------------------
    def show(self) -> bool:
        """
        Show the overlay unless dozing, in a call, off keyguard or already
        shown. Returns True only when the overlay was actually added.
        """
        if self._c.power.is_dozing():
            logger.debug("[OVERLAY] show suppressed: display dozing")
            return False
        if self._showing:
            return False
        if self.call_in_progress():
            logger.debug("[OVERLAY] show suppressed: call in progress")
            return False
        if not self.on_keyguard():
            logger.debug("[OVERLAY] show suppressed: not on keyguard")
            return False

        layout = self._layout
        self._c.ui_dispatch(lambda: self._c.overlay.show(layout))
        self._showing = True
        self._arm_timer()
        self._broadcast(True)
        logger.info("[OVERLAY] shown")
        return True

    def hide(self) -> bool:
        """Remove the overlay if shown. Always cancels the safety timer."""
        self._cancel_timer()
        if not self._showing:
            return False

        self._c.ui_dispatch(self._c.overlay.remove)
        self._showing = False
        self._broadcast(False)
        logger.info("[OVERLAY] hidden")
        return True

    def sleep(self) -> None:
        self._c.power.go_to_sleep(self._loop.now())

    # ---- safety timer ------------------------------------------------
    def _arm_timer(self) -> None:
        self._cancel_timer()
        self._timer = self._loop.schedule(self._cfg.display_off_delay_ms, DISPLAY_OFF_TIMER)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._loop.cancel(self._timer)
            self._timer = None

    def on_timer(self, event: TimerExpired) -> None:
        """
        The overlay stayed up for the whole delay: give up on the overlay and
        put the display to sleep, unless a call needs the screen or the
        device was unlocked meanwhile.
        """
        if self._timer is None or event.handle_id != self._timer.id:
            logger.debug("Ignoring stale timer %s", event.handle_id)
            return
        self._timer = None

        if self.call_in_progress() or not self.on_keyguard():
            logger.info("[OVERLAY] display-off timer expired, screen kept on")
            return

        self.hide()
        self.sleep()
        logger.info("[OVERLAY] display-off timer expired, display put to sleep")

    # ------------------------------------------------------------------
    def _broadcast(self, in_pocket: bool) -> None:
        cfg = self._cfg
        self._c.broadcaster.send(
            cfg.broadcast_action, cfg.broadcast_target, {cfg.broadcast_extra: in_pocket}
        )
