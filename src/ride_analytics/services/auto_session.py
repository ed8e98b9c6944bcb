"""Automatic session start/stop from live cadence and speed.

A 1 Hz hysteresis state machine. While no session is recorded, cadence
above zero for five consecutive ticks starts one; while a session is
recorded, zero, missing or stale speed for three consecutive ticks stops it.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set

from ..config import get_settings
from .scheduler import RepeatingTask
from .sensors import LiveSensorState
from .session import SessionController

logger = logging.getLogger(__name__)


class AutoSessionAction(str, Enum):
    """Decision produced by one tick."""
    START = "start"
    STOP = "stop"


@dataclass
class AutoSessionState:
    """
    Counters of the auto-session state machine.

    Only one branch runs per tick, chosen by whether a session is active,
    and each branch zeroes the other branch's counter.
    """

    enabled: bool = False
    cadence_ticks: int = 0
    speed_zero_ticks: int = 0
    countdown: Optional[int] = None
    start_threshold: int = 5
    stop_threshold: int = 3

    def reset(self) -> None:
        self.cadence_ticks = 0
        self.speed_zero_ticks = 0
        self.countdown = None

    def step(
        self,
        active: bool,
        cadence: Optional[float],
        speed: Optional[float],
        speed_stale: bool = False,
    ) -> Optional[AutoSessionAction]:
        """
        Advance one tick.

        Args:
            active: Whether a session is being recorded
            cadence: Latest cadence (rpm), None if unknown
            speed: Latest speed (km/h), None if unknown
            speed_stale: Recorder flagged the speed channel as stale

        Returns:
            The action to take this tick, if any
        """
        if not self.enabled:
            self.reset()
            return None

        if not active:
            self.speed_zero_ticks = 0
            if cadence is not None and cadence > 0:
                self.cadence_ticks += 1
                remaining = self.start_threshold - self.cadence_ticks
                if remaining > 0:
                    self.countdown = remaining
                    return None
                self.cadence_ticks = 0
                self.countdown = None
                return AutoSessionAction.START
            self.cadence_ticks = 0
            self.countdown = None
            return None

        self.cadence_ticks = 0
        self.countdown = None
        if speed is None or speed == 0 or speed_stale:
            self.speed_zero_ticks += 1
            if self.speed_zero_ticks >= self.stop_threshold:
                self.speed_zero_ticks = 0
                return AutoSessionAction.STOP
        else:
            self.speed_zero_ticks = 0
        return None


class AutoSessionDetector:
    """
    Runs AutoSessionState every tick and issues start/stop through the
    SessionController.

    Start and stop are single-flight: while a call is in flight a second
    one is not issued. Failures are logged and dropped; the rider keeps
    manual control.

    Usage:
        detector = AutoSessionDetector(sensor_state, session_controller)
        detector.start()       # begins the 1 Hz tick
        detector.set_enabled(True)
        ...
        detector.stop()
    """

    def __init__(
        self,
        sensor_state: LiveSensorState,
        session_controller: SessionController,
        tick_secs: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.sensor_state = sensor_state
        self.session_controller = session_controller
        self.state = AutoSessionState(
            start_threshold=settings.auto_start_threshold,
            stop_threshold=settings.auto_stop_threshold,
        )
        self.task = RepeatingTask(
            "auto_session_tick",
            self.tick,
            tick_secs or settings.auto_session_tick_secs,
        )
        self._starting = False
        self._stopping = False
        self._last_active: Optional[bool] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    @property
    def countdown(self) -> Optional[int]:
        """Seconds left before an auto-start, for display."""
        return self.state.countdown

    def set_enabled(self, enabled: bool) -> None:
        """Turn detection on or off; turning off clears counters immediately."""
        self.state.enabled = enabled
        if not enabled:
            self.state.reset()
        logger.info(f"Auto-session {'enabled' if enabled else 'disabled'}")

    async def tick(self) -> None:
        """Sample the latest channel values and act on the state machine."""
        active = self.session_controller.state.active
        if self._last_active is not None and active != self._last_active:
            self.state.reset()
        self._last_active = active

        action = self.state.step(
            active=active,
            cadence=self.sensor_state.cadence,
            speed=self.sensor_state.speed,
            speed_stale=self.sensor_state.speed_stale,
        )
        logger.debug(
            f"Auto-session tick: active={active} cadence_ticks={self.state.cadence_ticks} "
            f"speed_zero_ticks={self.state.speed_zero_ticks}"
        )

        if action == AutoSessionAction.START:
            self._spawn(self._start_session())
        elif action == AutoSessionAction.STOP:
            self._spawn(self._stop_session())

    def _spawn(self, coro) -> None:
        # Fire and forget: a tick never awaits the session API
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _start_session(self) -> None:
        if self._starting:
            return
        self._starting = True
        try:
            result = await self.session_controller.start_session()
            if result.success:
                logger.info("Auto-started session")
            else:
                logger.warning(f"Auto-start failed: {result.error}")
        except Exception as e:
            logger.warning(f"Auto-start failed: {e}")
        finally:
            self._starting = False

    async def _stop_session(self) -> None:
        if self._stopping:
            return
        self._stopping = True
        try:
            result = await self.session_controller.stop_session()
            if result.success:
                logger.info("Auto-stopped session")
            else:
                logger.warning(f"Auto-stop failed: {result.error}")
        except Exception as e:
            logger.warning(f"Auto-stop failed: {e}")
        finally:
            self._stopping = False

    async def wait_idle(self) -> None:
        """Wait for in-flight start/stop calls to settle."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def start(self) -> None:
        self.task.start()

    def stop(self) -> None:
        """Stop ticking, reset counters and drop single-flight guards."""
        self.task.stop()
        self.state.reset()
        self._starting = False
        self._stopping = False
        self._last_active = None
