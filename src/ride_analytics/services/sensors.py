"""Latest-value sensor state and the live-metrics poll."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

from ..config import get_settings
from ..models.sensors import LiveMetrics, SensorKind, SensorReading
from .base import BaseService, SessionApi
from .scheduler import RepeatingTask
from .session import SessionState

logger = logging.getLogger(__name__)


@dataclass
class MetricSample:
    """Latest value of every channel at the moment a reading arrived."""

    epoch_ms: int
    power: Optional[float]
    heart_rate: Optional[float]
    cadence: Optional[float]
    speed: Optional[float]


class LiveSensorState:
    """
    Latest known value per channel plus the most recent live metrics.

    Channels update independently as readings arrive, in whatever order the
    devices deliver them. Consumers sample the latest values when they need
    them instead of waiting for a synchronized multi-channel event.

    Owned by RideRuntime; cleared when monitoring stops.
    """

    def __init__(
        self,
        session_state: Optional[SessionState] = None,
        max_history: Optional[int] = None,
    ) -> None:
        self._session_state = session_state
        self._latest: Dict[SensorKind, Optional[float]] = {kind: None for kind in SensorKind}
        self.live_metrics: Optional[LiveMetrics] = None
        self._history: Deque[MetricSample] = deque(
            maxlen=max_history or get_settings().max_history
        )

    @property
    def power(self) -> Optional[float]:
        return self._latest[SensorKind.POWER]

    @property
    def heart_rate(self) -> Optional[float]:
        return self._latest[SensorKind.HEART_RATE]

    @property
    def cadence(self) -> Optional[float]:
        return self._latest[SensorKind.CADENCE]

    @property
    def speed(self) -> Optional[float]:
        return self._latest[SensorKind.SPEED]

    @property
    def speed_stale(self) -> bool:
        """Whether the recorder flagged the speed channel as stale."""
        return bool(self.live_metrics and self.live_metrics.stale_speed)

    @property
    def history(self) -> List[MetricSample]:
        return list(self._history)

    def _recording(self) -> bool:
        state = self._session_state
        return state is not None and state.active and not state.paused

    def ingest(self, reading: SensorReading) -> None:
        """Record a reading as the latest value of its channel."""
        self._latest[reading.kind] = reading.value

        if self._recording():
            self._history.append(
                MetricSample(
                    epoch_ms=reading.epoch_ms,
                    power=self.power,
                    heart_rate=self.heart_rate,
                    cadence=self.cadence,
                    speed=self.speed,
                )
            )

    def update_live_metrics(self, metrics: Optional[LiveMetrics]) -> None:
        self.live_metrics = metrics

    def clear(self) -> None:
        """Forget every value; used when monitoring stops."""
        for kind in SensorKind:
            self._latest[kind] = None
        self.live_metrics = None
        self._history.clear()


class LiveMetricsPoller(BaseService):
    """Refreshes LiveSensorState.live_metrics from the session recorder (~4 Hz)."""

    def __init__(
        self,
        session_api: SessionApi,
        sensor_state: LiveSensorState,
        interval_secs: Optional[float] = None,
    ) -> None:
        super().__init__()
        self.session_api = session_api
        self.sensor_state = sensor_state
        self.task = RepeatingTask(
            "live_metrics_poll",
            self.poll_once,
            interval_secs or get_settings().live_metrics_poll_secs,
        )

    async def poll_once(self) -> None:
        try:
            metrics = await self.session_api.get_live_metrics()
        except Exception as e:
            # No active session on the recorder side
            self.logger.debug(f"Live metrics unavailable: {e}")
            return
        self.sensor_state.update_live_metrics(metrics)

    def start(self) -> None:
        self.task.start()

    def stop(self) -> None:
        self.task.stop()
        self.sensor_state.update_live_metrics(None)
