"""Live-ride runtime: owns the state containers and the three periodic tasks."""

import logging
from typing import Optional

from ..config import Settings, get_settings
from ..models.sensors import SensorReading
from .auto_session import AutoSessionDetector
from .base import SessionApi, ZoneControlActuator, ZoneRideStore
from .sensors import LiveMetricsPoller, LiveSensorState
from .session import SessionController, SessionState
from .zone_ride import ZoneRideController

logger = logging.getLogger(__name__)


class RideRuntime:
    """
    Wires the live-ride components together.

    Created when the ride view activates and torn down with shutdown().
    Consumers receive the state containers from here rather than through
    module globals.

    Usage:
        runtime = RideRuntime(session_api, actuator, zone_store)
        runtime.start_monitoring()
        runtime.on_sensor_reading(reading)
        ...
        runtime.shutdown()
    """

    def __init__(
        self,
        session_api: SessionApi,
        actuator: ZoneControlActuator,
        zone_store: Optional[ZoneRideStore] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()

        self.session_state = SessionState()
        self.sensor_state = LiveSensorState(
            session_state=self.session_state,
            max_history=self.settings.max_history,
        )
        self.zone_ride = ZoneRideController(
            actuator,
            store=zone_store,
            sensor_state=self.sensor_state,
            poll_interval_secs=self.settings.zone_status_poll_secs,
            session_state=self.session_state,
        )
        self.session_controller = SessionController(
            session_api,
            state=self.session_state,
            zone_ride=self.zone_ride,
        )
        self.auto_session = AutoSessionDetector(
            self.sensor_state,
            self.session_controller,
            tick_secs=self.settings.auto_session_tick_secs,
        )
        self.metrics_poller = LiveMetricsPoller(
            session_api,
            self.sensor_state,
            interval_secs=self.settings.live_metrics_poll_secs,
        )

    def on_sensor_reading(self, reading: SensorReading) -> None:
        """Entry point for decoded sensor events."""
        self.sensor_state.ingest(reading)

    def start_monitoring(self) -> None:
        """Begin the live-metrics poll and the auto-session tick."""
        self.metrics_poller.start()
        self.auto_session.start()
        logger.info("Ride monitoring started")

    def shutdown(self) -> None:
        """Stop every task and drop transient state. Never raises."""
        for name, stop in (
            ("auto-session tick", self.auto_session.stop),
            ("zone status poll", self.zone_ride.shutdown),
            ("live metrics poll", self.metrics_poller.stop),
        ):
            try:
                stop()
            except Exception as e:
                logger.warning(f"Stopping {name} failed: {e}")
        self.sensor_state.clear()
        logger.info("Ride monitoring stopped")
