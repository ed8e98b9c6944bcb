"""
Services layer for the ride analytics engine.

Controllers that talk to the external collaborators, the live-ride state
containers, and the periodic tasks that drive them.
"""

from .base import (
    BaseService,
    ServiceResult,
    SessionApi,
    SessionSource,
    ZoneControlActuator,
    ZoneRideStore,
)
from .scheduler import RepeatingTask
from .session import SessionController, SessionState
from .sensors import LiveMetricsPoller, LiveSensorState, MetricSample
from .zone_ride import ZoneRideController, build_zone_target
from .auto_session import AutoSessionAction, AutoSessionDetector, AutoSessionState
from .analytics import AnalyticsReport, AnalyticsService, build_report
from .runtime import RideRuntime

__all__ = [
    # Base
    "BaseService",
    "ServiceResult",
    "SessionApi",
    "SessionSource",
    "ZoneControlActuator",
    "ZoneRideStore",
    # Scheduling
    "RepeatingTask",
    # Session
    "SessionController",
    "SessionState",
    # Sensors
    "LiveMetricsPoller",
    "LiveSensorState",
    "MetricSample",
    # Zone ride
    "ZoneRideController",
    "build_zone_target",
    # Auto-session
    "AutoSessionAction",
    "AutoSessionDetector",
    "AutoSessionState",
    # Analytics
    "AnalyticsReport",
    "AnalyticsService",
    "build_report",
    # Runtime
    "RideRuntime",
]
