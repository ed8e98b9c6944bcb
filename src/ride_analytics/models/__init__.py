"""Data contracts exchanged with the session store, sensors and actuator."""

from .sessions import (
    DEFAULT_HR_ZONES,
    DEFAULT_POWER_ZONES,
    SessionConfig,
    SessionRecord,
    parse_timestamp,
    validate_zone_config,
    validate_zones_ascending,
)
from .sensors import LiveMetrics, SensorKind, SensorReading
from .zone_control import (
    StopReason,
    ZoneControlStatus,
    ZoneMode,
    ZoneRideSummary,
    ZoneTarget,
)

__all__ = [
    # Sessions
    "DEFAULT_HR_ZONES",
    "DEFAULT_POWER_ZONES",
    "SessionConfig",
    "SessionRecord",
    "parse_timestamp",
    "validate_zone_config",
    "validate_zones_ascending",
    # Sensors
    "LiveMetrics",
    "SensorKind",
    "SensorReading",
    # Zone control
    "StopReason",
    "ZoneControlStatus",
    "ZoneMode",
    "ZoneRideSummary",
    "ZoneTarget",
]
