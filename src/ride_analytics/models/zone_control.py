"""Zone-control target, status and summary models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class ZoneMode(str, Enum):
    """Quantity a zone ride holds the rider in."""
    POWER = "Power"
    HEART_RATE = "HeartRate"


class StopReason(str, Enum):
    """Why the actuator ended a zone ride."""
    USER_STOPPED = "UserStopped"
    DURATION_COMPLETE = "DurationComplete"
    SAFETY_STOP = "SafetyStop"
    TRAINER_DISCONNECTED = "TrainerDisconnected"
    SENSOR_LOST = "SensorLost"


class ZoneTarget(BaseModel):
    """A bounded target-zone ride request. zone=0 marks custom bounds."""

    mode: ZoneMode
    zone: int = Field(..., ge=0)
    lower_bound: int = Field(..., ge=0)
    upper_bound: int = Field(..., ge=0)
    duration_secs: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_bounds(self):
        if self.upper_bound < self.lower_bound:
            raise ValueError("upper_bound must not be below lower_bound")
        return self

    @property
    def is_custom(self) -> bool:
        return self.zone == 0


class ZoneControlStatus(BaseModel):
    """Status snapshot polled from the zone-control actuator."""

    active: bool = False
    mode: Optional[ZoneMode] = None
    target_zone: Optional[int] = None
    lower_bound: Optional[int] = None
    upper_bound: Optional[int] = None
    commanded_power: Optional[int] = None
    time_in_zone_secs: int = 0
    elapsed_secs: int = 0
    duration_secs: Optional[int] = None
    paused: bool = False
    phase: str = "idle"
    safety_note: Optional[str] = None


class ZoneRideSummary(BaseModel):
    """Record written once per completed zone ride."""

    session_id: Optional[str] = None
    mode: ZoneMode
    zone: Optional[int] = None
    lower_bound: Optional[int] = None
    upper_bound: Optional[int] = None
    duration_secs: int = 0
    time_in_zone_secs: int = 0
    commanded_power_series: List[int] = Field(default_factory=list)
    time_to_zone_secs: Optional[float] = None
    stop_reason: Optional[StopReason] = None
    safety_note: Optional[str] = None
    completed_at: datetime = Field(default_factory=datetime.now)
