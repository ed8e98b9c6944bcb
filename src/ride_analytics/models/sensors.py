"""Live sensor reading and metrics models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SensorKind(str, Enum):
    """Channel a reading belongs to."""
    POWER = "power"
    HEART_RATE = "heart_rate"
    CADENCE = "cadence"
    SPEED = "speed"


class SensorReading(BaseModel):
    """One decoded reading from a connected device."""

    model_config = ConfigDict(frozen=True)

    kind: SensorKind
    value: float = Field(..., description="Watts, bpm, rpm or km/h depending on kind")
    device_id: str
    epoch_ms: int = Field(..., ge=0)


class LiveMetrics(BaseModel):
    """Rolling metrics published by the session recorder during a ride."""

    elapsed_secs: int = 0
    current_power: Optional[float] = None
    avg_power_3s: Optional[float] = None
    avg_power_10s: Optional[float] = None
    avg_power_30s: Optional[float] = None
    normalized_power: Optional[float] = None
    tss: Optional[float] = None
    intensity_factor: Optional[float] = None
    current_hr: Optional[float] = None
    current_cadence: Optional[float] = None
    current_speed: Optional[float] = None
    hr_zone: Optional[int] = None
    power_zone: Optional[int] = None
    stale_power: bool = False
    stale_hr: bool = False
    stale_cadence: bool = False
    stale_speed: bool = False
