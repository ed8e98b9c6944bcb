"""Session summary and athlete configuration models."""

from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import ZoneConfigError


DEFAULT_HR_ZONES = [120, 140, 160, 175, 190]
DEFAULT_POWER_ZONES = [55, 75, 90, 105, 120, 150]


class SessionRecord(BaseModel):
    """
    Summary of one recorded ride, as supplied by the session store.

    start_time is kept as the timezone-bearing ISO string the store hands
    out; its first ten characters are the athlete's local calendar day.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    start_time: str
    duration_secs: int = Field(0, ge=0)
    ftp: Optional[int] = Field(None, description="FTP in effect for the ride")
    avg_power: Optional[float] = None
    max_power: Optional[int] = None
    normalized_power: Optional[float] = None
    tss: Optional[float] = Field(None, ge=0, description="Training Stress Score")
    intensity_factor: Optional[float] = None
    avg_hr: Optional[float] = None
    max_hr: Optional[int] = None
    avg_cadence: Optional[float] = None
    avg_speed: Optional[float] = None
    title: Optional[str] = None
    activity_type: Optional[str] = None

    @property
    def date_key(self) -> str:
        """YYYY-MM-DD taken straight from the timestamp, no timezone shift."""
        return self.start_time[:10]

    @property
    def day(self) -> Optional[date]:
        """Calendar day of the ride, or None if the timestamp is malformed."""
        try:
            return date.fromisoformat(self.date_key)
        except ValueError:
            return None

    @property
    def started_at(self) -> Optional[datetime]:
        """Parsed start instant in UTC, or None if unparseable."""
        return parse_timestamp(self.start_time)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO timestamp to an aware UTC datetime (naive is read as UTC)."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class SessionConfig(BaseModel):
    """
    Athlete configuration used for zones and load.

    power_zones holds the upper bound of zones 1-6 as a percentage of FTP
    (zone 7 is everything above). hr_zones holds the upper bound of zones
    1-5 in bpm.
    """

    ftp: int = Field(200, ge=0)
    weight_kg: float = 75.0
    hr_zones: List[int] = Field(default_factory=lambda: list(DEFAULT_HR_ZONES))
    power_zones: List[int] = Field(default_factory=lambda: list(DEFAULT_POWER_ZONES))
    units: str = "metric"
    date_of_birth: Optional[str] = None
    sex: Optional[str] = None
    resting_hr: Optional[int] = None
    max_hr: Optional[int] = None

    @field_validator("hr_zones")
    @classmethod
    def validate_hr_zone_count(cls, v):
        """Exactly five HR zone boundaries."""
        if len(v) != 5:
            raise ValueError("hr_zones must contain 5 upper bounds")
        return v

    @field_validator("power_zones")
    @classmethod
    def validate_power_zone_count(cls, v):
        """Exactly six power zone boundaries."""
        if len(v) != 6:
            raise ValueError("power_zones must contain 6 upper bounds (% FTP)")
        return v

    @field_validator("units")
    @classmethod
    def validate_units(cls, v):
        if v not in ("metric", "imperial"):
            raise ValueError("units must be 'metric' or 'imperial'")
        return v

    @classmethod
    def default(cls) -> "SessionConfig":
        """Stock profile used before the athlete edits anything."""
        return cls()


def validate_zones_ascending(zones: Sequence[float], label: str) -> None:
    """Raise ZoneConfigError unless every boundary is above the previous one."""
    for lower, upper in zip(zones, zones[1:]):
        if upper <= lower:
            raise ZoneConfigError(label, zones)


def validate_zone_config(config: SessionConfig) -> SessionConfig:
    """Check both zone lists before a configuration is accepted."""
    validate_zones_ascending(config.hr_zones, "HR zones")
    validate_zones_ascending(config.power_zones, "Power zones")
    return config
