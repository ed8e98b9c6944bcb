"""
Zone Adherence Analysis

Post-ride cardiovascular decoupling, time-in-zone and time-to-zone over
fixed-interval value series.
"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional, Sequence

from ..config import get_settings


class HrPowerPoint(NamedTuple):
    """Power and heart rate for one interval, either may be missing."""
    power: Optional[float]
    heart_rate: Optional[float]


@dataclass
class TimeInZoneResult:
    """Seconds spent below, inside and above a zone."""

    below_secs: float = 0.0
    in_zone_secs: float = 0.0
    above_secs: float = 0.0

    @property
    def total_secs(self) -> float:
        return self.below_secs + self.in_zone_secs + self.above_secs

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "below_secs": self.below_secs,
            "in_zone_secs": self.in_zone_secs,
            "above_secs": self.above_secs,
        }


def calculate_decoupling(
    timeseries: Sequence[HrPowerPoint],
    min_points: Optional[int] = None,
) -> Optional[float]:
    """
    Compute HR:Power decoupling percentage (cardiac drift).

    Only intervals with both readings and positive power are used. The
    paired points are split by count into a first and second half, and the
    HR/power ratio of each half is compared:

        decoupling = (ratio2 - ratio1) / ratio1 * 100

    Positive values mean heart rate rose for the same power.

    Args:
        timeseries: (power, heart_rate) per interval
        min_points: Minimum paired points (default from settings, 20; never below 2)

    Returns:
        Signed percentage, or None with too few paired points
    """
    required = min_points if min_points is not None else get_settings().decoupling_min_points
    # Each half needs at least one point
    required = max(required, 2)

    paired = [
        (power, heart_rate)
        for power, heart_rate in timeseries
        if power is not None and heart_rate is not None and power > 0
    ]
    if len(paired) < required:
        return None

    mid = len(paired) // 2
    first_half = paired[:mid]
    second_half = paired[mid:]

    avg_power_1 = sum(p for p, _ in first_half) / len(first_half)
    avg_hr_1 = sum(hr for _, hr in first_half) / len(first_half)
    avg_power_2 = sum(p for p, _ in second_half) / len(second_half)
    avg_hr_2 = sum(hr for _, hr in second_half) / len(second_half)

    if avg_power_1 == 0 or avg_power_2 == 0:
        return None

    ratio_1 = avg_hr_1 / avg_power_1
    ratio_2 = avg_hr_2 / avg_power_2
    if ratio_1 == 0:
        return None

    return (ratio_2 - ratio_1) / ratio_1 * 100


def calculate_time_in_zone(
    values: Sequence[Optional[float]],
    lower: float,
    upper: float,
    interval_secs: float,
) -> TimeInZoneResult:
    """
    Time spent below, inside and above [lower, upper].

    Each value covers interval_secs. Missing values count toward no bucket.
    """
    result = TimeInZoneResult()
    for value in values:
        if value is None:
            continue
        if value < lower:
            result.below_secs += interval_secs
        elif value > upper:
            result.above_secs += interval_secs
        else:
            result.in_zone_secs += interval_secs
    return result


def calculate_time_to_zone(
    values: Sequence[Optional[float]],
    lower: float,
    upper: float,
    interval_secs: float,
) -> Optional[float]:
    """Seconds until the first value inside [lower, upper], or None if it never gets there."""
    for index, value in enumerate(values):
        if value is not None and lower <= value <= upper:
            return index * interval_secs
    return None
