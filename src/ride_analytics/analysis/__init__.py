"""
Analysis module for ride history and recorded series.

Provides weekly trend buckets, FTP progression, ramp rate, and
zone adherence (decoupling, time-in-zone, time-to-zone).
"""

from .weekly import (
    WeekBucket,
    calculate_weekly_trends,
    week_monday,
)
from .trends import (
    RAMP_BANDS,
    FtpPoint,
    RampClassification,
    RampRate,
    calculate_ramp_rate,
    classify_ramp_rate,
    extract_ftp_progression,
)
from .zones import (
    HrPowerPoint,
    TimeInZoneResult,
    calculate_decoupling,
    calculate_time_in_zone,
    calculate_time_to_zone,
)

__all__ = [
    # Weekly
    "WeekBucket",
    "calculate_weekly_trends",
    "week_monday",
    # Trends
    "RAMP_BANDS",
    "FtpPoint",
    "RampClassification",
    "RampRate",
    "calculate_ramp_rate",
    "classify_ramp_rate",
    "extract_ftp_progression",
    # Zone adherence
    "HrPowerPoint",
    "TimeInZoneResult",
    "calculate_decoupling",
    "calculate_time_in_zone",
    "calculate_time_to_zone",
]
