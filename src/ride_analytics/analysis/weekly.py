"""
Weekly Training Trends

Bucket sessions into ISO weeks (Monday start) and aggregate volume,
load and intensity per week.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from ..models.sessions import SessionRecord

logger = logging.getLogger(__name__)


@dataclass
class WeekBucket:
    """Aggregates for one ISO week that has at least one session."""

    week_start: str                 # Monday, YYYY-MM-DD
    total_tss: float
    avg_power: Optional[float]      # Mean over sessions that report power
    avg_hr: Optional[float]         # Mean over sessions that report HR
    session_count: int
    total_duration_secs: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "week_start": self.week_start,
            "total_tss": self.total_tss,
            "avg_power": self.avg_power,
            "avg_hr": self.avg_hr,
            "session_count": self.session_count,
            "total_duration_secs": self.total_duration_secs,
        }


@dataclass
class _WeekAccumulator:
    total_tss: float = 0.0
    powers: List[float] = field(default_factory=list)
    hrs: List[float] = field(default_factory=list)
    count: int = 0
    total_duration: int = 0


def week_monday(moment: datetime) -> date:
    """
    Monday of the ISO week containing a UTC instant.

    Sunday belongs to the week that started the previous Monday.
    """
    day = moment.date()
    return day - timedelta(days=day.weekday())


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def calculate_weekly_trends(sessions: Iterable[SessionRecord]) -> List[WeekBucket]:
    """
    Group sessions by ISO week and compute per-week aggregates.

    Missing TSS contributes 0 to the week total. Average power and HR are
    means over only the sessions that report them; a week where no session
    reports a metric gets None for it. Weeks with no sessions are not emitted.

    Args:
        sessions: Immutable snapshot of session summaries

    Returns:
        List of WeekBucket sorted by week start
    """
    buckets: Dict[str, _WeekAccumulator] = {}

    for session in sessions:
        started_at = session.started_at
        if started_at is None:
            logger.debug(f"Skipping session {session.id} with malformed start_time {session.start_time!r}")
            continue

        key = week_monday(started_at).isoformat()
        bucket = buckets.setdefault(key, _WeekAccumulator())

        bucket.total_tss += session.tss or 0.0
        if session.avg_power is not None:
            bucket.powers.append(session.avg_power)
        if session.avg_hr is not None:
            bucket.hrs.append(session.avg_hr)
        bucket.count += 1
        bucket.total_duration += session.duration_secs

    return [
        WeekBucket(
            week_start=key,
            total_tss=bucket.total_tss,
            avg_power=_mean(bucket.powers),
            avg_hr=_mean(bucket.hrs),
            session_count=bucket.count,
            total_duration_secs=bucket.total_duration,
        )
        for key, bucket in sorted(buckets.items())
    ]
