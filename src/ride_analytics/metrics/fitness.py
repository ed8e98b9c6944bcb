"""Fitness-Fatigue model calculations (CTL, ATL, TSB) over session history."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from ..config import get_settings
from ..models.sessions import SessionRecord

logger = logging.getLogger(__name__)


@dataclass
class PmcDay:
    """One calendar day of the Performance Management Chart."""

    date: str   # YYYY-MM-DD
    tss: float  # Summed TSS for the day (0 on rest days)
    ctl: float  # Chronic Training Load (fitness) - 42 day average
    atl: float  # Acute Training Load (fatigue) - 7 day average
    tsb: float  # Training Stress Balance (form) = CTL - ATL

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date,
            "tss": self.tss,
            "ctl": self.ctl,
            "atl": self.atl,
            "tsb": self.tsb,
        }


def update_training_load(
    previous_load: float,
    daily_tss: float,
    time_constant: int,
) -> float:
    """
    Advance an exponentially weighted training load by one day.

    Uses the formula: load_n = load_{n-1} + (tss - load_{n-1}) / time_constant

    Args:
        previous_load: Yesterday's CTL or ATL
        daily_tss: Today's summed TSS
        time_constant: Time constant in days (42 for CTL, 7 for ATL)

    Returns:
        Today's load value
    """
    return previous_load + (daily_tss - previous_load) / time_constant


def group_tss_by_day(sessions: Iterable[SessionRecord]) -> Dict[str, float]:
    """Sum TSS per calendar day key; sessions without TSS contribute 0."""
    tss_by_day: Dict[str, float] = {}
    for session in sessions:
        if session.day is None:
            logger.debug(f"Skipping session {session.id} with malformed start_time {session.start_time!r}")
            continue
        key = session.date_key
        tss_by_day[key] = tss_by_day.get(key, 0.0) + (session.tss or 0.0)
    return tss_by_day


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def calculate_pmc(
    sessions: Iterable[SessionRecord],
    today: Optional[date] = None,
    ctl_time_constant: Optional[int] = None,
    atl_time_constant: Optional[int] = None,
) -> List[PmcDay]:
    """
    Compute the Performance Management Chart from a session snapshot.

    Walks every calendar day from the earliest session up to and including
    today, in ascending order, starting from CTL = ATL = 0. Days without a
    session are applied with TSS 0, so the output has no gaps.

    Args:
        sessions: Immutable snapshot of session summaries
        today: Last day to emit (defaults to the current UTC date)
        ctl_time_constant: Days for CTL (default from settings, 42)
        atl_time_constant: Days for ATL (default from settings, 7)

    Raises:
        ValueError: If a time constant is below one day

    Returns:
        List of PmcDay, one per calendar day; empty for an empty snapshot
    """
    settings = get_settings()
    ctl_tc = ctl_time_constant if ctl_time_constant is not None else settings.ctl_time_constant
    atl_tc = atl_time_constant if atl_time_constant is not None else settings.atl_time_constant
    if ctl_tc < 1 or atl_tc < 1:
        raise ValueError("CTL and ATL time constants must be at least one day")

    tss_by_day = group_tss_by_day(sessions)
    if not tss_by_day:
        return []

    first_day = date.fromisoformat(min(tss_by_day))
    end_day = today or utc_today()

    results: List[PmcDay] = []
    ctl = 0.0
    atl = 0.0

    current = first_day
    while current <= end_day:
        key = current.isoformat()
        tss = tss_by_day.get(key, 0.0)

        ctl = update_training_load(ctl, tss, ctl_tc)
        atl = update_training_load(atl, tss, atl_tc)

        results.append(PmcDay(date=key, tss=tss, ctl=ctl, atl=atl, tsb=ctl - atl))
        current += timedelta(days=1)

    return results


def get_form_status(tsb: float) -> str:
    """
    Describe current form from Training Stress Balance.

    Args:
        tsb: Training Stress Balance (CTL - ATL)

    Returns:
        Short form label
    """
    if tsb > 25:
        return "fresh"
    elif tsb > 0:
        return "positive"
    elif tsb > -10:
        return "neutral"
    elif tsb > -25:
        return "fatigued"
    else:
        return "very_fatigued"
