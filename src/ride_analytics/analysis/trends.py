"""
Fitness Trend Analysis

FTP progression over the session history and the trailing CTL ramp rate.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..config import get_settings
from ..metrics.fitness import PmcDay
from ..models.sessions import SessionRecord


class RampClassification(str, Enum):
    """Qualitative label for a weekly CTL change."""
    RECOVERY = "recovery"
    MAINTENANCE = "maintenance"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
    EXCESSIVE = "excessive"


# Lower edge (inclusive) of each band in CTL per week, highest first.
# Anything below the maintenance edge is recovery.
RAMP_BANDS = (
    (8.0, RampClassification.EXCESSIVE),
    (6.0, RampClassification.AGGRESSIVE),
    (3.0, RampClassification.MODERATE),
    (-1.0, RampClassification.MAINTENANCE),
)


@dataclass
class FtpPoint:
    """FTP in effect from a given day."""

    date: str
    ftp: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"date": self.date, "ftp": self.ftp}


@dataclass
class RampRate:
    """Trailing 7-day CTL change and its classification."""

    current: float
    classification: RampClassification

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "classification": self.classification.value,
        }


def extract_ftp_progression(sessions: Iterable[SessionRecord]) -> List[FtpPoint]:
    """
    Reduce a session history to FTP change points.

    Emits the first known FTP, then a point whenever FTP differs from the
    previously emitted value. The series always ends at the latest session
    with a known FTP, even when FTP did not change there.

    Args:
        sessions: Immutable snapshot of session summaries

    Returns:
        List of FtpPoint in chronological order; empty if no session has FTP
    """
    with_ftp = sorted(
        (s for s in sessions if s.ftp is not None),
        key=lambda s: s.start_time,
    )
    if not with_ftp:
        return []

    points: List[FtpPoint] = []
    previous_ftp: Optional[int] = None

    for session in with_ftp:
        if session.ftp != previous_ftp:
            points.append(FtpPoint(date=session.date_key, ftp=session.ftp))
            previous_ftp = session.ftp

    last = with_ftp[-1]
    if points[-1].date != last.date_key:
        points.append(FtpPoint(date=last.date_key, ftp=last.ftp))

    return points


def classify_ramp_rate(current: float) -> RampClassification:
    """
    Classify a weekly CTL change.

    Bands (CTL/week):
    - < -1: recovery
    - -1 to 3: maintenance
    - 3 to 6: moderate
    - 6 to 8: aggressive
    - >= 8: excessive
    """
    for lower_edge, classification in RAMP_BANDS:
        if current >= lower_edge:
            return classification
    return RampClassification.RECOVERY


def calculate_ramp_rate(
    pmc: Sequence[PmcDay],
    window_days: Optional[int] = None,
) -> Optional[RampRate]:
    """
    Trailing CTL ramp rate from a PMC day sequence.

    Args:
        pmc: Consecutive PmcDay entries in date order
        window_days: Lookback in days (default from settings, 7)

    Returns:
        RampRate, or None with fewer than window + 1 days of history
    """
    window = window_days if window_days is not None else get_settings().ramp_window_days
    if len(pmc) < window + 1:
        return None

    current = pmc[-1].ctl - pmc[-1 - window].ctl
    return RampRate(current=current, classification=classify_ramp_rate(current))
