"""Historical analytics over a session snapshot."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..analysis.trends import FtpPoint, RampRate, calculate_ramp_rate, extract_ftp_progression
from ..analysis.weekly import WeekBucket, calculate_weekly_trends
from ..metrics.fitness import PmcDay, calculate_pmc
from ..models.sessions import SessionRecord
from .base import BaseService, SessionSource


@dataclass
class AnalyticsReport:
    """Everything the history view shows, computed from one snapshot."""

    pmc: List[PmcDay] = field(default_factory=list)
    weekly: List[WeekBucket] = field(default_factory=list)
    ftp_progression: List[FtpPoint] = field(default_factory=list)
    ramp_rate: Optional[RampRate] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pmc": [d.to_dict() for d in self.pmc],
            "weekly": [w.to_dict() for w in self.weekly],
            "ftp_progression": [p.to_dict() for p in self.ftp_progression],
            "ramp_rate": self.ramp_rate.to_dict() if self.ramp_rate else None,
        }


def build_report(sessions: List[SessionRecord], today: Optional[date] = None) -> AnalyticsReport:
    """Compute every history metric from the same snapshot."""
    pmc = calculate_pmc(sessions, today=today)
    return AnalyticsReport(
        pmc=pmc,
        weekly=calculate_weekly_trends(sessions),
        ftp_progression=extract_ftp_progression(sessions),
        ramp_rate=calculate_ramp_rate(pmc),
    )


class AnalyticsService(BaseService):
    """Takes a snapshot from the session source and builds a report on request."""

    def __init__(self, source: SessionSource) -> None:
        super().__init__()
        self.source = source

    def refresh(self, today: Optional[date] = None) -> AnalyticsReport:
        """Recompute from a fresh snapshot; callers decide when."""
        sessions = list(self.source.list_sessions())
        self.logger.debug(f"Building analytics from {len(sessions)} sessions")
        return build_report(sessions, today=today)
