"""Cycling power metrics calculations (NP, IF, TSS) for ride summaries."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


NP_WINDOW_SECS = 30


@dataclass
class PowerSummary:
    """Power-derived aggregates for one ride."""

    avg_power: Optional[float] = None
    max_power: Optional[int] = None
    normalized_power: Optional[float] = None
    intensity_factor: Optional[float] = None
    tss: Optional[float] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "avg_power": self.avg_power,
            "max_power": self.max_power,
            "normalized_power": self.normalized_power,
            "intensity_factor": self.intensity_factor,
            "tss": self.tss,
        }


def calculate_normalized_power(
    power_samples: Sequence[float],
    sample_rate_hz: int = 1,
) -> Optional[float]:
    """
    Normalized Power over a power series.

    Surges cost more than steady riding at the same average, so NP
    raises each 30 s rolling mean to the 4th power before averaging.

    Formula: NP = (mean(rolling_30s_power^4))^0.25

    Args:
        power_samples: Power values in watts (one per sample)
        sample_rate_hz: Samples per second (1 for a 1 Hz recording)

    Returns:
        Normalized Power in watts, or None before a full 30 s window
    """
    window_size = NP_WINDOW_SECS * max(sample_rate_hz, 1)
    if len(power_samples) < window_size:
        return None

    # Rolling window sum
    window_sum = float(sum(power_samples[:window_size]))
    fourth_power_sum = (window_sum / window_size) ** 4
    count = 1
    for i in range(window_size, len(power_samples)):
        window_sum += power_samples[i] - power_samples[i - window_size]
        fourth_power_sum += (window_sum / window_size) ** 4
        count += 1

    return (fourth_power_sum / count) ** 0.25


def calculate_intensity_factor(normalized_power: float, ftp: int) -> float:
    """
    Intensity Factor: NP relative to FTP.

    1.0 is a threshold effort. FTP is clamped to at least 1 W.

    Formula: IF = NP / FTP
    """
    return normalized_power / max(ftp, 1)


def calculate_tss(
    duration_secs: float,
    normalized_power: float,
    ftp: int,
) -> float:
    """
    Training Stress Score for a ride.

    A TSS of 100 represents one hour at FTP.

    Formula: TSS = (duration_sec * NP * IF) / (FTP * 3600) * 100

    Args:
        duration_secs: Active duration in seconds
        normalized_power: Normalized Power in watts
        ftp: Functional Threshold Power in watts

    Returns:
        Training Stress Score (0 for a zero-length ride)
    """
    if duration_secs <= 0:
        return 0.0

    ftp = max(ftp, 1)
    intensity_factor = calculate_intensity_factor(normalized_power, ftp)
    return (duration_secs * normalized_power * intensity_factor) / (ftp * 3600) * 100


def summarize_power(
    power_samples: Sequence[Optional[float]],
    ftp: int,
    duration_secs: Optional[float] = None,
    sample_rate_hz: int = 1,
) -> PowerSummary:
    """
    Build the power aggregates of a ride summary from a 1 Hz power series.

    Missing samples are dropped. Average power excludes nothing else
    (coasting zeros count). NP, IF and TSS stay None until there is a full
    30-second window.

    Args:
        power_samples: Power series, None for missing samples
        ftp: FTP in effect for the ride
        duration_secs: Active duration; defaults to samples / sample rate
        sample_rate_hz: Samples per second

    Returns:
        PowerSummary
    """
    samples: List[float] = [p for p in power_samples if p is not None]
    if not samples:
        return PowerSummary()

    summary = PowerSummary(
        avg_power=sum(samples) / len(samples),
        max_power=int(max(samples)),
    )

    normalized_power = calculate_normalized_power(samples, sample_rate_hz)
    if normalized_power is None:
        return summary

    if duration_secs is None:
        duration_secs = len(samples) / max(sample_rate_hz, 1)

    summary.normalized_power = normalized_power
    summary.intensity_factor = calculate_intensity_factor(normalized_power, ftp)
    summary.tss = calculate_tss(duration_secs, normalized_power, ftp)
    return summary
