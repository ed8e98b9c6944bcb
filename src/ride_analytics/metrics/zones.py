"""Power and heart rate zone resolution from athlete configuration."""

import math
from typing import Dict, List, NamedTuple, Optional, Sequence

from ..config import get_settings
from ..models.sessions import SessionConfig
from ..models.zone_control import ZoneMode


POWER_ZONE_NAMES = {
    1: "Active Recovery",
    2: "Endurance",
    3: "Tempo",
    4: "Threshold",
    5: "VO2max",
    6: "Anaerobic",
    7: "Neuromuscular",
}

HR_ZONE_NAMES = {
    1: "Recovery",
    2: "Aerobic",
    3: "Tempo",
    4: "Threshold",
    5: "VO2max",
}


class ZoneBounds(NamedTuple):
    """Inclusive numeric bounds of a zone (watts or bpm)."""
    lower: int
    upper: int


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def power_zone_boundaries(ftp: int, power_zones: Sequence[int]) -> List[int]:
    """Convert the six %FTP upper bounds to absolute watts."""
    return [round_half_up((pct / 100) * ftp) for pct in power_zones]


def resolve_zone_bounds(
    mode: ZoneMode,
    zone: int,
    config: SessionConfig,
) -> ZoneBounds:
    """
    Resolve a zone number to numeric bounds from the athlete's configuration.

    Power zones are stored as %FTP upper bounds of zones 1-6; zone 7 is open
    ended and approximated as up to 1.5x FTP. HR zones are absolute bpm
    upper bounds of zones 1-5; zone 5 runs up to max HR (220 if unset).
    A top-zone upper bound never falls below its lower bound.

    Args:
        mode: ZoneMode.POWER or ZoneMode.HEART_RATE
        zone: Zone number (values below 1 resolve as zone 1, above the top
              zone as the top zone)
        config: Athlete configuration

    Returns:
        ZoneBounds(lower, upper)
    """
    settings = get_settings()

    if mode == ZoneMode.POWER:
        boundaries = power_zone_boundaries(config.ftp, config.power_zones)
        if zone <= 1:
            return ZoneBounds(0, boundaries[0])
        if zone >= 7:
            top = round_half_up(config.ftp * settings.top_power_zone_multiplier)
            return ZoneBounds(boundaries[5], max(boundaries[5], top))
        return ZoneBounds(boundaries[zone - 2], boundaries[zone - 1])

    hr_zones = config.hr_zones
    if zone <= 1:
        return ZoneBounds(0, hr_zones[0])
    if zone >= 5:
        max_hr = config.max_hr or settings.default_max_hr
        return ZoneBounds(hr_zones[4], max(hr_zones[4], max_hr))
    return ZoneBounds(hr_zones[zone - 2], hr_zones[zone - 1])


def get_power_zones(config: SessionConfig) -> Dict[int, ZoneBounds]:
    """All seven power zones for the configured FTP."""
    return {
        zone: resolve_zone_bounds(ZoneMode.POWER, zone, config)
        for zone in range(1, 8)
    }


def get_hr_zones(config: SessionConfig) -> Dict[int, ZoneBounds]:
    """All five heart rate zones."""
    return {
        zone: resolve_zone_bounds(ZoneMode.HEART_RATE, zone, config)
        for zone in range(1, 6)
    }


def power_zone_for(
    watts: Optional[float],
    ftp: int,
    power_zones: Sequence[int],
) -> Optional[int]:
    """
    Return zone number (1-7) for a live power reading.

    A reading exactly on a boundary belongs to the lower zone. FTP is
    clamped to at least 1 W.

    Args:
        watts: Current power, or None if no reading
        ftp: Functional Threshold Power in watts
        power_zones: Six %FTP upper bounds

    Returns:
        Zone number, or None without a reading
    """
    if watts is None:
        return None

    pct = watts / max(ftp, 1) * 100
    for zone_num, upper in enumerate(power_zones, 1):
        if pct <= upper:
            return zone_num
    return 7


def hr_zone_for(bpm: Optional[float], hr_zones: Sequence[int]) -> Optional[int]:
    """Return zone number (1-5) for a live heart rate, boundary going to the lower zone."""
    if bpm is None:
        return None

    for zone_num, upper in enumerate(hr_zones, 1):
        if bpm <= upper:
            return zone_num
    return 5
