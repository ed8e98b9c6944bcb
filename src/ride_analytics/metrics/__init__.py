"""Training metrics calculations."""

from .fitness import (
    PmcDay,
    calculate_pmc,
    get_form_status,
    group_tss_by_day,
    update_training_load,
)
from .zones import (
    HR_ZONE_NAMES,
    POWER_ZONE_NAMES,
    ZoneBounds,
    get_hr_zones,
    get_power_zones,
    hr_zone_for,
    power_zone_boundaries,
    power_zone_for,
    resolve_zone_bounds,
)
from .power import (
    PowerSummary,
    calculate_intensity_factor,
    calculate_normalized_power,
    calculate_tss,
    summarize_power,
)

__all__ = [
    # Fitness model
    "PmcDay",
    "calculate_pmc",
    "get_form_status",
    "group_tss_by_day",
    "update_training_load",
    # Zones
    "HR_ZONE_NAMES",
    "POWER_ZONE_NAMES",
    "ZoneBounds",
    "get_hr_zones",
    "get_power_zones",
    "hr_zone_for",
    "power_zone_boundaries",
    "power_zone_for",
    "resolve_zone_bounds",
    # Power metrics
    "PowerSummary",
    "calculate_intensity_factor",
    "calculate_normalized_power",
    "calculate_tss",
    "summarize_power",
]
