"""
Purpose: Human-readable travel info rows ("25 min / 5.2 km").
The distance unit is a user preference (see preferences/store.py); the
engine always works in seconds and meters.
"""

from __future__ import annotations

import math
from enum import Enum

from .models import TravelEntry

METERS_PER_KILOMETER = 1000.0
MILES_PER_METER = 0.000621371


class DistanceUnit(str, Enum):
    KILOMETERS = "Kilometers"
    MILES = "Miles"


def format_distance(distance_m: float, unit: DistanceUnit = DistanceUnit.KILOMETERS) -> str:
    if unit == DistanceUnit.MILES:
        return f"{distance_m * MILES_PER_METER:.1f} mi"
    return f"{distance_m / METERS_PER_KILOMETER:.1f} km"


def format_travel_time(duration_s: float) -> str:
    """
    Hours and minutes only, e.g. "1 hr, 5 min", "25 min", "2 hr".
    """
    if duration_s is None or math.isnan(duration_s) or duration_s < 0:
        return "N/A"

    total_minutes = int(duration_s // 60)
    hours, minutes = divmod(total_minutes, 60)

    if hours and minutes:
        return f"{hours} hr, {minutes} min"
    if hours:
        return f"{hours} hr"
    return f"{minutes} min"


def format_entry(entry: TravelEntry, unit: DistanceUnit = DistanceUnit.KILOMETERS) -> str:
    route = entry.route
    return f"{entry.participant.name}: {format_travel_time(route.duration_s)} / {format_distance(route.distance_m, unit)}"
