"""World calendar helper utilities.

Conversions between ``H:MM`` strings, decimal hours and seconds.  Every helper
takes the calendar's :class:`~worldcal.engine.models.TimeUnits`; no code path
assumes 24/60/60 unless the units are omitted.
"""

from __future__ import annotations

import math
import re

from ..exceptions import InvalidTimeFormatError
from .models import TimeOfDay, TimeUnits

_TIME_RE = re.compile(r"^\s*(\d{1,3}):(\d{1,3})\s*$")  # H:MM, 1-3 digits each

DEFAULT_UNITS = TimeUnits()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""

    return math.floor(value + 0.5)


def parse_time_string(value: str, units: TimeUnits | None = None) -> tuple[int, int]:
    """Parse ``H:MM`` into ``(hour, minute)``.

    Hours and minutes accept one to three digits so calendars with long days
    or long hours can express e.g. ``125:45`` or ``6:100``.  Raises
    :class:`InvalidTimeFormatError` for anything else, including minutes that
    do not fit the calendar's hour.
    """

    units = units or DEFAULT_UNITS
    if not isinstance(value, str):
        raise InvalidTimeFormatError(
            f"Invalid time format: {value!r}. Expected H:MM", code="invalid_time"
        )
    match = _TIME_RE.fullmatch(value)
    if not match:
        raise InvalidTimeFormatError(
            f"Invalid time format: {value!r}. Expected H:MM", code="invalid_time"
        )
    hour, minute = map(int, match.groups())
    if minute >= units.minutes_in_hour:
        raise InvalidTimeFormatError(
            f"Invalid time {value!r}: minutes must be below {units.minutes_in_hour}",
            code="invalid_time",
        )
    return hour, minute


def time_string_to_hours(value: str, units: TimeUnits | None = None) -> float:
    units = units or DEFAULT_UNITS
    hour, minute = parse_time_string(value, units)
    return hour + minute / units.minutes_in_hour


def time_string_to_seconds(value: str, units: TimeUnits | None = None) -> int:
    units = units or DEFAULT_UNITS
    hour, minute = parse_time_string(value, units)
    return hour * units.seconds_per_hour + minute * units.seconds_per_minute


def decimal_hours_to_components(hours: float, units: TimeUnits | None = None) -> TimeOfDay:
    """Split decimal hours into hour/minute, carrying a rounded-up full hour."""

    units = units or DEFAULT_UNITS
    hour = math.floor(hours)
    minute = round_half_up((hours - hour) * units.minutes_in_hour)
    if minute >= units.minutes_in_hour:
        hour += 1
        minute = 0
    return TimeOfDay(hour=hour, minute=minute)


def hours_to_time_string(hours: float, units: TimeUnits | None = None) -> str:
    """Format decimal hours as zero padded ``HH:MM``."""

    parts = decimal_hours_to_components(hours, units)
    return f"{parts.hour:02d}:{parts.minute:02d}"


def hours_to_seconds(hours: float, units: TimeUnits | None = None) -> int:
    units = units or DEFAULT_UNITS
    return round_half_up(hours * units.seconds_per_hour)


def seconds_to_time_string(seconds: int, units: TimeUnits | None = None) -> str:
    """Format seconds from midnight as ``HH:MM`` (seconds are truncated)."""

    units = units or DEFAULT_UNITS
    hour, rest = divmod(int(seconds), units.seconds_per_hour)
    minute = rest // units.seconds_per_minute
    return f"{hour:02d}:{minute:02d}"


__all__ = [
    "decimal_hours_to_components",
    "hours_to_seconds",
    "hours_to_time_string",
    "parse_time_string",
    "round_half_up",
    "seconds_to_time_string",
    "time_string_to_hours",
    "time_string_to_seconds",
]
