"""
Sunrise and sunset derivation.

Keyframes with known sunrise/sunset hours are collected from seasons and solar
anchors, placed on their day of the year and linearly interpolated.  The
interval from the last keyframe of a year to the first one wraps around the
year boundary.
"""

from __future__ import annotations

import bisect
import logging
from operator import attrgetter
from typing import NamedTuple

from . import defaults
from .core import CalendarEngine
from .models import CalendarDate, Season
from .seasons import find_season_index
from .utils import hours_to_seconds, time_string_to_hours

logger = logging.getLogger(__name__)


class SolarTimes(NamedTuple):
    """Sunrise and sunset in seconds from midnight."""

    sunrise: int
    sunset: int


class Keyframe(NamedTuple):
    day_of_year: int
    sunrise: float
    sunset: float


def _interpolate(start: float, end: float, progress: float) -> float:
    return start + (end - start) * progress


class SolarCalculator:
    def __init__(
        self,
        engine: CalendarEngine,
        default_sunrise_fraction: float = defaults.DEFAULT_SUNRISE_FRACTION,
        default_sunset_fraction: float = defaults.DEFAULT_SUNSET_FRACTION,
    ) -> None:
        self.engine = engine
        self.default_sunrise_fraction = default_sunrise_fraction
        self.default_sunset_fraction = default_sunset_fraction

    def default_hours(self) -> tuple[float, float]:
        hours_in_day = self.engine.schema.time.hours_in_day
        return (
            hours_in_day * self.default_sunrise_fraction,
            hours_in_day * self.default_sunset_fraction,
        )

    def season_hours(self, season: Season) -> tuple[float, float] | None:
        """Explicit season times, else reference times for well-known names."""

        units = self.engine.schema.time
        if season.sunrise and season.sunset:
            return (
                time_string_to_hours(season.sunrise, units),
                time_string_to_hours(season.sunset, units),
            )
        reference = defaults.SOLAR_REFERENCE_TIMES.get(season.name)
        if reference is None:
            return None
        sunrise, sunset = reference
        return time_string_to_hours(sunrise, units), time_string_to_hours(sunset, units)

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        # a leap-day anchor falls back to the month's last day in common years
        day = min(day, self.engine.get_month_length(month, year))
        return self.engine.day_of_year(CalendarDate(year=year, month=month, day=day))

    def keyframes(self, year: int) -> list[Keyframe]:
        """Keyframes for ``year`` sorted by day of year."""

        schema = self.engine.schema
        units = schema.time
        frames = []
        for season in schema.seasons:
            hours = self.season_hours(season)
            if hours is None:
                continue
            day = self._day_of_year(year, season.start_month, season.start_day or 1)
            frames.append(Keyframe(day, *hours))
        for anchor in schema.solar_anchors:
            if not (anchor.sunrise and anchor.sunset):
                continue
            frames.append(
                Keyframe(
                    self._day_of_year(year, anchor.month, anchor.day),
                    time_string_to_hours(anchor.sunrise, units),
                    time_string_to_hours(anchor.sunset, units),
                )
            )
        frames.sort(key=attrgetter("day_of_year"))
        return frames

    def _progress(self, day: int, start: int, end: int, year_length: int) -> float:
        if end > start:
            total = end - start
        else:
            total = year_length - start + end
        into = day - start if day >= start else year_length - start + day
        return into / total if total > 0 else 0.0

    def _from_keyframes(self, frames: list[Keyframe], date: CalendarDate) -> tuple[float, float]:
        if len(frames) == 1:
            return frames[0].sunrise, frames[0].sunset
        day = self.engine.day_of_year(date)
        year_length = self.engine.get_year_length(date.year)
        index = bisect.bisect_right([f.day_of_year for f in frames], day)
        previous = frames[index - 1] if index > 0 else frames[-1]
        following = frames[index] if index < len(frames) else frames[0]
        if 0 < index < len(frames):
            period = following.day_of_year - previous.day_of_year
            progress = (day - previous.day_of_year) / period if period else 0.0
        else:
            progress = self._progress(day, previous.day_of_year, following.day_of_year, year_length)
        return (
            _interpolate(previous.sunrise, following.sunrise, progress),
            _interpolate(previous.sunset, following.sunset, progress),
        )

    def _from_seasons(self, date: CalendarDate) -> tuple[float, float]:
        """Season-to-season interpolation for calendars without keyframes.

        Only reached when no season has solar times, so both ends use the
        default day split and the result is always that split.
        """

        seasons = self.engine.schema.seasons
        index = find_season_index(self.engine, date, seasons)
        if index is None:
            return self.default_hours()
        current = seasons[index]
        following = seasons[(index + 1) % len(seasons)]
        current_hours = self.season_hours(current) or self.default_hours()
        following_hours = self.season_hours(following) or self.default_hours()
        progress = self._progress(
            self.engine.day_of_year(date),
            self._day_of_year(date.year, current.start_month, current.start_day or 1),
            self._day_of_year(date.year, following.start_month, following.start_day or 1),
            self.engine.get_year_length(date.year),
        )
        return (
            _interpolate(current_hours[0], following_hours[0], progress),
            _interpolate(current_hours[1], following_hours[1], progress),
        )

    def calculate_hours(self, date: CalendarDate) -> tuple[float, float]:
        """Sunrise and sunset for ``date`` as decimal hours."""

        frames = self.keyframes(date.year)
        if frames:
            return self._from_keyframes(frames, date)
        if self.engine.schema.seasons:
            return self._from_seasons(date)
        logger.debug("Calendar %s has no solar data; using default day split", self.engine.schema.id)
        return self.default_hours()

    def calculate(self, date: CalendarDate) -> SolarTimes:
        units = self.engine.schema.time
        sunrise, sunset = self.calculate_hours(date)
        return SolarTimes(hours_to_seconds(sunrise, units), hours_to_seconds(sunset, units))


def solar_times(engine: CalendarEngine, date: CalendarDate) -> SolarTimes:
    return SolarCalculator(engine).calculate(date)
