"""Season resolution for world calendars."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..exceptions import CalendarSchemaError
from . import defaults
from .core import CalendarEngine
from .models import CalendarDate, Season

logger = logging.getLogger(__name__)


def default_season_icon(name: str) -> str:
    """Icon keyword derived from a season name, ``"spring"`` when nothing matches."""

    lower = name.lower()
    if "spring" in lower:
        return "spring"
    if "summer" in lower:
        return "summer"
    if "autumn" in lower or "fall" in lower:
        return "fall"
    if "winter" in lower:
        return "winter"
    return "spring"


def default_season(month: int) -> Season:
    """Built-in season banding used when a calendar has no matching season."""

    for name, start, end in defaults.DEFAULT_SEASON_BANDS:
        if start <= month <= end:
            return Season(name=name, start_month=start, end_month=end, icon=name.lower())
    name = defaults.DEFAULT_SEASON_FALLBACK
    return Season(name=name, start_month=12, end_month=2, icon=name.lower())


class SeasonResolver:
    """Find the season a date belongs to.

    Seasons are tested in definition order and the first match wins.  An
    ``end_day`` larger than its month rolls the excess into the following
    months; when the calendar runs out of months the end is clamped to the
    last day of the final month.
    """

    def __init__(self, engine: CalendarEngine, warn_on_overflow: bool = True) -> None:
        self.engine = engine
        self.warn_on_overflow = warn_on_overflow

    def _check_months(self, season: Season) -> None:
        month_count = len(self.engine.schema.months)
        for label, value in (("start_month", season.start_month), ("end_month", season.end_month)):
            if value is not None and not 1 <= value <= month_count:
                raise CalendarSchemaError(
                    f"Season {season.name!r} {label}={value} is outside months 1..{month_count}",
                    code="invalid_season",
                )
        for label, value in (("start_day", season.start_day), ("end_day", season.end_day)):
            if value is not None and value < 1:
                raise CalendarSchemaError(
                    f"Season {season.name!r} {label}={value} must be at least 1",
                    code="invalid_season",
                )

    def effective_end(self, season: Season, year: int) -> tuple[int, int]:
        """Return ``(month, day)`` of the last day of ``season`` in ``year``."""

        self._check_months(season)
        lengths = self.engine.get_month_lengths(year)
        end_month = season.end_month or season.start_month
        literal = lengths[end_month - 1]
        if season.end_day is None:
            return end_month, literal
        if season.end_day <= literal:
            return end_month, season.end_day

        if self.warn_on_overflow:
            logger.warning(
                "Season %r end_day=%s exceeds the %s days of month %s; rolling into later months",
                season.name,
                season.end_day,
                literal,
                end_month,
            )
        month, remaining = end_month, season.end_day
        while remaining > lengths[month - 1]:
            if month == len(lengths):
                return month, lengths[-1]
            remaining -= lengths[month - 1]
            month += 1
        return month, remaining

    def _position(self, date: CalendarDate) -> tuple[int, int]:
        """``(month, day)`` ordering key; intercalary days sit outside their month's days."""

        if date.intercalary is None:
            return date.month, date.day
        span = next(
            (i for i in self.engine.get_intercalary_days(date.year) if i.name == date.intercalary),
            None,
        )
        if span is None:
            return date.month, date.day
        if span.after is not None:
            return date.month, self.engine.get_month_length(date.month, date.year) + date.day
        return date.month, date.day - span.days

    def contains(self, date: CalendarDate, season: Season) -> bool:
        start = (season.start_month, 1 if season.start_day is None else season.start_day)
        end = self.effective_end(season, date.year)
        current = self._position(date)
        configured_end = season.end_month or season.start_month
        if season.start_month > configured_end:
            return current >= start or current <= end
        return start <= current <= end

    def find_index(self, date: CalendarDate, seasons: Sequence[Season]) -> int | None:
        for index, season in enumerate(seasons):
            if self.contains(date, season):
                return index
        return None

    def resolve(self, date: CalendarDate, seasons: Sequence[Season] | None = None) -> Season:
        """Season containing ``date``; the built-in banding when none matches."""

        if seasons is None:
            seasons = self.engine.schema.seasons
        index = self.find_index(date, seasons)
        if index is None:
            return default_season(date.month)
        season = seasons[index]
        if season.icon is None:
            return replace(season, icon=default_season_icon(season.name))
        return season


def resolve_season(
    engine: CalendarEngine, date: CalendarDate, seasons: Sequence[Season] | None = None
) -> Season:
    return SeasonResolver(engine).resolve(date, seasons)


def is_date_in_season(engine: CalendarEngine, date: CalendarDate, season: Season) -> bool:
    return SeasonResolver(engine, warn_on_overflow=False).contains(date, season)


def find_season_index(
    engine: CalendarEngine, date: CalendarDate, seasons: Sequence[Season]
) -> int | None:
    return SeasonResolver(engine, warn_on_overflow=False).find_index(date, seasons)
