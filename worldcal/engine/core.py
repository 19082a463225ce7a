"""Calendar time engine.

This module converts between world time (signed integer seconds) and
structured :class:`~worldcal.engine.models.CalendarDate` values for any
calendar described by a :class:`~worldcal.engine.models.CalendarSchema`.

Day 0 is the first day of the schema's epoch year.  Within a year the days are
laid out month by month; intercalary spans anchored ``before`` a month come
ahead of its first day and spans anchored ``after`` it follow its last day,
each group in definition order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import NamedTuple

from ..exceptions import InvalidDateError
from ..validators import validate_date_parts, validate_schema
from .models import CalendarDate, CalendarSchema, IntercalaryDay, TimeOfDay, WeekName

logger = logging.getLogger(__name__)


class _Segment(NamedTuple):
    month: int
    length: int
    span: IntercalaryDay | None


class CalendarEngine:
    """Pure date arithmetic over one immutable calendar schema.

    Per-year month lengths and year lengths are memoised in dicts holding
    immutable values, so one engine can be shared between threads.
    """

    def __init__(self, schema: CalendarSchema, *, validate: bool = True) -> None:
        if validate:
            validate_schema(schema)
        self.schema = schema
        self._leap_month = schema.month_index(schema.leap_year.month)
        self._before: dict[int, tuple[IntercalaryDay, ...]] = {}
        self._after: dict[int, tuple[IntercalaryDay, ...]] = {}
        for span in schema.intercalary:
            index = schema.month_index(span.anchor)
            if index is None:
                continue
            target = self._after if span.after is not None else self._before
            target[index] = target.get(index, ()) + (span,)
        self._month_lengths: dict[int, tuple[int, ...]] = {}
        self._year_lengths: dict[int, int] = {}
        self._weekday_year_lengths: dict[int, int] = {}

    # ------------------------------------------------------------------
    # Year structure
    # ------------------------------------------------------------------
    def is_leap_year(self, year: int) -> bool:
        """Return True if ``year`` is a leap year under the schema's rule."""

        leap = self.schema.leap_year
        if leap.rule == "gregorian":
            return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
        if leap.rule == "custom":
            if not leap.interval:
                return False
            # Python's modulo is non-negative for a positive interval
            return (year - leap.offset) % leap.interval == 0
        return False

    def get_month_lengths(self, year: int) -> tuple[int, ...]:
        """Return the length of every month in ``year``.

        In leap years the rule's month is adjusted by ``extra_days`` and never
        drops below one day.
        """

        cached = self._month_lengths.get(year)
        if cached is not None:
            return cached
        lengths = [m.days for m in self.schema.months]
        if self._leap_month is not None and self.is_leap_year(year):
            adjusted = lengths[self._leap_month - 1] + self.schema.leap_year.extra_days
            if adjusted < 1:
                logger.warning(
                    "Calendar %s: month %r clamped to 1 day in year %s (was %s)",
                    self.schema.id,
                    self.schema.leap_year.month,
                    year,
                    adjusted,
                )
                adjusted = 1
            lengths[self._leap_month - 1] = adjusted
        result = tuple(lengths)
        self._month_lengths[year] = result
        return result

    def get_month_length(self, month: int, year: int) -> int:
        """Length of ``month`` in ``year``; 0 for a month outside the calendar."""

        lengths = self.get_month_lengths(year)
        if not 1 <= month <= len(lengths):
            return 0
        return lengths[month - 1]

    def get_intercalary_days(self, year: int) -> tuple[IntercalaryDay, ...]:
        """Intercalary spans that occur in ``year``."""

        leap = self.is_leap_year(year)
        return tuple(i for i in self.schema.intercalary if leap or not i.leap_year_only)

    def get_intercalary_days_after_month(self, year: int, month: int) -> tuple[IntercalaryDay, ...]:
        leap = self.is_leap_year(year)
        return tuple(i for i in self._after.get(month, ()) if leap or not i.leap_year_only)

    def get_intercalary_days_before_month(self, year: int, month: int) -> tuple[IntercalaryDay, ...]:
        leap = self.is_leap_year(year)
        return tuple(i for i in self._before.get(month, ()) if leap or not i.leap_year_only)

    def intercalary_days_total(self, year: int) -> int:
        return sum(i.days for i in self.get_intercalary_days(year))

    def get_year_length(self, year: int) -> int:
        """Number of days in ``year`` including intercalary spans."""

        cached = self._year_lengths.get(year)
        if cached is None:
            cached = sum(self.get_month_lengths(year)) + self.intercalary_days_total(year)
            self._year_lengths[year] = cached
        return cached

    def _weekday_year_length(self, year: int) -> int:
        cached = self._weekday_year_lengths.get(year)
        if cached is None:
            cached = sum(self.get_month_lengths(year)) + sum(
                i.days for i in self.get_intercalary_days(year) if i.counts_for_weekdays
            )
            self._weekday_year_lengths[year] = cached
        return cached

    def _layout(self, year: int) -> Iterator[_Segment]:
        lengths = self.get_month_lengths(year)
        for month, length in enumerate(lengths, start=1):
            for span in self.get_intercalary_days_before_month(year, month):
                yield _Segment(month, span.days, span)
            yield _Segment(month, length, None)
            for span in self.get_intercalary_days_after_month(year, month):
                yield _Segment(month, span.days, span)

    def _days_before_year(self, year: int, year_length: Callable[[int], int]) -> int:
        """Signed day count from the start of the epoch year to the start of ``year``."""

        epoch = self.schema.year.epoch
        if year >= epoch:
            return sum(year_length(y) for y in range(epoch, year))
        return -sum(year_length(y) for y in range(year, epoch))

    def _offset_in_year(self, date: CalendarDate, weekdays_only: bool = False) -> int:
        offset = 0
        for segment in self._layout(date.year):
            if date.intercalary is None:
                if segment.span is None and segment.month == date.month:
                    return offset + date.day - 1
            elif segment.span is not None and segment.span.name == date.intercalary:
                return offset + date.day - 1
            if weekdays_only and segment.span is not None and not segment.span.counts_for_weekdays:
                continue
            offset += segment.length
        raise InvalidDateError(f"Date {date} is not part of year {date.year}", code="invalid_date")

    # ------------------------------------------------------------------
    # Day counters
    # ------------------------------------------------------------------
    def date_to_days(self, date: CalendarDate) -> int:
        """Return days elapsed from the start of the epoch year to ``date``."""

        validate_date_parts(self, date.year, date.month, date.day, date.intercalary)
        return self._days_before_year(date.year, self.get_year_length) + self._offset_in_year(date)

    def days_to_date(self, total_days: int) -> CalendarDate:
        """Inverse of :meth:`date_to_days`; the result carries no time."""

        year = self.schema.year.epoch
        remaining = total_days
        while remaining >= self.get_year_length(year):
            remaining -= self.get_year_length(year)
            year += 1
        while remaining < 0:
            year -= 1
            remaining += self.get_year_length(year)

        for segment in self._layout(year):
            if remaining < segment.length:
                if segment.span is not None:
                    return CalendarDate(
                        year=year,
                        month=segment.month,
                        day=remaining + 1,
                        intercalary=segment.span.name,
                    )
                day = remaining + 1
                return CalendarDate(
                    year=year,
                    month=segment.month,
                    day=day,
                    weekday=self.calculate_weekday(year, segment.month, day),
                )
            remaining -= segment.length
        raise AssertionError("year layout does not add up to the year length")  # pragma: no cover

    def day_of_year(self, date: CalendarDate) -> int:
        """1-based position of ``date`` in its year, intercalary spans included."""

        validate_date_parts(self, date.year, date.month, date.day, date.intercalary)
        return self._offset_in_year(date) + 1

    def calculate_weekday(self, year: int, month: int, day: int) -> int:
        """Weekday index of a regular date.

        Only weekday-contributing days are counted: intercalary spans with
        ``counts_for_weekdays`` disabled do not advance the cycle.
        """

        validate_date_parts(self, year, month, day)
        date = CalendarDate(year=year, month=month, day=day)
        elapsed = self._days_before_year(year, self._weekday_year_length) + self._offset_in_year(
            date, weekdays_only=True
        )
        return (elapsed + self.schema.year.start_day) % len(self.schema.weekdays)

    # ------------------------------------------------------------------
    # World time
    # ------------------------------------------------------------------
    def _split_seconds(self, absolute: int) -> CalendarDate:
        units = self.schema.time
        days, second_of_day = divmod(absolute, units.seconds_per_day)
        hour, rest = divmod(second_of_day, units.seconds_per_hour)
        minute, second = divmod(rest, units.seconds_per_minute)
        date = self.days_to_date(days)
        return date.replace(time=TimeOfDay(hour=hour, minute=minute, second=second))

    def _time_seconds(self, time: TimeOfDay | None) -> int:
        if time is None:
            return 0
        units = self.schema.time
        return time.hour * units.seconds_per_hour + time.minute * units.seconds_per_minute + time.second

    def _zero_point(self) -> int:
        """Absolute seconds that world time 0 maps to without a creation timestamp."""

        world_time = self.schema.world_time
        if world_time is None or world_time.interpretation != "real-time-based":
            return 0
        days = self._days_before_year(world_time.current_year, self.get_year_length)
        return days * self.schema.time.seconds_per_day

    def _uses_creation_timestamp(self, timestamp: float | None) -> bool:
        return timestamp is not None and self.schema.interpretation == "real-time-based"

    def _creation_point(self, timestamp: float) -> int | None:
        """Absolute seconds of the calendar moment matching a real creation timestamp.

        The calendar year is the UTC year of ``timestamp`` shifted by the world
        time epoch year; month, day and time are the timestamp's UTC values
        clamped into the calendar.  Returns ``None`` for unusable timestamps.
        """

        if not math.isfinite(timestamp):
            return None
        try:
            created = datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

        schema = self.schema
        units = schema.time
        epoch_year = schema.world_time.epoch_year if schema.world_time else schema.year.epoch
        year = created.year + epoch_year
        month = min(created.month, len(schema.months))
        day = min(created.day, self.get_month_length(month, year))
        base = CalendarDate(year=year, month=month, day=day)
        days = self._days_before_year(year, self.get_year_length) + self._offset_in_year(base)
        seconds = (
            min(created.hour, units.hours_in_day - 1) * units.seconds_per_hour
            + min(created.minute, units.minutes_in_hour - 1) * units.seconds_per_minute
            + min(created.second, units.seconds_in_minute - 1)
        )
        return days * units.seconds_per_day + seconds

    def world_time_to_date(
        self, world_time: int, world_creation_timestamp: float | None = None
    ) -> CalendarDate:
        """Convert world time seconds to a calendar date with time of day.

        For ``real-time-based`` calendars an optional real-world creation
        timestamp (Unix seconds) anchors world time 0.  A non-finite timestamp
        does not raise: the returned date has a ``math.nan`` year.
        """

        world_time = math.floor(world_time)
        if self._uses_creation_timestamp(world_creation_timestamp):
            origin = self._creation_point(world_creation_timestamp)
            if origin is None:
                logger.warning(
                    "Calendar %s: invalid world creation timestamp %r; year is NaN",
                    self.schema.id,
                    world_creation_timestamp,
                )
                date = self._split_seconds(self._zero_point() + world_time)
                return date.replace(year=math.nan)
            return self._split_seconds(origin + world_time)
        return self._split_seconds(self._zero_point() + world_time)

    def date_to_world_time(
        self, date: CalendarDate, world_creation_timestamp: float | None = None
    ) -> int:
        """Exact inverse of :meth:`world_time_to_date` for the same timestamp."""

        absolute = self.date_to_days(date) * self.schema.time.seconds_per_day + self._time_seconds(
            date.time
        )
        if self._uses_creation_timestamp(world_creation_timestamp):
            origin = self._creation_point(world_creation_timestamp)
            if origin is None:
                logger.warning(
                    "Calendar %s: invalid world creation timestamp %r; world time is NaN",
                    self.schema.id,
                    world_creation_timestamp,
                )
                return math.nan
            return absolute - origin
        return absolute - self._zero_point()

    # ------------------------------------------------------------------
    # Construction and arithmetic
    # ------------------------------------------------------------------
    def create_date(
        self,
        year: int,
        month: int,
        day: int,
        time: TimeOfDay | None = None,
        intercalary: str | None = None,
    ) -> CalendarDate:
        """Return a validated date with its weekday filled in."""

        validate_date_parts(self, year, month, day, intercalary)
        if time is not None:
            units = self.schema.time
            if not (
                0 <= time.hour < units.hours_in_day
                and 0 <= time.minute < units.minutes_in_hour
                and 0 <= time.second < units.seconds_in_minute
            ):
                raise InvalidDateError(f"Time {time} is outside the calendar's units", code="invalid_time")
        weekday = None if intercalary else self.calculate_weekday(year, month, day)
        return CalendarDate(
            year=year, month=month, day=day, weekday=weekday, time=time, intercalary=intercalary
        )

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        result = self.days_to_date(self.date_to_days(date) + days)
        return result.replace(time=date.time)

    def add_months(self, date: CalendarDate, months: int) -> CalendarDate:
        """Move ``months`` months, clamping the day to the target month's length."""

        month_count = len(self.schema.months)
        index = date.month - 1 + months
        year = date.year + index // month_count
        month = index % month_count + 1
        return self._clamped(date, year, month)

    def add_years(self, date: CalendarDate, years: int) -> CalendarDate:
        return self._clamped(date, date.year + years, date.month)

    def _clamped(self, date: CalendarDate, year: int, month: int) -> CalendarDate:
        day = min(date.day, self.get_month_length(month, year))
        return CalendarDate(
            year=year,
            month=month,
            day=day,
            weekday=self.calculate_weekday(year, month, day),
            time=date.time,
        )

    def add_seconds(self, date: CalendarDate, seconds: int) -> CalendarDate:
        absolute = self.date_to_days(date) * self.schema.time.seconds_per_day
        return self._split_seconds(absolute + self._time_seconds(date.time) + seconds)

    def add_minutes(self, date: CalendarDate, minutes: int) -> CalendarDate:
        return self.add_seconds(date, minutes * self.schema.time.seconds_per_minute)

    def add_hours(self, date: CalendarDate, hours: int) -> CalendarDate:
        return self.add_seconds(date, hours * self.schema.time.seconds_per_hour)

    def compare(self, a: CalendarDate, b: CalendarDate) -> int:
        """Return -1, 0 or 1 as ``a`` is before, equal to or after ``b``."""

        key_a = (self.date_to_days(a), self._time_seconds(a.time))
        key_b = (self.date_to_days(b), self._time_seconds(b.time))
        return (key_a > key_b) - (key_a < key_b)

    def days_between(self, start: CalendarDate, end: CalendarDate) -> int:
        return self.date_to_days(end) - self.date_to_days(start)

    # ------------------------------------------------------------------
    # Weeks
    # ------------------------------------------------------------------
    def get_week_of_month(self, date: CalendarDate) -> int | None:
        """1-based week of the month, or ``None`` when weeks do not apply."""

        weeks = self.schema.weeks
        if weeks is None or weeks.type == "year-based":
            return None
        per_week = weeks.days_per_week or len(self.schema.weekdays)
        raw = (date.day - 1) // per_week + 1
        month_days = self.get_month_length(date.month, date.year)
        if month_days % per_week == 0:
            return raw
        expected = weeks.per_month if weeks.per_month is not None else month_days // per_week
        if weeks.remainder_handling == "extend-last" and raw == expected + 1:
            return expected
        if weeks.remainder_handling == "none" and raw > expected:
            return None
        return raw

    def get_week_info(self, date: CalendarDate) -> WeekName | None:
        week = self.get_week_of_month(date)
        weeks = self.schema.weeks
        if week is None or weeks is None:
            return None
        if len(weeks.names) >= week:
            return weeks.names[week - 1]
        if weeks.naming_pattern == "ordinal":
            return WeekName(name=f"{_ordinal(week)} Week", abbreviation=str(week))
        if weeks.naming_pattern == "numeric":
            return WeekName(name=f"Week {week}", abbreviation=str(week))
        return None


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"
