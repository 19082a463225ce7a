"""Validators for world calendar dates and calendar definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import CalendarSchemaError, InvalidDateError

if TYPE_CHECKING:
    from .engine.core import CalendarEngine
    from .engine.models import CalendarSchema

INTERPRETATIONS = ("epoch-based", "real-time-based")
LEAP_RULES = ("none", "gregorian", "custom")


def validate_date_parts(
    engine: CalendarEngine,
    year: int,
    month: int,
    day: int,
    intercalary: str | None = None,
) -> None:
    """Validate numeric parts of a date against ``engine``'s calendar."""

    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidDateError(f"Year must be an integer, got {year!r}", code="invalid_year")
    month_count = len(engine.schema.months)
    if not 1 <= month <= month_count:
        raise InvalidDateError(f"Month must be 1..{month_count}, got {month}", code="invalid_month")

    if intercalary is None:
        max_day = engine.get_month_length(month, year)
        if not 1 <= day <= max_day:
            raise InvalidDateError(
                f"Month {month} has {max_day} days in year {year}", code="invalid_day"
            )
        return

    span = next((i for i in engine.get_intercalary_days(year) if i.name == intercalary), None)
    if span is None:
        raise InvalidDateError(
            f"Intercalary day {intercalary!r} does not occur in year {year}",
            code="invalid_intercalary",
        )
    anchor_month = engine.schema.month_index(span.anchor)
    if month != anchor_month:
        raise InvalidDateError(
            f"Intercalary day {intercalary!r} belongs to month {anchor_month}, got {month}",
            code="invalid_intercalary",
        )
    if not 1 <= day <= span.days:
        raise InvalidDateError(
            f"Intercalary day {intercalary!r} spans {span.days} days, got day {day}",
            code="invalid_day",
        )


def validate_schema(schema: CalendarSchema) -> None:
    """Check structural invariants of ``schema``.

    All problems are collected and raised together as a single
    :class:`CalendarSchemaError`.
    """

    errors: list[str] = []
    month_count = len(schema.months)

    if not schema.months:
        errors.append("Calendar must define at least one month")
    for month in schema.months:
        if month.days < 1:
            errors.append(f"Month {month.name!r} must have at least 1 day")
    if len({m.name for m in schema.months}) != month_count:
        errors.append("Month names must be unique")
    if not schema.weekdays:
        errors.append("Calendar must define at least one weekday")
    elif not 0 <= schema.year.start_day < len(schema.weekdays):
        errors.append(
            f"year.start_day must be 0..{len(schema.weekdays) - 1}, got {schema.year.start_day}"
        )

    units = schema.time
    for label, value in (
        ("hours_in_day", units.hours_in_day),
        ("minutes_in_hour", units.minutes_in_hour),
        ("seconds_in_minute", units.seconds_in_minute),
    ):
        if value < 1:
            errors.append(f"time.{label} must be positive, got {value}")

    leap = schema.leap_year
    if leap.rule not in LEAP_RULES:
        errors.append(f"Unknown leap year rule {leap.rule!r}")
    if leap.rule == "custom" and (leap.interval is None or leap.interval < 1):
        errors.append("Custom leap year rule requires a positive interval")
    if leap.rule != "none" and leap.month is not None and schema.month_index(leap.month) is None:
        errors.append(f"Leap year month {leap.month!r} is not a month of this calendar")

    for span in schema.intercalary:
        if (span.after is None) == (span.before is None):
            errors.append(f"Intercalary day {span.name!r} needs exactly one of after/before")
        elif schema.month_index(span.anchor) is None:
            errors.append(f"Intercalary day {span.name!r} references unknown month {span.anchor!r}")
        if span.days < 1:
            errors.append(f"Intercalary day {span.name!r} must span at least 1 day")

    for season in schema.seasons:
        in_range = True
        for label, value in (("start_month", season.start_month), ("end_month", season.end_month)):
            if value is not None and not 1 <= value <= month_count:
                in_range = False
                errors.append(
                    f"Season {season.name!r} {label}={value} is outside months 1..{month_count}"
                )
        if season.start_day is not None and in_range:
            longest = _longest_month(schema, season.start_month)
            if not 1 <= season.start_day <= longest:
                errors.append(
                    f"Season {season.name!r} start_day={season.start_day} is outside "
                    f"days 1..{longest} of month {season.start_month}"
                )
        # end_day may exceed its month; the excess rolls into later months
        if season.end_day is not None and season.end_day < 1:
            errors.append(f"Season {season.name!r} end_day={season.end_day} must be at least 1")

    for anchor in schema.solar_anchors:
        if not 1 <= anchor.month <= month_count:
            errors.append(
                f"Solar anchor {anchor.id!r} month={anchor.month} is outside months 1..{month_count}"
            )
        elif not 1 <= anchor.day <= _longest_month(schema, anchor.month):
            errors.append(
                f"Solar anchor {anchor.id!r} day={anchor.day} is outside days "
                f"1..{_longest_month(schema, anchor.month)} of month {anchor.month}"
            )

    if schema.world_time is not None and schema.world_time.interpretation not in INTERPRETATIONS:
        errors.append(f"Unknown world time interpretation {schema.world_time.interpretation!r}")

    for moon in schema.moons:
        if moon.cycle_length <= 0:
            errors.append(f"Moon {moon.name!r} must have a positive cycle length")
        if not moon.phases:
            errors.append(f"Moon {moon.name!r} must define at least one phase")

    if errors:
        raise CalendarSchemaError(errors, code="invalid_schema")


def _longest_month(schema: CalendarSchema, month: int) -> int:
    """Length of ``month`` in its longest year (leap adjustment included)."""

    days = schema.months[month - 1].days
    leap = schema.leap_year
    if leap.rule != "none" and leap.month is not None and schema.month_index(leap.month) == month:
        days += max(leap.extra_days, 0)
    return days
