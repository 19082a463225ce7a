from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Literal

from . import defaults

logger = logging.getLogger(__name__)

LeapRuleKind = Literal["none", "gregorian", "custom"]
Interpretation = Literal["epoch-based", "real-time-based"]


@dataclass(frozen=True)
class Month:
    name: str
    days: int
    abbreviation: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Weekday:
    name: str
    abbreviation: str | None = None


@dataclass(frozen=True)
class LeapYearRule:
    """Leap year rule of a calendar.

    ``month`` names the month that receives ``extra_days`` in leap years.
    ``extra_days`` may be negative to remove days; the engine never lets the
    month drop below a single day.
    """

    rule: LeapRuleKind = "none"
    interval: int | None = None
    month: str | None = None
    extra_days: int = 1
    offset: int = 0


@dataclass(frozen=True)
class IntercalaryDay:
    """Named span inserted before or after a month, outside month numbering."""

    name: str
    after: str | None = None
    before: str | None = None
    days: int = 1
    leap_year_only: bool = False
    counts_for_weekdays: bool = True
    description: str | None = None

    @property
    def anchor(self) -> str | None:
        return self.after if self.after is not None else self.before


@dataclass(frozen=True)
class YearConfig:
    epoch: int = 0
    current_year: int = 0
    start_day: int = 0
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class WorldTimeConfig:
    interpretation: Interpretation = "epoch-based"
    epoch_year: int = 0
    current_year: int = 0


@dataclass(frozen=True)
class Season:
    name: str
    start_month: int
    start_day: int | None = None
    end_month: int | None = None
    end_day: int | None = None
    sunrise: str | None = None
    sunset: str | None = None
    icon: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SolarAnchor:
    """Extra point on the solar curve, independent of seasons."""

    id: str
    month: int
    day: int
    sunrise: str | None = None
    sunset: str | None = None
    label: str | None = None
    type: str | None = None


@dataclass(frozen=True)
class TimeUnits:
    hours_in_day: int = 24
    minutes_in_hour: int = 60
    seconds_in_minute: int = 60

    @property
    def seconds_per_minute(self) -> int:
        return self.seconds_in_minute

    @property
    def seconds_per_hour(self) -> int:
        return self.minutes_in_hour * self.seconds_in_minute

    @property
    def seconds_per_day(self) -> int:
        return self.hours_in_day * self.seconds_per_hour


@dataclass(frozen=True)
class MoonPhase:
    name: str
    length: float
    icon: str | None = None


@dataclass(frozen=True)
class MoonReference:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class Moon:
    name: str
    cycle_length: float
    first_new_moon: MoonReference
    phases: tuple[MoonPhase, ...] = ()
    color: str | None = None


@dataclass(frozen=True)
class WeekName:
    name: str
    abbreviation: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class WeeksConfig:
    type: Literal["month-based", "year-based"] = "month-based"
    days_per_week: int | None = None
    per_month: int | None = None
    remainder_handling: Literal["partial-last", "extend-last", "none"] = "partial-last"
    naming_pattern: Literal["numeric", "ordinal", "none"] = "numeric"
    names: tuple[WeekName, ...] = ()


@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass(frozen=True)
class CalendarDate:
    """Immutable calendar date.

    ``weekday`` is ``None`` for intercalary dates.  For those, ``month`` is the
    index of the anchor month and ``day`` the 1-based position inside the
    intercalary span named by ``intercalary``.

    ``year`` is ``math.nan`` when the date was derived from an unusable
    world creation timestamp.
    """

    year: int
    month: int
    day: int
    weekday: int | None = None
    time: TimeOfDay | None = None
    intercalary: str | None = None

    @property
    def is_intercalary(self) -> bool:
        return self.intercalary is not None

    def replace(self, **changes: Any) -> CalendarDate:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalendarDate:
        time = data.get("time")
        return cls(
            year=data["year"],
            month=int(data["month"]),
            day=int(data["day"]),
            weekday=data.get("weekday"),
            time=TimeOfDay(**time) if time else None,
            intercalary=data.get("intercalary"),
        )


@dataclass(frozen=True)
class CalendarSchema:
    """Validated, immutable description of a calendar."""

    id: str
    months: tuple[Month, ...]
    weekdays: tuple[Weekday, ...]
    leap_year: LeapYearRule = field(default_factory=LeapYearRule)
    intercalary: tuple[IntercalaryDay, ...] = ()
    year: YearConfig = field(default_factory=YearConfig)
    time: TimeUnits = field(default_factory=TimeUnits)
    seasons: tuple[Season, ...] = ()
    solar_anchors: tuple[SolarAnchor, ...] = ()
    world_time: WorldTimeConfig | None = None
    moons: tuple[Moon, ...] = ()
    weeks: WeeksConfig | None = None
    name: str | None = None

    def month_index(self, name: str | None) -> int | None:
        """Return the 1-based index of month ``name`` or ``None``."""

        if name is None:
            return None
        for i, month in enumerate(self.months, start=1):
            if month.name == name:
                return i
        return None

    @property
    def interpretation(self) -> Interpretation:
        if self.world_time is None:
            return "epoch-based"
        return self.world_time.interpretation

    # ------------------------------------------------------------------
    # Construction from provider mappings
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalendarSchema:
        """Build a schema from a camelCase calendar definition mapping.

        Missing ``year``, ``leapYear``, ``months``, ``weekdays``,
        ``intercalary`` and ``time`` sections fall back to Gregorian values.
        """

        cal_id = str(data.get("id") or "custom")
        for section in ("year", "leapYear", "months", "weekdays", "intercalary", "time"):
            if data.get(section) is None:
                logger.warning(
                    "Calendar %s missing %s data; using Gregorian defaults", cal_id, section
                )

        return cls(
            id=cal_id,
            name=_calendar_name(data),
            months=_parse_months(data.get("months")),
            weekdays=_parse_weekdays(data.get("weekdays")),
            leap_year=_parse_leap_year(data.get("leapYear")),
            intercalary=tuple(_parse_intercalary(i) for i in data.get("intercalary") or ()),
            year=_parse_year(data.get("year")),
            time=_parse_time(data.get("time")),
            seasons=tuple(_parse_season(s) for s in data.get("seasons") or ()),
            solar_anchors=tuple(_parse_anchor(a) for a in data.get("solarAnchors") or ()),
            world_time=_parse_world_time(data.get("worldTime")),
            moons=tuple(_parse_moon(m) for m in data.get("moons") or ()),
            weeks=_parse_weeks(data.get("weeks")),
        )


# ---------------------------------------------------------------------------
# Mapping parsers
# ---------------------------------------------------------------------------


def _calendar_name(data: Mapping[str, Any]) -> str | None:
    if data.get("name"):
        return str(data["name"])
    label = (data.get("translations") or {}).get("en", {}).get("label")
    return str(label) if label else None


def _parse_months(raw: Any) -> tuple[Month, ...]:
    if raw is None:
        return tuple(Month(name=n, days=d) for n, d in defaults.GREGORIAN_MONTHS)
    return tuple(
        Month(
            name=str(m["name"]),
            days=int(m["days"]),
            abbreviation=m.get("abbreviation"),
            description=m.get("description"),
        )
        for m in raw
    )


def _parse_weekdays(raw: Any) -> tuple[Weekday, ...]:
    if raw is None:
        return tuple(Weekday(name=n) for n in defaults.GREGORIAN_WEEKDAYS)
    return tuple(Weekday(name=str(w["name"]), abbreviation=w.get("abbreviation")) for w in raw)


def _parse_leap_year(raw: Mapping[str, Any] | None) -> LeapYearRule:
    if raw is None:
        raw = defaults.GREGORIAN_LEAP_YEAR
    elif raw.get("rule", "none") == "none":
        return LeapYearRule(rule="none")
    interval = raw.get("interval")
    return LeapYearRule(
        rule=raw.get("rule", "none"),
        interval=int(interval) if interval is not None else None,
        month=raw.get("month"),
        extra_days=int(raw.get("extraDays", 1)),
        offset=int(raw.get("offset", 0)),
    )


def _parse_intercalary(raw: Mapping[str, Any]) -> IntercalaryDay:
    return IntercalaryDay(
        name=str(raw["name"]),
        after=raw.get("after"),
        before=raw.get("before"),
        days=int(raw.get("days") or 1),
        leap_year_only=bool(raw.get("leapYearOnly", False)),
        counts_for_weekdays=bool(raw.get("countsForWeekdays", True)),
        description=raw.get("description"),
    )


def _parse_year(raw: Mapping[str, Any] | None) -> YearConfig:
    merged = {**defaults.GREGORIAN_YEAR, **(raw or {})}
    return YearConfig(
        epoch=int(merged.get("epoch", 0)),
        current_year=int(merged.get("currentYear", 0)),
        start_day=int(merged.get("startDay", 0)),
        prefix=merged.get("prefix") or "",
        suffix=merged.get("suffix") or "",
    )


def _parse_time(raw: Mapping[str, Any] | None) -> TimeUnits:
    merged = {**defaults.GREGORIAN_TIME, **(raw or {})}
    return TimeUnits(
        hours_in_day=int(merged["hoursInDay"]),
        minutes_in_hour=int(merged["minutesInHour"]),
        seconds_in_minute=int(merged["secondsInMinute"]),
    )


def _optional_int(value: Any) -> int | None:
    return int(value) if value is not None else None


def _parse_season(raw: Mapping[str, Any]) -> Season:
    return Season(
        name=str(raw["name"]),
        start_month=int(raw["startMonth"]),
        start_day=_optional_int(raw.get("startDay")),
        end_month=_optional_int(raw.get("endMonth")),
        end_day=_optional_int(raw.get("endDay")),
        sunrise=raw.get("sunrise"),
        sunset=raw.get("sunset"),
        icon=raw.get("icon"),
        description=raw.get("description"),
    )


def _parse_anchor(raw: Mapping[str, Any]) -> SolarAnchor:
    return SolarAnchor(
        id=str(raw["id"]),
        month=int(raw["month"]),
        day=int(raw["day"]),
        sunrise=raw.get("sunrise"),
        sunset=raw.get("sunset"),
        label=raw.get("label"),
        type=raw.get("type"),
    )


def _parse_world_time(raw: Mapping[str, Any] | None) -> WorldTimeConfig | None:
    if raw is None:
        return None
    return WorldTimeConfig(
        interpretation=raw.get("interpretation", "epoch-based"),
        epoch_year=int(raw.get("epochYear", 0)),
        current_year=int(raw.get("currentYear", 0)),
    )


def _parse_moon(raw: Mapping[str, Any]) -> Moon:
    ref = raw["firstNewMoon"]
    return Moon(
        name=str(raw["name"]),
        cycle_length=float(raw["cycleLength"]),
        first_new_moon=MoonReference(int(ref["year"]), int(ref["month"]), int(ref["day"])),
        phases=tuple(
            MoonPhase(name=str(p["name"]), length=float(p["length"]), icon=p.get("icon"))
            for p in raw.get("phases") or ()
        ),
        color=raw.get("color"),
    )


def _parse_weeks(raw: Mapping[str, Any] | None) -> WeeksConfig | None:
    if raw is None:
        return None
    return WeeksConfig(
        type=raw.get("type", "month-based"),
        days_per_week=_optional_int(raw.get("daysPerWeek")),
        per_month=_optional_int(raw.get("perMonth")),
        remainder_handling=raw.get("remainderHandling", "partial-last"),
        naming_pattern=raw.get("namingPattern", "numeric"),
        names=tuple(
            WeekName(
                name=str(n["name"]),
                abbreviation=n.get("abbreviation"),
                description=n.get("description"),
            )
            for n in raw.get("names") or ()
        ),
    )
