"""Public interface for the world calendar engine."""

from .core import CalendarEngine
from .models import (
    CalendarDate,
    CalendarSchema,
    IntercalaryDay,
    LeapYearRule,
    Month,
    Moon,
    MoonPhase,
    MoonReference,
    Season,
    SolarAnchor,
    TimeOfDay,
    TimeUnits,
    WeekName,
    WeeksConfig,
    Weekday,
    WorldTimeConfig,
    YearConfig,
)
from .moons import MoonPhaseInfo, moon_phase_info, moon_phases_at_world_time
from .seasons import (
    SeasonResolver,
    default_season_icon,
    find_season_index,
    is_date_in_season,
    resolve_season,
)
from .solar import SolarCalculator, SolarTimes, solar_times

__all__ = [
    "CalendarEngine",
    "CalendarDate",
    "CalendarSchema",
    "IntercalaryDay",
    "LeapYearRule",
    "Month",
    "Moon",
    "MoonPhase",
    "MoonReference",
    "Season",
    "SolarAnchor",
    "TimeOfDay",
    "TimeUnits",
    "WeekName",
    "WeeksConfig",
    "Weekday",
    "WorldTimeConfig",
    "YearConfig",
    "MoonPhaseInfo",
    "moon_phase_info",
    "moon_phases_at_world_time",
    "SeasonResolver",
    "default_season_icon",
    "find_season_index",
    "is_date_in_season",
    "resolve_season",
    "SolarCalculator",
    "SolarTimes",
    "solar_times",
]
