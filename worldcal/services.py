"""Application-level helpers wiring the engine to project settings.

The engine never reads Django settings; the values from :mod:`worldcal.conf`
are passed in here.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from . import conf
from .engine import CalendarEngine, CalendarSchema, SeasonResolver, SolarCalculator
from .engine.moons import moon_phase_info
from .engine.utils import seconds_to_time_string

logger = logging.getLogger(__name__)


def build_engine(definition: CalendarSchema | Mapping[str, Any]) -> CalendarEngine:
    """Return an engine for a schema or a camelCase calendar definition."""

    if isinstance(definition, CalendarSchema):
        schema = definition
    else:
        schema = CalendarSchema.from_dict(definition)
    logger.debug("Building engine for calendar %s (%s)", schema.id, schema.interpretation)
    return CalendarEngine(schema)


def season_resolver_for(engine: CalendarEngine) -> SeasonResolver:
    return SeasonResolver(engine, warn_on_overflow=conf.WARN_SEASON_OVERFLOW)


def solar_calculator_for(engine: CalendarEngine) -> SolarCalculator:
    return SolarCalculator(
        engine,
        default_sunrise_fraction=conf.DEFAULT_SUNRISE_FRACTION,
        default_sunset_fraction=conf.DEFAULT_SUNSET_FRACTION,
    )


def calendar_snapshot(
    engine: CalendarEngine, world_time: int, world_creation_timestamp: float | None = None
) -> dict[str, Any]:
    """Describe the moment ``world_time`` for display.

    Returns the date, its weekday and season names, sunrise/sunset as
    ``HH:MM`` and the phase of every moon.
    """

    schema = engine.schema
    date = engine.world_time_to_date(world_time, world_creation_timestamp)
    meta: dict[str, Any] = {"date": date.to_dict(), "calendar": schema.id}
    if isinstance(date.year, float) and math.isnan(date.year):
        return meta

    season = season_resolver_for(engine).resolve(date)
    solar = solar_calculator_for(engine).calculate(date)
    meta.update(
        {
            "weekday": schema.weekdays[date.weekday].name if date.weekday is not None else None,
            "month_lengths": list(engine.get_month_lengths(date.year)),
            "season": {"name": season.name, "icon": season.icon},
            "sunrise": seconds_to_time_string(solar.sunrise, schema.time),
            "sunset": seconds_to_time_string(solar.sunset, schema.time),
            "moons": [
                {"name": info.moon.name, "phase": info.phase.name, "progress": info.phase_progress}
                for info in moon_phase_info(engine, date)
            ],
        }
    )
    return meta
