"""Moon phase tracking."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .core import CalendarEngine
from .defaults import MOON_PHASE_TOLERANCE
from .models import CalendarDate, Moon, MoonPhase


@dataclass(frozen=True)
class MoonPhaseInfo:
    moon: Moon
    phase: MoonPhase
    phase_index: int
    day_in_phase: int
    day_in_phase_exact: float
    days_until_next: int
    days_until_next_exact: float
    phase_progress: float


def _normalize(value: float) -> float:
    rounded = round(value, 6)
    if rounded == 0 or not math.isfinite(rounded):
        return 0.0
    return rounded


def moon_phase(engine: CalendarEngine, moon: Moon, date: CalendarDate) -> MoonPhaseInfo:
    """Phase of ``moon`` on ``date``.

    Dates before the reference new moon wrap into the cycle.  Phase lengths
    may be fractional; a position within ``MOON_PHASE_TOLERANCE`` of a phase
    boundary belongs to the next phase.
    """

    ref = moon.first_new_moon
    reference = CalendarDate(year=ref.year, month=ref.month, day=ref.day)
    elapsed = engine.date_to_days(date) - engine.date_to_days(reference)
    position = elapsed % moon.cycle_length

    phase_start = 0.0
    index = 0
    for index, phase in enumerate(moon.phases):
        phase_end = phase_start + phase.length
        if position < phase_end - MOON_PHASE_TOLERANCE or index == len(moon.phases) - 1:
            break
        phase_start = phase_end

    phase = moon.phases[index]
    day_in_phase_exact = min(max(_normalize(position - phase_start), 0.0), phase.length)
    days_until_next_exact = max(_normalize(phase.length - day_in_phase_exact), 0.0)
    progress = min(max(day_in_phase_exact / phase.length, 0.0), 1.0) if phase.length > 0 else 0.0
    return MoonPhaseInfo(
        moon=moon,
        phase=phase,
        phase_index=index,
        day_in_phase=math.floor(day_in_phase_exact),
        day_in_phase_exact=day_in_phase_exact,
        days_until_next=max(math.ceil(days_until_next_exact), 0),
        days_until_next_exact=days_until_next_exact,
        phase_progress=progress,
    )


def moon_phase_info(
    engine: CalendarEngine, date: CalendarDate, moon_name: str | None = None
) -> list[MoonPhaseInfo]:
    """Phase of every moon of the calendar, or only the one named ``moon_name``."""

    moons = engine.schema.moons
    if moon_name is not None:
        moons = tuple(m for m in moons if m.name == moon_name)
    return [moon_phase(engine, moon, date) for moon in moons]


def moon_phases_at_world_time(
    engine: CalendarEngine, world_time: int, moon_name: str | None = None
) -> list[MoonPhaseInfo]:
    return moon_phase_info(engine, engine.world_time_to_date(world_time), moon_name)
