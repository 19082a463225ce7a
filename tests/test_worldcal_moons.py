import pytest

from tests.worldcal_helpers import gregorian_engine
from worldcal.engine import CalendarDate, moon_phase_info, moon_phases_at_world_time

LUNA = {
    "name": "Luna",
    "cycleLength": 29.5,
    "firstNewMoon": {"year": 2023, "month": 1, "day": 1},
    "phases": [
        {"name": "New", "length": 1},
        {"name": "Waxing", "length": 13.75},
        {"name": "Full", "length": 1},
        {"name": "Waning", "length": 13.75},
    ],
}
SELUNE = {
    "name": "Selune",
    "cycleLength": 30,
    "firstNewMoon": {"year": 2023, "month": 1, "day": 10},
    "phases": [{"name": "Dark", "length": 15}, {"name": "Bright", "length": 15}],
}


@pytest.fixture
def engine():
    return gregorian_engine(moons=[LUNA, SELUNE], year={"epoch": 2023, "currentYear": 2023, "startDay": 0})


def luna(engine, month, day, year=2023):
    return moon_phase_info(engine, CalendarDate(year, month, day), "Luna")[0]


def test_reference_day_is_new_moon(engine):
    info = luna(engine, 1, 1)
    assert info.phase.name == "New"
    assert info.phase_index == 0
    assert info.day_in_phase == 0
    assert info.days_until_next == 1


def test_phase_boundary_belongs_to_next_phase(engine):
    info = luna(engine, 1, 2)
    assert info.phase.name == "Waxing"
    assert info.day_in_phase_exact == 0
    assert info.days_until_next == 14


def test_fractional_phase_lengths(engine):
    info = luna(engine, 1, 16)
    assert info.phase.name == "Full"
    assert info.day_in_phase_exact == pytest.approx(0.25)
    assert info.day_in_phase == 0
    assert info.days_until_next_exact == pytest.approx(0.75)
    assert info.days_until_next == 1
    assert info.phase_progress == pytest.approx(0.25)


def test_dates_before_reference_wrap_into_cycle(engine):
    info = luna(engine, 12, 31, year=2022)
    assert info.phase.name == "Waning"
    assert info.day_in_phase_exact == pytest.approx(12.75)


def test_all_moons_or_one_by_name(engine):
    infos = moon_phase_info(engine, CalendarDate(2023, 1, 25))
    assert [(i.moon.name, i.phase.name) for i in infos] == [("Luna", "Waning"), ("Selune", "Bright")]
    assert moon_phase_info(engine, CalendarDate(2023, 1, 25), "Nobody") == []


def test_phases_at_world_time(engine):
    infos = moon_phases_at_world_time(engine, 86400 * 9, "Selune")
    assert infos[0].phase.name == "Dark"
    assert infos[0].days_until_next == 15
