import pytest

from tests.worldcal_helpers import gregorian_definition, gregorian_engine, harptos_definition, make_engine
from worldcal.engine import CalendarDate
from worldcal.exceptions import CalendarSchemaError, InvalidDateError
from worldcal.validators import validate_date_parts


def test_empty_months_rejected():
    with pytest.raises(CalendarSchemaError, match="at least one month"):
        gregorian_engine(months=[])


def test_all_problems_reported_together():
    with pytest.raises(CalendarSchemaError) as excinfo:
        gregorian_engine(
            months=[{"name": "Only", "days": 0}, {"name": "Only", "days": 10}],
            weekdays=[],
        )
    messages = excinfo.value.messages
    assert "Month 'Only' must have at least 1 day" in messages
    assert "Month names must be unique" in messages
    assert "Calendar must define at least one weekday" in messages


def test_leap_month_must_exist():
    with pytest.raises(CalendarSchemaError, match="'Frimaire' is not a month"):
        gregorian_engine(leapYear={"rule": "gregorian", "month": "Frimaire"})


def test_custom_rule_needs_interval():
    with pytest.raises(CalendarSchemaError, match="positive interval"):
        gregorian_engine(leapYear={"rule": "custom", "month": "February"})


def test_intercalary_needs_exactly_one_anchor():
    with pytest.raises(CalendarSchemaError, match="exactly one of after/before"):
        gregorian_engine(intercalary=[{"name": "Limbo", "after": "March", "before": "April"}])
    with pytest.raises(CalendarSchemaError, match="unknown month 'Smarch'"):
        gregorian_engine(intercalary=[{"name": "Limbo", "after": "Smarch"}])


def test_start_day_and_time_units():
    with pytest.raises(CalendarSchemaError, match="start_day must be 0..6"):
        gregorian_engine(year={"epoch": 0, "startDay": 7})
    with pytest.raises(CalendarSchemaError, match="hours_in_day must be positive"):
        gregorian_engine(time={"hoursInDay": 0})


def test_world_time_interpretation_and_anchor_months():
    with pytest.raises(CalendarSchemaError, match="Unknown world time interpretation"):
        gregorian_engine(worldTime={"interpretation": "sundial"})
    with pytest.raises(CalendarSchemaError, match="Solar anchor 'x'"):
        gregorian_engine(solarAnchors=[{"id": "x", "month": 0, "day": 1}])


def test_moon_definition_checked():
    moon = {"name": "Dud", "cycleLength": 0, "firstNewMoon": {"year": 1, "month": 1, "day": 1}}
    with pytest.raises(CalendarSchemaError, match="positive cycle length"):
        gregorian_engine(moons=[moon])


def test_validate_date_parts():
    engine = make_engine(harptos_definition())
    validate_date_parts(engine, 1481, 1, 30)
    validate_date_parts(engine, 1481, 1, 1, "Midwinter")
    with pytest.raises(InvalidDateError, match="Year must be an integer"):
        validate_date_parts(engine, 1481.5, 1, 1)
    with pytest.raises(InvalidDateError, match="Month 1 has 30 days"):
        validate_date_parts(engine, 1481, 1, 31)


def test_valid_definition_builds():
    engine = make_engine(gregorian_definition(seasons=[{"name": "Spring", "startMonth": 3}]))
    assert engine.create_date(2024, 3, 1) == CalendarDate(2024, 3, 1, weekday=5)


def test_season_start_day_must_fit_start_month():
    with pytest.raises(CalendarSchemaError, match="start_day=40 is outside days 1..29 of month 2"):
        gregorian_engine(seasons=[{"name": "Thaw", "startMonth": 2, "startDay": 40, "endMonth": 4}])
    with pytest.raises(CalendarSchemaError, match="start_day=0"):
        gregorian_engine(seasons=[{"name": "Thaw", "startMonth": 2, "startDay": 0}])


def test_season_end_day_must_be_positive():
    with pytest.raises(CalendarSchemaError, match="end_day=0 must be at least 1"):
        gregorian_engine(seasons=[{"name": "Z", "startMonth": 3, "endMonth": 3, "endDay": 0}])
    # overflowing end days stay valid
    gregorian_engine(seasons=[{"name": "Long", "startMonth": 12, "endMonth": 2, "endDay": 30}])


def test_solar_anchor_day_must_fit_month():
    with pytest.raises(CalendarSchemaError, match="day=0 is outside days 1..31 of month 1"):
        gregorian_engine(solarAnchors=[{"id": "x", "month": 1, "day": 0}])
    with pytest.raises(CalendarSchemaError, match="day=30 is outside days 1..29 of month 2"):
        gregorian_engine(solarAnchors=[{"id": "x", "month": 2, "day": 30}])
    gregorian_engine(solarAnchors=[{"id": "leap", "month": 2, "day": 29}])
