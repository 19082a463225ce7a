import pytest

from worldcal.engine import TimeOfDay, TimeUnits
from worldcal.engine.utils import (
    decimal_hours_to_components,
    hours_to_seconds,
    hours_to_time_string,
    parse_time_string,
    round_half_up,
    seconds_to_time_string,
    time_string_to_hours,
    time_string_to_seconds,
)
from worldcal.exceptions import InvalidTimeFormatError

LONG_HOURS = TimeUnits(hours_in_day=30, minutes_in_hour=120, seconds_in_minute=60)


def test_parse_time_string_accepts_up_to_three_digits():
    assert parse_time_string("6:30") == (6, 30)
    assert parse_time_string("06:05") == (6, 5)
    assert parse_time_string("125:45") == (125, 45)
    assert parse_time_string("6:100", LONG_HOURS) == (6, 100)


@pytest.mark.parametrize("value", ["", "6", "6:3:0", "six:30", "6.30", "1234:00", None])
def test_parse_time_string_rejects_malformed(value):
    with pytest.raises(InvalidTimeFormatError, match="Invalid time format"):
        parse_time_string(value)


def test_minutes_must_fit_the_hour():
    with pytest.raises(InvalidTimeFormatError, match="minutes must be below 60"):
        parse_time_string("6:60")


def test_time_string_to_hours_uses_calendar_minutes():
    assert time_string_to_hours("06:30") == 6.5
    assert time_string_to_hours("06:30", LONG_HOURS) == 6.25
    assert time_string_to_seconds("06:30", LONG_HOURS) == 6 * 7200 + 30 * 60


def test_hours_to_time_string_round_trip():
    for value in ("00:00", "05:45", "17:59", "23:01"):
        assert hours_to_time_string(time_string_to_hours(value)) == value
    for value in ("07:25", "12:119", "29:00"):
        assert hours_to_time_string(time_string_to_hours(value, LONG_HOURS), LONG_HOURS) == value


def test_rounding_carries_into_next_hour():
    assert hours_to_time_string(5.9999) == "06:00"
    assert decimal_hours_to_components(5.9999) == TimeOfDay(6, 0)


def test_seconds_conversions():
    assert hours_to_seconds(6.5) == 23400
    assert hours_to_seconds(1.5, LONG_HOURS) == 10800
    assert seconds_to_time_string(6 * 3600 + 30 * 60 + 59) == "06:30"
    assert seconds_to_time_string(time_string_to_seconds("12:119", LONG_HOURS), LONG_HOURS) == "12:119"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2
