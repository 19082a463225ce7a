import logging

import pytest

from tests.worldcal_helpers import gregorian_engine, harptos_definition, make_engine, small_definition
from worldcal.engine import CalendarDate, Season, SeasonResolver, default_season_icon, resolve_season
from worldcal.engine.seasons import find_season_index, is_date_in_season
from worldcal.exceptions import CalendarSchemaError


def d(month, day, year=2023):
    return CalendarDate(year, month, day)


def test_year_crossing_season():
    engine = gregorian_engine()
    winter = Season("Winter", start_month=12, end_month=2)
    assert is_date_in_season(engine, d(12, 25), winter)
    assert is_date_in_season(engine, d(1, 15), winter)
    assert is_date_in_season(engine, d(2, 28), winter)
    assert not is_date_in_season(engine, d(3, 1), winter)
    assert not is_date_in_season(engine, d(11, 30), winter)


def test_end_day_overflow_rolls_into_next_month(caplog):
    engine = gregorian_engine()
    resolver = SeasonResolver(engine)
    season = Season("Long Winter", start_month=12, end_month=2, end_day=30)
    with caplog.at_level(logging.WARNING, logger="worldcal"):
        assert resolver.effective_end(season, 2023) == (3, 2)
    assert "end_day=30" in caplog.text
    assert "28 days" in caplog.text
    assert resolver.contains(d(3, 2), season)
    assert not resolver.contains(d(3, 3), season)
    # leap February absorbs one more day
    assert resolver.effective_end(season, 2024) == (3, 1)


def test_overflow_warning_can_be_silenced(caplog):
    engine = gregorian_engine()
    resolver = SeasonResolver(engine, warn_on_overflow=False)
    with caplog.at_level(logging.WARNING, logger="worldcal"):
        resolver.effective_end(Season("Long Winter", 12, end_month=2, end_day=30), 2023)
    assert caplog.text == ""


def test_overflow_clamps_at_final_month():
    engine = gregorian_engine()
    resolver = SeasonResolver(engine, warn_on_overflow=False)
    assert resolver.effective_end(Season("Late", 11, end_month=12, end_day=45), 2023) == (12, 31)


def test_overflow_across_several_months_with_few_months():
    engine = make_engine(small_definition())
    resolver = SeasonResolver(engine, warn_on_overflow=False)
    assert resolver.effective_end(Season("Short", 1, end_day=15), 1) == (2, 5)
    assert resolver.effective_end(Season("Endless", 1, end_day=50), 1) == (3, 10)
    assert resolver.contains(CalendarDate(1, 3, 10), Season("Endless", 1, end_day=50))


def test_start_and_end_days_are_respected():
    engine = gregorian_engine()
    spring = Season("Spring", 3, start_day=20, end_month=6, end_day=20)
    assert not is_date_in_season(engine, d(3, 19), spring)
    assert is_date_in_season(engine, d(3, 20), spring)
    assert is_date_in_season(engine, d(6, 20), spring)
    assert not is_date_in_season(engine, d(6, 21), spring)


def test_defaults_for_missing_end():
    engine = gregorian_engine()
    may = Season("May", 5)
    assert is_date_in_season(engine, d(5, 31), may)
    assert not is_date_in_season(engine, d(6, 1), may)


def test_first_match_wins():
    engine = gregorian_engine()
    seasons = [Season("Wet", 1, end_month=6), Season("Early", 1, end_month=3)]
    assert resolve_season(engine, d(2, 1), seasons).name == "Wet"
    assert find_season_index(engine, d(2, 1), seasons) == 0
    assert find_season_index(engine, d(8, 1), seasons) is None


@pytest.mark.parametrize(
    "month,name",
    [(1, "Winter"), (3, "Spring"), (5, "Spring"), (7, "Summer"), (10, "Fall"), (12, "Winter")],
)
def test_default_banding_without_seasons(month, name):
    engine = gregorian_engine()
    season = resolve_season(engine, d(month, 1))
    assert season.name == name
    assert season.icon == name.lower()


def test_default_banding_when_nothing_matches():
    engine = gregorian_engine(seasons=[{"name": "Festival", "startMonth": 6, "endMonth": 6}])
    assert resolve_season(engine, d(6, 10)).name == "Festival"
    assert resolve_season(engine, d(4, 10)).name == "Spring"


def test_resolved_season_gets_default_icon():
    engine = gregorian_engine(
        seasons=[
            {"name": "Midsummer Heat", "startMonth": 6, "endMonth": 8},
            {"name": "Rains", "startMonth": 9, "endMonth": 11, "icon": "cloud"},
        ]
    )
    assert resolve_season(engine, d(7, 1)).icon == "summer"
    assert resolve_season(engine, d(10, 1)).icon == "cloud"


def test_default_season_icon_keywords():
    assert default_season_icon("Early Spring") == "spring"
    assert default_season_icon("Autumn Glow") == "fall"
    assert default_season_icon("Deep WINTER") == "winter"
    assert default_season_icon("Harvest") == "spring"


def test_season_month_outside_calendar_fails_fast():
    engine = gregorian_engine()
    with pytest.raises(CalendarSchemaError, match="outside months 1..12"):
        resolve_season(engine, d(1, 1), [Season("Broken", 13)])


def test_schema_rejects_season_month_outside_calendar():
    with pytest.raises(CalendarSchemaError, match="end_month=14"):
        gregorian_engine(seasons=[{"name": "Broken", "startMonth": 1, "endMonth": 14}])


def test_zero_end_day_is_rejected_not_read_as_whole_month():
    engine = gregorian_engine()
    with pytest.raises(CalendarSchemaError, match="end_day=0 must be at least 1"):
        SeasonResolver(engine).effective_end(Season("Z", 3, end_month=3, end_day=0), 2023)
    assert SeasonResolver(engine).effective_end(Season("Z", 3, end_month=3), 2023) == (3, 31)


def test_intercalary_after_month_follows_its_last_day():
    engine = make_engine(harptos_definition())
    midwinter = CalendarDate(1481, 1, 1, intercalary="Midwinter")
    assert is_date_in_season(engine, midwinter, Season("Deep Winter", 1, start_day=15, end_month=2, end_day=10))
    assert not is_date_in_season(engine, midwinter, Season("Hammer", 1))
    assert not is_date_in_season(engine, midwinter, Season("Alturiak", 2))


def test_intercalary_before_month_precedes_its_first_day():
    engine = make_engine(small_definition())
    yearstart = CalendarDate(1, 1, 2, intercalary="Yearstart")
    assert not is_date_in_season(engine, yearstart, Season("A", 1))
    assert is_date_in_season(engine, yearstart, Season("Turn", 3, end_month=1))
