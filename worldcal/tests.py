from django.apps import apps
from django.core.management import call_command

from .engine import CalendarDate, CalendarSchema
from .services import build_engine


def test_app_is_installed():
    config = apps.get_app_config("worldcal")
    assert config.verbose_name == "World calendar"


def test_system_checks_pass():
    call_command("check", "--fail-level", "ERROR")


def test_default_calendar_is_gregorian():
    engine = build_engine(CalendarSchema.from_dict({"id": "default"}))
    assert engine.get_year_length(2024) == 366
    assert engine.day_of_year(CalendarDate(2024, 12, 31)) == 366
