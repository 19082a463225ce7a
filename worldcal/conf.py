from django.conf import settings
from django.core import checks

DEFAULT_SUNRISE_FRACTION = getattr(settings, "WORLD_CALENDAR_DEFAULT_SUNRISE_FRACTION", 0.25)
DEFAULT_SUNSET_FRACTION = getattr(settings, "WORLD_CALENDAR_DEFAULT_SUNSET_FRACTION", 0.75)
WARN_SEASON_OVERFLOW = getattr(settings, "WORLD_CALENDAR_WARN_SEASON_OVERFLOW", True)


def check_solar_fractions(app_configs=None, **kwargs):
    """System check: default sunrise must come before sunset within one day."""

    sunrise = getattr(settings, "WORLD_CALENDAR_DEFAULT_SUNRISE_FRACTION", DEFAULT_SUNRISE_FRACTION)
    sunset = getattr(settings, "WORLD_CALENDAR_DEFAULT_SUNSET_FRACTION", DEFAULT_SUNSET_FRACTION)
    if not 0 <= sunrise < sunset <= 1:
        return [
            checks.Error(
                "WORLD_CALENDAR_DEFAULT_SUNRISE_FRACTION must be below "
                "WORLD_CALENDAR_DEFAULT_SUNSET_FRACTION and both within 0..1",
                id="worldcal.E001",
            )
        ]
    return []
