from django.apps import AppConfig


class WorldCalendarConfig(AppConfig):
    name = "worldcal"
    verbose_name = "World calendar"

    def ready(self) -> None:
        from django.core import checks

        from .conf import check_solar_fractions

        checks.register(check_solar_fractions, "worldcal")
