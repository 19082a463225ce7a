import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "insecure-secret-key")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "worldcal.apps.WorldCalendarConfig",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DJANGO_DB_PATH", str(BASE_DIR / "db_dev.sqlite3")),
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# World calendar
WORLD_CALENDAR_DEFAULT_SUNRISE_FRACTION = float(
    os.getenv("WORLD_CALENDAR_DEFAULT_SUNRISE_FRACTION", "0.25")
)
WORLD_CALENDAR_DEFAULT_SUNSET_FRACTION = float(
    os.getenv("WORLD_CALENDAR_DEFAULT_SUNSET_FRACTION", "0.75")
)
WORLD_CALENDAR_WARN_SEASON_OVERFLOW = os.getenv("WORLD_CALENDAR_WARN_SEASON_OVERFLOW", "1") == "1"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "worldcal": {
            "handlers": ["console"],
            "level": os.getenv("WORLD_CALENDAR_LOG_LEVEL", "INFO"),
        },
    },
}
