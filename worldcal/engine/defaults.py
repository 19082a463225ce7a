"""
Default values used by the calendar engine.

Calendar definitions that omit a section fall back to the Gregorian values
below.  The solar reference table provides sunrise/sunset times for seasons
that carry a well-known name but no explicit times.
"""

GREGORIAN_MONTHS = (
    ("January", 31),
    ("February", 28),
    ("March", 31),
    ("April", 30),
    ("May", 31),
    ("June", 30),
    ("July", 31),
    ("August", 31),
    ("September", 30),
    ("October", 31),
    ("November", 30),
    ("December", 31),
)

GREGORIAN_WEEKDAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

GREGORIAN_YEAR = {"epoch": 0, "currentYear": 2024, "startDay": 6}
GREGORIAN_LEAP_YEAR = {"rule": "gregorian", "month": "February", "extraDays": 1}
GREGORIAN_TIME = {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60}

# Baltimore, MD reference values (HH:MM)
SOLAR_REFERENCE_TIMES = {
    "Winter": ("07:00", "16:45"),
    "Spring": ("06:30", "17:45"),
    "Summer": ("05:45", "20:15"),
    "Autumn": ("06:30", "19:30"),
    "Fall": ("06:30", "19:30"),
}

# (name, first month, last month); months outside every band are Winter
DEFAULT_SEASON_BANDS = (
    ("Spring", 3, 5),
    ("Summer", 6, 8),
    ("Fall", 9, 11),
)
DEFAULT_SEASON_FALLBACK = "Winter"

DEFAULT_SUNRISE_FRACTION = 0.25  # of hours_in_day
DEFAULT_SUNSET_FRACTION = 0.75

MOON_PHASE_TOLERANCE = 1e-6
