"""Error types raised by the world calendar engine."""

from django.core.exceptions import ValidationError


class CalendarError(ValidationError, ValueError):
    """Base class for calendar errors.

    Subclasses :class:`ValidationError` so form and admin code can surface the
    message directly, and :class:`ValueError` for plain Python callers.
    """


class InvalidDateError(CalendarError):
    """Month or day outside the bounds of the calendar."""


class InvalidTimeFormatError(CalendarError):
    """Time string that is not a valid ``H:MM`` value for the calendar."""


class CalendarSchemaError(CalendarError):
    """Structural problem in a calendar definition."""


__all__ = [
    "CalendarError",
    "CalendarSchemaError",
    "InvalidDateError",
    "InvalidTimeFormatError",
]
