"""Error hierarchy for calendar computations and upstream data providers."""

from typing import Optional


class CalendarError(Exception):
    """Base class for every error raised by calintel."""


class InvalidDateError(CalendarError, ValueError):
    def __init__(self, value: object, reason: str = "expected a valid YYYY-MM-DD date"):
        self.value = value
        super().__init__(f"Invalid date {value!r}: {reason}")


class InvalidRangeError(CalendarError, ValueError):
    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"End date {end} precedes start date {start}")


class InvalidCountryError(CalendarError, ValueError):
    pass


class InvalidBusinessDayCountError(CalendarError, ValueError):
    pass


class ProviderError(CalendarError):
    """Upstream data source was unreachable or returned unusable data."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        country: Optional[str] = None,
        year: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.country = country
        self.year = year


class UnsupportedCountryError(ProviderError):
    """Provider has no data for the requested country/year."""
