"""Pure calendar arithmetic over UTC-anchored dates.

Every function here works on plain ``datetime.date`` values and never looks
at the local timezone of the process. Dates cross the API boundary as
canonical ``YYYY-MM-DD`` strings, see :func:`parse_date` / :func:`format_date`.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterator, Optional, Tuple
import re

from .errors import InvalidDateError

Clock = Callable[[], datetime]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today(clock: Optional[Clock] = None) -> date:
    """Current calendar date in UTC according to ``clock``."""
    now = (clock or utc_now)()
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def parse_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a date."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidDateError(value)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateError(value) from None


def format_date(target_date: date) -> str:
    return target_date.isoformat()


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(target_date: date) -> int:
    """1-based ordinal of the date within its year (1..366)."""
    return (target_date - date(target_date.year, 1, 1)).days + 1


def quarter(target_date: date) -> int:
    return (target_date.month + 2) // 3


def is_weekend(target_date: date) -> bool:
    """Check if date falls on weekend (Saturday=5, Sunday=6)."""
    return target_date.weekday() >= 5


def _week_thursday(target_date: date) -> date:
    # Thursday of the Monday-anchored week holding target_date
    return target_date + timedelta(days=3 - target_date.weekday())


def iso_week(target_date: date) -> int:
    """ISO-8601 week number.

    The date is shifted to the Thursday of its week; the week number is the
    count of 7-day blocks into that Thursday's year. Late-December dates can
    therefore land in week 1 of the next year and early-January dates in the
    last week of the previous one.
    """
    thursday = _week_thursday(target_date)
    return (day_of_year(thursday) - 1) // 7 + 1


def iso_year(target_date: date) -> int:
    """Year that owns the ISO week of ``target_date``."""
    return _week_thursday(target_date).year


def week_bounds(target_date: date) -> Tuple[date, date]:
    """Monday-anchored week containing the date: (Monday, Sunday)."""
    week_start = add_days(target_date, -target_date.weekday())
    return week_start, add_days(week_start, 6)


def add_days(target_date: date, n: int) -> date:
    """Shift by ``n`` calendar days; raises InvalidDateError past date.min or date.max."""
    try:
        return target_date + timedelta(days=n)
    except OverflowError:
        raise InvalidDateError(
            format_date(target_date), f"moving {n} days leaves the supported date range"
        ) from None


def days_between(start_date: date, end_date: date) -> int:
    """Signed calendar-day difference ``end_date - start_date``."""
    return (end_date - start_date).days


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date in range (inclusive). Empty when end < start."""
    if end_date < start_date:
        return
    current = start_date
    while current < end_date:
        yield current
        current += timedelta(days=1)
    yield end_date


def day_name(target_date: date) -> str:
    return DAY_NAMES[target_date.weekday()]
