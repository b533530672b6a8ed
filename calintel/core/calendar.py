"""Business-day calendar composed from date math and provider holiday sets."""

import asyncio
import logging
import re
from datetime import date
from enum import Enum
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Tuple

from . import date_math
from .errors import InvalidBusinessDayCountError, InvalidCountryError, ProviderError
from .models import (
    BusinessDayTally,
    BusinessDayWalk,
    CountryComparison,
    CountryHolidays,
    DateInfo,
    DateRange,
    HolidayRecord,
    HolidaySet,
    NextHoliday,
)

logger = logging.getLogger(__name__)

_COUNTRY_CODE = re.compile(r"^[A-Za-z]{2}$")

MAX_BUSINESS_DAYS = 365
# Years fetched up front for a business-day walk; further years load on demand
WALK_PREFETCH_YEARS = 3
MIN_COMPARE_COUNTRIES = 2
MAX_COMPARE_COUNTRIES = 5


class DayKind(str, Enum):
    BUSINESS = "business"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


def normalize_country(country_code: str) -> str:
    if not isinstance(country_code, str) or not _COUNTRY_CODE.match(country_code.strip()):
        raise InvalidCountryError(f"Invalid country code {country_code!r}: expected 2 letters")
    return country_code.strip().upper()


def classify_day(target_date: date, holiday_dates: AbstractSet[date]) -> DayKind:
    """Weekend wins over holiday when a date is both."""
    if date_math.is_weekend(target_date):
        return DayKind.WEEKEND
    if target_date in holiday_dates:
        return DayKind.HOLIDAY
    return DayKind.BUSINESS


def tally_range(
    date_range: DateRange,
    holiday_dates: AbstractSet[date],
    missing_years: Iterable[int] = (),
) -> BusinessDayTally:
    counts = {kind: 0 for kind in DayKind}
    for current in date_range:
        counts[classify_day(current, holiday_dates)] += 1

    return BusinessDayTally(
        total_days=sum(counts.values()),
        business_days=counts[DayKind.BUSINESS],
        weekend_days=counts[DayKind.WEEKEND],
        holiday_days=counts[DayKind.HOLIDAY],
        missing_years=tuple(sorted(set(missing_years))),
    )


def walk_business_days(start_date: date, n: int, holiday_dates: AbstractSet[date]) -> Tuple[date, int]:
    """Step ``n`` business days from ``start_date`` (backwards when n < 0).

    The start date itself is never counted. Returns the landing date and the
    number of calendar days traversed. Raises InvalidDateError when the walk
    would run past date.min or date.max.
    """
    step = 1 if n >= 0 else -1
    current = start_date
    added = moved = 0
    while added < abs(n):
        current = date_math.add_days(current, step)
        moved += 1
        if classify_day(current, holiday_dates) is DayKind.BUSINESS:
            added += 1
    return current, moved


def describe_date(target_date: date) -> DateInfo:
    week_start, week_end = date_math.week_bounds(target_date)
    return DateInfo(
        date=target_date,
        iso_week=date_math.iso_week(target_date),
        iso_year=date_math.iso_year(target_date),
        day_of_year=date_math.day_of_year(target_date),
        quarter=date_math.quarter(target_date),
        is_weekend=date_math.is_weekend(target_date),
        is_leap_year=date_math.is_leap_year(target_date.year),
        week_start=week_start,
        week_end=week_end,
        day_name=date_math.day_name(target_date),
        days_in_year=date_math.days_in_year(target_date.year),
    )


class BusinessCalendar:
    """Answers business-day questions for a country using a HolidayProvider.

    Instances hold no per-request state; every call fetches the holiday data
    it needs. Operations that aggregate across years tolerate a failed year
    and report it in ``missing_years``; single-date lookups propagate the
    provider error.
    """

    def __init__(self, provider):
        self.provider = provider

    async def holiday_set(
        self,
        country_code: str,
        start_year: int,
        end_year: int,
        tolerate_failures: bool = False,
    ) -> HolidaySet:
        country = normalize_country(country_code)
        years = list(range(start_year, end_year + 1))
        results = await asyncio.gather(
            *(self.provider.fetch_holidays(country, year) for year in years),
            return_exceptions=True,
        )

        records: List[HolidayRecord] = []
        missing: List[int] = []
        for year, result in zip(years, results):
            if isinstance(result, BaseException):
                if tolerate_failures and isinstance(result, ProviderError):
                    logger.warning(f"No holiday data for {country}/{year}, counting year as holiday-free: {result}")
                    missing.append(year)
                    continue
                raise result
            records.extend(result)

        return HolidaySet(
            country=country,
            start_year=start_year,
            end_year=end_year,
            records=tuple(records),
            missing_years=tuple(missing),
        )

    async def country_holidays(self, country_code: str, year: int) -> List[HolidayRecord]:
        holidays = await self.holiday_set(country_code, year, year)
        return sorted(holidays.records, key=lambda r: r.date)

    async def is_holiday(self, target_date: date, country_code: str) -> Optional[HolidayRecord]:
        holidays = await self.holiday_set(country_code, target_date.year, target_date.year)
        return holidays.find(target_date)

    async def is_business_day(self, target_date: date, country_code: str) -> bool:
        if date_math.is_weekend(target_date):
            # Still validate the country code before answering
            normalize_country(country_code)
            return False
        return await self.is_holiday(target_date, country_code) is None

    async def tally(self, date_range: DateRange, country_code: str) -> BusinessDayTally:
        holidays = await self.holiday_set(
            country_code, date_range.start.year, date_range.end.year, tolerate_failures=True
        )
        return tally_range(date_range, holidays.dates, holidays.missing_years)

    async def add_business_days(self, start_date: date, n: int, country_code: str) -> BusinessDayWalk:
        return await self._walk(start_date, n, country_code, forward=True)

    async def subtract_business_days(self, start_date: date, n: int, country_code: str) -> BusinessDayWalk:
        return await self._walk(start_date, n, country_code, forward=False)

    async def _walk(self, start_date: date, n: int, country_code: str, forward: bool) -> BusinessDayWalk:
        if isinstance(n, bool) or not isinstance(n, int) or not 1 <= n <= MAX_BUSINESS_DAYS:
            raise InvalidBusinessDayCountError(
                f"Business day count must be an integer in [1, {MAX_BUSINESS_DAYS}], got {n!r}"
            )

        if forward:
            first_year = start_date.year
            last_year = min(start_date.year + WALK_PREFETCH_YEARS - 1, date.max.year)
        else:
            first_year = max(start_date.year - WALK_PREFETCH_YEARS + 1, date.min.year)
            last_year = start_date.year
        holidays = await self.holiday_set(country_code, first_year, last_year, tolerate_failures=True)
        holiday_dates = set(holidays.dates)
        missing = list(holidays.missing_years)

        steps = n if forward else -n
        result_date, moved = walk_business_days(start_date, steps, holiday_dates)
        while not first_year <= result_date.year <= last_year:
            # Walk left the loaded horizon: load the years it crossed and walk again
            if forward:
                extra_first, extra_last = last_year + 1, result_date.year
            else:
                extra_first, extra_last = result_date.year, first_year - 1
            logger.info(f"Extending holiday horizon for {holidays.country} to {extra_first}-{extra_last}")
            extra = await self.holiday_set(country_code, extra_first, extra_last, tolerate_failures=True)
            holiday_dates |= extra.dates
            missing.extend(extra.missing_years)
            first_year, last_year = min(first_year, extra_first), max(last_year, extra_last)
            result_date, moved = walk_business_days(start_date, steps, holiday_dates)

        return BusinessDayWalk(
            start_date=start_date,
            result_date=result_date,
            business_days_added=n,
            calendar_days_moved=moved,
            missing_years=tuple(sorted(missing)),
        )

    async def next_holiday(self, country_code: str, from_date: date) -> Optional[NextHoliday]:
        holidays = await self.holiday_set(country_code, from_date.year, from_date.year + 1)
        upcoming = sorted((r for r in holidays.records if r.date > from_date), key=lambda r: r.date)
        if not upcoming:
            return None
        holiday = upcoming[0]
        return NextHoliday(
            from_date=from_date,
            holiday=holiday,
            days_until=date_math.days_between(from_date, holiday.date),
        )

    async def compare_countries(self, country_codes: Sequence[str], year: int) -> CountryComparison:
        countries = [normalize_country(c) for c in country_codes]
        if not MIN_COMPARE_COUNTRIES <= len(countries) <= MAX_COMPARE_COUNTRIES:
            raise InvalidCountryError(
                f"Compare between {MIN_COMPARE_COUNTRIES} and {MAX_COMPARE_COUNTRIES} countries, got {len(countries)}"
            )
        if len(set(countries)) != len(countries):
            raise InvalidCountryError(f"Duplicate country codes in {countries}")

        fetched = await asyncio.gather(*(self.country_holidays(c, year) for c in countries))
        results = tuple(CountryHolidays(country=c, holidays=tuple(h)) for c, h in zip(countries, fetched))

        shared_index: Dict[date, List[str]] = {}
        for result in results:
            for holiday_date in sorted({h.date for h in result.holidays}):
                shared_index.setdefault(holiday_date, []).append(result.country)
        shared_index = {d: cs for d, cs in sorted(shared_index.items()) if len(cs) > 1}

        most = fewest = results[0]
        for result in results[1:]:
            if result.total_holidays > most.total_holidays:
                most = result
            if result.total_holidays < fewest.total_holidays:
                fewest = result

        return CountryComparison(
            year=year,
            countries=results,
            shared_holiday_dates=tuple(shared_index),
            shared_index=shared_index,
            most_holidays=most.country,
            fewest_holidays=fewest.country,
        )

    async def holidays_on(self, target_date: date, country_codes: Sequence[str]) -> List[Tuple[str, HolidayRecord]]:
        """Holidays falling on ``target_date`` across countries, skipping countries with no data."""
        countries = [normalize_country(c) for c in country_codes]
        results = await asyncio.gather(
            *(self.is_holiday(target_date, c) for c in countries),
            return_exceptions=True,
        )

        found = []
        for country, result in zip(countries, results):
            if isinstance(result, BaseException):
                if isinstance(result, ProviderError):
                    logger.warning(f"Skipping {country} for {target_date}: {result}")
                    continue
                raise result
            if result is not None:
                found.append((country, result))
        return found
