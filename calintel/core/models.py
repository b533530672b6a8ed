from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .date_math import days_between, iter_dates
from .errors import InvalidRangeError


class HolidayRecord(BaseModel):
    """A single public holiday as reported by the holiday provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: date
    name: str
    local_name: str = Field(alias="localName")
    is_national: bool = Field(default=True, alias="global")
    types: FrozenSet[str] = Field(default_factory=frozenset)
    country_code: Optional[str] = Field(default=None, alias="countryCode")
    counties: Optional[Tuple[str, ...]] = None
    launch_year: Optional[int] = Field(default=None, alias="launchYear")
    fixed: Optional[bool] = None


class HistoricalEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: Optional[int] = None
    text: str
    title: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError(self.start, self.end)

    @property
    def days(self) -> int:
        return days_between(self.start, self.end) + 1

    @property
    def years(self) -> range:
        return range(self.start.year, self.end.year + 1)

    def __iter__(self) -> Iterator[date]:
        return iter_dates(self.start, self.end)

    def __contains__(self, target_date: date) -> bool:
        return self.start <= target_date <= self.end


@dataclass(frozen=True)
class HolidaySet:
    """Holiday dates for one country over an inclusive year span."""

    country: str
    start_year: int
    end_year: int
    records: Tuple[HolidayRecord, ...] = ()
    missing_years: Tuple[int, ...] = ()
    dates: FrozenSet[date] = field(init=False)
    by_date: Dict[date, HolidayRecord] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index: Dict[date, HolidayRecord] = {}
        for record in self.records:
            # First record wins when a date is listed twice
            index.setdefault(record.date, record)
        object.__setattr__(self, "by_date", index)
        object.__setattr__(self, "dates", frozenset(index))

    def __contains__(self, target_date: date) -> bool:
        return target_date in self.dates

    def __len__(self) -> int:
        return len(self.dates)

    def covers(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def find(self, target_date: date) -> Optional[HolidayRecord]:
        return self.by_date.get(target_date)


@dataclass(frozen=True)
class BusinessDayTally:
    total_days: int = 0
    business_days: int = 0
    weekend_days: int = 0
    holiday_days: int = 0
    missing_years: Tuple[int, ...] = ()


@dataclass(frozen=True)
class BusinessDayWalk:
    start_date: date
    result_date: date
    business_days_added: int
    calendar_days_moved: int
    missing_years: Tuple[int, ...] = ()


@dataclass(frozen=True)
class NextHoliday:
    from_date: date
    holiday: HolidayRecord
    days_until: int


@dataclass(frozen=True)
class CountryHolidays:
    country: str
    holidays: Tuple[HolidayRecord, ...]

    @property
    def total_holidays(self) -> int:
        return len(self.holidays)


@dataclass(frozen=True)
class CountryComparison:
    year: int
    countries: Tuple[CountryHolidays, ...]
    shared_holiday_dates: Tuple[date, ...]
    shared_index: Dict[date, List[str]]
    most_holidays: str
    fewest_holidays: str


@dataclass(frozen=True)
class DateInfo:
    date: date
    iso_week: int
    iso_year: int
    day_of_year: int
    quarter: int
    is_weekend: bool
    is_leap_year: bool
    week_start: date
    week_end: date
    day_name: str
    days_in_year: int

    @property
    def days_remaining_in_year(self) -> int:
        return self.days_in_year - self.day_of_year
