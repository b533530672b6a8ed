from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from ..core.calendar import MAX_BUSINESS_DAYS, MAX_COMPARE_COUNTRIES, MIN_COMPARE_COUNTRIES
from ..core.date_math import format_date
from ..core.entrypoint import (
    MAX_YEAR,
    MIN_YEAR,
    BaseEntrypoint,
    CountryCode,
    DateString,
    EntrypointInput,
    parse_bounded_date,
)
from ..core.models import DateRange
from ..core.registry import register_entrypoint


class BusinessDaysInput(EntrypointInput):
    country: CountryCode = Field(..., description="ISO 3166-1 alpha-2 country code")
    start_date: DateString = Field(..., description="Start date YYYY-MM-DD")
    end_date: DateString = Field(..., description="End date YYYY-MM-DD")


class AddBusinessDaysInput(EntrypointInput):
    country: CountryCode = Field(..., description="ISO 3166-1 alpha-2 country code")
    start_date: DateString = Field(..., description="Start date YYYY-MM-DD")
    days_to_add: int = Field(..., ge=1, le=MAX_BUSINESS_DAYS, description="Number of business days to add")


class CompareCountriesInput(EntrypointInput):
    countries: List[CountryCode] = Field(
        ..., min_length=MIN_COMPARE_COUNTRIES, max_length=MAX_COMPARE_COUNTRIES, description="List of country codes"
    )
    year: Optional[int] = Field(default=None, ge=MIN_YEAR, le=MAX_YEAR, description="Defaults to the current year")

    @field_validator("countries")
    @classmethod
    def validate_distinct(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("countries must be distinct")
        return v


@register_entrypoint(
    "business-days", price=2000,
    description="Calculate business days between two dates (excluding weekends and holidays)",
)
class BusinessDaysEntrypoint(BaseEntrypoint):
    input_model = BusinessDaysInput

    async def handle(self, params: BusinessDaysInput) -> Dict[str, Any]:
        date_range = DateRange(parse_bounded_date(params.start_date), parse_bounded_date(params.end_date))
        tally = await self.calendar.tally(date_range, params.country)

        return {
            "country": params.country,
            "startDate": format_date(date_range.start),
            "endDate": format_date(date_range.end),
            "businessDays": tally.business_days,
            "totalDays": tally.total_days,
            "weekendDays": tally.weekend_days,
            "holidayDays": tally.holiday_days,
            "missingYears": list(tally.missing_years),
            "fetchedAt": self.timestamp(),
        }


@register_entrypoint("add-business-days", price=3000, description="Calculate a future date by adding N business days")
class AddBusinessDaysEntrypoint(BaseEntrypoint):
    input_model = AddBusinessDaysInput

    async def handle(self, params: AddBusinessDaysInput) -> Dict[str, Any]:
        start_date = parse_bounded_date(params.start_date)
        walk = await self.calendar.add_business_days(start_date, params.days_to_add, params.country)

        return {
            "country": params.country,
            "startDate": format_date(start_date),
            "businessDaysAdded": walk.business_days_added,
            "resultDate": format_date(walk.result_date),
            "calendarDaysMoved": walk.calendar_days_moved,
            "missingYears": list(walk.missing_years),
            "fetchedAt": self.timestamp(),
        }


@register_entrypoint("compare-countries", price=3000, description="Compare public holidays across multiple countries")
class CompareCountriesEntrypoint(BaseEntrypoint):
    input_model = CompareCountriesInput

    async def handle(self, params: CompareCountriesInput) -> Dict[str, Any]:
        year = params.year or self.today().year
        comparison = await self.calendar.compare_countries(params.countries, year)

        return {
            "year": year,
            "countries": [
                {
                    "country": result.country,
                    "totalHolidays": result.total_holidays,
                    "holidays": [{"date": format_date(h.date), "name": h.name} for h in result.holidays],
                }
                for result in comparison.countries
            ],
            "sharedHolidayDates": [format_date(d) for d in comparison.shared_holiday_dates],
            "sharedHolidays": {format_date(d): countries for d, countries in comparison.shared_index.items()},
            "comparison": {
                "mostHolidays": comparison.most_holidays,
                "fewestHolidays": comparison.fewest_holidays,
            },
            "fetchedAt": self.timestamp(),
        }
