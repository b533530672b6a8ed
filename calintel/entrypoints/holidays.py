from typing import Any, Dict, Optional

from pydantic import Field

from ..core.date_math import format_date, is_weekend, parse_date
from ..core.entrypoint import MAX_YEAR, MIN_YEAR, BaseEntrypoint, CountryCode, DateString, EmptyInput, EntrypointInput
from ..core.models import HolidayRecord
from ..core.registry import register_entrypoint


def holiday_output(record: HolidayRecord) -> Dict[str, Any]:
    return {
        "date": format_date(record.date),
        "name": record.name,
        "localName": record.local_name,
        "global": record.is_national,
        "types": sorted(record.types),
    }


class CountryYearInput(EntrypointInput):
    country: CountryCode = Field(..., description="ISO 3166-1 alpha-2 country code (e.g., US, GB, DE)")
    year: Optional[int] = Field(default=None, ge=MIN_YEAR, le=MAX_YEAR, description="Defaults to the current year")


class CountryDateInput(EntrypointInput):
    country: CountryCode = Field(..., description="ISO 3166-1 alpha-2 country code")
    date: DateString = Field(..., description="Date in YYYY-MM-DD format")


class NextHolidayInput(EntrypointInput):
    country: CountryCode = Field(..., description="ISO 3166-1 alpha-2 country code")
    from_date: Optional[DateString] = Field(default=None, description="Start date (defaults to today)")


@register_entrypoint("overview", price=0, description="Free overview - check which countries have a holiday today")
class OverviewEntrypoint(BaseEntrypoint):
    input_model = EmptyInput

    async def handle(self, params: EmptyInput) -> Dict[str, Any]:
        today = self.today()
        countries = self.context.settings.major_countries
        available = await self.context.holiday_provider.fetch_available_countries()
        found = await self.calendar.holidays_on(today, countries)

        return {
            "date": format_date(today),
            "holidaysToday": [
                {"country": country, "holiday": record.name, "localName": record.local_name}
                for country, record in found
            ],
            "countriesChecked": len(countries),
            "totalCountriesAvailable": len(available),
            "fetchedAt": self.timestamp(),
            "dataSource": f"{self.context.holiday_provider.name} API (live)",
        }


@register_entrypoint("country-holidays", price=1000, description="Get all public holidays for a country in a given year")
class CountryHolidaysEntrypoint(BaseEntrypoint):
    input_model = CountryYearInput

    async def handle(self, params: CountryYearInput) -> Dict[str, Any]:
        year = params.year or self.today().year
        holidays = await self.calendar.country_holidays(params.country, year)

        return {
            "country": params.country,
            "year": year,
            "holidays": [holiday_output(h) for h in holidays],
            "totalHolidays": len(holidays),
            "fetchedAt": self.timestamp(),
        }


@register_entrypoint("is-holiday", price=1000, description="Check if a specific date is a public holiday in a country")
class IsHolidayEntrypoint(BaseEntrypoint):
    input_model = CountryDateInput

    async def handle(self, params: CountryDateInput) -> Dict[str, Any]:
        target_date = parse_date(params.date)
        holiday = await self.calendar.is_holiday(target_date, params.country)
        weekend = is_weekend(target_date)

        return {
            "country": params.country,
            "date": format_date(target_date),
            "isHoliday": holiday is not None,
            "isWeekend": weekend,
            "isBusinessDay": holiday is None and not weekend,
            "holidayDetails": {
                "name": holiday.name,
                "localName": holiday.local_name,
                "types": sorted(holiday.types),
            } if holiday else None,
            "fetchedAt": self.timestamp(),
        }


@register_entrypoint("next-holiday", price=2000, description="Get the next upcoming public holiday in a country")
class NextHolidayEntrypoint(BaseEntrypoint):
    input_model = NextHolidayInput

    async def handle(self, params: NextHolidayInput) -> Dict[str, Any]:
        from_date = parse_date(params.from_date) if params.from_date else self.today()
        upcoming = await self.calendar.next_holiday(params.country, from_date)

        output = {
            "country": params.country,
            "fromDate": format_date(from_date),
            "nextHoliday": None,
            "fetchedAt": self.timestamp(),
        }
        if upcoming is None:
            output["message"] = "No upcoming holidays found"
            return output

        output["nextHoliday"] = {
            "date": format_date(upcoming.holiday.date),
            "name": upcoming.holiday.name,
            "localName": upcoming.holiday.local_name,
            "daysUntil": upcoming.days_until,
            "types": sorted(upcoming.holiday.types),
        }
        return output
