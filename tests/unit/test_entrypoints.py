import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from calintel.core.entrypoint import AgentContext
from calintel.core.errors import InvalidDateError, InvalidRangeError, ProviderError
from calintel.entrypoints.business_days import (
    AddBusinessDaysEntrypoint,
    BusinessDaysEntrypoint,
    CompareCountriesEntrypoint,
)
from calintel.entrypoints.dates import DateInfoEntrypoint
from calintel.entrypoints.history import OnThisDayEntrypoint
from calintel.entrypoints.holidays import (
    CountryHolidaysEntrypoint,
    IsHolidayEntrypoint,
    NextHolidayEntrypoint,
    OverviewEntrypoint,
)

from tests.fakes import FakeHolidayProvider


def test_prices():
    assert OverviewEntrypoint.price == 0
    assert CountryHolidaysEntrypoint.price == 1000
    assert IsHolidayEntrypoint.price == 1000
    assert NextHolidayEntrypoint.price == 2000
    assert BusinessDaysEntrypoint.price == 2000
    assert CompareCountriesEntrypoint.price == 3000
    assert AddBusinessDaysEntrypoint.price == 3000


@pytest.mark.asyncio
async def test_overview(provider):
    context = AgentContext(
        holiday_provider=provider,
        clock=lambda: datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
    )
    output = await OverviewEntrypoint(context).invoke()

    assert output["date"] == "2025-01-01"
    assert [h["country"] for h in output["holidaysToday"]] == ["US", "GB"]
    assert output["holidaysToday"][0]["holiday"] == "New Year's Day"
    assert output["countriesChecked"] == len(context.settings.major_countries)
    assert output["totalCountriesAvailable"] == 2
    assert output["dataSource"] == "Fake API (live)"


@pytest.mark.asyncio
async def test_country_holidays_defaults_to_current_year(context):
    output = await CountryHolidaysEntrypoint(context).invoke({"country": "us"})

    assert output["country"] == "US"
    assert output["year"] == 2024
    assert output["totalHolidays"] == 10
    assert output["holidays"][0] == {
        "date": "2024-01-01",
        "name": "New Year's Day",
        "localName": "New Year's Day",
        "global": True,
        "types": ["Public"],
    }
    assert output["fetchedAt"] == "2024-12-26T09:30:00Z"


@pytest.mark.asyncio
async def test_is_holiday(context):
    output = await IsHolidayEntrypoint(context).invoke({"country": "US", "date": "2024-07-04"})
    assert output["isHoliday"] is True
    assert output["isWeekend"] is False
    assert output["isBusinessDay"] is False
    assert output["holidayDetails"]["name"] == "Independence Day"

    output = await IsHolidayEntrypoint(context).invoke({"country": "US", "date": "2024-07-05"})
    assert output["isHoliday"] is False
    assert output["isBusinessDay"] is True
    assert output["holidayDetails"] is None


@pytest.mark.asyncio
async def test_is_holiday_input_validation(context):
    with pytest.raises(InvalidDateError):
        await IsHolidayEntrypoint(context).invoke({"country": "US", "date": "2024-02-30"})
    with pytest.raises(ValidationError):
        await IsHolidayEntrypoint(context).invoke({"country": "US", "date": "07/04/2024"})
    with pytest.raises(ValidationError):
        await IsHolidayEntrypoint(context).invoke({"country": "USA", "date": "2024-07-04"})
    with pytest.raises(ValidationError):
        await IsHolidayEntrypoint(context).invoke({"country": "US", "date": "2024-07-04", "extra": 1})


@pytest.mark.asyncio
async def test_next_holiday_from_today(context):
    output = await NextHolidayEntrypoint(context).invoke({"country": "US"})
    assert output["fromDate"] == "2024-12-26"
    assert output["nextHoliday"]["date"] == "2025-01-01"
    assert output["nextHoliday"]["daysUntil"] == 6


@pytest.mark.asyncio
async def test_next_holiday_none_found(frozen_clock):
    provider = FakeHolidayProvider({("US", 2024): [], ("US", 2025): []})
    context = AgentContext(holiday_provider=provider, clock=frozen_clock)
    output = await NextHolidayEntrypoint(context).invoke({"country": "US", "fromDate": "2024-06-01"})
    assert output["nextHoliday"] is None
    assert output["message"] == "No upcoming holidays found"


@pytest.mark.asyncio
async def test_business_days(context):
    output = await BusinessDaysEntrypoint(context).invoke(
        {"country": "US", "startDate": "2024-01-01", "endDate": "2024-01-07"}
    )
    assert output["totalDays"] == 7
    assert output["businessDays"] == 4
    assert output["weekendDays"] == 2
    assert output["holidayDays"] == 1
    assert output["missingYears"] == []


@pytest.mark.asyncio
async def test_business_days_inverted_range(context):
    with pytest.raises(InvalidRangeError):
        await BusinessDaysEntrypoint(context).invoke(
            {"country": "US", "startDate": "2024-01-07", "endDate": "2024-01-01"}
        )


@pytest.mark.asyncio
async def test_add_business_days(context):
    output = await AddBusinessDaysEntrypoint(context).invoke(
        {"country": "US", "startDate": "2024-07-03", "daysToAdd": 3}
    )
    assert output["resultDate"] == "2024-07-09"
    assert output["calendarDaysMoved"] == 6
    assert output["businessDaysAdded"] == 3
    # 2026 is not in the fake data set
    assert output["missingYears"] == [2026]

    for days in (0, 366):
        with pytest.raises(ValidationError):
            await AddBusinessDaysEntrypoint(context).invoke(
                {"country": "US", "startDate": "2024-07-03", "daysToAdd": days}
            )


@pytest.mark.asyncio
async def test_compare_countries(context):
    output = await CompareCountriesEntrypoint(context).invoke({"countries": ["us", "gb"], "year": 2025})

    assert [c["country"] for c in output["countries"]] == ["US", "GB"]
    assert output["sharedHolidayDates"] == ["2025-01-01", "2025-04-18", "2025-05-26", "2025-12-25"]
    assert output["sharedHolidays"]["2025-12-25"] == ["US", "GB"]
    assert output["comparison"] == {"mostHolidays": "GB", "fewestHolidays": "US"}


@pytest.mark.asyncio
@pytest.mark.parametrize("countries", [["US"], ["US", "us"], ["US", "GB", "DE", "FR", "JP", "AU"]])
async def test_compare_countries_validation(context, countries):
    with pytest.raises(ValidationError):
        await CompareCountriesEntrypoint(context).invoke({"countries": countries, "year": 2025})


@pytest.mark.asyncio
async def test_date_info(context):
    output = await DateInfoEntrypoint(context).invoke({"date": "2021-01-01"})
    assert output["isoWeek"] == 53
    assert output["isoYear"] == 2020
    assert output["dayName"] == "Friday"
    assert output["weekStart"] == "2020-12-28"
    assert output["weekEnd"] == "2021-01-03"
    assert output["isLeapYear"] is False
    assert output["quarter"] == 1


@pytest.mark.asyncio
async def test_on_this_day_defaults_to_today(context):
    output = await OnThisDayEntrypoint(context).invoke({"limit": 2})
    assert (output["month"], output["day"]) == (12, 26)
    assert [e["year"] for e in output["events"]] == [1969, 1881]
    assert output["totalEvents"] == 3
    assert output["dataSource"] == "FakeWiki (live)"


@pytest.mark.asyncio
async def test_on_this_day_rejects_impossible_day(context):
    with pytest.raises(InvalidDateError):
        await OnThisDayEntrypoint(context).invoke({"month": 2, "day": 30})


@pytest.mark.asyncio
async def test_on_this_day_without_provider(provider, frozen_clock):
    context = AgentContext(holiday_provider=provider, clock=frozen_clock)
    with pytest.raises(ProviderError):
        await OnThisDayEntrypoint(context).invoke({"month": 7, "day": 20})


@pytest.mark.asyncio
async def test_snake_case_input_accepted(context):
    output = await BusinessDaysEntrypoint(context).invoke(
        {"country": "US", "start_date": "2024-07-01", "end_date": "2024-07-05"}
    )
    assert output["businessDays"] == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("start, end", [
    ("0001-01-01", "9999-12-31"),
    ("1999-12-31", "2000-01-03"),
    ("2100-12-31", "2101-01-01"),
])
async def test_business_days_year_bounds(provider, frozen_clock, start, end):
    context = AgentContext(holiday_provider=provider, clock=frozen_clock)
    with pytest.raises(InvalidDateError, match="between 2000 and 2100"):
        await BusinessDaysEntrypoint(context).invoke({"country": "US", "startDate": start, "endDate": end})
    assert provider.calls == []


@pytest.mark.asyncio
async def test_add_business_days_year_bounds(provider, frozen_clock):
    context = AgentContext(holiday_provider=provider, clock=frozen_clock)
    with pytest.raises(InvalidDateError, match="between 2000 and 2100"):
        await AddBusinessDaysEntrypoint(context).invoke(
            {"country": "US", "startDate": "9999-12-20", "daysToAdd": 30}
        )
    assert provider.calls == []


@pytest.mark.asyncio
async def test_date_info_at_date_max(context):
    with pytest.raises(InvalidDateError):
        await DateInfoEntrypoint(context).invoke({"date": "9999-12-31"})
    output = await DateInfoEntrypoint(context).invoke({"date": "9999-12-26"})
    assert output["weekEnd"] == "9999-12-26"
