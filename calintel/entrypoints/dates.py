from typing import Any, Dict

from pydantic import Field

from ..core.calendar import describe_date
from ..core.date_math import format_date, parse_date
from ..core.entrypoint import BaseEntrypoint, DateString, EntrypointInput
from ..core.registry import register_entrypoint


class DateInfoInput(EntrypointInput):
    date: DateString = Field(..., description="Date in YYYY-MM-DD format")


@register_entrypoint(
    "date-info", price=1000,
    description="Calendar facts for a date - ISO week, day of year, quarter, week bounds, leap year",
)
class DateInfoEntrypoint(BaseEntrypoint):
    input_model = DateInfoInput

    async def handle(self, params: DateInfoInput) -> Dict[str, Any]:
        info = describe_date(parse_date(params.date))

        return {
            "date": format_date(info.date),
            "dayName": info.day_name,
            "isoWeek": info.iso_week,
            "isoYear": info.iso_year,
            "dayOfYear": info.day_of_year,
            "daysInYear": info.days_in_year,
            "daysRemainingInYear": info.days_remaining_in_year,
            "quarter": info.quarter,
            "isWeekend": info.is_weekend,
            "isLeapYear": info.is_leap_year,
            "weekStart": format_date(info.week_start),
            "weekEnd": format_date(info.week_end),
            "generatedAt": self.timestamp(),
        }
