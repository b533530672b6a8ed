from datetime import date
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.entrypoint import BaseEntrypoint, EntrypointInput
from ..core.errors import InvalidDateError, ProviderError
from ..core.registry import register_entrypoint


class OnThisDayInput(EntrypointInput):
    month: Optional[int] = Field(default=None, ge=1, le=12, description="Month (defaults to today)")
    day: Optional[int] = Field(default=None, ge=1, le=31, description="Day of month (defaults to today)")
    limit: int = Field(default=10, ge=1, le=50, description="Maximum number of events to return")


@register_entrypoint("on-this-day", price=2000, description="Historical events that happened on a day of the year")
class OnThisDayEntrypoint(BaseEntrypoint):
    input_model = OnThisDayInput

    async def handle(self, params: OnThisDayInput) -> Dict[str, Any]:
        today = self.today()
        month = params.month or today.month
        day = params.day or today.day
        try:
            # 2000 is a leap year, so Feb 29 is accepted
            date(2000, month, day)
        except ValueError:
            raise InvalidDateError(f"{month:02d}-{day:02d}") from None

        provider = self.context.events_provider
        if provider is None:
            raise ProviderError("No historical events provider configured")
        events = await provider.fetch_events(month, day)

        return {
            "month": month,
            "day": day,
            "events": [
                {"year": e.year, "text": e.text, "title": e.title, "url": e.url}
                for e in events[:params.limit]
            ],
            "totalEvents": len(events),
            "fetchedAt": self.timestamp(),
            "dataSource": f"{provider.name} (live)",
        }
