"""Provider ABCs consumed by the calendar core."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..core.models import HistoricalEvent, HolidayRecord


class HolidayProvider(ABC):
    """Source of public holiday data per country and year."""

    name: str = "holidays"

    @abstractmethod
    async def fetch_holidays(self, country_code: str, year: int) -> List[HolidayRecord]:
        """Fetch public holidays for a country in a year.

        Args:
            country_code: ISO 3166-1 alpha-2 code, already upper-cased.
            year: Calendar year.

        Returns:
            List of HolidayRecord sorted by date ascending.

        Raises:
            UnsupportedCountryError: no data exists for the country/year.
            ProviderError: upstream unreachable or returned malformed data.
        """
        ...

    async def fetch_available_countries(self) -> List[Dict[str, Any]]:
        """List of ``{"countryCode", "name"}`` entries the provider supports."""
        return []

    async def aclose(self) -> None:
        pass


class EventsProvider(ABC):
    """Source of historical "on this day" events."""

    name: str = "events"

    @abstractmethod
    async def fetch_events(self, month: int, day: int) -> List[HistoricalEvent]:
        ...

    async def aclose(self) -> None:
        pass
