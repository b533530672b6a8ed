"""Nager.Date public holiday provider."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..core.errors import ProviderError, UnsupportedCountryError
from ..core.models import HolidayRecord
from .base import HolidayProvider

logger = logging.getLogger(__name__)


class NagerDateProvider(HolidayProvider):
    """Fetch public holidays from the Nager.Date v3 API."""

    name = "Nager.Date"

    def __init__(self, client: Optional[httpx.AsyncClient] = None, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.base_url = self.settings.nager_base_url.rstrip("/")
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.settings.http_timeout_seconds,
                headers={"User-Agent": self.settings.user_agent},
            )
        return self._client

    async def _get_json(self, path: str, country: Optional[str] = None, year: Optional[int] = None) -> Any:
        url = f"{self.base_url}{path}"
        client = await self._get_client()
        try:
            resp = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Nager.Date request failed for {url}: {e}")
            raise ProviderError(f"Holiday provider unreachable: {e}", country=country, year=year) from e

        if resp.status_code == 404:
            raise UnsupportedCountryError(
                f"No holiday data for country {country!r} in {year}",
                status_code=404, country=country, year=year,
            )
        if not resp.is_success:
            logger.error(f"Nager.Date API error {resp.status_code} for {url}")
            raise ProviderError(
                f"API error: {resp.status_code}",
                status_code=resp.status_code, country=country, year=year,
            )
        # Only a successful reply with no body means the data does not exist
        if resp.status_code == 204 or not resp.content:
            raise UnsupportedCountryError(
                f"Holiday provider returned no content for {country!r} in {year}",
                status_code=resp.status_code, country=country, year=year,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError(f"Malformed JSON from holiday provider: {e}", country=country, year=year) from e

    async def fetch_holidays(self, country_code: str, year: int) -> List[HolidayRecord]:
        country = country_code.upper()
        logger.debug(f"Fetching holidays for {country}/{year}")
        data = await self._get_json(f"/PublicHolidays/{year}/{country}", country=country, year=year)

        if not isinstance(data, list):
            raise ProviderError("Holiday provider response is not a list", country=country, year=year)

        try:
            records = [HolidayRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise ProviderError(f"Malformed holiday record: {e}", country=country, year=year) from e

        records.sort(key=lambda r: r.date)
        logger.debug(f"Nager.Date returned {len(records)} holidays for {country}/{year}")
        return records

    async def fetch_available_countries(self) -> List[Dict[str, Any]]:
        data = await self._get_json("/AvailableCountries")
        if not isinstance(data, list):
            raise ProviderError("Available countries response is not a list")
        return data

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
