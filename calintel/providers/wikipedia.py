"""Wikipedia "on this day" historical events provider."""

import logging
from typing import List, Optional

import httpx

from ..config import Settings, settings as default_settings
from ..core.errors import ProviderError
from ..core.models import HistoricalEvent
from .base import EventsProvider

logger = logging.getLogger(__name__)


class WikipediaEventsProvider(EventsProvider):
    """Fetch events from the Wikimedia REST ``feed/onthisday`` endpoint."""

    name = "Wikipedia"

    def __init__(self, client: Optional[httpx.AsyncClient] = None, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.base_url = self.settings.wikipedia_base_url.rstrip("/")
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.settings.http_timeout_seconds,
                headers={"User-Agent": self.settings.user_agent},
            )
        return self._client

    async def fetch_events(self, month: int, day: int) -> List[HistoricalEvent]:
        url = f"{self.base_url}/feed/onthisday/events/{month:02d}/{day:02d}"
        client = await self._get_client()
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Wikipedia API error {e.response.status_code} for {url}")
            raise ProviderError(f"API error: {e.response.status_code}", status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Wikipedia request failed for {url}: {e}")
            raise ProviderError(f"Events provider unreachable: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Malformed JSON from events provider: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("events"), list):
            raise ProviderError("Events provider response has no events list")

        events = []
        for item in data["events"]:
            if not isinstance(item, dict) or not item.get("text"):
                logger.warning(f"Skip malformed event for {month:02d}/{day:02d}: {item!r}")
                continue
            pages = item.get("pages") or []
            page = pages[0] if pages and isinstance(pages[0], dict) else {}
            events.append(HistoricalEvent(
                year=item.get("year"),
                text=item["text"],
                title=page.get("normalizedtitle") or page.get("title"),
                url=(page.get("content_urls") or {}).get("desktop", {}).get("page"),
            ))

        # Newest first, undated events last
        events.sort(key=lambda e: (e.year is None, -(e.year or 0)))
        logger.debug(f"Wikipedia returned {len(events)} events for {month:02d}/{day:02d}")
        return events

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
