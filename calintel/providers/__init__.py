"""Remote data providers for holidays and historical events."""

from .base import EventsProvider, HolidayProvider
from .nager import NagerDateProvider
from .wikipedia import WikipediaEventsProvider

__all__ = ["EventsProvider", "HolidayProvider", "NagerDateProvider", "WikipediaEventsProvider"]
