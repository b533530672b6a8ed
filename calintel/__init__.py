"""calendar-intel - holiday and business-day intelligence for scheduling agents."""

__version__ = "1.0.0"
__description__ = "Public holiday data for scheduling agents - holidays, business days, and calendar intelligence"

from .core.calendar import BusinessCalendar
from .core.registry import EntrypointRegistry

__all__ = ["BusinessCalendar", "EntrypointRegistry"]
