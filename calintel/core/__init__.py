"""Core calintel components - calendar math, business days, entrypoint plumbing."""

from .calendar import BusinessCalendar
from .entrypoint import AgentContext, BaseEntrypoint
from .registry import EntrypointRegistry

__all__ = ["AgentContext", "BaseEntrypoint", "BusinessCalendar", "EntrypointRegistry"]
