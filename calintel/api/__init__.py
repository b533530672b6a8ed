"""HTTP surface for the calendar-intel agent."""

from .main import create_app

app = create_app()

__all__ = ["app", "create_app"]
