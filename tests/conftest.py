import pytest
from datetime import datetime, timezone

from calintel.core.entrypoint import AgentContext

from tests.fakes import (
    GB_2025,
    US_2024,
    US_2025,
    FakeEventsProvider,
    FakeHolidayProvider,
    FixedDateHolidayProvider,
)


@pytest.fixture
def holiday_data():
    return {("US", 2024): US_2024, ("US", 2025): US_2025, ("GB", 2025): GB_2025}


@pytest.fixture
def provider(holiday_data):
    return FakeHolidayProvider(holiday_data)


@pytest.fixture
def fixed_provider():
    return FixedDateHolidayProvider()


@pytest.fixture
def frozen_clock():
    return lambda: datetime(2024, 12, 26, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def context(provider, frozen_clock):
    return AgentContext(holiday_provider=provider, events_provider=FakeEventsProvider(), clock=frozen_clock)
