"""
End-to-end tests of the HTTP surface.

The app is built with an injected AgentContext backed by in-memory
providers, so the full FastAPI stack (lifespan discovery, routing, input
validation, error mapping) runs without network access.
"""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from calintel.api.main import create_app
from calintel.core.entrypoint import AgentContext

from tests.fakes import FakeEventsProvider, FakeHolidayProvider


@pytest.fixture
def client(holiday_data):
    provider = FakeHolidayProvider(holiday_data, failing={("DE", 2025)})
    context = AgentContext(
        holiday_provider=provider,
        events_provider=FakeEventsProvider(),
        clock=lambda: datetime(2024, 12, 26, 9, 30, tzinfo=timezone.utc),
    )
    with TestClient(create_app(context=context)) as test_client:
        yield test_client


def invoke(client, key, payload=None):
    return client.post(f"/entrypoints/{key}/invoke", json=payload or {})


@pytest.mark.integration
class TestAgentApi:
    def test_health(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["name"] == "calendar-intel"
        assert body["entrypoints_available"] >= 9

    def test_list_entrypoints(self, client):
        response = client.get("/entrypoints")
        assert response.status_code == 200
        entrypoints = {e["key"]: e for e in response.json()}

        assert entrypoints["overview"]["price"] == 0
        assert entrypoints["add-business-days"]["price"] == 3000
        schema = entrypoints["business-days"]["input_schema"]
        assert set(schema["required"]) == {"country", "startDate", "endDate"}

    def test_invoke_business_days(self, client):
        response = invoke(client, "business-days", {
            "country": "us", "startDate": "2024-01-01", "endDate": "2024-01-07",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["key"] == "business-days"
        assert body["price"] == 2000
        assert body["output"]["businessDays"] == 4
        assert body["output"]["country"] == "US"

    def test_invoke_is_holiday(self, client):
        response = invoke(client, "is-holiday", {"country": "US", "date": "2024-07-04"})
        assert response.status_code == 200
        assert response.json()["output"]["isBusinessDay"] is False

    def test_invoke_next_holiday(self, client):
        response = invoke(client, "next-holiday", {"country": "US", "fromDate": "2024-12-26"})
        assert response.status_code == 200
        assert response.json()["output"]["nextHoliday"]["daysUntil"] == 6

    def test_invoke_on_this_day(self, client):
        response = invoke(client, "on-this-day", {"month": 7, "day": 20, "limit": 1})
        assert response.status_code == 200
        assert len(response.json()["output"]["events"]) == 1

    def test_unknown_entrypoint(self, client):
        response = invoke(client, "does-not-exist")
        assert response.status_code == 404

    def test_schema_violation_is_422(self, client):
        response = invoke(client, "add-business-days", {"country": "US", "startDate": "2024-07-03", "daysToAdd": 0})
        assert response.status_code == 422

    def test_invalid_calendar_date_is_400(self, client):
        response = invoke(client, "is-holiday", {"country": "US", "date": "2024-02-30"})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidDateError"

    def test_inverted_range_is_400(self, client):
        response = invoke(client, "business-days", {
            "country": "US", "startDate": "2024-01-07", "endDate": "2024-01-01",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidRangeError"

    def test_unsupported_country_is_404(self, client):
        response = invoke(client, "country-holidays", {"country": "XX", "year": 2025})
        assert response.status_code == 404
        assert response.json()["error"] == "UnsupportedCountryError"

    def test_provider_failure_is_502(self, client):
        response = invoke(client, "country-holidays", {"country": "DE", "year": 2025})
        assert response.status_code == 502
        assert response.json()["error"] == "ProviderError"

    def test_range_tally_survives_failed_year(self, client):
        response = invoke(client, "business-days", {
            "country": "US", "startDate": "2025-12-30", "endDate": "2026-01-02",
        })
        assert response.status_code == 200
        output = response.json()["output"]
        assert output["missingYears"] == [2026]
        assert output["totalDays"] == 4

    def test_calendar_limits_are_400(self, client):
        responses = [
            invoke(client, "business-days", {"country": "US", "startDate": "0001-01-01", "endDate": "9999-12-31"}),
            invoke(client, "add-business-days", {"country": "US", "startDate": "9999-12-20", "daysToAdd": 30}),
            invoke(client, "date-info", {"date": "9999-12-31"}),
        ]
        for response in responses:
            assert response.status_code == 400
            assert response.json()["error"] == "InvalidDateError"
