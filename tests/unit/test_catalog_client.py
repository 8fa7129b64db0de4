"""
Unit tests for the wger catalog client.

Requests are answered by httpx.MockTransport, so no traffic leaves the
process.
"""

import asyncio

import httpx
import pytest

from fitcrm.core.exercises.suggestions import (
    CatalogUnavailableError,
    normalize_catalog_records,
)
from fitcrm.infrastructure.catalog.client import (
    CatalogConfig,
    CatalogError,
    MockCatalogClient,
    WgerCatalogClient,
    create_catalog_client,
)

PAYLOAD = {
    "count": 1,
    "results": [
        {
            "id": 1,
            "category": {"id": 10, "name": "Abs"},
            "translations": [{"language": 2, "name": "Crunches", "description": "<p>Curl up.</p>"}],
        }
    ],
}


def client_with(handler, **config) -> WgerCatalogClient:
    return WgerCatalogClient(CatalogConfig(**config), transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class TestCatalogConfig:
    """Tests for CatalogConfig."""

    def test_defaults_point_at_wger(self):
        config = CatalogConfig()
        assert config.exercise_info_url == "https://wger.de/api/v2/exerciseinfo/"
        assert config.language == 2
        assert config.pool_size == 50

    def test_trailing_slash_tolerated(self):
        config = CatalogConfig(base_url="http://localhost:8001/api/v2/")
        assert config.exercise_info_url == "http://localhost:8001/api/v2/exerciseinfo/"

    @pytest.mark.parametrize("kwargs", [
        {"base_url": ""},
        {"pool_size": 0},
        {"timeout_seconds": 0},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            CatalogConfig(**kwargs)


# ---------------------------------------------------------------------------
# wger Client
# ---------------------------------------------------------------------------

class TestWgerCatalogClient:
    """Tests for WgerCatalogClient."""

    def test_requests_exercise_info_page(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PAYLOAD)

        payload = asyncio.run(client_with(handler, pool_size=20).fetch_exercise_pool())

        assert payload == PAYLOAD
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/v2/exerciseinfo/"
        assert request.url.params["language"] == "2"
        assert request.url.params["limit"] == "20"
        assert request.headers["accept"] == "application/json"

    def test_error_status_raises(self):
        client = client_with(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(CatalogError, match="500"):
            asyncio.run(client.fetch_exercise_pool())

    def test_non_json_body_raises(self):
        client = client_with(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

        with pytest.raises(CatalogError, match="Invalid catalog response"):
            asyncio.run(client.fetch_exercise_pool())

    def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CatalogError, match="request failed"):
            asyncio.run(client_with(handler).fetch_exercise_pool())

    def test_errors_are_catalog_unavailable(self):
        """The suggestion service only knows about CatalogUnavailableError."""
        assert issubclass(CatalogError, CatalogUnavailableError)


# ---------------------------------------------------------------------------
# Mock Client and Factory
# ---------------------------------------------------------------------------

class TestMockCatalogClient:
    """Tests for the canned development catalog."""

    def test_payload_normalizes(self):
        payload = asyncio.run(MockCatalogClient().fetch_exercise_pool())
        exercises = normalize_catalog_records(payload)

        assert len(exercises) == 10
        assert all(e.category for e in exercises)
        assert all("<" not in e.description for e in exercises)


class TestCreateCatalogClient:
    """Tests for the catalog factory."""

    def test_mock_mode(self):
        assert isinstance(create_catalog_client(mock_mode=True), MockCatalogClient)

    def test_real_client_by_default(self):
        assert isinstance(create_catalog_client(), WgerCatalogClient)
