"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import json
import pytest
import httpx
from typing import Any, Optional

from config.apify import ApifyConfig
from integrations.apify import ApifyClient
from services.port_resolution_service import PortResolutionService
from services.webhook_log_service import RecentEventsLog


# ===================
# FAKE APIFY API
# ===================

class FakeApify:
    """
    Fake Apify API served through httpx.MockTransport.

    Records every request; responses are configurable per endpoint.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.run_status = 201
        self.run_body: Any = {
            "data": {
                "id": "run-123",
                "status": "SUCCEEDED",
                "defaultDatasetId": "dataset-456",
            }
        }
        self.dataset_status = 200
        self.dataset_body: Any = []
        self.raise_on: Optional[str] = None

    def set_dataset(self, records: list[dict]):
        self.dataset_body = records

    @property
    def run_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if "/actor-tasks/" in r.url.path]

    @property
    def dataset_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if "/datasets/" in r.url.path]

    def _respond(self, status: int, body: Any) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=json.dumps(body).encode())

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if "/actor-tasks/" in request.url.path:
            if self.raise_on == "run":
                raise httpx.ConnectError("connection refused", request=request)
            return self._respond(self.run_status, self.run_body)

        if "/datasets/" in request.url.path:
            if self.raise_on == "dataset":
                raise httpx.ReadTimeout("timed out", request=request)
            return self._respond(self.dataset_status, self.dataset_body)

        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


# ===================
# FIXTURES
# ===================

@pytest.fixture
def apify_config() -> ApifyConfig:
    """Complete Apify configuration."""
    return ApifyConfig(
        token="test-token",
        task_id="user~cruise-itineraries",
        base_url="https://api.apify.test/v2",
    )


@pytest.fixture
def fake_apify() -> FakeApify:
    """
    Fake Apify API.

    Usage:
        def test_something(fake_apify, apify_client):
            fake_apify.set_dataset([{...}])
    """
    return FakeApify()


@pytest.fixture
def apify_client(apify_config, fake_apify) -> ApifyClient:
    """ApifyClient wired to the fake API."""
    return ApifyClient(apify_config, http_client=fake_apify.client())


@pytest.fixture
def resolution_service(apify_client) -> PortResolutionService:
    """PortResolutionService scraping through the fake API."""
    return PortResolutionService(scrape_client=apify_client)


@pytest.fixture
def events_log() -> RecentEventsLog:
    return RecentEventsLog(capacity=20)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(resolution_service, events_log):
    """
    FastAPI test client with the fake Apify API and a fresh events log.

    Usage:
        def test_endpoint(test_client, fake_apify):
            fake_apify.set_dataset([...])
            response = test_client.post("/webhooks/order-paid", json={...})
    """
    from unittest.mock import patch
    from fastapi.testclient import TestClient
    from main import app

    with patch("routes.webhooks.get_port_resolution_service", return_value=resolution_service):
        with patch("routes.webhooks.get_recent_events_log", return_value=events_log):
            yield TestClient(app)
