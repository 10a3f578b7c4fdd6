"""
Pytest configuration and shared fixtures for account-probe tests.

Every piece of test data is generated inside a test or a function-scoped
fixture, so a re-run of a failed test sends fresh unique values.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from adapters.http_client import ProbeClient
from core.config import ProbeSettings
from tests.mocks import FakeAccountApi

FAKE_API_BASE_URL = "https://api.example.test"


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run the API scenarios against the configured live API instead of the in-process fake.",
    )


def pytest_configure(config):
    """Register markers so `-m` selection works without warnings."""
    config.addinivalue_line("markers", "api: HTTP-level specs against the user-account API")
    config.addinivalue_line("markers", "ui: browser-driven specs (supplied externally)")
    config.addinivalue_line("markers", "unit: fast, isolated tests")
    config.addinivalue_line("markers", "property: property-based tests (hypothesis)")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        path = str(item.fspath)
        if "/unit/" in path or "\\unit\\" in path:
            item.add_marker(pytest.mark.unit)
        elif "/property/" in path or "\\property\\" in path:
            item.add_marker(pytest.mark.property)


@pytest.fixture
def settings() -> ProbeSettings:
    """Settings pointing at the fake API, isolated from any .env file."""
    return ProbeSettings(_env_file=None, api_base_url=FAKE_API_BASE_URL)


@pytest.fixture
def fake_api() -> FakeAccountApi:
    return FakeAccountApi()


@pytest_asyncio.fixture
async def probe_client(settings: ProbeSettings, fake_api: FakeAccountApi) -> AsyncGenerator[ProbeClient, None]:
    """ProbeClient wired to the fake API through httpx.MockTransport."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api)) as http_client:
        async with ProbeClient(settings, client=http_client) as client:
            yield client
