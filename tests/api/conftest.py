"""Fixtures for the account API scenarios.

By default every scenario talks to the in-process fake; `--live` points the
same scenarios at the configured API and paces them one second apart.
"""

from __future__ import annotations

import time
from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from adapters.fixtures import TestDataFile, load_default_test_data
from adapters.http_client import ProbeClient
from core.config import ProbeSettings
from tests.mocks import FakeAccountApi


@pytest.fixture
def live(request) -> bool:
    return bool(request.config.getoption("--live"))


@pytest.fixture
def api_settings(live: bool, settings: ProbeSettings) -> ProbeSettings:
    return ProbeSettings() if live else settings


@pytest.fixture(autouse=True)
def _pace_live_requests(live: bool) -> None:
    if live:
        time.sleep(1.0)


@pytest.fixture
def test_data(api_settings: ProbeSettings) -> TestDataFile:
    return load_default_test_data(api_settings)


@pytest_asyncio.fixture
async def account_api(
    live: bool,
    api_settings: ProbeSettings,
    fake_api: FakeAccountApi,
) -> AsyncGenerator[ProbeClient, None]:
    if live:
        async with ProbeClient(api_settings) as client:
            yield client
        return

    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api)) as http_client:
        async with ProbeClient(api_settings, client=http_client) as client:
            yield client
