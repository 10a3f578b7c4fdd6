"""Unit tests for settings and run modes."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import ProbeSettings, get_user_config_dir, get_user_env_file
from core.domain.run_mode import RunMode


def test_defaults():
    settings = ProbeSettings(_env_file=None)
    assert settings.api_base_url == "https://demoqa.com"
    assert settings.ui_base_url == "https://app.ramp.com"
    assert settings.request_timeout_seconds == 10.0
    assert settings.test_timeout_seconds == 30.0
    assert settings.retry_attempts == 2
    assert (settings.viewport_width, settings.viewport_height) == (1920, 1080)
    assert settings.rate_limit_concurrent is False
    assert settings.strict_payload_tags is False


def test_default_headers():
    headers = ProbeSettings(_env_file=None).default_headers()
    assert headers == {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": "account-probe-test-runner",
        "X-Test-Run": "account-probe-automation",
    }


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ACCOUNT_PROBE_API_BASE_URL", "https://staging.example.test")
    monkeypatch.setenv("ACCOUNT_PROBE_RETRY_ATTEMPTS", "0")
    monkeypatch.setenv("ACCOUNT_PROBE_STRICT_PAYLOAD_TAGS", "true")
    settings = ProbeSettings(_env_file=None)
    assert settings.api_base_url == "https://staging.example.test"
    assert settings.retry_attempts == 0
    assert settings.strict_payload_tags is True


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ACCOUNT_PROBE_USER_AGENT=from-dotenv\n", encoding="utf-8")
    assert ProbeSettings(_env_file=env_file).user_agent == "from-dotenv"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"request_timeout_seconds": 0},
        {"retry_attempts": -1},
        {"retry_attempts": 11},
        {"api_base_url": "x"},
        {"rate_limit_max_concurrency": 0},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        ProbeSettings(_env_file=None, **kwargs)


def test_settings_are_frozen():
    settings = ProbeSettings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.retry_attempts = 5


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout")
def test_user_config_dir_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "account-probe"
    assert get_user_env_file() == tmp_path / "account-probe" / ".env"


@pytest.mark.parametrize(
    ("mode", "marker", "label"),
    [
        (RunMode.ALL, None, "All specs"),
        (RunMode.UI, "ui", "UI specs"),
        (RunMode.API, "api", "API specs"),
    ],
)
def test_run_modes(mode, marker, label):
    assert mode.marker_expression() == marker
    assert mode.label() == label


def test_run_mode_default_and_parse():
    assert RunMode.default() is RunMode.ALL
    assert RunMode("api") is RunMode.API
    assert isinstance(ProbeSettings(_env_file=None).reports_dir, Path)
