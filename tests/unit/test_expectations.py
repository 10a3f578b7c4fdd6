"""Unit tests for scenario allow-list helpers."""

from __future__ import annotations

import logging

import pytest

from core.domain.models import ProbeResult
from core.services.expectations import (
    expect_status_in,
    has_error_field,
    message_mentions,
    note_unexpected_success,
)


def _result(status: int, body=None) -> ProbeResult:
    return ProbeResult(method="POST", url="https://api.example.test/Account/v1/User", status_code=status, body=body)


def test_expect_status_in_returns_status():
    assert expect_status_in(_result(406), [406, 409]) == 406


def test_expect_status_in_failure_message():
    with pytest.raises(AssertionError) as exc:
        expect_status_in(_result(201, {"userID": "x"}), [400, 422], scenario="empty body")
    text = str(exc.value)
    assert "expected status to be one of [400, 422], got 201" in text
    assert "(empty body)" in text


def test_note_unexpected_success_logs_observation(caplog):
    result = _result(201, {"userID": "x", "username": "<script>"})
    with caplog.at_level(logging.WARNING, logger="core.services.expectations"):
        assert note_unexpected_success(result, scenario="XSS in userName") is True
    assert "SECURITY OBSERVATION" in caplog.text
    assert "XSS in userName" in caplog.text


def test_note_unexpected_success_quiet_on_rejection(caplog):
    with caplog.at_level(logging.WARNING, logger="core.services.expectations"):
        assert note_unexpected_success(_result(400, {"message": "no"}), scenario="x") is False
    assert caplog.text == ""


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"message": "x"}, True),
        ({"error": "x"}, True),
        ({"code": "1200"}, True),
        ({"details": []}, True),
        ({"userID": "x"}, False),
        ("Bad Request", False),
        (None, False),
    ],
)
def test_has_error_field(body, expected):
    assert has_error_field(body) is expected


def test_message_mentions_is_case_insensitive():
    body = {"message": "UserName and Password required."}
    assert message_mentions(body, ["password"])
    assert not message_mentions(body, ["length"])
    assert not message_mentions({"message": 5}, ["5"])
    assert not message_mentions("password", ["password"])
