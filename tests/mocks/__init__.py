"""Test doubles for the account API."""

from tests.mocks.fake_account_api import FakeAccountApi

__all__ = ["FakeAccountApi"]
