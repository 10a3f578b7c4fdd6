"""Property-based tests for the data generators (hypothesis)."""

from __future__ import annotations

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from core.services.payload_catalog import PAYLOAD_TAGS, get_malformed_payload
from core.services.test_data import generate_secure_password, generate_unique_email, generate_user_data

SPECIALS = list(string.punctuation)


def _classes(password: str) -> tuple[bool, bool, bool, bool]:
    return (
        any(c.isupper() for c in password),
        any(c.islower() for c in password),
        any(c.isdigit() for c in password),
        any(not c.isalnum() for c in password),
    )


@given(length=st.integers(min_value=9, max_value=256), special=st.sampled_from(SPECIALS))
def test_password_has_exact_length_above_floor(length, special):
    password = generate_secure_password(length, special=special)
    assert len(password) == length
    assert all(_classes(password))


@given(length=st.integers(min_value=-5, max_value=8))
def test_password_never_below_floor(length):
    password = generate_secure_password(length)
    assert len(password) >= 8
    assert all(_classes(password))


def test_ten_thousand_emails_are_distinct():
    emails = [generate_unique_email() for _ in range(10_000)]
    assert len(set(emails)) == len(emails)


@settings(max_examples=50)
@given(
    field=st.sampled_from(["firstName", "lastName", "companyName", "phone", "email", "password"]),
    value=st.text(min_size=1, max_size=40),
)
def test_single_override_wins_and_others_stay_filled(field, value):
    user = generate_user_data({field: value})
    dumped = user.model_dump(by_alias=True)
    assert dumped[field] == value
    assert all(v for k, v in dumped.items() if k != field)


@given(tag=st.sampled_from(PAYLOAD_TAGS))
def test_catalog_copies_are_independent(tag):
    first = get_malformed_payload(tag)
    first["injected"] = True
    assert "injected" not in get_malformed_payload(tag)


@given(tag=st.text(min_size=1, max_size=20).filter(lambda t: t not in PAYLOAD_TAGS))
def test_unknown_tags_fall_back_to_empty_object(tag):
    assert get_malformed_payload(tag) == {}
