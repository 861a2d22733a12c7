"""Tests for price, phone number and password validation."""

import math

import pytest

from app.services.errors import ValidationError
from app.services.validation import (
    DEFAULT_AUTH_ERROR,
    auth_error_message,
    validate_password,
    validate_phone_number,
    validate_price,
)


def test_validate_price() -> None:
    """Test only finite positive numbers are prices."""
    assert validate_price(4.5) == 4.5
    assert validate_price(12) == 12.0
    for bad in (0, -1, math.inf, math.nan, True, "12"):
        with pytest.raises(ValidationError):
            validate_price(bad)


def test_validate_phone_number() -> None:
    """Test US numbers are reduced to ten digits."""
    assert validate_phone_number("(555) 123-4567") == "5551234567"
    assert validate_phone_number("555.123.4567") == "5551234567"

    for bad in ("555-1234", "05551234567", "0551234567", "1551234567"):
        with pytest.raises(ValidationError):
            validate_phone_number(bad)


def test_validate_password_accepts_strong_password() -> None:
    """Test a password meeting every rule passes."""
    validate_password("Baklava1!")


@pytest.mark.parametrize(
    "password,message",
    [
        ("Ab1!", "at least 6 characters"),
        ("baklava1!", "uppercase letter"),
        ("Baklava!", "number"),
        ("Baklava1", "special character"),
    ],
)
def test_validate_password_reports_first_failing_rule(
    password: str, message: str
) -> None:
    """Test each rule produces its own message."""
    with pytest.raises(ValidationError, match=message):
        validate_password(password)


def test_auth_error_message_known_codes() -> None:
    """Test provider codes map to fixed messages."""
    assert auth_error_message("auth/wrong-password") == (
        "Incorrect password. Please try again."
    )
    assert auth_error_message("auth/popup-closed-by-user") == "Sign-in cancelled"
    assert "already registered" in auth_error_message("auth/email-already-in-use")


def test_auth_error_message_fallbacks() -> None:
    """Test unknown codes use the provider message without its prefix."""
    assert (
        auth_error_message("auth/quota-exceeded", "Firebase: Quota exceeded.")
        == "Quota exceeded."
    )
    assert auth_error_message("auth/unknown", "") == DEFAULT_AUTH_ERROR
    assert auth_error_message(None) == DEFAULT_AUTH_ERROR
