"""Form-input validation for prices, phone numbers and passwords."""

import math
import re
from typing import Optional

from app.services.errors import ValidationError

_NON_DIGIT_RE = re.compile(r"\D")
_UPPERCASE_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SPECIAL_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")
_PROVIDER_PREFIX_RE = re.compile(r"^Firebase:\s*", re.IGNORECASE)

MIN_PASSWORD_LENGTH = 6

# Identity provider error codes, as forwarded by the auth proxy
AUTH_ERROR_MESSAGES = {
    "auth/email-already-in-use": (
        "This email is already registered. Please sign in or use a different email."
    ),
    "auth/invalid-email": "Invalid email address. Please check and try again.",
    "auth/operation-not-allowed": (
        "Email/password accounts are not enabled. Please contact support."
    ),
    "auth/weak-password": (
        "Password is too weak. Please use at least 6 characters with uppercase, "
        "number, and special character."
    ),
    "auth/user-disabled": "This account has been disabled. Please contact support.",
    "auth/user-not-found": "No account found with this email. Please check or sign up.",
    "auth/wrong-password": "Incorrect password. Please try again.",
    "auth/too-many-requests": "Too many failed attempts. Please try again later.",
    "auth/network-request-failed": (
        "Network error. Please check your connection and try again."
    ),
    "auth/requires-recent-login": (
        "This operation requires recent authentication. Please sign in again."
    ),
    "auth/popup-closed-by-user": "Sign-in cancelled",
}

DEFAULT_AUTH_ERROR = "An error occurred. Please try again."


def validate_price(price: float, label: str = "price") -> float:
    """Ensure a price is a finite number greater than zero."""
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValidationError(f"Please enter a valid {label}")
    if not math.isfinite(price) or price <= 0:
        raise ValidationError(f"Please enter a valid {label}")
    return float(price)


def validate_phone_number(phone_number: str) -> str:
    """
    Validate a US phone number and return its ten digits.

    Formatting characters are ignored: "(555) 123-4567" is accepted.
    """
    digits = _NON_DIGIT_RE.sub("", phone_number)

    if len(digits) != 10:
        raise ValidationError("Phone number must be 10 digits (e.g., (555) 123-4567)")
    if digits[0] in ("0", "1"):
        raise ValidationError("Phone number cannot start with 0 or 1")
    return digits


def validate_password(password: str) -> None:
    """
    Check a new password against the account password rules.

    A password needs at least 6 characters, an uppercase letter, a digit
    and one of ``!@#$%^&*(),.?":{}|<>``. The first rule that fails is
    reported.

    Raises:
        ValidationError: With the message for the first failing rule
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if not _UPPERCASE_RE.search(password):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not _DIGIT_RE.search(password):
        raise ValidationError("Password must contain at least one number")
    if not _SPECIAL_RE.search(password):
        raise ValidationError(
            "Password must contain at least one special character (!@#$%^&*...)"
        )


def auth_error_message(code: Optional[str], message: str = "") -> str:
    """
    Turn an identity provider error into a message for the user.

    Known codes get a fixed message. Anything else falls back to the
    provider's own message without its ``Firebase:`` prefix, or to a
    generic message when there is none.
    """
    if code in AUTH_ERROR_MESSAGES:
        return AUTH_ERROR_MESSAGES[code]
    cleaned = _PROVIDER_PREFIX_RE.sub("", message or "").strip()
    return cleaned or DEFAULT_AUTH_ERROR
