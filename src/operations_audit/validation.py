"""Validation rules for contact fields."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ContactInfo


PHONE_DIGITS = 10

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT_RE = re.compile(r"\D")

REQUIRED_FIELDS_MESSAGE = "Please complete all required fields."
INVALID_EMAIL_MESSAGE = "Please enter a valid email address."
INVALID_PHONE_MESSAGE = "Please enter a valid 10-digit phone number."
CONSENT_MESSAGE = "Please confirm you agree to be contacted."


def is_valid_email(value: str) -> bool:
    """Check for local@domain with a dot in the domain and no whitespace."""
    value = value.strip()
    if not value:
        return False
    return _EMAIL_RE.match(value) is not None


def phone_digits(value: str) -> str:
    """Strip punctuation and keep at most 10 digits."""
    return _NON_DIGIT_RE.sub("", value)[:PHONE_DIGITS]


def is_valid_phone(value: str) -> bool:
    """Valid when exactly 10 digits remain; punctuation is irrelevant."""
    return len(_NON_DIGIT_RE.sub("", value)) == PHONE_DIGITS


def format_phone_display(value: str) -> str:
    """Render digits as (555) 123-4567, growing as digits are typed."""
    d = phone_digits(value)
    if len(d) <= 3:
        return f"({d}" if d else ""
    if len(d) <= 6:
        return f"({d[:3]}) {d[3:]}"
    return f"({d[:3]}) {d[3:6]}-{d[6:]}"


def contact_error(contact: ContactInfo) -> str | None:
    """Return the first failing contact rule, or None when submittable.

    Rules are checked in a fixed order and evaluation stops at the first
    failure: required fields, email, phone, consent.
    """
    if not (contact.first_name and contact.email and contact.phone):
        return REQUIRED_FIELDS_MESSAGE
    if not is_valid_email(contact.email):
        return INVALID_EMAIL_MESSAGE
    if not is_valid_phone(contact.phone):
        return INVALID_PHONE_MESSAGE
    if not contact.consent:
        return CONSENT_MESSAGE
    return None
