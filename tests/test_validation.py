from operations_audit.models import ContactInfo
from operations_audit.validation import (
    CONSENT_MESSAGE,
    INVALID_EMAIL_MESSAGE,
    INVALID_PHONE_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    contact_error,
    format_phone_display,
    is_valid_email,
    is_valid_phone,
    phone_digits,
)


def test_email_requires_dot_in_domain() -> None:
    assert is_valid_email("a@b") is False
    assert is_valid_email("a@b.com") is True


def test_email_rejects_whitespace_and_missing_parts() -> None:
    assert is_valid_email("") is False
    assert is_valid_email("   ") is False
    assert is_valid_email("a b@c.com") is False
    assert is_valid_email("@b.com") is False
    assert is_valid_email("a@.com") is False
    assert is_valid_email("a@@b.com") is False


def test_email_ignores_surrounding_whitespace() -> None:
    assert is_valid_email("  ada@example.com  ") is True


def test_phone_validity_depends_only_on_digit_count() -> None:
    assert is_valid_phone("555123") is False
    assert is_valid_phone("5551234567") is True
    assert is_valid_phone("(555) 123-4567") is True
    assert is_valid_phone("555.123.4567") is True
    assert is_valid_phone("55512345678") is False


def test_phone_digits_truncates_to_ten() -> None:
    assert phone_digits("(555) 123-4567 ext 89") == "5551234567"
    assert phone_digits("abc") == ""


def test_phone_display_grows_with_input() -> None:
    assert format_phone_display("") == ""
    assert format_phone_display("55") == "(55"
    assert format_phone_display("5551") == "(555) 1"
    assert format_phone_display("5551234567") == "(555) 123-4567"
    assert format_phone_display("(555) 123-4567") == "(555) 123-4567"


def _contact(**overrides) -> ContactInfo:
    fields = dict(
        first_name="Ada",
        email="ada@example.com",
        phone="5551234567",
        company="",
        consent=True,
    )
    fields.update(overrides)
    return ContactInfo(**fields)


def test_contact_error_none_when_complete() -> None:
    assert contact_error(_contact()) is None


def test_contact_error_reports_first_failure_only() -> None:
    # Everything is wrong; only the required-fields message surfaces
    everything_wrong = _contact(first_name="", email="bad", phone="123", consent=False)
    assert contact_error(everything_wrong) == REQUIRED_FIELDS_MESSAGE

    assert contact_error(_contact(email="bad", phone="123", consent=False)) == INVALID_EMAIL_MESSAGE
    assert contact_error(_contact(phone="123", consent=False)) == INVALID_PHONE_MESSAGE
    assert contact_error(_contact(consent=False)) == CONSENT_MESSAGE


def test_company_is_optional() -> None:
    assert contact_error(_contact(company="")) is None
