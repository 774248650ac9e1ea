import pytest

from services.normalize.redactor import PIIRedactor, redact_pii


@pytest.fixture
def redactor():
    return PIIRedactor()


def test_phone_and_email_redacted():
    text = "Call me at 555-123-4567 or email john@co.com"
    assert redact_pii(text) == "Call me at [PHONE_REDACTED] or email [EMAIL_REDACTED]"


@pytest.mark.parametrize("phone", [
    "555-123-4567",
    "555.123.4567",
    "555 123 4567",
    "(555) 123-4567",
    "+1 555-123-4567",
    "123-4567",
])
def test_phone_formats(phone):
    assert redact_pii(f"reach me on {phone} today") == "reach me on [PHONE_REDACTED] today"


@pytest.mark.parametrize("card", [
    "4111 1111 1111 1111",
    "4111-1111-1111-1111",
    "4111111111111111",
])
def test_card_numbers(card):
    assert redact_pii(f"card {card} please") == "card [PAYMENT_INFO_REDACTED] please"


def test_national_id():
    assert redact_pii("SSN 123-45-6789.") == "SSN [SSN_REDACTED]."


def test_email_with_digits_is_redacted_as_email():
    assert redact_pii("mail 5551234567@example.com now") == "mail [EMAIL_REDACTED] now"


def test_text_without_pii_unchanged():
    assert redact_pii("Hair, Nails") == "Hair, Nails"


def test_empty_input():
    assert redact_pii("") == ""
    assert redact_pii(None) == ""


def test_redact_with_stats_counts(redactor):
    text = (
        "Contact john.doe@example.com or 555-123-4567. "
        "SSN 123-45-6789. Card 4111 1111 1111 1111."
    )
    redacted, stats = redactor.redact_with_stats(text)

    assert stats == {"EMAIL": 1, "PHONE": 1, "SSN": 1, "PAYMENT": 1}
    assert "john.doe" not in redacted
    assert "6789" not in redacted
    assert "4111" not in redacted


@pytest.mark.parametrize("text", [
    "numbers 1234567890123456789 and 5551234 and 12345678901",
    "x123-45-67891 then 555 123 4567 8901 2345",
    "dates 20260115 and 2026-01-15 and ids 00012345",
    "+44 20 7946 0958, (212)555-0100, a.b+c@d.co",
    "4111 1111 1111 1111 1111 1111",
])
def test_output_never_matches_any_pattern(redactor, text):
    redacted = redactor.redact(text)
    assert not redactor.contains_pii(redacted)
    for _, pattern in redactor.patterns:
        assert pattern.search(redacted) is None
