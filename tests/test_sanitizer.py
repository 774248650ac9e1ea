from services.normalize.identifiers import hash_pseudonym
from services.normalize.sanitizer import FieldSanitizer
from shared.schemas.submission import ExtractedFields


def test_sanitize_end_to_end_fields(fixed_clock):
    fields = ExtractedFields(
        feature_description="Need group booking for parties",
        usage_frequency="Once a week",
        service_types="Hair, Nails",
        contact_email="Jane.Doe@Example.com",
    )

    sanitized = FieldSanitizer(clock=fixed_clock).sanitize(fields)

    assert sanitized.user_id == "user_" + hash_pseudonym("jane.doe@example.com")
    assert sanitized.user_id == "user_0cba00ca"
    assert sanitized.service_types == "Hair, Nails"
    assert sanitized.usage_frequency == "Once a week"
    assert sanitized.timestamp == "2026-01-15T10:30:00.123Z"
    assert sanitized.request_id.startswith("req_20260115103000_")
    assert not hasattr(sanitized, "contact_email")


def test_free_text_fields_redacted():
    fields = ExtractedFields(
        feature_description="Call me at 555-123-4567 or email john@co.com",
        service_types="Hair (text 555-987-6543)",
        user_interests="ping me: jane@salon.io",
    )

    sanitized = FieldSanitizer().sanitize(fields)

    assert sanitized.feature_description == "Call me at [PHONE_REDACTED] or email [EMAIL_REDACTED]"
    assert sanitized.service_types == "Hair (text [PHONE_REDACTED])"
    assert sanitized.user_interests == "ping me: [EMAIL_REDACTED]"


def test_frequency_is_not_redacted():
    fields = ExtractedFields(feature_description="x", usage_frequency="5551234567 times")
    assert FieldSanitizer().sanitize(fields).usage_frequency == "5551234567 times"


def test_defaults_for_missing_optional_fields():
    sanitized = FieldSanitizer().sanitize(ExtractedFields(feature_description="Gift cards"))

    assert sanitized.usage_frequency == "Not specified"
    assert sanitized.service_types == "General"
    assert sanitized.user_interests == ""
    assert sanitized.user_id.startswith("user_")
