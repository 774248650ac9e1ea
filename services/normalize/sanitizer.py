"""
Field Sanitizer
Converts ExtractedFields to PII-free SanitizedFields with generated identifiers
"""

from typing import Optional

import structlog

from shared.schemas.submission import ExtractedFields, SanitizedFields

from .identifiers import Clock, new_request_id, new_timestamp, new_user_id, utc_now
from .redactor import PIIRedactor

logger = structlog.get_logger()


class FieldSanitizer:
    """
    Sanitizes extracted fields.

    Features:
    - Redacts free-text fields (description, service types, interests)
    - Replaces the contact email with a pseudonymous user_id
    - Stamps the submission with a timestamp and request_id

    Usage frequency is a structured answer and is passed through untouched.
    """

    DEFAULT_FREQUENCY = "Not specified"
    DEFAULT_SERVICE_TYPES = "General"

    def __init__(self, redactor: Optional[PIIRedactor] = None, clock: Clock = utc_now):
        self.redactor = redactor or PIIRedactor()
        self.clock = clock

    def sanitize(self, fields: ExtractedFields) -> SanitizedFields:
        """
        Sanitize an extracted field set.

        Args:
            fields: Output of the field extractor

        Returns:
            SanitizedFields without any contact details
        """
        now = self.clock()

        description, stats = self.redactor.redact_with_stats(fields.feature_description)
        service_types = self.redactor.redact(fields.service_types or self.DEFAULT_SERVICE_TYPES)
        user_interests = self.redactor.redact(fields.user_interests or "")

        sanitized = SanitizedFields(
            feature_description=description,
            usage_frequency=fields.usage_frequency or self.DEFAULT_FREQUENCY,
            service_types=service_types,
            user_interests=user_interests,
            user_id=new_user_id(fields.contact_email),
            timestamp=new_timestamp(lambda: now),
            request_id=new_request_id(lambda: now),
        )

        logger.info(
            "Sanitized submission",
            request_id=sanitized.request_id,
            user_id=sanitized.user_id,
            redactions=stats,
            anonymous=not fields.contact_email,
        )
        return sanitized


# Default sanitizer instance
default_sanitizer = FieldSanitizer()


def sanitize_fields(fields: ExtractedFields) -> SanitizedFields:
    """Convenience function to sanitize an extracted field set"""
    return default_sanitizer.sanitize(fields)
