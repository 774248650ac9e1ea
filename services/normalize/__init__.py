"""
FRI Normalize Service
Strips PII from extracted fields and stamps request identifiers

Components:
- redactor.py: PIIRedactor for removing PII from text
- identifiers.py: pseudonymous user ids, request ids, timestamps
- sanitizer.py: FieldSanitizer for ExtractedFields -> SanitizedFields
"""

from .identifiers import hash_pseudonym, new_request_id, new_timestamp, new_user_id
from .redactor import PIIRedactor, redact_pii
from .sanitizer import FieldSanitizer, sanitize_fields

__all__ = [
    "FieldSanitizer",
    "sanitize_fields",
    "PIIRedactor",
    "redact_pii",
    "hash_pseudonym",
    "new_request_id",
    "new_timestamp",
    "new_user_id",
]
