"""
FRI Extract Service
Maps raw Typeform submissions to logical submission fields

Components:
- extractor.py: FieldExtractor for structured payloads and notification text
- text_parser.py: LLMTextParser and AnchorTextParser for notification text
"""

from .extractor import FIELD_MAPPING, FieldExtractor, extract_fields
from .text_parser import AnchorTextParser, LLMTextParser

__all__ = [
    "FieldExtractor",
    "extract_fields",
    "FIELD_MAPPING",
    "AnchorTextParser",
    "LLMTextParser",
]
