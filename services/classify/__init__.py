"""
FRI Classify Service
Normalizes sanitized feature requests with an LLM and writes tickets

Components:
- generator.py: TextGenerator protocol and OllamaGenerator backend
- response_parser.py: permissive JSON extraction from generated text
- classifier.py: FeatureClassifier and the fallback record
- ticket_writer.py: TicketWriter (strict or permissive) and the fallback ticket
- prompts.py: prompt templates and response schemas
"""

from .classifier import FeatureClassifier, build_fallback_record, split_service_types
from .generator import OllamaGenerator, TextGenerator
from .response_parser import parse_json_response
from .ticket_writer import TicketWriter, build_fallback_ticket

__all__ = [
    "TextGenerator",
    "OllamaGenerator",
    "parse_json_response",
    "FeatureClassifier",
    "build_fallback_record",
    "split_service_types",
    "TicketWriter",
    "build_fallback_ticket",
]
