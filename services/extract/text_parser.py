"""
Notification Text Parsers
Segment Typeform notification prose into the logical submission fields
"""

import re
from typing import Any, Optional, Protocol

import structlog

from services.classify.generator import TextGenerator
from services.classify.prompts import TYPEFORM_PARSE_PROMPT, TYPEFORM_PARSE_SCHEMA
from services.classify.response_parser import parse_json_response
from shared.errors import GenerationError, TextParserError

logger = structlog.get_logger()


# Keys used by both parsers, matching the generator output schema
PARSED_KEYS = {
    "featureDescription": "feature_description",
    "usageFrequency": "usage_frequency",
    "serviceTypes": "service_types",
    "userInterests": "user_interests",
    "contactEmail": "contact_email",
}


class TextParser(Protocol):
    def parse(self, text: str) -> dict[str, Optional[str]]:
        """Return logical field name -> value (None when absent)"""
        ...


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == "null":
        return None
    return value


class LLMTextParser:
    """Parses notification text with a text generator"""

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    def parse(self, text: str) -> dict[str, Optional[str]]:
        prompt = TYPEFORM_PARSE_PROMPT.format(text=text)
        try:
            response = self.generator.generate(prompt, schema=TYPEFORM_PARSE_SCHEMA)
        except GenerationError as e:
            raise TextParserError("notification parser unavailable", timed_out=e.timed_out) from e

        parsed = parse_json_response(response)
        if parsed is None:
            raise TextParserError("notification parser output is not a JSON object")

        return {field: _clean(parsed.get(key)) for key, field in PARSED_KEYS.items()}


class AnchorTextParser:
    """
    Deterministic parser keyed on the question text of the Typeform
    notification email. A value runs from the end of its anchor to the
    start of the next anchor found in the text.
    """

    DEFAULT_ANCHORS: dict[str, list[str]] = {
        "feature_description": [
            r"Please describe the feature you(?:'|’)re requesting\.?(?:\s*Note anything you like!?)?",
        ],
        "usage_frequency": [
            r"Over the last week, how often have you needed to use this feature\??",
        ],
        "service_types": [
            r"What type of services do you provide\??",
        ],
        "user_interests": [
            r"Please select the feature areas you(?:'|’)re interested in shaping and influencing\.?",
        ],
        "contact_email": [
            r"GlossGenius Email:?",
            r"\bEmail(?: address)?:",
        ],
    }

    EMAIL_PATTERN = re.compile(r'[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}')

    def __init__(self, anchors: Optional[dict[str, list[str]]] = None):
        anchors = anchors or self.DEFAULT_ANCHORS
        self._anchors = {
            field: [re.compile(p, re.IGNORECASE) for p in patterns]
            for field, patterns in anchors.items()
        }

    def parse(self, text: str) -> dict[str, Optional[str]]:
        # field -> (anchor start, value start)
        positions: dict[str, tuple[int, int]] = {}
        for field, patterns in self._anchors.items():
            for pattern in patterns:
                match = pattern.search(text)
                if match:
                    positions[field] = (match.start(), match.end())
                    break

        ordered = sorted(positions.items(), key=lambda item: item[1][0])
        result: dict[str, Optional[str]] = {field: None for field in PARSED_KEYS.values()}
        for i, (field, (_, value_start)) in enumerate(ordered):
            value_end = ordered[i + 1][1][0] if i + 1 < len(ordered) else len(text)
            result[field] = _clean(text[value_start:value_end])

        email = result.get("contact_email")
        if email:
            match = self.EMAIL_PATTERN.search(email)
            result["contact_email"] = match.group() if match else None

        logger.debug("Anchor parse", found=[field for field, _ in ordered])
        return result
