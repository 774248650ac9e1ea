"""
Feature Classification Service
Uses an LLM to normalize sanitized feature requests into canonical records
"""

from typing import Any, Optional

import structlog

from services.normalize.redactor import PIIRedactor
from shared.errors import ClassificationUnusable, GenerationError
from shared.schemas.record import FEATURE_REVIEW_NEEDED, ClassifiedRecord, FeatureDomain
from shared.schemas.submission import SanitizedFields

from .generator import TextGenerator
from .prompts import FEATURE_CLASSIFY_PROMPT, FEATURE_CLASSIFY_SCHEMA
from .response_parser import parse_json_response

logger = structlog.get_logger()

DEFAULT_NICHE = "General"
FALLBACK_KEYWORDS = ["Review", "Unprocessed"]


def string_value(value: Any) -> Optional[str]:
    """Stripped string, or None for blanks and non-strings"""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def string_list(value: Any) -> Optional[list[str]]:
    """Blank-free list if value is a list of strings, else None"""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    return [v.strip() for v in value if v.strip()]


def split_service_types(service_types: str) -> list[str]:
    """Comma-split sanitized service types into niche categories"""
    niche = [part.strip() for part in service_types.split(",") if part.strip()]
    return niche or [DEFAULT_NICHE]


def build_fallback_record(fields: SanitizedFields) -> ClassifiedRecord:
    """
    Deterministic record used when classifier output is unusable.
    The sentinel feature name flags it for human follow-up.
    """
    return ClassifiedRecord(
        feature_name=FEATURE_REVIEW_NEEDED,
        description=fields.feature_description,
        domain=FeatureDomain.OTHER,
        niche=split_service_types(fields.service_types),
        keywords=list(FALLBACK_KEYWORDS),
        frequency=fields.usage_frequency,
        user_id=fields.user_id,
        timestamp=fields.timestamp,
        request_id=fields.request_id,
    )


class FeatureClassifier:
    """Classifies sanitized feature requests using a text generator"""

    def __init__(self, generator: TextGenerator, redactor: Optional[PIIRedactor] = None):
        self.generator = generator
        self.redactor = redactor or PIIRedactor()

    def classify(self, fields: SanitizedFields) -> ClassifiedRecord:
        """
        Classify a sanitized submission.

        Args:
            fields: Sanitized fields with pre-computed identifiers

        Returns:
            ClassifiedRecord with every field validated or defaulted

        Raises:
            ClassificationUnusable: generator failed or output was not JSON
        """
        prompt = FEATURE_CLASSIFY_PROMPT.format(
            description=fields.feature_description,
            service_types=fields.service_types,
            user_interests=fields.user_interests or "Not specified",
            domains=", ".join(f'"{d}"' for d in FeatureDomain.values()),
            frequency=fields.usage_frequency,
            user_id=fields.user_id,
            timestamp=fields.timestamp,
            request_id=fields.request_id,
        )

        try:
            response = self.generator.generate(prompt, schema=FEATURE_CLASSIFY_SCHEMA)
        except GenerationError as e:
            raise ClassificationUnusable(
                "classifier unavailable",
                request_id=fields.request_id,
                timed_out=e.timed_out,
            ) from e

        parsed = parse_json_response(response)
        if parsed is None:
            raise ClassificationUnusable(
                "classifier output is not a JSON object",
                request_id=fields.request_id,
            )

        record = self._build_record(parsed, fields)
        logger.info(
            "Classified feature request",
            request_id=record.request_id,
            feature_name=record.feature_name,
            domain=record.domain,
        )
        return record

    def _build_record(self, parsed: dict[str, Any], fields: SanitizedFields) -> ClassifiedRecord:
        """Validate and default each parsed field independently"""
        feature_name = string_value(parsed.get("feature_name"))
        description = string_value(parsed.get("description"))

        domain = parsed.get("domain")
        if domain not in FeatureDomain.values():
            if domain is not None:
                logger.debug("Discarding out-of-enum domain", request_id=fields.request_id)
            domain = FeatureDomain.OTHER

        niche = string_list(parsed.get("niche")) or [DEFAULT_NICHE]
        keywords = string_list(parsed.get("keywords")) or []

        # Identifiers always come from the sanitized input, never the echo.
        return ClassifiedRecord(
            feature_name=self.redactor.redact(feature_name) if feature_name else FEATURE_REVIEW_NEEDED,
            description=self.redactor.redact(description) if description else fields.feature_description,
            domain=domain,
            niche=[self.redactor.redact(n) for n in niche],
            keywords=[self.redactor.redact(k) for k in keywords],
            frequency=fields.usage_frequency,
            user_id=fields.user_id,
            timestamp=fields.timestamp,
            request_id=fields.request_id,
        )
