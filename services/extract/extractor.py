"""
Field Extractor
Maps raw Typeform submissions to the logical ExtractedFields set
"""

from typing import Any, Iterable, Optional, Union

import structlog
from pydantic import ValidationError

from shared.errors import ExtractionError
from shared.schemas.submission import (
    ExtractedFields,
    FormAnswer,
    FormResponse,
    TypeformWebhook,
)

from .text_parser import TextParser

logger = structlog.get_logger()

RawSubmission = Union[str, TypeformWebhook, FormResponse, dict, list]


# Accepted field refs/ids per logical field, in priority order
FIELD_MAPPING: dict[str, list[str]] = {
    "feature_description": ["feature_description", "feature_request", "description", "what_feature"],
    "usage_frequency": ["usage_frequency", "frequency", "how_often"],
    "service_types": ["service_types", "services", "what_services"],
    "user_interests": ["interests", "areas", "user_interests"],
    "contact_email": ["email", "contact_email", "contact"],
}


def answer_value(answer: FormAnswer) -> str:
    """Answer text by precedence: text, email, choice label, choice labels"""
    if answer.text:
        return answer.text
    if answer.email:
        return answer.email
    if answer.choice and answer.choice.label:
        return answer.choice.label
    if answer.choices and answer.choices.labels:
        return ", ".join(answer.choices.labels)
    return ""


def find_answer(answers: list[FormAnswer], field_refs: Iterable[str]) -> Optional[str]:
    """First answer whose field ref or id matches, scanning refs in priority order"""
    for ref in field_refs:
        for answer in answers:
            if answer.field.ref == ref or answer.field.id == ref:
                return answer_value(answer)
    return None


class FieldExtractor:
    """
    Extracts logical fields from a raw submission.

    Structured payloads are resolved deterministically through the field
    mapping; notification text is delegated to a TextParser.
    """

    def __init__(
        self,
        field_mapping: Optional[dict[str, list[str]]] = None,
        text_parser: Optional[TextParser] = None,
    ):
        self.field_mapping = field_mapping or FIELD_MAPPING
        self.text_parser = text_parser

    def extract(self, raw: RawSubmission) -> ExtractedFields:
        """
        Extract fields from either shape of raw submission.

        Raises:
            ExtractionError: feature description missing or input malformed
        """
        if isinstance(raw, str):
            return self.extract_text(raw)
        return self.extract_structured(self._answers(raw))

    def extract_structured(self, answers: list[FormAnswer]) -> ExtractedFields:
        values = {
            field: find_answer(answers, refs) or None
            for field, refs in self.field_mapping.items()
        }
        return self._build(values, source="structured", answer_count=len(answers))

    def extract_text(self, text: str) -> ExtractedFields:
        if not text or not text.strip():
            raise ExtractionError("notification text is empty", source="free_text")
        if self.text_parser is None:
            raise ExtractionError("no text parser configured", source="free_text")

        values = self.text_parser.parse(text)
        return self._build(values, source="free_text", text_chars=len(text))

    def _answers(self, raw: Any) -> list[FormAnswer]:
        """Normalize the accepted structured shapes to a list of answers"""
        try:
            if isinstance(raw, TypeformWebhook):
                return list(raw.form_response.answers)
            if isinstance(raw, FormResponse):
                return list(raw.answers)
            if isinstance(raw, dict):
                if "form_response" in raw:
                    return list(TypeformWebhook.model_validate(raw).form_response.answers)
                return [FormAnswer.model_validate(a) for a in raw.get("answers", [])]
            if isinstance(raw, list):
                return [a if isinstance(a, FormAnswer) else FormAnswer.model_validate(a) for a in raw]
        except ValidationError as e:
            raise ExtractionError(
                "structured payload does not match the form response shape",
                source="structured",
                error_count=e.error_count(),
            ) from e
        raise ExtractionError(
            f"unsupported submission type {type(raw).__name__}",
            source="structured",
        )

    def _build(self, values: dict[str, Optional[str]], source: str, **context: Any) -> ExtractedFields:
        description = values.get("feature_description")
        if not description or not description.strip():
            logger.warning("Missing feature description", source=source, **context)
            raise ExtractionError("missing feature description", source=source)

        fields = ExtractedFields(
            feature_description=description,
            usage_frequency=values.get("usage_frequency"),
            service_types=values.get("service_types"),
            user_interests=values.get("user_interests"),
            contact_email=values.get("contact_email"),
        )
        logger.info(
            "Extracted submission fields",
            source=source,
            description_chars=len(description),
            found=[k for k, v in values.items() if v],
            **context,
        )
        return fields


# Default extractor instance (structured payloads only)
default_extractor = FieldExtractor()


def extract_fields(raw: RawSubmission) -> ExtractedFields:
    """Convenience function to extract fields from a structured submission"""
    return default_extractor.extract(raw)
