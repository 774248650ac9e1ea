"""
Ticket Writer Service
Generates developer-ready story specifications from sanitized feature requests
"""

from typing import Any, Optional

import structlog
from pydantic import ValidationError

from services.normalize.redactor import PIIRedactor
from shared.errors import ClassificationError, ClassificationUnusable, GenerationError
from shared.schemas.submission import SanitizedFields
from shared.schemas.ticket import (
    DEFAULT_STORY_POINTS,
    STORY_POINT_SCALE,
    TicketPriority,
    TicketSpec,
)

from .classifier import string_value
from .generator import TextGenerator
from .prompts import TICKET_PROMPT, TICKET_SCHEMA
from .response_parser import parse_json_response

logger = structlog.get_logger()

SUMMARY_PREFIX = "[Feature] - "
SUMMARY_DESCRIPTION_CHARS = 80


def default_summary(fields: SanitizedFields) -> str:
    return f"{SUMMARY_PREFIX}{fields.feature_description[:SUMMARY_DESCRIPTION_CHARS]}"


def build_fallback_ticket(fields: SanitizedFields) -> TicketSpec:
    """Placeholder story used when ticket generation output is unusable"""
    return TicketSpec(
        summary=default_summary(fields),
        description=fields.feature_description,
        acceptance_criteria="",
        note_for_qa="",
        story_points=DEFAULT_STORY_POINTS,
        priority=TicketPriority.MEDIUM,
    )


class TicketWriter:
    """
    Generates a TicketSpec with an LLM.

    In strict mode the parsed document must validate against TicketSpec as a
    whole and any failure is fatal. Otherwise each field is defaulted on its
    own and unusable output is reported as recoverable.
    """

    def __init__(
        self,
        generator: TextGenerator,
        strict: bool = True,
        redactor: Optional[PIIRedactor] = None,
    ):
        self.generator = generator
        self.strict = strict
        self.redactor = redactor or PIIRedactor()

    def write(self, fields: SanitizedFields) -> TicketSpec:
        """
        Generate a ticket for a sanitized submission.

        Raises:
            ClassificationError: strict mode, any failure
            ClassificationUnusable: permissive mode, generator failure or
                unparsable output
        """
        prompt = TICKET_PROMPT.format(
            description=fields.feature_description,
            frequency=fields.usage_frequency,
            service_types=fields.service_types,
            user_interests=fields.user_interests or "Not specified",
        )

        try:
            response = self.generator.generate(prompt, schema=TICKET_SCHEMA)
        except GenerationError as e:
            self._fail("ticket generator unavailable", fields, e, timed_out=e.timed_out)

        parsed = parse_json_response(response)
        if parsed is None:
            self._fail("ticket output is not a JSON object", fields)

        if self.strict:
            ticket = self._validate(parsed, fields)
        else:
            ticket = self._build_ticket(parsed, fields)

        logger.info(
            "Generated ticket",
            request_id=fields.request_id,
            priority=ticket.priority,
            story_points=ticket.story_points,
        )
        return ticket

    def _fail(self, reason: str, fields: SanitizedFields, cause: Optional[Exception] = None, **context):
        error_cls = ClassificationError if self.strict else ClassificationUnusable
        raise error_cls(reason, request_id=fields.request_id, **context) from cause

    def _validate(self, parsed: dict[str, Any], fields: SanitizedFields) -> TicketSpec:
        """Full schema validation; the document is accepted whole or not at all"""
        try:
            ticket = TicketSpec.model_validate(parsed)
        except ValidationError as e:
            # Only field locations, never the offending values.
            invalid = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise ClassificationError(
                "ticket output failed schema validation",
                request_id=fields.request_id,
                invalid_fields=invalid,
            ) from e
        return self._redacted(ticket)

    def _build_ticket(self, parsed: dict[str, Any], fields: SanitizedFields) -> TicketSpec:
        """Per-field defaulting for the permissive variant"""
        story_points = parsed.get("storyPoints")
        if isinstance(story_points, bool) or story_points not in STORY_POINT_SCALE:
            story_points = DEFAULT_STORY_POINTS

        priority = str(parsed.get("priority", ""))
        if priority not in {p.value for p in TicketPriority}:
            priority = TicketPriority.MEDIUM.value

        ticket = TicketSpec(
            summary=string_value(parsed.get("summary")) or default_summary(fields),
            description=string_value(parsed.get("description")) or "",
            acceptance_criteria=string_value(parsed.get("acceptanceCriteria")) or "",
            note_for_qa=string_value(parsed.get("noteForQA")) or "",
            story_points=story_points,
            priority=priority,
        )
        return self._redacted(ticket)

    def _redacted(self, ticket: TicketSpec) -> TicketSpec:
        return ticket.model_copy(update={
            "summary": self.redactor.redact(ticket.summary),
            "description": self.redactor.redact(ticket.description),
            "acceptance_criteria": self.redactor.redact(ticket.acceptance_criteria),
            "note_for_qa": self.redactor.redact(ticket.note_for_qa),
        })
