import json

import pytest

from services.classify.ticket_writer import TicketWriter, build_fallback_ticket
from shared.errors import ClassificationError, ClassificationUnusable, GenerationError

from conftest import FakeGenerator


def ticket_response(**overrides):
    data = {
        "summary": "Add group booking for party appointments on Booking Site",
        "description": "Problem: parties need several slots at once.",
        "acceptanceCriteria": "- Given a party booking, When confirmed, Then all slots are reserved",
        "noteForQA": "Test overlapping bookings.",
        "storyPoints": 8,
        "priority": "2",
    }
    data.update(overrides)
    return json.dumps(data)


def test_strict_valid_ticket(sanitized_fields):
    ticket = TicketWriter(FakeGenerator(ticket_response()), strict=True).write(sanitized_fields)

    assert ticket.summary.startswith("Add group booking")
    assert ticket.story_points == 8
    assert ticket.priority == "2"
    assert ticket.model_dump(by_alias=True)["acceptanceCriteria"].startswith("- Given")


@pytest.mark.parametrize("overrides", [
    {"storyPoints": 4},
    {"priority": "9"},
    {"summary": ""},
    {"noteForQA": None},
])
def test_strict_schema_failure_is_fatal(sanitized_fields, overrides):
    writer = TicketWriter(FakeGenerator(ticket_response(**overrides)), strict=True)
    with pytest.raises(ClassificationError) as exc:
        writer.write(sanitized_fields)
    assert exc.value.to_dict()["invalid_fields"]


def test_strict_missing_key_is_fatal(sanitized_fields):
    data = json.loads(ticket_response())
    del data["noteForQA"]
    with pytest.raises(ClassificationError):
        TicketWriter(FakeGenerator(json.dumps(data)), strict=True).write(sanitized_fields)


def test_strict_unparsable_and_timeout_are_fatal(sanitized_fields):
    with pytest.raises(ClassificationError):
        TicketWriter(FakeGenerator("nope"), strict=True).write(sanitized_fields)
    with pytest.raises(ClassificationError):
        TicketWriter(FakeGenerator(GenerationError("slow", timed_out=True)), strict=True).write(sanitized_fields)


def test_permissive_defaults(sanitized_fields):
    writer = TicketWriter(FakeGenerator('{"storyPoints": 4, "priority": 2}'), strict=False)
    ticket = writer.write(sanitized_fields)

    assert ticket.summary == "[Feature] - Need group booking for parties"
    assert ticket.description == ""
    assert ticket.story_points == 5
    assert ticket.priority == "2"


def test_permissive_unusable(sanitized_fields):
    with pytest.raises(ClassificationUnusable):
        TicketWriter(FakeGenerator("nope"), strict=False).write(sanitized_fields)


def test_ticket_text_is_redacted(sanitized_fields):
    response = ticket_response(noteForQA="Ask 555-123-4567 for test data")
    ticket = TicketWriter(FakeGenerator(response)).write(sanitized_fields)
    assert ticket.note_for_qa == "Ask [PHONE_REDACTED] for test data"


def test_fallback_ticket(sanitized_fields):
    ticket = build_fallback_ticket(sanitized_fields)
    assert ticket.summary == "[Feature] - Need group booking for parties"
    assert ticket.priority == "3"
    assert ticket.story_points == 5
