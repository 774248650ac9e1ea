import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path so tests can import `services.*` and `shared.*`
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from shared.errors import GenerationError, SinkError  # noqa: E402
from shared.schemas.submission import SanitizedFields  # noqa: E402


class FakeGenerator:
    """Returns scripted responses in order; exceptions in the script are raised"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []
        self.schemas = []

    def generate(self, prompt, schema=None):
        self.prompts.append(prompt)
        self.schemas.append(schema)
        if not self.responses:
            raise GenerationError("no scripted response")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class MemorySheetSink:
    name = "sheet"

    def __init__(self, fail=False):
        self.rows = []
        self.fail = fail

    def append(self, row):
        if self.fail:
            raise SinkError("sheet unavailable", sink=self.name)
        self.rows.append(row)


class MemoryTicketSink:
    name = "ticket"

    def __init__(self, fail=False):
        self.tickets = []
        self.fail = fail

    def create(self, ticket, record):
        if self.fail:
            raise SinkError("tracker unavailable", sink=self.name)
        self.tickets.append((ticket, record))


FIXED_NOW = datetime(2026, 1, 15, 10, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def sanitized_fields():
    return SanitizedFields(
        feature_description="Need group booking for parties",
        usage_frequency="Once a week",
        service_types="Hair, Nails",
        user_interests="Booking website",
        user_id="user_1a2b3c4d",
        timestamp="2026-01-15T10:30:00.123Z",
        request_id="req_20260115103000_ab12",
    )


def make_answer(ref, field_type="short_text", field_id=None, **value):
    answer = {
        "type": value.pop("answer_type", "text"),
        "field": {"id": field_id or f"id_{ref}", "ref": ref, "type": field_type},
    }
    answer.update(value)
    return answer


@pytest.fixture
def webhook_payload():
    return {
        "event_id": "01HXYZEVENT",
        "event_type": "form_response",
        "form_response": {
            "form_id": "frm123",
            "token": "tok123",
            "landed_at": "2026-01-15T10:29:00Z",
            "submitted_at": "2026-01-15T10:30:00Z",
            "definition": {"id": "frm123", "title": "Feature Request", "fields": []},
            "answers": [
                make_answer("feature_description", "long_text", text="Need group booking for parties"),
                make_answer("usage_frequency", "multiple_choice", answer_type="choice",
                            choice={"label": "Once a week"}),
                make_answer("service_types", "multiple_choice", answer_type="choices",
                            choices={"labels": ["Hair", "Nails"]}),
                make_answer("email", "email", answer_type="email", email="Jane.Doe@Example.com"),
            ],
        },
    }
