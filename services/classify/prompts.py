"""
Prompt templates and response schemas for the generation backends
"""

from shared.schemas.record import FeatureDomain


TYPEFORM_PARSE_PROMPT = """You extract fields from a Typeform feature request notification.

NOTIFICATION:
{text}

Return a JSON object with these keys:
{{
  "featureDescription": "full feature description, verbatim and untruncated",
  "usageFrequency": "answer to how often the feature was needed, or null",
  "serviceTypes": "comma-separated service types, or null",
  "userInterests": "comma-separated research areas, or null",
  "contactEmail": "email address, or null"
}}

Preserve the original wording exactly. featureDescription must never be empty.
Respond ONLY with valid JSON, no markdown or explanation."""


TYPEFORM_PARSE_SCHEMA = {
    "type": "object",
    "properties": {
        "featureDescription": {"type": "string"},
        "usageFrequency": {"type": ["string", "null"]},
        "serviceTypes": {"type": ["string", "null"]},
        "userInterests": {"type": ["string", "null"]},
        "contactEmail": {"type": ["string", "null"]},
    },
    "required": ["featureDescription"],
}


FEATURE_CLASSIFY_PROMPT = """You are a feature request analyst for beauty & wellness business software.
Normalize the sanitized request below for a tracking sheet.

FEATURE DESCRIPTION:
{description}

SERVICE TYPES: {service_types}
USER INTERESTS: {user_interests}

Rules:
- feature_name: short canonical name that groups similar requests
  (e.g. "Group Offering", "Automated Reminders", "Gift Card System").
  Use "Feature Review Needed" when the request is unclear.
- description: 1-2 sentence summary, no personal data.
- domain: exactly one of {domains}.
- niche: title-case service categories; ["General"] if none are given.
- keywords: 3-5 relevant terms.
- Copy these values exactly, do not invent them:
  frequency="{frequency}", user_id="{user_id}", timestamp="{timestamp}", request_id="{request_id}"

Generate a JSON response with:
{{
  "feature_name": "...",
  "description": "...",
  "domain": "...",
  "niche": ["..."],
  "keywords": ["..."],
  "frequency": "...",
  "user_id": "...",
  "timestamp": "...",
  "request_id": "..."
}}

Respond ONLY with valid JSON, no markdown or explanation."""


FEATURE_CLASSIFY_SCHEMA = {
    "type": "object",
    "properties": {
        "feature_name": {"type": "string"},
        "description": {"type": "string"},
        "domain": {"type": "string", "enum": FeatureDomain.values()},
        "niche": {"type": "array", "items": {"type": "string"}},
        "keywords": {"type": "array", "items": {"type": "string"}},
        "frequency": {"type": "string"},
        "user_id": {"type": "string"},
        "timestamp": {"type": "string"},
        "request_id": {"type": "string"},
    },
    "required": ["feature_name", "description", "domain", "niche", "keywords"],
}


TICKET_PROMPT = """You are a staff product manager. Turn the feature request below into a
developer-ready story that an engineer can implement without further context.

FEATURE DESCRIPTION:
{description}

USAGE FREQUENCY: {frequency}
SERVICE TYPES: {service_types}
USER INTERESTS: {user_interests}

Rules:
- summary: specific 8-14 word title, starting with a verb.
- description: problem statement, proposed solution, assumptions, open questions, risks.
- acceptanceCriteria: objective, testable checklist including edge cases.
- noteForQA: test scenarios, setup needs and regression areas.
- storyPoints: one of 1, 2, 3, 5, 8, 13.
- priority: "1" (highest) to "5" (lowest); default "3" when unclear.
- Never include personal data; keep redaction tags such as [EMAIL_REDACTED] as-is.

Generate a JSON response with exactly these keys:
{{
  "summary": "...",
  "description": "...",
  "acceptanceCriteria": "...",
  "noteForQA": "...",
  "storyPoints": 5,
  "priority": "3"
}}

Respond ONLY with valid JSON, no markdown or explanation."""


TICKET_SCHEMA = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "description": {"type": "string"},
        "acceptanceCriteria": {"type": "string"},
        "noteForQA": {"type": "string"},
        "storyPoints": {"type": "integer", "enum": [1, 2, 3, 5, 8, 13]},
        "priority": {"type": "string", "enum": ["1", "2", "3", "4", "5"]},
    },
    "required": ["summary", "description", "acceptanceCriteria", "noteForQA", "storyPoints", "priority"],
}
