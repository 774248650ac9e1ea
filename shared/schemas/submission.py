"""
Feature Request Intake - Submission Schemas

Inbound Typeform payload shapes and the per-stage field sets that flow
through the pipeline before classification.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FormFieldRef(BaseModel):
    """Field reference attached to each Typeform answer"""
    id: str
    ref: Optional[str] = None
    type: str

    class Config:
        frozen = True


class FormChoice(BaseModel):
    label: str

    class Config:
        frozen = True


class FormChoices(BaseModel):
    labels: list[str] = Field(default_factory=list)

    class Config:
        frozen = True


class FormAnswer(BaseModel):
    """Single answer record from a Typeform response"""
    type: str
    text: Optional[str] = None
    email: Optional[str] = None
    choice: Optional[FormChoice] = None
    choices: Optional[FormChoices] = None
    field: FormFieldRef

    class Config:
        frozen = True


class FormFieldDefinition(BaseModel):
    id: str
    ref: Optional[str] = None
    type: str
    title: str

    class Config:
        frozen = True


class FormDefinition(BaseModel):
    id: str
    title: str
    fields: list[FormFieldDefinition] = Field(default_factory=list)

    class Config:
        frozen = True


class FormResponse(BaseModel):
    form_id: str
    token: str
    landed_at: str
    submitted_at: str
    definition: FormDefinition
    answers: list[FormAnswer]

    class Config:
        frozen = True


class TypeformWebhook(BaseModel):
    """
    Typeform webhook payload.
    Received once per submission and never modified.
    """
    event_id: str
    event_type: str
    form_response: FormResponse

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "event_id": "01HXYZ",
                "event_type": "form_response",
                "form_response": {
                    "form_id": "abc123",
                    "token": "tok",
                    "landed_at": "2026-01-15T10:29:00Z",
                    "submitted_at": "2026-01-15T10:30:00Z",
                    "definition": {"id": "abc123", "title": "Feature Request", "fields": []},
                    "answers": [
                        {
                            "type": "text",
                            "text": "Need group booking for parties",
                            "field": {"id": "f1", "ref": "feature_description", "type": "long_text"},
                        }
                    ],
                },
            }
        }


class ExtractedFields(BaseModel):
    """Logical fields located in a raw submission"""
    feature_description: str = Field(..., min_length=1)
    usage_frequency: Optional[str] = None
    service_types: Optional[str] = None
    user_interests: Optional[str] = None
    contact_email: Optional[str] = None

    class Config:
        frozen = True


class SanitizedFields(BaseModel):
    """
    PII-free field set with generated identifiers.
    Contact email is replaced by the pseudonymous user_id.
    """
    feature_description: str
    usage_frequency: str = "Not specified"
    service_types: str = "General"
    user_interests: str = ""
    user_id: str = Field(..., pattern=r"^user_[0-9a-f]{8}$")
    timestamp: str
    request_id: str = Field(..., pattern=r"^req_\d{14}_[0-9a-f]{4}$")

    class Config:
        frozen = True
