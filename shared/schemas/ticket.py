"""
Feature Request Intake - Ticket Schemas

Developer-ready issue-tracker story generated from a feature request
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


STORY_POINT_SCALE = (1, 2, 3, 5, 8, 13)
DEFAULT_STORY_POINTS = 5


class TicketPriority(str, Enum):
    """Story priority, 1 is highest"""
    HIGHEST = "1"
    HIGH = "2"
    MEDIUM = "3"
    LOW = "4"
    LOWEST = "5"


class TicketSpec(BaseModel):
    """
    Jira-style story specification.
    Terminal projection: never re-enters the pipeline.
    """
    summary: str = Field(..., min_length=1)
    description: str
    acceptance_criteria: str = Field(..., alias="acceptanceCriteria")
    note_for_qa: str = Field(..., alias="noteForQA")
    story_points: int = Field(..., alias="storyPoints")
    priority: TicketPriority

    @field_validator("story_points")
    @classmethod
    def _fibonacci_points(cls, value: int) -> int:
        if value not in STORY_POINT_SCALE:
            raise ValueError(f"story points must be one of {STORY_POINT_SCALE}")
        return value

    class Config:
        frozen = True
        populate_by_name = True
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "summary": "Add group booking for party appointments on Booking Site",
                "description": "Problem statement...\n\nProposed solution...",
                "acceptanceCriteria": "- Given a party booking...",
                "noteForQA": "Test scenarios...",
                "storyPoints": 5,
                "priority": "3",
            }
        }
