"""
Feature Request Intake - Record Schemas

Canonical classified record, its tabular projection and the pipeline result.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from .ticket import TicketSpec


FEATURE_REVIEW_NEEDED = "Feature Review Needed"


class FeatureDomain(str, Enum):
    """Primary product area of a feature request"""
    BOOKING_SITE = "Booking Site"
    PAYMENTS = "Payments"
    MARKETING = "Marketing"
    CLIENT_MANAGEMENT = "Client Management"
    ANALYTICS = "Analytics"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list[str]:
        return [d.value for d in cls]


class ClassifiedRecord(BaseModel):
    """
    Canonical normalized feature request.
    This is the unit projected to every downstream sink.
    """
    feature_name: str
    description: str
    domain: FeatureDomain = FeatureDomain.OTHER
    niche: list[str] = Field(default_factory=lambda: ["General"], min_length=1)
    keywords: list[str] = Field(default_factory=list)
    frequency: str
    user_id: str
    timestamp: str
    request_id: str

    @property
    def needs_review(self) -> bool:
        return self.feature_name == FEATURE_REVIEW_NEEDED

    class Config:
        frozen = True
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "feature_name": "Group Offering",
                "description": "Allow booking multiple clients into one slot for parties.",
                "domain": "Booking Site",
                "niche": ["Hair Salon", "Nail Technician"],
                "keywords": ["Group Booking", "Party", "Scheduling"],
                "frequency": "Once a week",
                "user_id": "user_1a2b3c4d",
                "timestamp": "2026-01-15T10:30:00.000Z",
                "request_id": "req_20260115103000_ab12",
            }
        }


class SheetRow(BaseModel):
    """Tracking-sheet row with list fields flattened to comma-separated strings"""
    request_id: str
    timestamp: str
    feature_name: str
    description: str
    domain: str
    niche: str = Field(..., description="Comma-separated service categories")
    keywords: str = Field(..., description="Comma-separated keywords")
    frequency: str
    user_id: str
    success: bool = True
    message: str = ""

    @classmethod
    def columns(cls) -> list[str]:
        """Sheet column order (status pair excluded)"""
        return [
            "request_id",
            "timestamp",
            "feature_name",
            "description",
            "domain",
            "niche",
            "keywords",
            "frequency",
            "user_id",
        ]

    class Config:
        frozen = True


class PipelineResult(BaseModel):
    """Outcome of a completed pipeline run"""
    record: ClassifiedRecord
    row: Optional[SheetRow] = None
    ticket: Optional[TicketSpec] = None
    fallback_used: bool = False
    deliveries: dict[str, bool] = Field(default_factory=dict)
    sink_errors: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def request_id(self) -> str:
        return self.record.request_id
