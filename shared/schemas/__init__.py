"""FRI Shared Schemas"""

from .record import (
    FEATURE_REVIEW_NEEDED,
    ClassifiedRecord,
    FeatureDomain,
    PipelineResult,
    SheetRow,
)
from .submission import (
    ExtractedFields,
    FormAnswer,
    FormResponse,
    SanitizedFields,
    TypeformWebhook,
)
from .ticket import TicketPriority, TicketSpec

__all__ = [
    # Submission schemas
    "TypeformWebhook",
    "FormResponse",
    "FormAnswer",
    "ExtractedFields",
    "SanitizedFields",
    # Record schemas
    "FEATURE_REVIEW_NEEDED",
    "FeatureDomain",
    "ClassifiedRecord",
    "SheetRow",
    "PipelineResult",
    # Ticket schemas
    "TicketPriority",
    "TicketSpec",
]
