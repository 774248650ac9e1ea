"""
Feature Request Intake - Error Taxonomy

Fatal errors abort a pipeline run; recoverable ones are absorbed by the
orchestrator. Payloads never carry raw submission text.
"""

from typing import Any, Optional


class PipelineError(Exception):
    """Base class for all pipeline failures"""

    stage: str = "pipeline"
    kind: str = "internal"

    def __init__(self, reason: str, **context: Any):
        super().__init__(reason)
        self.reason = reason
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Machine-readable error payload for operators and API clients"""
        return {
            "stage": self.stage,
            "kind": self.kind,
            "reason": self.reason,
            **self.context,
        }


class ExtractionError(PipelineError):
    """Mandatory feature description could not be located"""

    stage = "extract"
    kind = "malformed_input"


class TextParserError(PipelineError):
    """Notification text parser unavailable or its output unusable (fatal)"""

    stage = "extract"


class ClassificationUnusable(PipelineError):
    """Classifier unreachable or its output could not be interpreted"""

    stage = "classify"


class ClassificationError(PipelineError):
    """Classification failure under strict mode (fatal)"""

    stage = "classify"


class SinkError(PipelineError):
    """Downstream sink rejected a row or ticket"""

    stage = "sink"

    def __init__(self, reason: str, sink: str = "unknown", **context: Any):
        super().__init__(reason, sink=sink, **context)
        self.sink = sink


class GenerationError(Exception):
    """Text-generation backend failed to produce a response"""

    def __init__(self, message: str, timed_out: bool = False, status_code: Optional[int] = None):
        super().__init__(message)
        self.timed_out = timed_out
        self.status_code = status_code
