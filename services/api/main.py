"""
FRI API Service - FastAPI webhook receiver for Typeform feature requests
"""

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from services.pipeline.config import InputShape, PipelineConfig
from services.pipeline.orchestrator import FeatureRequestPipeline, build_pipeline
from shared.errors import ExtractionError, PipelineError
from shared.schemas.submission import TypeformWebhook

logger = structlog.get_logger()

SERVICE_NAME = "feature-request-manager"
FORM_RESPONSE_EVENT = "form_response"

app = FastAPI(
    title="FRI API",
    description="Feature Request Intake - Typeform webhook, PII sanitization and classification",
    version="0.1.0",
)

# CORS for form tooling
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Typeform-Signature"],
)


# Pipelines (lazy init)
_pipeline: Optional[FeatureRequestPipeline] = None
_text_pipeline: Optional[FeatureRequestPipeline] = None


def get_pipeline() -> FeatureRequestPipeline:
    """Pipeline for structured webhook payloads."""
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline(PipelineConfig.from_env(input_shape=InputShape.STRUCTURED))
    return _pipeline


def get_text_pipeline() -> FeatureRequestPipeline:
    """Pipeline for raw notification text."""
    global _text_pipeline
    if _text_pipeline is None:
        _text_pipeline = build_pipeline(PipelineConfig.from_env(input_shape=InputShape.FREE_TEXT))
    return _text_pipeline


class TextSubmission(BaseModel):
    text: str


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str


def _failure(status_code: int, error: str, details: Optional[dict] = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _run(pipeline: FeatureRequestPipeline, raw: Any):
    """Run the pipeline and map outcomes to HTTP responses."""
    try:
        result = pipeline.run(raw)
    except ExtractionError as e:
        logger.warning("Rejected submission", **e.to_dict())
        return _failure(400, "Missing feature description", e.to_dict())
    except PipelineError as e:
        logger.error("Pipeline failed", **e.to_dict())
        return _failure(500, "Workflow execution failed", e.to_dict())
    except Exception as e:
        # Exception text may echo submission content, so only the type is reported.
        logger.exception("Unexpected pipeline error", error_type=type(e).__name__)
        return _failure(500, "Internal server error", {"error_type": type(e).__name__})

    return {
        "success": True,
        "message": "Feature request processed",
        "data": result.model_dump(mode="json", by_alias=True),
    }


@app.post("/typeform-webhook")
def typeform_webhook(body: dict[str, Any], pipeline: FeatureRequestPipeline = Depends(get_pipeline)):
    """
    Receive a Typeform webhook event and process the feature request.
    Only form_response events are processed; others are acknowledged.
    """
    logger.info("Typeform webhook received", event_id=body.get("event_id"), event_type=body.get("event_type"))

    if body.get("event_type") != FORM_RESPONSE_EVENT:
        return {"success": True, "message": "Event type ignored"}

    try:
        payload = TypeformWebhook.model_validate(body)
    except ValidationError as e:
        logger.warning("Invalid webhook payload", error_count=e.error_count())
        return _failure(400, "Invalid webhook payload")

    return _run(pipeline, payload)


@app.post("/typeform-webhook/text")
def typeform_notification(submission: TextSubmission,
                          pipeline: FeatureRequestPipeline = Depends(get_text_pipeline)):
    """Process a raw Typeform notification email body."""
    return _run(pipeline, submission.text)


@app.get("/typeform-webhook/health", response_model=HealthResponse)
def health_check():
    """Liveness check with static service identity."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
