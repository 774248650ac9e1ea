"""
FRI Pipeline Service
Sequences extraction, sanitization, classification and projection

Components:
- orchestrator.py: FeatureRequestPipeline and build_pipeline wiring
- config.py: PipelineConfig variant selection and environment settings
- projector.py: ClassifiedRecord -> SheetRow projection
- sinks.py: logging and JSONL sheet/ticket sinks
- run_pipeline.py: command-line runner
"""

from .config import InputShape, PipelineConfig
from .orchestrator import FeatureRequestPipeline, build_pipeline
from .projector import project_row, row_values, split_list_field

__all__ = [
    "InputShape",
    "PipelineConfig",
    "FeatureRequestPipeline",
    "build_pipeline",
    "project_row",
    "row_values",
    "split_list_field",
]
