"""
Pipeline configuration
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class InputShape(str, Enum):
    STRUCTURED = "structured"
    FREE_TEXT = "free_text"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Selects the pipeline variant.

    strict_classification: unusable classifier output is fatal instead of
        falling back to a placeholder record/ticket
    input_shape: expected raw submission shape
    emit_row / emit_ticket: which projections to produce and deliver
    """
    strict_classification: bool = False
    input_shape: InputShape = InputShape.STRUCTURED
    emit_row: bool = True
    emit_ticket: bool = False

    @classmethod
    def from_env(cls, input_shape: Optional[InputShape] = None) -> "PipelineConfig":
        return cls(
            strict_classification=_env_flag("FRI_STRICT_CLASSIFICATION", False),
            input_shape=input_shape or InputShape(os.getenv("FRI_INPUT_SHAPE", InputShape.STRUCTURED.value)),
            emit_row=_env_flag("FRI_EMIT_ROW", True),
            emit_ticket=_env_flag("FRI_EMIT_TICKET", False),
        )


# Adapter settings
TEXT_PARSER = os.getenv("FRI_TEXT_PARSER", "llm")
SHEET_PATH = os.getenv("FRI_SHEET_PATH")
TICKET_PATH = os.getenv("FRI_TICKET_PATH")
