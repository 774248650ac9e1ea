"""
Permissive JSON extraction from generated text
"""

import json
import re
from typing import Any, Optional

import structlog

logger = structlog.get_logger()

_OBJECT_SPAN = re.compile(r'\{.*\}', re.DOTALL)


def parse_json_response(response: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Parse a JSON object from an LLM response.

    Tries the whole text first, then the outermost brace-delimited span
    (models like to wrap JSON in prose or markdown fences).

    Returns:
        Parsed object, or None when the response is unusable
    """
    if not isinstance(response, str) or not response.strip():
        return None

    text = response.strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = None
        match = _OBJECT_SPAN.search(text)
        if match:
            try:
                parsed = json.loads(match.group())
            except json.JSONDecodeError:
                pass

    if isinstance(parsed, dict):
        return parsed

    logger.warning("Failed to parse LLM response as JSON", response_chars=len(text))
    return None
