"""
Text Generation Backends
Black-box generative capability used for parsing, classification and tickets
"""

import os
from typing import Any, Optional, Protocol

import httpx
import structlog

from shared.errors import GenerationError

logger = structlog.get_logger()

# Environment-based defaults
DEFAULT_OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434")
DEFAULT_CLASSIFIER_MODEL = os.getenv("CLASSIFIER_MODEL", "llama3.2:3b")
DEFAULT_TIMEOUT = float(os.getenv("CLASSIFIER_TIMEOUT", "120"))


class TextGenerator(Protocol):
    """Anything that turns a prompt into text"""

    def generate(self, prompt: str, schema: Optional[dict[str, Any]] = None) -> str:
        ...


class OllamaGenerator:
    """Generates completions through the Ollama HTTP API"""

    def __init__(
        self,
        ollama_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_CLASSIFIER_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        temperature: float = 0.3,
        client: Optional[httpx.Client] = None,
    ):
        self.ollama_url = ollama_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self._client = client or httpx.Client(timeout=timeout)

    def generate(self, prompt: str, schema: Optional[dict[str, Any]] = None) -> str:
        """
        Call Ollama API for completion.

        Args:
            prompt: Full prompt text
            schema: Optional JSON schema the response must follow

        Returns:
            Raw response text

        Raises:
            GenerationError: on timeout, transport or HTTP status failure, or a
                reply without a text "response" field
        """
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": self.temperature},
        }
        if schema is not None:
            payload["format"] = schema

        try:
            response = self._client.post(
                f"{self.ollama_url}/api/generate",
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Generation timed out", model=self.model, timeout=self.timeout)
            raise GenerationError(f"generation timed out after {self.timeout}s", timed_out=True) from e
        except httpx.HTTPStatusError as e:
            logger.warning("Generation failed", model=self.model, status=e.response.status_code)
            raise GenerationError(
                f"generation returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Generation failed", model=self.model, error=str(e))
            raise GenerationError(f"generation request failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise GenerationError("generation response was not JSON") from e

        if not isinstance(result, dict) or not isinstance(result.get("response"), str):
            logger.warning("Unexpected generation response shape", model=self.model)
            raise GenerationError("generation response has no text response field")
        return result["response"]

    def close(self):
        self._client.close()
