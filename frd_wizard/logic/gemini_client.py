"""Gemini `generateContent` REST client."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from frd_wizard.config import GeminiConfig

logger = logging.getLogger(__name__)


class GeminiError(RuntimeError):
    pass


class GeminiClient:
    def __init__(self, config: GeminiConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.config = config
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url}/models/{self.config.model}:generateContent"

    def _payload(self, prompt: str) -> Dict[str, Any]:
        params = self.config.params
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": params.temperature,
                "topK": params.top_k,
                "topP": params.top_p,
                "maxOutputTokens": params.max_output_tokens,
            },
        }

    def generate_text(self, prompt: str) -> str:
        """Return the first candidate's text.

        Raises:
            GeminiError: missing API key, transport failure, non-2xx status,
                or a response without candidate text.
        """
        if not self.config.api_key:
            raise GeminiError("Gemini API key not configured")

        try:
            with httpx.Client(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = client.post(
                    self.endpoint,
                    params={"key": self.config.api_key},
                    json=self._payload(prompt),
                )
        except httpx.HTTPError as exc:
            logger.warning("gemini_transport_error model=%s error=%s", self.config.model, exc.__class__.__name__)
            raise GeminiError(f"Gemini request failed: {exc.__class__.__name__}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            logger.warning("gemini_http_error model=%s status=%s", self.config.model, response.status_code)
            raise GeminiError(f"Gemini API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise GeminiError("Gemini returned a non-JSON response") from exc

        text = extract_candidate_text(data)
        if not text:
            raise GeminiError("Failed to generate FRD content")
        logger.info("gemini_generated model=%s chars=%s", self.config.model, len(text))
        return text


def extract_candidate_text(data: Any) -> Optional[str]:
    """Return `candidates[0].content.parts[0].text`, or None if any hop is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


__all__ = ["GeminiClient", "GeminiError", "extract_candidate_text"]
