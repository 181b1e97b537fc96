"""Generation collaborator adapters used by the orchestrator.

`LocalGenerationClient` calls the generation service in-process.
`HttpGenerationClient` calls the `/functions/generate-frd` endpoint of a
(possibly remote) deployment. Transport errors, non-2xx responses and
`success: false` payloads all produce the same failure result.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from frd_wizard.logic.collaborators import GenerationResult
from frd_wizard.logic.generation_service import GenerationService

logger = logging.getLogger(__name__)

GENERATE_FRD_PATH = "/functions/generate-frd"


class LocalGenerationClient:
    def __init__(self, service: GenerationService) -> None:
        self.service = service

    def generate_document(self, record_id: str) -> GenerationResult:
        return self.service.generate_document(record_id)


class HttpGenerationClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 120.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def generate_document(self, record_id: str) -> GenerationResult:
        url = f"{self.base_url}{GENERATE_FRD_PATH}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(url, json={"conversationId": record_id})
        except httpx.HTTPError as exc:
            logger.warning("generate_frd_transport_error url=%s error=%s", url, exc.__class__.__name__)
            return GenerationResult.failure(f"Generation request failed: {exc.__class__.__name__}")

        try:
            body = response.json()
        except ValueError:
            body = None

        error = body.get("error") if isinstance(body, dict) else None
        if not response.is_success:
            logger.warning("generate_frd_http_error url=%s status=%s", url, response.status_code)
            return GenerationResult.failure(error or f"Generation service returned {response.status_code}")
        if not isinstance(body, dict) or body.get("success") is not True:
            return GenerationResult.failure(error or "Failed to generate FRD")

        document = body.get("frd")
        if not isinstance(document, str) or not document.strip():
            return GenerationResult.failure("Generation service returned an empty document")
        return GenerationResult.ok(document)


__all__ = ["LocalGenerationClient", "HttpGenerationClient", "GENERATE_FRD_PATH"]
