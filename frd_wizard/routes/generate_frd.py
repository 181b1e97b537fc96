"""FRD generation function endpoint.

Mirrors the serverless function contract consumed by `HttpGenerationClient`:
`{"conversationId": ...}` in, `{"success": true, "frd": ...}` out, or a 500
with `{"success": false, "error": ...}`. Malformed bodies get the same 500
failure shape rather than a problem+json response.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from frd_wizard.logic.generation_service import GenerationService
from frd_wizard.models.answer_upsert import GenerateFrdRequest
from frd_wizard.models.response_types import GenerateFrdResponse


router = APIRouter()
logger = logging.getLogger(__name__)


def _failure(error: str) -> JSONResponse:
    return JSONResponse(GenerateFrdResponse(success=False, error=error).body(), status_code=500)


@router.post("/functions/generate-frd", summary="Generate an FRD for a stored record")
async def generate_frd(request: Request):
    try:
        payload = GenerateFrdRequest.model_validate(json.loads(await request.body() or b"{}"))
    except (ValueError, ValidationError) as exc:
        logger.warning("generate_frd_bad_request error=%s", exc.__class__.__name__)
        return _failure("Invalid request body")

    service: GenerationService = request.app.state.generation_service
    # The service blocks on the database and the LLM call
    result = await run_in_threadpool(service.generate_document, payload.conversation_id or "")
    if not result.success:
        logger.error("generate_frd_failed conversation_id=%s error=%s", payload.conversation_id, result.error)
        return _failure(result.error or "Failed to generate FRD")
    return JSONResponse(GenerateFrdResponse(success=True, frd=result.document).body())


__all__ = ["router"]
