"""Server-side FRD generation function.

Given the id of a stored questionnaire record, builds the FRD prompt, asks
the language model for the document and attaches it to the record. The
function never raises: every failure becomes `GenerationResult.failure`.
Attaching the document to the record is best-effort; a failed update is
logged and the generated document is still returned.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from frd_wizard.logic.collaborators import GenerationResult, RecordStoreError
from frd_wizard.logic.gemini_client import GeminiError
from frd_wizard.logic.prompt_builder import build_frd_prompt
from frd_wizard.logic.repository_conversations import STATUS_COMPLETED

logger = logging.getLogger(__name__)


class ConversationRepository(Protocol):
    def get_record(self, record_id: str) -> Optional[Dict[str, Any]]: ...

    def update_record(self, record_id: str, generated_document: str, status: str = ...) -> None: ...


class TextGenerator(Protocol):
    def generate_text(self, prompt: str) -> str: ...


class GenerationService:
    def __init__(self, repository: ConversationRepository, llm: TextGenerator) -> None:
        self.repository = repository
        self.llm = llm

    def generate_document(self, record_id: str) -> GenerationResult:
        if not record_id or not str(record_id).strip():
            return GenerationResult.failure("Conversation ID is required")

        try:
            record = self.repository.get_record(record_id)
        except RecordStoreError as exc:
            logger.error("conversation_load_failed id=%s", record_id, exc_info=True)
            return GenerationResult.failure(f"Conversation not found: {exc}")
        if not record:
            return GenerationResult.failure("Conversation not found")

        try:
            document = self.llm.generate_text(build_frd_prompt(record))
        except GeminiError as exc:
            logger.error("frd_generation_error id=%s error=%s", record_id, exc)
            return GenerationResult.failure(str(exc))

        try:
            self.repository.update_record(record_id, document, STATUS_COMPLETED)
        except RecordStoreError:
            # Document is still returned to the caller
            logger.error("record_update_failed id=%s", record_id, exc_info=True)

        return GenerationResult.ok(document)


__all__ = ["GenerationService"]
