"""Generation orchestrator.

Runs one generation attempt for a wizard session:

1. Gate on phase (Reviewing or Failed) and completeness.
2. Persist the full response record as a new record.
3. Ask the generation collaborator for a document using the new record id.
4. Land the session in Completed or Failed.

Nothing is retried here. A retry is a fresh call to `generate()`, which
persists another new record. Collaborator exceptions are converted into
error values on the session; they never propagate to the caller.

If the session is reset while the attempt is outstanding, the late result
is dropped: no event is published and the caller gets InvalidTransition.
"""

from __future__ import annotations

import logging

from frd_wizard.logic.collaborators import DocumentGenerator, GenerationResult, RecordStore
from frd_wizard.logic.events import FRD_GENERATED, FRD_GENERATION_FAILED, publish
from frd_wizard.logic.outcomes import ErrorKind, Outcome, WizardError
from frd_wizard.logic.wizard import WizardSession


logger = logging.getLogger(__name__)


def _abandoned(persisted_id: str | None) -> Outcome:
    logger.info("frd_generation_abandoned record_id=%s", persisted_id)
    return Outcome.failed(ErrorKind.INVALID_TRANSITION, "generation was abandoned by a session reset")


class GenerationOrchestrator:
    def __init__(self, store: RecordStore, generator: DocumentGenerator) -> None:
        self.store = store
        self.generator = generator

    def generate(self, session: WizardSession) -> Outcome:
        gate, epoch = session.begin_generation()
        if not gate.ok:
            logger.info("generate_rejected kind=%s", gate.error.kind.value if gate.error else None)
            return gate

        record = session.responses.as_record()
        try:
            raw_id = self.store.create_record(record)
        except Exception as exc:
            logger.error("frd_persist_failed", exc_info=True)
            return self._fail(session, epoch, ErrorKind.PERSISTENCE_ERROR, f"Failed to save responses: {exc}", None)
        if raw_id is None or not str(raw_id).strip():
            return self._fail(session, epoch, ErrorKind.PERSISTENCE_ERROR, "Record store returned no identifier", None)
        persisted_id = str(raw_id)
        session.record_persisted(epoch, persisted_id)
        logger.info("frd_record_persisted record_id=%s fields=%s", persisted_id, sorted(record))

        try:
            result = self.generator.generate_document(persisted_id)
        except Exception as exc:
            logger.error("frd_generation_call_failed record_id=%s", persisted_id, exc_info=True)
            result = GenerationResult.failure(str(exc) or exc.__class__.__name__)

        if not isinstance(result, GenerationResult) or not result.success:
            message = getattr(result, "error", None) or "Failed to generate FRD"
            return self._fail(session, epoch, ErrorKind.GENERATION_ERROR, message, persisted_id)
        if not isinstance(result.document, str) or not result.document.strip():
            return self._fail(session, epoch, ErrorKind.GENERATION_ERROR, "Generation service returned an empty document", persisted_id)

        if not session.complete_generation(epoch, result.document):
            return _abandoned(persisted_id)
        publish(FRD_GENERATED, {"record_id": persisted_id, "length": len(result.document)})
        return Outcome.applied()

    def _fail(
        self,
        session: WizardSession,
        epoch: int,
        kind: ErrorKind,
        message: str,
        persisted_id: str | None,
    ) -> Outcome:
        error = WizardError(kind=kind, message=message)
        if not session.fail_generation(epoch, error):
            return _abandoned(persisted_id)
        logger.warning("frd_generation_failed kind=%s record_id=%s message=%s", kind.value, persisted_id, message)
        publish(FRD_GENERATION_FAILED, {"record_id": persisted_id, "kind": kind.value, "message": message})
        return Outcome(ok=False, changed=True, error=error)


__all__ = ["GenerationOrchestrator"]
