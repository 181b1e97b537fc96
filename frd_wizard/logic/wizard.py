"""Wizard state machine for one questionnaire session.

A `WizardSession` owns its catalog reference, its response store and its
`SessionState`; there is no module-level state, so any number of sessions can
coexist. All operations return an `Outcome` and never raise for invalid
requests.

Phases::

    NotStarted -> Collecting -> Reviewing -> Generating -> Completed
                      ^             |             |
                      |             v             v
                      +------- jump_to ------- Failed --(generate)--> Generating

Position ranges over [-1, len(catalog)]: -1 before `start()`, len(catalog)
once the last question has been passed and the session awaits review.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

from frd_wizard.logic.catalog import QuestionCatalog, default_catalog
from frd_wizard.logic.completeness import count_answered, is_ready_to_generate, missing_required
from frd_wizard.logic.outcomes import ErrorKind, Outcome, WizardError
from frd_wizard.logic.response_store import ResponseStore
from frd_wizard.models.answers import parse_raw_answer, to_input_text
from frd_wizard.models.question import QuestionDefinition


logger = logging.getLogger(__name__)


class Phase(str, Enum):
    NOT_STARTED = "NotStarted"
    COLLECTING = "Collecting"
    REVIEWING = "Reviewing"
    GENERATING = "Generating"
    COMPLETED = "Completed"
    FAILED = "Failed"


@dataclass(frozen=True)
class SessionState:
    position: int = -1
    phase: Phase = Phase.NOT_STARTED
    generated_document: Optional[str] = None
    persisted_id: Optional[str] = None
    last_error: Optional[WizardError] = None


def _invalid(op: str, phase: Phase) -> Outcome:
    return Outcome.failed(ErrorKind.INVALID_TRANSITION, f"{op} is not allowed in phase {phase.value}")


class WizardSession:
    def __init__(self, catalog: QuestionCatalog | None = None) -> None:
        self.catalog = catalog or default_catalog()
        self.responses = ResponseStore()
        self._state = SessionState()
        self._lock = threading.RLock()
        # Bumped by reset(); lets an in-flight generation detect it was abandoned
        self._epoch = 0

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def position(self) -> int:
        return self._state.position

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def current_question(self) -> Optional[QuestionDefinition]:
        return self.catalog.at(self._state.position)

    @property
    def progress_fraction(self) -> float:
        if self._state.position < 0:
            return 0.0
        return self._state.position / len(self.catalog)

    @property
    def is_finished(self) -> bool:
        return self._state.position >= len(self.catalog)

    @property
    def current_value(self) -> str:
        question = self.current_question
        if question is None:
            return ""
        return to_input_text(self.responses.get(question.field))

    @property
    def can_advance(self) -> bool:
        """UI hint mirroring a disabled Next button; `advance()` ignores it."""
        question = self.current_question
        if self._state.phase is not Phase.COLLECTING or question is None:
            return False
        return not question.required or self.current_value.strip() != ""

    @property
    def step_label(self) -> str:
        if self.current_question is None:
            return ""
        return f"Question {self._state.position + 1} of {len(self.catalog)}"

    def count_answered(self) -> int:
        return count_answered(self.catalog, self.responses)

    def is_ready_to_generate(self) -> bool:
        return is_ready_to_generate(self.catalog, self.responses)

    def missing_required(self) -> list[QuestionDefinition]:
        return missing_required(self.catalog, self.responses)

    # ------------------------------------------------------------------
    # Navigation and answers
    # ------------------------------------------------------------------

    def _transition(self, op: str, **changes: Any) -> Outcome:
        before = self._state
        self._state = replace(before, **changes)
        logger.info(
            "wizard_transition op=%s phase=%s->%s position=%s->%s",
            op,
            before.phase.value,
            self._state.phase.value,
            before.position,
            self._state.position,
        )
        return Outcome.applied()

    def start(self) -> Outcome:
        with self._lock:
            if self._state.phase is not Phase.NOT_STARTED:
                return _invalid("start", self._state.phase)
            return self._transition("start", position=0, phase=Phase.COLLECTING)

    def set_current_answer(self, raw: str) -> Outcome:
        with self._lock:
            if self._state.phase is not Phase.COLLECTING:
                return _invalid("set_current_answer", self._state.phase)
            question = self.current_question
            if question is None:
                return Outcome.noop()
            self.responses.set(question.field, parse_raw_answer(question.answer_type, raw))
            return Outcome.applied()

    def advance(self) -> Outcome:
        with self._lock:
            if self._state.phase is not Phase.COLLECTING:
                return _invalid("advance", self._state.phase)
            return self._step_forward("advance")

    def _step_forward(self, op: str) -> Outcome:
        position = self._state.position
        if position < self.catalog.last_index:
            return self._transition(op, position=position + 1)
        return self._transition(op, position=len(self.catalog), phase=Phase.REVIEWING)

    def skip(self) -> Outcome:
        with self._lock:
            if self._state.phase is not Phase.COLLECTING:
                return _invalid("skip", self._state.phase)
            question = self.current_question
            if question is None or question.required:
                return Outcome.noop()
            if self._state.position >= self.catalog.last_index:
                return Outcome.noop()
            return self._step_forward("skip")

    def retreat(self) -> Outcome:
        with self._lock:
            if self._state.phase is not Phase.COLLECTING:
                return _invalid("retreat", self._state.phase)
            if self._state.position <= 0:
                return Outcome.noop()
            return self._transition("retreat", position=self._state.position - 1)

    def jump_to(self, index: int) -> Outcome:
        with self._lock:
            if self._state.phase not in (Phase.REVIEWING, Phase.FAILED):
                return _invalid("jump_to", self._state.phase)
            if not self.catalog.contains_index(index):
                return Outcome.failed(
                    ErrorKind.INVALID_INDEX,
                    f"index {index} is outside 0..{self.catalog.last_index}",
                )
            return self._transition("jump_to", position=index, phase=Phase.COLLECTING)

    def back_to_questions(self) -> Outcome:
        """Leave the review screen and resume on the last question."""
        with self._lock:
            if self._state.phase is not Phase.REVIEWING:
                return _invalid("back_to_questions", self._state.phase)
            return self._transition("back_to_questions", position=self.catalog.last_index, phase=Phase.COLLECTING)

    def reset(self) -> Outcome:
        with self._lock:
            self.responses.clear()
            self._epoch += 1
            return self._transition(
                "reset",
                position=-1,
                phase=Phase.NOT_STARTED,
                generated_document=None,
                persisted_id=None,
                last_error=None,
            )

    # ------------------------------------------------------------------
    # Generation hooks (driven by GenerationOrchestrator)
    # ------------------------------------------------------------------

    def begin_generation(self) -> tuple[Outcome, int]:
        """Check the generation gate and enter Generating.

        Returns the outcome and the epoch the attempt belongs to.
        """
        with self._lock:
            if self._state.phase not in (Phase.REVIEWING, Phase.FAILED):
                return _invalid("generate", self._state.phase), self._epoch
            missing = self.missing_required()
            if missing:
                return (
                    Outcome.failed(
                        ErrorKind.INCOMPLETE_RESPONSES,
                        f"{len(missing)} required questions missing: {', '.join(q.field for q in missing)}",
                    ),
                    self._epoch,
                )
            self._transition(
                "generate",
                phase=Phase.GENERATING,
                generated_document=None,
                persisted_id=None,
                last_error=None,
            )
            return Outcome.applied(), self._epoch

    def _is_current(self, epoch: int) -> bool:
        if epoch != self._epoch or self._state.phase is not Phase.GENERATING:
            logger.warning("generation_result_discarded epoch=%s current_epoch=%s", epoch, self._epoch)
            return False
        return True

    def record_persisted(self, epoch: int, persisted_id: str) -> None:
        with self._lock:
            if self._is_current(epoch):
                self._state = replace(self._state, persisted_id=persisted_id)

    def complete_generation(self, epoch: int, document: str) -> bool:
        """Land in Completed; False when the attempt was abandoned."""
        with self._lock:
            if not self._is_current(epoch):
                return False
            self._transition("generate_completed", phase=Phase.COMPLETED, generated_document=document)
            return True

    def fail_generation(self, epoch: int, error: WizardError) -> bool:
        with self._lock:
            if not self._is_current(epoch):
                return False
            self._transition("generate_failed", phase=Phase.FAILED, last_error=error)
            return True

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Caller-facing state view; never exposes internal objects."""
        with self._lock:
            question = self.current_question
            state = self._state
            return {
                "phase": state.phase.value,
                "position": state.position,
                "current_question": question.model_dump(mode="json") if question else None,
                "current_value": self.current_value,
                "can_advance": self.can_advance,
                "generated_document": state.generated_document,
                "persisted_id": state.persisted_id,
                "last_error": state.last_error.to_dict() if state.last_error else None,
            }

    def progress(self) -> Dict[str, Any]:
        with self._lock:
            missing = self.missing_required()
            return {
                "position": self._state.position,
                "total_questions": len(self.catalog),
                "progress_fraction": self.progress_fraction,
                "is_finished": self.is_finished,
                "step_label": self.step_label,
                "answered_count": self.count_answered(),
                "required_missing": len(missing),
                "ready_to_generate": not missing,
            }


__all__ = ("Phase", "SessionState", "WizardSession")
