"""Wizard session endpoints.

Thin adapters over `WizardSession` and `GenerationOrchestrator`: each handler
looks up the session, runs exactly one operation and returns the resulting
session view. Rejected operations become problem+json responses; failed
generation attempts are returned as session state (phase=Failed).
"""

from __future__ import annotations

import logging
from typing import Callable, Union

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from frd_wizard.http.error_mapping import STATEFUL_ERROR_KINDS
from frd_wizard.http.problem import problem_response
from frd_wizard.logic.events import SESSION_RESET, publish
from frd_wizard.logic.orchestrator import GenerationOrchestrator
from frd_wizard.logic.outcomes import Outcome
from frd_wizard.logic.problem_factory import problem_for_wizard_error, problem_session_not_found
from frd_wizard.logic.review import build_review
from frd_wizard.logic.session_registry import SessionRegistry
from frd_wizard.logic.wizard import WizardSession
from frd_wizard.models.answer_upsert import AnswerPayload
from frd_wizard.models.response_types import ProgressView, ReviewView, SessionView


router = APIRouter()
logger = logging.getLogger(__name__)

ViewOrProblem = Union[SessionView, JSONResponse]


def _registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def _orchestrator(request: Request) -> GenerationOrchestrator:
    return request.app.state.orchestrator


def session_view(session_id: str, session: WizardSession, outcome: Outcome | None = None) -> SessionView:
    return SessionView(
        session_id=session_id,
        changed=outcome.changed if outcome is not None else None,
        **session.snapshot(),
    )


def _run(request: Request, session_id: str, op: Callable[[WizardSession], Outcome]) -> ViewOrProblem:
    session = _registry(request).get(session_id)
    if session is None:
        return problem_response(problem_session_not_found(session_id))
    outcome = op(session)
    if outcome.error is not None and outcome.error.kind not in STATEFUL_ERROR_KINDS:
        return problem_response(problem_for_wizard_error(outcome.error))
    return session_view(session_id, session, outcome)


@router.post("/sessions", status_code=201, summary="Create a questionnaire session", response_model=SessionView)
def create_session(request: Request):
    session_id, session = _registry(request).create()
    return session_view(session_id, session)


@router.get("/sessions/{session_id}", summary="Get session state", response_model=SessionView)
def get_state(session_id: str, request: Request):
    return _run(request, session_id, lambda s: Outcome.noop())


@router.get("/sessions/{session_id}/progress", summary="Get session progress", response_model=ProgressView)
def get_progress(session_id: str, request: Request):
    session = _registry(request).get(session_id)
    if session is None:
        return problem_response(problem_session_not_found(session_id))
    return ProgressView(session_id=session_id, **session.progress())


@router.post("/sessions/{session_id}/start", summary="Start the questionnaire", response_model=SessionView)
def start(session_id: str, request: Request):
    return _run(request, session_id, lambda s: s.start())


@router.put("/sessions/{session_id}/answer", summary="Answer the current question", response_model=SessionView)
def answer(session_id: str, payload: AnswerPayload, request: Request):
    return _run(request, session_id, lambda s: s.set_current_answer(payload.value))


@router.post("/sessions/{session_id}/next", summary="Advance to the next question", response_model=SessionView)
def next_question(session_id: str, request: Request):
    return _run(request, session_id, lambda s: s.advance())


@router.post("/sessions/{session_id}/skip", summary="Skip an optional question", response_model=SessionView)
def skip(session_id: str, request: Request):
    return _run(request, session_id, lambda s: s.skip())


@router.post("/sessions/{session_id}/previous", summary="Go back one question", response_model=SessionView)
def previous(session_id: str, request: Request):
    return _run(request, session_id, lambda s: s.retreat())


@router.post("/sessions/{session_id}/back", summary="Leave review and resume the last question", response_model=SessionView)
def back_to_questions(session_id: str, request: Request):
    return _run(request, session_id, lambda s: s.back_to_questions())


@router.get("/sessions/{session_id}/review", summary="Review answers before generation", response_model=ReviewView)
def review(session_id: str, request: Request):
    session = _registry(request).get(session_id)
    if session is None:
        return problem_response(problem_session_not_found(session_id))
    return ReviewView(session_id=session_id, **build_review(session))


@router.post("/sessions/{session_id}/review/{index}", summary="Edit a question from the review screen", response_model=SessionView)
def jump_to_review(session_id: str, index: int, request: Request):
    return _run(request, session_id, lambda s: s.jump_to(index))


@router.post("/sessions/{session_id}/generate", summary="Persist answers and generate the FRD", response_model=SessionView)
def generate(session_id: str, request: Request):
    orchestrator = _orchestrator(request)
    return _run(request, session_id, orchestrator.generate)


@router.post("/sessions/{session_id}/reset", summary="Start over", response_model=SessionView)
def reset(session_id: str, request: Request):
    def _reset(session: WizardSession) -> Outcome:
        outcome = session.reset()
        publish(SESSION_RESET, {"session_id": session_id})
        return outcome

    return _run(request, session_id, _reset)


@router.delete("/sessions/{session_id}", status_code=204, summary="Discard a session")
def discard_session(session_id: str, request: Request):
    if not _registry(request).discard(session_id):
        return problem_response(problem_session_not_found(session_id))
    return Response(status_code=204)


__all__ = ["router", "session_view"]
