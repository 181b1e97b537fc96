"""Generated document endpoints: display view and markdown export."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
import logging

from frd_wizard.http.problem import problem_response
from frd_wizard.logic.outcomes import ErrorKind, WizardError
from frd_wizard.logic.presenter import export_filename, render_document
from frd_wizard.logic.problem_factory import problem_for_wizard_error, problem_session_not_found
from frd_wizard.logic.wizard import Phase, WizardSession
from frd_wizard.models.answers import to_summary_text
from frd_wizard.models.response_types import DocumentView


router = APIRouter()
logger = logging.getLogger(__name__)


def _completed_session(request: Request, session_id: str):
    session: WizardSession | None = request.app.state.sessions.get(session_id)
    if session is None:
        return None, problem_response(problem_session_not_found(session_id))
    if session.phase is not Phase.COMPLETED or session.state.generated_document is None:
        error = WizardError(
            kind=ErrorKind.INVALID_TRANSITION,
            message=f"no generated document in phase {session.phase.value}",
        )
        return None, problem_response(problem_for_wizard_error(error))
    return session, None


@router.get("/sessions/{session_id}/document", summary="Get the generated FRD", response_model=DocumentView)
def get_document(session_id: str, request: Request):
    session, problem = _completed_session(request, session_id)
    if problem is not None:
        return problem
    document = session.state.generated_document
    return DocumentView(
        session_id=session_id,
        persisted_id=session.state.persisted_id,
        document=document,
        html=render_document(document),
    )


@router.get("/sessions/{session_id}/document/export", summary="Download the generated FRD as markdown")
def export_document(session_id: str, request: Request):
    session, problem = _completed_session(request, session_id)
    if problem is not None:
        return problem
    filename = export_filename(to_summary_text(session.responses.get("product_name")))
    logger.info("document_exported session_id=%s filename=%s", session_id, filename)
    return PlainTextResponse(
        session.state.generated_document,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


__all__ = ["router"]
