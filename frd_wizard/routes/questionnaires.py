"""Question catalog endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

from frd_wizard.models.response_types import CatalogView


router = APIRouter()


@router.get(
    "/questions",
    summary="List the questionnaire in traversal order",
    operation_id="listQuestions",
    response_model=CatalogView,
)
def list_questions(request: Request):
    return CatalogView(questions=list(request.app.state.catalog))


__all__ = ["router"]
