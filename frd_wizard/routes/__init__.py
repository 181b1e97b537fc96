"""APIRouter registration for the FRD Wizard service."""

from __future__ import annotations

from fastapi import APIRouter

from frd_wizard.routes.documents import router as documents_router
from frd_wizard.routes.generate_frd import router as generate_frd_router
from frd_wizard.routes.questionnaires import router as questionnaires_router
from frd_wizard.routes.sessions import router as sessions_router

api_router = APIRouter()
api_router.include_router(questionnaires_router, tags=["Questions"])
api_router.include_router(sessions_router, tags=["Sessions"])
api_router.include_router(documents_router, tags=["Documents"])

# Generation function lives outside the /api/v1 prefix, like the hosted function it replaces
functions_router = APIRouter()
functions_router.include_router(generate_frd_router, tags=["Functions"])

__all__ = ["api_router", "functions_router"]
