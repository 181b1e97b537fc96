"""Pydantic models for wizard response bodies."""

from __future__ import annotations

from typing import Any, List, Optional
from pydantic import BaseModel

from frd_wizard.models.question import QuestionDefinition


class ErrorView(BaseModel):
    kind: str
    message: str


class SessionView(BaseModel):
    """State returned by `getState()` and by every wizard operation."""
    session_id: str
    phase: str
    position: int
    current_question: Optional[QuestionDefinition] = None
    current_value: str = ""
    can_advance: bool = False
    generated_document: Optional[str] = None
    persisted_id: Optional[str] = None
    last_error: Optional[ErrorView] = None
    changed: Optional[bool] = None


class ProgressView(BaseModel):
    session_id: str
    position: int
    total_questions: int
    progress_fraction: float
    is_finished: bool
    step_label: str
    answered_count: int
    required_missing: int
    ready_to_generate: bool


class ReviewEntry(BaseModel):
    index: int
    id: str
    prompt: str
    field: str
    required: bool
    answered: bool
    display_value: Optional[str] = None
    action: str


class ReviewView(BaseModel):
    session_id: str
    phase: str
    answered_count: int
    total_questions: int
    required_missing: int
    ready: bool
    required: List[ReviewEntry]
    optional: List[ReviewEntry]


class DocumentView(BaseModel):
    session_id: str
    persisted_id: Optional[str] = None
    document: str
    html: str


class CatalogView(BaseModel):
    questions: List[QuestionDefinition]


class GenerateFrdResponse(BaseModel):
    success: bool
    frd: Optional[str] = None
    error: Optional[str] = None

    def body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


__all__ = [
    "ErrorView",
    "SessionView",
    "ProgressView",
    "ReviewEntry",
    "ReviewView",
    "DocumentView",
    "CatalogView",
    "GenerateFrdResponse",
]
