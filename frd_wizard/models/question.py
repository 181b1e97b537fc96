"""Pydantic model for a single questionnaire question definition."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from frd_wizard.models.question_kind import AnswerType


class QuestionDefinition(BaseModel):
    """Immutable question definition.

    `field` is the key into the response record; `id` is the ordinal
    identifier shown to clients. Both must be unique within a catalog.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    field: str
    answer_type: AnswerType
    placeholder_hint: str = ""
    required: bool = True

    @field_validator("field", "id")
    @classmethod
    def must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("question id and field must be non-empty strings")
        return v


__all__ = ["QuestionDefinition"]
