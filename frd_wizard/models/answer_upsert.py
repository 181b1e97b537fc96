"""Pydantic models for wizard request payloads.

Kept out of the route modules so the payload structure is declared in one
place and shared with tests.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnswerPayload(BaseModel):
    """Raw answer text for the current question (lists: one entry per line)."""

    model_config = ConfigDict(extra="forbid")

    value: str


class GenerateFrdRequest(BaseModel):
    """Body of the generation function endpoint; camelCase on the wire."""

    conversation_id: str | None = Field(default=None, alias="conversationId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("conversation_id", mode="before")
    @classmethod
    def numeric_id_as_text(cls, v: Any) -> Any:
        # Record ids are opaque; a numeric id is looked up like any other
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


__all__ = ["AnswerPayload", "GenerateFrdRequest"]
