"""Tagged answer values keyed by answer type.

A stored answer is either a `TextAnswer` (single-line and multi-line text
questions) or a `ListAnswer` (line-delimited list questions). The helpers in
this module are the only places that branch on the variant: parsing raw
input, the answered predicate, storage serialisation and display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from frd_wizard.models.question_kind import AnswerType


@dataclass(frozen=True)
class TextAnswer:
    text: str
    kind: AnswerType = AnswerType.TEXT


@dataclass(frozen=True)
class ListAnswer:
    items: tuple[str, ...]
    kind: AnswerType = AnswerType.LIST


AnswerValue = Union[TextAnswer, ListAnswer]
StoredValue = Union[str, list]


def parse_raw_answer(answer_type: AnswerType, raw: str) -> AnswerValue:
    """Build the stored value for raw user input.

    List input is split on line breaks and whitespace-only lines are dropped;
    surviving lines are kept exactly as typed. Text input is kept verbatim,
    trimming only happens in the answered predicate.
    """
    if answer_type is AnswerType.LIST:
        lines = raw.split("\n")
        return ListAnswer(items=tuple(line for line in lines if line.strip() != ""))
    if answer_type in (AnswerType.TEXT, AnswerType.TEXTAREA):
        return TextAnswer(text=raw, kind=answer_type)
    raise ValueError(f"unsupported answer type: {answer_type!r}")


def is_answered(value: AnswerValue | None) -> bool:
    if value is None:
        return False
    if isinstance(value, ListAnswer):
        return len(value.items) > 0
    if isinstance(value, TextAnswer):
        return value.text.strip() != ""
    raise TypeError(f"unsupported answer value: {value!r}")


def to_storage(value: AnswerValue) -> StoredValue:
    """Serialise for the record store: lists as JSON arrays, text as-is."""
    if isinstance(value, ListAnswer):
        return list(value.items)
    if isinstance(value, TextAnswer):
        return value.text
    raise TypeError(f"unsupported answer value: {value!r}")


def to_input_text(value: AnswerValue | None) -> str:
    """Render a stored value back into the editor form (lists one per line)."""
    if value is None:
        return ""
    if isinstance(value, ListAnswer):
        return "\n".join(value.items)
    if isinstance(value, TextAnswer):
        return value.text
    raise TypeError(f"unsupported answer value: {value!r}")


def to_summary_text(value: AnswerValue | None) -> str:
    """Render a stored value for one-line summaries (lists comma-joined)."""
    if value is None:
        return ""
    if isinstance(value, ListAnswer):
        return ", ".join(value.items)
    if isinstance(value, TextAnswer):
        return value.text
    raise TypeError(f"unsupported answer value: {value!r}")


__all__ = [
    "TextAnswer",
    "ListAnswer",
    "AnswerValue",
    "StoredValue",
    "parse_raw_answer",
    "is_answered",
    "to_storage",
    "to_input_text",
    "to_summary_text",
]
