"""AnswerType enumeration for the questionnaire's answer shapes.

Values match the wire names used by the catalog endpoint and the stored
record columns: single-line text, multi-line text and a line-delimited list.
"""

from __future__ import annotations

from enum import Enum


class AnswerType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    LIST = "array"


__all__ = ["AnswerType"]
