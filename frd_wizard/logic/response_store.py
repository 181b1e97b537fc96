"""In-memory response record for one questionnaire session.

Answers are keyed by question field, never by catalog position. Each write
replaces the whole value for one field.
"""

from __future__ import annotations

from typing import Dict, Optional

from frd_wizard.models.answers import AnswerValue, StoredValue, to_storage


class ResponseStore:
    def __init__(self) -> None:
        self._values: Dict[str, AnswerValue] = {}

    def set(self, field: str, value: AnswerValue) -> None:
        self._values[field] = value

    def get(self, field: str) -> Optional[AnswerValue]:
        return self._values.get(field)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, field: object) -> bool:
        return field in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_record(self) -> Dict[str, StoredValue]:
        """Return a detached snapshot suitable for the record store."""
        return {field: to_storage(value) for field, value in self._values.items()}


__all__ = ["ResponseStore"]
