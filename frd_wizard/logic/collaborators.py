"""Interfaces of the external collaborators used by generation.

The orchestrator depends only on these protocols; concrete adapters live in
`repository_conversations` (storage) and `generation_client` (generation).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol


class RecordStoreError(RuntimeError):
    """Raised by a record store when a create/read/update cannot complete."""


@dataclass(frozen=True)
class GenerationResult:
    success: bool
    document: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, document: str) -> "GenerationResult":
        return cls(success=True, document=document)

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(success=False, error=error)


class RecordStore(Protocol):
    def create_record(self, fields: Mapping[str, Any]) -> str:
        """Insert one new record and return its opaque identifier."""
        ...


class DocumentGenerator(Protocol):
    def generate_document(self, record_id: str) -> GenerationResult:
        ...


__all__ = ["RecordStoreError", "GenerationResult", "RecordStore", "DocumentGenerator"]
