"""Data access for persisted FRD questionnaire records.

Keeps route handlers and the orchestrator free of ORM code. Every
`create_record` inserts a new row; existing rows are only touched by
`update_record` (used by the generation service to attach the document).
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from frd_wizard.db.base import get_engine, session_scope
from frd_wizard.logic.collaborators import RecordStoreError
from frd_wizard.models.conversation import ANSWER_COLUMNS, FrdConversation

logger = logging.getLogger(__name__)

STATUS_DRAFT = "draft"
STATUS_COMPLETED = "completed"


def _row_to_dict(row: FrdConversation) -> Dict[str, Any]:
    out: Dict[str, Any] = {name: getattr(row, name) for name in sorted(ANSWER_COLUMNS)}
    out.update(
        {
            "id": row.id,
            "generated_frd": row.generated_frd,
            "status": row.status,
            "created_at": row.created_at.isoformat() if row.created_at else None,
        }
    )
    return out


class SqlRecordStore:
    """Record store over the `frd_conversations` table."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine or get_engine()

    def create_record(self, fields: Mapping[str, Any]) -> str:
        unknown = sorted(set(fields) - ANSWER_COLUMNS)
        if unknown:
            raise RecordStoreError(f"unknown record fields: {unknown}")
        record_id = str(uuid.uuid4())
        try:
            with session_scope(self.engine) as session:
                session.add(FrdConversation(id=record_id, status=STATUS_DRAFT, **dict(fields)))
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"insert failed: {exc.__class__.__name__}") from exc
        logger.info("conversation_created id=%s", record_id)
        return record_id

    def get_record(self, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            with session_scope(self.engine) as session:
                row = session.get(FrdConversation, record_id)
                return _row_to_dict(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"read failed: {exc.__class__.__name__}") from exc

    def update_record(self, record_id: str, generated_document: str, status: str = STATUS_COMPLETED) -> None:
        try:
            with session_scope(self.engine) as session:
                row = session.get(FrdConversation, record_id)
                if row is None:
                    raise RecordStoreError(f"record not found: {record_id}")
                row.generated_frd = generated_document
                row.status = status
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"update failed: {exc.__class__.__name__}") from exc
        logger.info("conversation_updated id=%s status=%s", record_id, status)


__all__ = ["SqlRecordStore", "STATUS_DRAFT", "STATUS_COMPLETED"]
