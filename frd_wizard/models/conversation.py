"""ORM model for a persisted FRD questionnaire record."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FrdConversation(Base):  # type: ignore[valid-type]
    __tablename__ = "frd_conversations"

    id = Column(String, primary_key=True)
    product_name = Column(Text, nullable=True)
    product_description = Column(Text, nullable=True)
    target_users = Column(Text, nullable=True)
    problem_solved = Column(Text, nullable=True)
    product_goals = Column(JSON, nullable=True)
    key_features = Column(JSON, nullable=True)
    user_journey = Column(Text, nullable=True)
    tech_stack = Column(Text, nullable=True)
    constraints = Column(Text, nullable=True)
    success_metrics = Column(Text, nullable=True)
    product_stage = Column(Text, nullable=True)
    competitors = Column(Text, nullable=True)
    platforms = Column(Text, nullable=True)
    compliance = Column(Text, nullable=True)
    timeline = Column(Text, nullable=True)
    additional_info = Column(Text, nullable=True)
    generated_frd = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="draft")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


# Columns that carry questionnaire answers (everything else is bookkeeping)
ANSWER_COLUMNS: frozenset[str] = frozenset(
    c.name
    for c in FrdConversation.__table__.columns
    if c.name not in {"id", "generated_frd", "status", "created_at"}
)


__all__ = ["FrdConversation", "Base", "ANSWER_COLUMNS"]
