"""Completeness checks over a response store.

Computed on every call from the store and the catalog; nothing here is
cached, so the verdict always reflects the latest answer mutation. The phase
of the session is irrelevant to these checks.
"""

from __future__ import annotations

import logging
from typing import List

from frd_wizard.logic.catalog import QuestionCatalog
from frd_wizard.logic.response_store import ResponseStore
from frd_wizard.models.answers import is_answered
from frd_wizard.models.question import QuestionDefinition


logger = logging.getLogger(__name__)


def question_is_answered(question: QuestionDefinition, store: ResponseStore) -> bool:
    return is_answered(store.get(question.field))


def count_answered(catalog: QuestionCatalog, store: ResponseStore) -> int:
    return sum(1 for q in catalog if question_is_answered(q, store))


def missing_required(catalog: QuestionCatalog, store: ResponseStore) -> List[QuestionDefinition]:
    """Required questions with no usable answer, in catalog order."""
    return [q for q in catalog.required_questions() if not question_is_answered(q, store)]


def is_ready_to_generate(catalog: QuestionCatalog, store: ResponseStore) -> bool:
    missing = missing_required(catalog, store)
    if missing:
        logger.debug("completeness_blocked missing=%s", [q.field for q in missing])
    return not missing


__all__ = [
    "question_is_answered",
    "count_answered",
    "missing_required",
    "is_ready_to_generate",
]
