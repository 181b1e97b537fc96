"""Review screen projection.

Builds the summary shown before generation: answered counts, how many
required questions are still missing, and one entry per question grouped
into required and optional. Entry `index` is the catalog index to pass to
`WizardSession.jump_to` for edit-in-place.
"""

from __future__ import annotations

from typing import Any, Dict, List

from frd_wizard.logic.completeness import question_is_answered
from frd_wizard.logic.wizard import WizardSession
from frd_wizard.models.answers import to_summary_text


def _entry(session: WizardSession, index: int) -> Dict[str, Any]:
    question = session.catalog[index]
    answered = question_is_answered(question, session.responses)
    return {
        "index": index,
        "id": question.id,
        "prompt": question.prompt,
        "field": question.field,
        "required": question.required,
        "answered": answered,
        "display_value": to_summary_text(session.responses.get(question.field)) if answered else None,
        "action": "Edit" if answered else "Add",
    }


def build_review(session: WizardSession) -> Dict[str, Any]:
    entries = [_entry(session, i) for i in range(len(session.catalog))]
    required: List[Dict[str, Any]] = [e for e in entries if e["required"]]
    optional: List[Dict[str, Any]] = [e for e in entries if not e["required"]]
    required_missing = len(session.missing_required())
    return {
        "phase": session.phase.value,
        "answered_count": sum(1 for e in entries if e["answered"]),
        "total_questions": len(entries),
        "required_missing": required_missing,
        "ready": required_missing == 0,
        "required": required,
        "optional": optional,
    }


__all__ = ["build_review"]
