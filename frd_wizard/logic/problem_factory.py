"""Centralised construction of problem+json payloads for wizard errors.

Provides helpers that return dicts with stable codes so route modules never
embed status numbers or code strings.
"""

from __future__ import annotations

from typing import Dict
import logging

from frd_wizard.http.error_mapping import SESSION_NOT_FOUND, WIZARD_ERROR_MAP
from frd_wizard.logic.outcomes import WizardError


logger = logging.getLogger(__name__)


def problem_session_not_found(session_id: str) -> Dict[str, object]:
    """Return a 404 problem for an unknown session id."""
    problem = {
        "title": SESSION_NOT_FOUND["title"],
        "status": SESSION_NOT_FOUND["status"],
        "detail": f"session {session_id} does not exist",
        "code": SESSION_NOT_FOUND["code"],
    }
    logger.info("error_handler.handle code=%s", problem["code"])
    return problem


def problem_for_wizard_error(error: WizardError) -> Dict[str, object]:
    """Return a problem for a rejected wizard operation.

    Unknown kinds fall back to a 500 so a missing mapping is visible.
    """
    mapping = WIZARD_ERROR_MAP.get(error.kind)
    if mapping is None:
        logger.error("error_mapping_missing kind=%s", error.kind.value)
        mapping = {"code": "INTERNAL_ERROR", "status": 500, "title": "Internal Server Error"}
    problem = {
        "title": mapping["title"],
        "status": mapping["status"],
        "detail": error.message,
        "code": mapping["code"],
        "kind": error.kind.value,
    }
    logger.info("error_handler.handle code=%s", problem["code"])
    return problem


__all__ = ["problem_session_not_found", "problem_for_wizard_error"]
