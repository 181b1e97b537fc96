"""Central error mapping for wizard operations.

Single source of truth for mapping wizard error kinds to problem+json codes
and HTTP statuses. Route modules must import from here instead of
hardcoding strings or numbers.

PersistenceError and GenerationError are deliberately absent: they are part
of the session state (phase=Failed) and returned with a 200 response.
"""

from __future__ import annotations

from frd_wizard.logic.outcomes import ErrorKind

SESSION_NOT_FOUND = {"code": "SESSION_NOT_FOUND", "status": 404, "title": "Session not found"}

WIZARD_ERROR_MAP = {
    ErrorKind.INVALID_TRANSITION: {"code": "INVALID_TRANSITION", "status": 409, "title": "Invalid transition"},
    ErrorKind.INVALID_INDEX: {"code": "INVALID_INDEX", "status": 422, "title": "Invalid index"},
    ErrorKind.INCOMPLETE_RESPONSES: {"code": "INCOMPLETE_RESPONSES", "status": 409, "title": "Incomplete responses"},
}

# Error kinds reported inside the session state rather than as HTTP errors
STATEFUL_ERROR_KINDS = frozenset({ErrorKind.PERSISTENCE_ERROR, ErrorKind.GENERATION_ERROR})

__all__ = ["SESSION_NOT_FOUND", "WIZARD_ERROR_MAP", "STATEFUL_ERROR_KINDS"]
