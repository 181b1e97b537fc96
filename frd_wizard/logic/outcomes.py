"""Explicit result values for wizard and generation operations.

Operations never raise for expected failures; they return an `Outcome`
carrying a `WizardError` with a stable kind and a human readable message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    INVALID_TRANSITION = "InvalidTransition"
    INVALID_INDEX = "InvalidIndex"
    INCOMPLETE_RESPONSES = "IncompleteResponses"
    PERSISTENCE_ERROR = "PersistenceError"
    GENERATION_ERROR = "GenerationError"


@dataclass(frozen=True)
class WizardError:
    kind: ErrorKind
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class Outcome:
    """Result of one operation.

    `ok` is False only when `error` is set. `changed` is False for
    accepted no-ops (e.g. `retreat()` on the first question).
    """

    ok: bool
    changed: bool = False
    error: Optional[WizardError] = None

    @classmethod
    def applied(cls) -> "Outcome":
        return cls(ok=True, changed=True)

    @classmethod
    def noop(cls) -> "Outcome":
        return cls(ok=True, changed=False)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> "Outcome":
        return cls(ok=False, changed=False, error=WizardError(kind=kind, message=message))


__all__ = ["ErrorKind", "WizardError", "Outcome"]
