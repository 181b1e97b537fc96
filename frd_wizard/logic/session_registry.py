"""Process-local registry of wizard sessions.

Each entry is an independent `WizardSession`; the registry itself holds no
questionnaire state. Sessions are lost on restart.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Optional

from frd_wizard.logic.catalog import QuestionCatalog
from frd_wizard.logic.wizard import WizardSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self, catalog: QuestionCatalog | None = None) -> None:
        self._catalog = catalog
        self._sessions: Dict[str, WizardSession] = {}
        self._lock = threading.Lock()

    def create(self) -> tuple[str, WizardSession]:
        session_id = str(uuid.uuid4())
        session = WizardSession(self._catalog)
        with self._lock:
            self._sessions[session_id] = session
        logger.info("session_created id=%s", session_id)
        return session_id, session

    def get(self, session_id: str) -> Optional[WizardSession]:
        with self._lock:
            return self._sessions.get(str(session_id))

    def discard(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(str(session_id), None)
        if removed is not None:
            logger.info("session_discarded id=%s", session_id)
        return removed is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SessionRegistry"]
