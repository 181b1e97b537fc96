"""Domain events for the FRD generation flow.

Events are logged and kept in a process-local buffer so tests and the debug
surface can observe what the orchestrator did without a message broker.
"""

from __future__ import annotations

from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

FRD_GENERATED = "frd.generated"
FRD_GENERATION_FAILED = "frd.generation_failed"
SESSION_RESET = "session.reset"

# Process-local buffer, oldest first
EVENT_BUFFER: List[Dict[str, Any]] = []


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": dict(payload)})


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


def events_of_type(event_type: str) -> List[Dict[str, Any]]:
    return [e for e in EVENT_BUFFER if e.get("type") == event_type]


__all__ = [
    "FRD_GENERATED",
    "FRD_GENERATION_FAILED",
    "SESSION_RESET",
    "EVENT_BUFFER",
    "publish",
    "get_buffered_events",
    "events_of_type",
]
