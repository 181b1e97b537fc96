"""Database bootstrap utilities for the FRD Wizard service.

Exposes engine/session construction and schema creation for the
`frd_conversations` record store. Route handlers never touch the ORM
directly; they go through `frd_wizard.logic.repository_conversations`.
"""

from frd_wizard.db.base import get_engine, get_sessionmaker, init_schema, session_scope

__all__ = [
    "get_engine",
    "get_sessionmaker",
    "init_schema",
    "session_scope",
]
