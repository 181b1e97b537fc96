"""SQLAlchemy engine, session scope and schema bootstrap.

The record store targets PostgreSQL in production but runs on SQLite for
local development and CI. The only mapped table is `frd_conversations`.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from frd_wizard.models.conversation import Base

logger = logging.getLogger(__name__)

DEFAULT_DSN = "sqlite+pysqlite:///:memory:"

# One engine per DSN so every repository on the same database shares a pool
_ENGINES: Dict[str, Engine] = {}
_ENGINES_LOCK = threading.Lock()


def default_dsn() -> str:
    return os.getenv("TEST_DATABASE_URL") or os.getenv("DATABASE_URL") or DEFAULT_DSN


def _engine_options(dsn: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"pool_pre_ping": True}
    if dsn.startswith("sqlite"):
        # Sessions are used from the server's worker threads
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in dsn:
            # A single shared connection keeps the in-memory database alive
            options["poolclass"] = StaticPool
    return options


def get_engine(dsn: str | None = None) -> Engine:
    """Return the cached Engine for `dsn` (default: environment or in-memory SQLite)."""
    resolved = dsn or default_dsn()
    with _ENGINES_LOCK:
        engine = _ENGINES.get(resolved)
        if engine is None:
            engine = create_engine(resolved, **_engine_options(resolved))
            _ENGINES[resolved] = engine
            logger.info("db_engine_created dialect=%s", engine.dialect.name)
    return engine


def get_sessionmaker(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or get_engine(), expire_on_commit=False)


def init_schema(engine: Engine | None = None) -> None:
    """Create missing tables; existing tables are left untouched."""
    Base.metadata.create_all(engine or get_engine())


@contextmanager
def session_scope(engine: Engine | None = None) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""
    session = get_sessionmaker(engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("db_transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()
