from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from frd_wizard.config import AppConfig, load_config
from frd_wizard.db.base import get_engine, init_schema
from frd_wizard.http.problem import (
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from frd_wizard.http.request_id import RequestIdMiddleware
from frd_wizard.logging_setup import configure_logging
from frd_wizard.logic.catalog import QuestionCatalog, default_catalog
from frd_wizard.logic.collaborators import DocumentGenerator, RecordStore
from frd_wizard.logic.gemini_client import GeminiClient
from frd_wizard.logic.generation_client import HttpGenerationClient, LocalGenerationClient
from frd_wizard.logic.generation_service import GenerationService, TextGenerator
from frd_wizard.logic.orchestrator import GenerationOrchestrator
from frd_wizard.logic.repository_conversations import SqlRecordStore
from frd_wizard.logic.session_registry import SessionRegistry
from frd_wizard.middleware.cors import apply_cors
from frd_wizard.models.conversation import ANSWER_COLUMNS
from frd_wizard.routes import api_router, functions_router

logger = logging.getLogger(__name__)


def _health_check(engine: Engine) -> Callable[[], dict]:
    def check() -> dict:
        try:
            with engine.connect() as conn:
                conn.execute(sql_text("SELECT 1"))
            return {"status": "ok", "db": True}
        except SQLAlchemyError as e:
            logger.error("Health DB check failed", exc_info=True)
            return {"status": "degraded", "db": False, "reason": e.__class__.__name__}

    return check


def create_app(
    config: AppConfig | None = None,
    *,
    catalog: QuestionCatalog | None = None,
    record_store: RecordStore | None = None,
    generator: DocumentGenerator | None = None,
    llm: TextGenerator | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Collaborators default to the SQL record store and in-process generation
    backed by Gemini; tests pass their own to avoid network access.

    Raises:
        ValueError: a custom catalog has fields the default SQL record store
            has no column for and no `record_store` was supplied.
    """
    configure_logging()
    cfg = config or load_config()

    catalog = catalog or default_catalog()
    if record_store is None:
        unstorable = sorted(set(catalog.fields) - ANSWER_COLUMNS)
        if unstorable:
            logger.error("catalog_fields_unstorable fields=%s", unstorable)
            raise ValueError(f"catalog fields have no record column: {unstorable}; pass a record_store")

    engine = get_engine(cfg.database.dsn)
    init_schema(engine)
    repository = SqlRecordStore(engine)

    generation_service = GenerationService(repository, llm or GeminiClient(cfg.gemini))
    if generator is None:
        if cfg.generation_url:
            generator = HttpGenerationClient(cfg.generation_url, timeout=cfg.gemini.timeout_seconds)
            logger.info("generation_mode remote url=%s", cfg.generation_url)
        else:
            generator = LocalGenerationClient(generation_service)
            logger.info("generation_mode local model=%s", cfg.gemini.model)

    app = FastAPI(title="FRD Wizard", version="1.0.0")
    app.state.config = cfg
    app.state.catalog = catalog
    app.state.sessions = SessionRegistry(app.state.catalog)
    app.state.generation_service = generation_service
    app.state.orchestrator = GenerationOrchestrator(record_store or repository, generator)

    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    apply_cors(app, origins=cfg.cors.origins)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(functions_router)

    health_check = _health_check(engine)

    @app.get("/health")
    def health():  # pragma: no cover - trivial
        return health_check()

    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
