"""Functional test bootstrap for the FRD Wizard service.

Each test gets its own file-backed SQLite database under pytest's tmp_path
and fake collaborators in place of the Gemini API, so no test touches the
network.
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Any

import pytest

from frd_wizard.config import AppConfig, DatabaseConfig, GeminiConfig
from frd_wizard.logic.collaborators import GenerationResult, RecordStoreError
from frd_wizard.logic.events import EVENT_BUFFER
from frd_wizard.logic.gemini_client import GeminiError
from frd_wizard.logic.wizard import WizardSession


SAMPLE_ANSWERS = {
    "product_name": "TaskMaster Pro",
    "product_description": "A task platform for teams.",
    "target_users": "Project managers",
    "problem_solved": "Scattered communication",
    "product_goals": "Ship faster\nReduce churn",
    "key_features": "Boards\nReminders\n",
    "user_journey": "Log in, create project, track tasks",
    "tech_stack": "FastAPI, PostgreSQL",
    "constraints": "Must integrate with CRM",
    "success_metrics": "Weekly active teams",
}

FIXED_DOCUMENT = "**Functional Requirements Document**\n\n**1. Overview**\nTaskMaster Pro helps teams."


class FakeLLM:
    """Stands in for GeminiClient.generate_text."""

    def __init__(self, document: str = FIXED_DOCUMENT, error: str | None = None) -> None:
        self.document = document
        self.error = error
        self.prompts: List[str] = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise GeminiError(self.error)
        return self.document


class FakeRecordStore:
    def __init__(self, fail_with: str | None = None) -> None:
        self.fail_with = fail_with
        self.created: List[dict] = []

    def create_record(self, fields: Mapping[str, Any]) -> str:
        if self.fail_with:
            raise RecordStoreError(self.fail_with)
        self.created.append(dict(fields))
        return f"rec-{len(self.created)}"


class FakeGenerator:
    def __init__(self, result: GenerationResult | None = None, hook: Callable[[str], None] | None = None) -> None:
        self.result = result or GenerationResult.ok(FIXED_DOCUMENT)
        self.hook = hook
        self.calls: List[str] = []

    def generate_document(self, record_id: str) -> GenerationResult:
        self.calls.append(record_id)
        if self.hook is not None:
            self.hook(record_id)
        return self.result


@pytest.fixture(autouse=True)
def clear_event_buffer():
    EVENT_BUFFER.clear()
    yield
    EVENT_BUFFER.clear()


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'frd_functional.db'}"


@pytest.fixture
def app_config(db_url) -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(dsn=db_url),
        gemini=GeminiConfig(api_key="test-key", base_url="https://gemini.test/v1beta"),
    )


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def session() -> WizardSession:
    return WizardSession()


def fill_required_and_review(session: WizardSession, answers: Mapping[str, str] = SAMPLE_ANSWERS) -> None:
    """Drive a session from NotStarted to Reviewing answering required questions."""
    session.start()
    while session.current_question is not None:
        question = session.current_question
        if question.field in answers:
            session.set_current_answer(answers[question.field])
        session.advance()


@pytest.fixture
def reviewing_session(session) -> WizardSession:
    fill_required_and_review(session)
    return session
