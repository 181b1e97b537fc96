"""Functional tests for the HTTP surface.

Drives the FastAPI app through `TestClient` with a file-backed SQLite record
store and a fake language model in place of Gemini.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from frd_wizard.logic.catalog import QuestionCatalog
from frd_wizard.logic.events import SESSION_RESET, events_of_type
from frd_wizard.main import create_app
from frd_wizard.models.question import QuestionDefinition
from frd_wizard.models.question_kind import AnswerType

from conftest import FIXED_DOCUMENT, SAMPLE_ANSWERS, FakeLLM, FakeRecordStore

API = "/api/v1"


@pytest.fixture
def client(app_config, fake_llm):
    with TestClient(create_app(app_config, llm=fake_llm)) as c:
        yield c


def _new_session(client: TestClient) -> str:
    resp = client.post(f"{API}/sessions")
    assert resp.status_code == 201
    return resp.json()["session_id"]


def _answer_all_required(client: TestClient, sid: str) -> dict:
    body = client.post(f"{API}/sessions/{sid}/start").json()
    while body["current_question"] is not None:
        field = body["current_question"]["field"]
        if field in SAMPLE_ANSWERS:
            body = client.put(f"{API}/sessions/{sid}/answer", json={"value": SAMPLE_ANSWERS[field]}).json()
            assert body["can_advance"] is True
        body = client.post(f"{API}/sessions/{sid}/next").json()
    return body


def test_questions_endpoint_lists_catalog(client):
    resp = client.get(f"{API}/questions")
    assert resp.status_code == 200
    questions = resp.json()["questions"]
    assert len(questions) == 16
    assert questions[0]["field"] == "product_name"
    assert questions[4]["answer_type"] == "array"


def test_full_flow_generates_and_exports(client, fake_llm):
    sid = _new_session(client)
    body = _answer_all_required(client, sid)
    assert body["phase"] == "Reviewing"

    review = client.get(f"{API}/sessions/{sid}/review").json()
    assert review["ready"] is True
    assert review["required_missing"] == 0

    resp = client.post(f"{API}/sessions/{sid}/generate")
    assert resp.status_code == 200
    body = resp.json()
    assert body["phase"] == "Completed"
    assert body["generated_document"] == FIXED_DOCUMENT
    assert body["persisted_id"]
    assert "Product Name: TaskMaster Pro" in fake_llm.prompts[0]
    assert "Key Features: Boards, Reminders" in fake_llm.prompts[0]

    doc = client.get(f"{API}/sessions/{sid}/document").json()
    assert doc["document"] == FIXED_DOCUMENT
    assert doc["html"].startswith("<strong>Functional Requirements Document</strong><br>")

    export = client.get(f"{API}/sessions/{sid}/document/export")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/markdown")
    assert 'filename="frd-taskmaster-pro-' in export.headers["content-disposition"]
    assert export.text == FIXED_DOCUMENT


def test_generation_failure_is_session_state(app_config):
    with TestClient(create_app(app_config, llm=FakeLLM(error="Gemini API error: 500"))) as client:
        sid = _new_session(client)
        _answer_all_required(client, sid)
        resp = client.post(f"{API}/sessions/{sid}/generate")
        assert resp.status_code == 200
        body = resp.json()
        assert body["phase"] == "Failed"
        assert body["last_error"] == {"kind": "GenerationError", "message": "Gemini API error: 500"}
        assert body["persisted_id"]

        assert client.get(f"{API}/sessions/{sid}/document").status_code == 409
        # Failed sessions may return to editing
        assert client.post(f"{API}/sessions/{sid}/review/0").json()["phase"] == "Collecting"


def test_unknown_session_is_404_problem(client):
    resp = client.get(f"{API}/sessions/does-not-exist")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["code"] == "SESSION_NOT_FOUND"


def test_invalid_transition_is_409_problem(client):
    sid = _new_session(client)
    resp = client.post(f"{API}/sessions/{sid}/next")
    assert resp.status_code == 409
    assert resp.json()["code"] == "INVALID_TRANSITION"


def test_incomplete_generate_is_409_problem(client):
    sid = _new_session(client)
    client.post(f"{API}/sessions/{sid}/start")
    for _ in range(16):
        client.post(f"{API}/sessions/{sid}/next")
    resp = client.post(f"{API}/sessions/{sid}/generate")
    assert resp.status_code == 409
    assert resp.json()["code"] == "INCOMPLETE_RESPONSES"
    assert client.get(f"{API}/sessions/{sid}").json()["phase"] == "Reviewing"


def test_jump_out_of_range_is_422_problem(client):
    sid = _new_session(client)
    _answer_all_required(client, sid)
    resp = client.post(f"{API}/sessions/{sid}/review/99")
    assert resp.status_code == 422
    assert resp.json()["code"] == "INVALID_INDEX"


def test_answer_payload_is_validated(client):
    sid = _new_session(client)
    client.post(f"{API}/sessions/{sid}/start")
    resp = client.put(f"{API}/sessions/{sid}/answer", json={"text": "wrong key"})
    assert resp.status_code == 422
    assert resp.json()["code"] == "REQUEST_INVALID"


def test_noop_operations_report_unchanged(client):
    sid = _new_session(client)
    client.post(f"{API}/sessions/{sid}/start")
    body = client.post(f"{API}/sessions/{sid}/previous").json()
    assert body["changed"] is False
    assert body["position"] == 0
    assert client.post(f"{API}/sessions/{sid}/skip").json()["changed"] is False


def test_progress_and_reset(client):
    sid = _new_session(client)
    client.post(f"{API}/sessions/{sid}/start")
    client.put(f"{API}/sessions/{sid}/answer", json={"value": "Name"})
    client.post(f"{API}/sessions/{sid}/next")
    progress = client.get(f"{API}/sessions/{sid}/progress").json()
    assert progress["step_label"] == "Question 2 of 16"
    assert progress["answered_count"] == 1

    body = client.post(f"{API}/sessions/{sid}/reset").json()
    assert body["phase"] == "NotStarted"
    assert body["position"] == -1
    assert events_of_type(SESSION_RESET)[0]["payload"] == {"session_id": sid}


def test_delete_session(client):
    sid = _new_session(client)
    assert client.delete(f"{API}/sessions/{sid}").status_code == 204
    assert client.delete(f"{API}/sessions/{sid}").status_code == 404


def test_request_id_is_echoed(client):
    resp = client.get(f"{API}/questions", headers={"X-Request-Id": "abc-123"})
    assert resp.headers["x-request-id"] == "abc-123"
    assert client.get(f"{API}/questions").headers["x-request-id"]


def test_generate_frd_function_contract(client):
    repository = client.app.state.generation_service.repository
    record_id = repository.create_record({"product_name": "TaskMaster"})

    ok = client.post("/functions/generate-frd", json={"conversationId": record_id})
    assert ok.status_code == 200
    assert ok.json() == {"success": True, "frd": FIXED_DOCUMENT}
    assert repository.get_record(record_id)["status"] == "completed"

    missing = client.post("/functions/generate-frd", json={})
    assert missing.status_code == 500
    assert missing.json() == {"success": False, "error": "Conversation ID is required"}

    unknown = client.post("/functions/generate-frd", json={"conversationId": "nope"})
    assert unknown.json() == {"success": False, "error": "Conversation not found"}


def test_health_reports_database(client):
    assert client.get("/health").json() == {"status": "ok", "db": True}


def test_generate_frd_accepts_numeric_conversation_id(client):
    resp = client.post("/functions/generate-frd", json={"conversationId": 5})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Conversation not found"}


@pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"conversationId": {"id": 1}}'])
def test_generate_frd_malformed_body_keeps_failure_shape(client, body):
    resp = client.post("/functions/generate-frd", content=body, headers={"content-type": "application/json"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Invalid request body"}


def test_catalog_with_unstorable_fields_is_rejected_at_startup(app_config):
    custom = QuestionCatalog(
        [QuestionDefinition(id="1", prompt="Favourite colour?", field="favourite_colour", answer_type=AnswerType.TEXT)]
    )
    with pytest.raises(ValueError, match="no record column"):
        create_app(app_config, catalog=custom, llm=FakeLLM())

    app = create_app(app_config, catalog=custom, record_store=FakeRecordStore(), llm=FakeLLM())
    assert app.state.catalog is custom
