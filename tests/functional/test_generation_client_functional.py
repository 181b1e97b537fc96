"""Functional tests for the generation collaborator adapters."""

from __future__ import annotations

import json

import httpx
import pytest

from frd_wizard.logic.collaborators import GenerationResult
from frd_wizard.logic.generation_client import GENERATE_FRD_PATH, HttpGenerationClient, LocalGenerationClient


def _client(handler) -> HttpGenerationClient:
    return HttpGenerationClient("https://frd.test/", transport=httpx.MockTransport(handler))


def test_http_success_returns_document():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "frd": "# FRD"})

    result = _client(handler).generate_document("rec-1")
    assert result == GenerationResult.ok("# FRD")
    assert seen["path"] == GENERATE_FRD_PATH
    assert seen["body"] == {"conversationId": "rec-1"}


@pytest.mark.parametrize(
    "response, message",
    [
        (httpx.Response(500, json={"success": False, "error": "Gemini API error: 503"}), "Gemini API error: 503"),
        (httpx.Response(502, text="bad gateway"), "Generation service returned 502"),
        (httpx.Response(200, json={"success": False, "error": "Conversation not found"}), "Conversation not found"),
        (httpx.Response(200, json={"success": True, "frd": "  "}), "Generation service returned an empty document"),
        (httpx.Response(200, json={"frd": "# FRD"}), "Failed to generate FRD"),
    ],
)
def test_http_failures_map_to_failure_results(response, message):
    result = _client(lambda request: response).generate_document("rec-1")
    assert not result.success
    assert result.error == message


def test_http_transport_error_is_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = _client(handler).generate_document("rec-1")
    assert not result.success
    assert "ConnectError" in result.error


def test_local_client_delegates_to_service(mocker):
    service = mocker.Mock()
    service.generate_document.return_value = GenerationResult.ok("doc")
    assert LocalGenerationClient(service).generate_document("rec-9").document == "doc"
    service.generate_document.assert_called_once_with("rec-9")
