from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
import requests
from snip.api.client import DEFAULT_TIMEOUT_SECONDS, SnippetApiClient
from snip.config import ClientSettings
from snip.errors import TransportError
from snip.snippets import SearchResult, Snippet


def make_response(status_code: int, body: Any = None, *, reason: str = "", raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    response.url = "https://snip.example.com/api"
    if raw is not None:
        response._content = raw
    else:
        response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return response


@dataclass(slots=True)
class DummySession:
    responses: list[requests.Response | Exception] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


def build_client(session: DummySession, *, api_url: str = "https://snip.example.com/api/") -> SnippetApiClient:
    return SnippetApiClient(api_url, "secret-token-value", session=session)  # type: ignore[arg-type]


def test_client_sends_bearer_token_and_strips_trailing_slash() -> None:
    session = DummySession()

    client = build_client(session)

    assert session.headers["Authorization"] == "Bearer secret-token-value"
    assert client.base_url == "https://snip.example.com/api"


def test_create_snippet_posts_wire_payload() -> None:
    session = DummySession(responses=[make_response(201, {"id": 42})])
    client = build_client(session)

    body = client.create_snippet(Snippet(title="Pods", code="kubectl get pods", language="bash"))

    assert body == {"id": 42}
    assert session.calls == [
        {
            "method": "POST",
            "url": "https://snip.example.com/api/snippets",
            "timeout": DEFAULT_TIMEOUT_SECONDS,
            "json": {"title": "Pods", "code_content": "kubectl get pods", "language": "bash"},
        }
    ]


def test_create_snippet_tolerates_empty_body() -> None:
    session = DummySession(responses=[make_response(204)])

    assert build_client(session).create_snippet(Snippet(title="T", code="c")) == {}


def test_search_decodes_results_in_order() -> None:
    payload = {
        "results": [
            {"title": "B", "language": "bash", "code_content": "echo b"},
            {"title": "A", "language": "sql", "code_content": "select 1"},
        ]
    }
    session = DummySession(responses=[make_response(200, payload)])

    results = build_client(session).search("docker logs")

    assert results == [
        SearchResult(title="B", language="bash", code="echo b"),
        SearchResult(title="A", language="sql", code="select 1"),
    ]
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "https://snip.example.com/api/search"
    assert session.calls[0]["params"] == {"q": "docker logs"}


def test_search_skips_results_without_code() -> None:
    payload = {
        "results": [
            {"title": "Empty", "language": "bash", "code_content": None},
            {"title": "Kept", "language": "bash", "code_content": "echo kept"},
            {"title": "Blank", "language": "bash", "code_content": "   "},
            {"title": "Missing", "language": "bash"},
        ]
    }
    session = DummySession(responses=[make_response(200, payload)])

    results = build_client(session).search("echo")

    assert results == [SearchResult(title="Kept", language="bash", code="echo kept")]


def test_search_without_results_list_is_transport_error() -> None:
    session = DummySession(responses=[make_response(200, {"items": []})])

    with pytest.raises(TransportError, match="unexpected response"):
        build_client(session).search("x")


def test_error_message_comes_from_response_body() -> None:
    session = DummySession(responses=[make_response(401, {"message": "Invalid token"}, reason="Unauthorized")])

    with pytest.raises(TransportError) as excinfo:
        build_client(session).search("x")

    assert excinfo.value.reason == "Invalid token"
    assert excinfo.value.status_code == 401
    assert str(excinfo.value) == "search failed: Invalid token"


def test_error_message_joins_validation_messages() -> None:
    body = {"message": ["title should not be empty", "language must be a string"]}
    session = DummySession(responses=[make_response(400, body, reason="Bad Request")])

    with pytest.raises(TransportError) as excinfo:
        build_client(session).create_snippet(Snippet(title="T", code="c"))

    assert excinfo.value.reason == "title should not be empty; language must be a string"


def test_error_message_falls_back_to_status() -> None:
    session = DummySession(responses=[make_response(502, raw=b"<html>Bad gateway</html>", reason="Bad Gateway")])

    with pytest.raises(TransportError) as excinfo:
        build_client(session).create_snippet(Snippet(title="T", code="c"))

    assert excinfo.value.reason == "502 Bad Gateway"
    assert excinfo.value.operation == "save snippet"


def test_connection_error_is_transport_error() -> None:
    session = DummySession(responses=[requests.ConnectionError("Connection refused")])

    with pytest.raises(TransportError) as excinfo:
        build_client(session).search("x")

    assert excinfo.value.status_code is None
    assert "Connection refused" in excinfo.value.reason


def test_context_manager_closes_session() -> None:
    session = DummySession()

    with build_client(session):
        pass

    assert session.closed is True


def test_from_settings_uses_url_and_token() -> None:
    client = SnippetApiClient.from_settings(ClientSettings(api_url="http://localhost:3000/api", token="tok"))

    try:
        assert client.base_url == "http://localhost:3000/api"
    finally:
        client.close()
