from __future__ import annotations

import http.client
import io
import json
import urllib.error
import urllib.request

import pytest

from adapters.openrouter_client import CompletionError, OpenRouterClient, build_payload, parse_reply
from core.config import CompletionConfig
from core.models import Message, Role


class FakeResponse:
    def __init__(self, body: str) -> None:
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def _reply(content: str) -> str:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


def _messages() -> list[Message]:
    return [
        Message(role=Role.SYSTEM, content="You are a helpful assistant."),
        Message(role=Role.USER, content="hi"),
    ]


def test_build_payload_uses_role_values() -> None:
    payload = build_payload(_messages(), "some/model")

    assert payload == {
        "model": "some/model",
        "messages": [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "hi"},
        ],
    }


def test_parse_reply_extracts_first_choice() -> None:
    assert parse_reply(_reply("hello there")) == "hello there"


@pytest.mark.parametrize("body", ["not json", "{}", '{"choices": []}', '{"choices": [{"message": {"content": null}}]}'])
def test_parse_reply_rejects_malformed_bodies(body: str) -> None:
    with pytest.raises(CompletionError, match="Error parsing JSON response"):
        parse_reply(body)


def test_complete_posts_request(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_urlopen(request: urllib.request.Request, timeout: float) -> FakeResponse:
        captured["request"] = request
        captured["timeout"] = timeout
        return FakeResponse(_reply("pong"))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    config = CompletionConfig(endpoint="https://example.test/v1/chat", model="m", timeout=5.0)

    reply = OpenRouterClient("secret", config).complete(_messages())

    request = captured["request"]
    assert reply == "pong"
    assert captured["timeout"] == 5.0
    assert request.full_url == "https://example.test/v1/chat"
    assert request.get_method() == "POST"
    assert request.get_header("Authorization") == "Bearer secret"
    assert json.loads(request.data.decode("utf-8"))["model"] == "m"


def test_http_error_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float) -> FakeResponse:
        raise urllib.error.HTTPError(
            request.full_url, 401, "Unauthorized", None, io.BytesIO(b'{"error": "bad key"}')
        )

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(CompletionError, match="Completion API error 401"):
        OpenRouterClient("bad", CompletionConfig()).complete(_messages())


def test_network_error_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float) -> FakeResponse:
        raise urllib.error.URLError("no route to host")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(CompletionError, match="Network error"):
        OpenRouterClient("key", CompletionConfig()).complete(_messages())


def test_truncated_response_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float) -> FakeResponse:
        raise http.client.IncompleteRead(b'{"choices": [')

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(CompletionError, match="Network error"):
        OpenRouterClient("key", CompletionConfig()).complete(_messages())


def test_unencodable_api_key_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float) -> FakeResponse:
        raise UnicodeEncodeError("latin-1", "ключ", 0, 4, "ordinal not in range(256)")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(CompletionError, match="Invalid request"):
        OpenRouterClient("ключ", CompletionConfig()).complete(_messages())
