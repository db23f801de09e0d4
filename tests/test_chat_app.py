from __future__ import annotations

import asyncio
from typing import Sequence

from textual.widgets import Input

from adapters.openrouter_client import CompletionError
from core.config import CompletionConfig
from core.models import Message, Role
from frontend.app import ChatApp, CompletionFinished
from frontend.constants import CANCELLED_NOTICE
from frontend.validators import MISSING_API_KEY


class FakeClient:
    def __init__(self, reply: str = "", error: "str | None" = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: list[Sequence[Message]] = []

    def complete(self, messages: Sequence[Message]) -> str:
        self.requests.append(list(messages))
        if self.error:
            raise CompletionError(self.error)
        return self.reply


class BrokenClient:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def complete(self, messages: Sequence[Message]) -> str:
        raise self.exc


def _run_send(client: "FakeClient | BrokenClient", api_key: str, text: str) -> ChatApp:
    app = ChatApp(
        config=CompletionConfig(system_prompt="sys"),
        api_key=api_key,
        client_factory=lambda config, key: client,
    )

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.query_one("#message-input", Input).value = text
            app.action_send()
            await app.workers.wait_for_complete()
            await pilot.pause()

    asyncio.run(scenario())
    return app


def test_reply_is_appended_after_user_message() -> None:
    client = FakeClient(reply="```py\nprint(1)\n```")
    app = _run_send(client, "key", "show me code")

    assert [(m.role, m.content) for m in app.history] == [
        (Role.USER, "show me code"),
        (Role.ASSISTANT, "```py\nprint(1)\n```"),
    ]
    assert client.requests[0][0] == Message(role=Role.SYSTEM, content="sys")
    assert not app.chat_state.waiting


def test_transport_error_becomes_system_message() -> None:
    app = _run_send(FakeClient(error="Completion API error 500: boom"), "key", "hi")

    last = list(app.history)[-1]
    assert last.role is Role.SYSTEM
    assert last.content == "Error: Completion API error 500: boom"


def test_missing_key_does_not_send() -> None:
    client = FakeClient(reply="unused")
    app = _run_send(client, "", "hi")

    assert [(m.role, m.content) for m in app.history] == [(Role.SYSTEM, MISSING_API_KEY)]
    assert client.requests == []


def test_unexpected_worker_error_keeps_app_running() -> None:
    error = UnicodeEncodeError("latin-1", "ключ", 0, 4, "ordinal not in range(256)")
    app = _run_send(BrokenClient(error), "ключ", "hi")

    last = list(app.history)[-1]
    assert last.role is Role.SYSTEM
    assert last.content.startswith("Error: 'latin-1' codec")
    assert not app.chat_state.waiting


def _run_with_posted_result(prepare, result: CompletionFinished) -> ChatApp:
    app = ChatApp(
        config=CompletionConfig(),
        api_key="key",
        client_factory=lambda config, key: FakeClient(),
    )

    async def scenario() -> None:
        async with app.run_test() as pilot:
            prepare(app)
            app.post_message(result)
            await pilot.pause()

    asyncio.run(scenario())
    return app


def test_reply_arriving_after_cancel_is_dropped() -> None:
    def prepare(app: ChatApp) -> None:
        app.chat_state.requests_sent = 1
        app._set_waiting(True)
        app.action_cancel_request()

    app = _run_with_posted_result(prepare, CompletionFinished(Role.ASSISTANT, "late reply", request_id=1))

    assert [m.content for m in app.history] == [CANCELLED_NOTICE]
    assert not app.chat_state.waiting


def test_reply_for_superseded_request_is_dropped() -> None:
    def prepare(app: ChatApp) -> None:
        app.chat_state.requests_sent = 2
        app._set_waiting(True)

    app = _run_with_posted_result(prepare, CompletionFinished(Role.ASSISTANT, "old reply", request_id=1))

    assert len(app.history) == 0
    assert app.chat_state.waiting
