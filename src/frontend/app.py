"""Main Textual app for the schoolbot chat window."""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Footer, Input, Static
from textual.worker import get_current_worker

from client import build_completion_client
from core.config import CompletionConfig
from core.history import ChatHistory, build_request_messages
from core.models import Message, Role
from core.ports import CompletionPort

from .constants import ACCENT_BLUE, CANCELLED_NOTICE, WINDOW_BACKGROUND
from .state import ChatState
from .validators import check_send
from .widgets import MessageView

LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[CompletionConfig, str], CompletionPort]


class CompletionFinished(TextualMessage):
    """Posted from the worker thread once a reply (or an error) is ready."""

    def __init__(self, role: Role, content: str, request_id: int) -> None:
        super().__init__()
        self.role = role
        self.content = content
        self.request_id = request_id


class ChatApp(App):
    """Chat window: API key, transcript, composer and send button."""

    BINDINGS = [
        ("escape", "cancel_request", "Cancel request"),
        ("ctrl+q", "quit", "Quit"),
    ]

    CSS = f"""
    Screen {{
        background: {WINDOW_BACKGROUND};
        color: #e8eef5;
    }}

    #header {{
        height: auto;
        padding: 0 1;
        border-bottom: solid #2a2a33;
    }}

    #title {{
        text-style: bold;
    }}

    #api-key {{
        width: 40;
    }}

    #transcript {{
        height: 1fr;
        border: round #33333f;
        padding: 0 1;
    }}

    .message {{
        margin-bottom: 1;
        padding-left: 1;
    }}

    #composer {{
        height: 3;
    }}

    #message-input {{
        width: 1fr;
    }}

    #send-btn {{
        width: 14;
    }}
    """

    def __init__(
        self,
        config: CompletionConfig,
        api_key: str = "",
        title: str = "OpenRouter Python Client",
        client_factory: ClientFactory = build_completion_client,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._completion_config = config
        self._initial_key = api_key
        self._window_title = title
        self._client_factory = client_factory
        self.history = ChatHistory()
        self.chat_state = ChatState()

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            yield Static(self._title_text(), id="title")
            yield Input(
                value=self._initial_key,
                placeholder="API Key (Required)",
                password=True,
                id="api-key",
            )
        yield VerticalScroll(id="transcript")
        with Horizontal(id="composer"):
            yield Input(placeholder="Type a message", id="message-input")
            yield Button("SEND", id="send-btn", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#message-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "message-input":
            self.action_send()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self.action_send()

    def action_send(self) -> None:
        if self.chat_state.waiting:
            return

        message_input = self.query_one("#message-input", Input)
        api_key = self.query_one("#api-key", Input).value
        check = check_send(message_input.value, api_key)
        if check.error:
            self.add_message(Role.SYSTEM, check.error)
            return
        if not check.ok:
            return

        self.add_message(Role.USER, message_input.value)
        message_input.value = ""
        request = build_request_messages(
            self.history, self._completion_config.system_prompt, self._completion_config.history_window
        )
        self._set_waiting(True)
        self.chat_state.requests_sent += 1
        self._request_completion(api_key.strip(), request, self.chat_state.requests_sent)
        message_input.focus()

    def action_cancel_request(self) -> None:
        if not self.chat_state.waiting:
            return
        self.workers.cancel_group(self, "completion")
        LOGGER.info("Completion request cancelled by user")
        self.add_message(Role.SYSTEM, CANCELLED_NOTICE)
        self._set_waiting(False)

    @work(thread=True, exclusive=True, group="completion")
    def _request_completion(self, api_key: str, messages: Sequence[Message], request_id: int) -> None:
        worker = get_current_worker()
        try:
            client = self._client_factory(self._completion_config, api_key)
            result = CompletionFinished(Role.ASSISTANT, client.complete(messages), request_id)
        except Exception as exc:
            LOGGER.exception("Completion request failed")
            result = CompletionFinished(Role.SYSTEM, f"Error: {exc}", request_id)
        # A cancelled request must not append anything after the fact.
        if worker.is_cancelled:
            return
        self.post_message(result)

    def on_completion_finished(self, event: CompletionFinished) -> None:
        # Replies to a cancelled or superseded request arrive too late to show.
        if not self.chat_state.waiting or event.request_id != self.chat_state.requests_sent:
            LOGGER.info("Dropping stale completion result (request %s)", event.request_id)
            return
        self.add_message(event.role, event.content)
        self._set_waiting(False)

    def add_message(self, role: Role, content: str) -> Message:
        """Append to the history and mount the rendered message."""

        message = self.history.append(role, content)
        transcript = self.query_one("#transcript", VerticalScroll)
        transcript.mount(MessageView(message))
        transcript.scroll_end(animate=False)
        return message

    def _set_waiting(self, waiting: bool) -> None:
        self.chat_state.waiting = waiting
        button = self.query_one("#send-btn", Button)
        button.label = "Fetching..." if waiting else "SEND"
        button.disabled = waiting

    def _title_text(self) -> Text:
        return Text.assemble(
            ("> ", ACCENT_BLUE),
            (self._window_title, "bold"),
        )
