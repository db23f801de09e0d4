"""Transcript widgets for the chat window."""

from __future__ import annotations

from typing import Any

from textual.widgets import Static

from adapters.rich_rendering import render_message
from core.models import Message


class MessageView(Static):
    """One rendered chat message: role header, text runs and code panels."""

    def __init__(self, message: Message, **kwargs: Any) -> None:
        super().__init__(render_message(message), classes=f"message message--{message.role.value}", **kwargs)
        self.message = message
