"""Chat history store and request windowing (core domain)."""

from __future__ import annotations

from typing import Iterator, List, Tuple, Union

from core.models import Message, Role


class ChatHistory:
    """Append-only list of messages owned by a single thread.

    Background workers never touch the history directly; they hand their
    results back to the owning thread, which performs the append.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, role: Union[Role, str], content: str) -> Message:
        message = Message(role=Role(role), content=content)
        self._messages.append(message)
        return message

    def snapshot(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def recent(self, count: int) -> Tuple[Message, ...]:
        """Return up to ``count`` of the newest messages, oldest first."""

        if count <= 0:
            return ()
        return tuple(self._messages[-count:])

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))


def build_request_messages(history: ChatHistory, system_prompt: str, window: int) -> List[Message]:
    """Return the message list sent to the completion API.

    The system prompt always leads, followed by the last ``window`` history
    entries so the request stays small regardless of conversation length.
    """

    messages = [Message(role=Role.SYSTEM, content=system_prompt)]
    messages.extend(history.recent(window))
    return messages
