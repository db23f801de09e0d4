"""Ports (interfaces) used by the chat layer.

Ports define the minimal contract for the completion transport so the UI can
be exercised with fakes and different backends.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from core.models import Message


class CompletionPort(Protocol):
    """Blocking chat completion used from a background worker."""

    def complete(self, messages: Sequence[Message]) -> str:
        ...
