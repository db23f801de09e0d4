"""State container for the in-flight request indicator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ChatState:
    waiting: bool = False
    requests_sent: int = 0
