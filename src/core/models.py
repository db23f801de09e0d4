"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any renderer-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import NamedTuple, Optional, Union


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class Message:
    """One entry of the chat history."""

    role: Role
    content: str


class Color(NamedTuple):
    """RGBA color with float channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_hex(self) -> str:
        # Terminals have no alpha channel, so it is dropped here.
        return "#{:02x}{:02x}{:02x}".format(
            _channel(self.r), _channel(self.g), _channel(self.b)
        )


def _channel(value: float) -> int:
    return max(0, min(255, round(value * 255)))


@dataclass(frozen=True)
class TextRun:
    """Plain text between (or around) fenced code blocks."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block.

    ``start``/``end`` cover the whole fenced region in the source message,
    fences included, so pieces can be mapped back onto the original text.
    """

    language: str
    code: str
    start: int
    end: int


Piece = Union[TextRun, CodeBlock]


@dataclass(frozen=True)
class HighlightRule:
    """A language-scoped lexical rule."""

    category: str
    pattern: re.Pattern
    color: Color


@dataclass(frozen=True)
class Highlight:
    """Candidate colored span on a single line (``end`` is exclusive)."""

    start: int
    end: int
    color: Color


@dataclass(frozen=True)
class Segment:
    """Render-ready run of a line. ``color`` of None means default text."""

    text: str
    color: Optional[Color]
    start: int
    end: int

    @property
    def plain(self) -> bool:
        return self.color is None
