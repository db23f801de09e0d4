"""Fenced code block extraction (core domain).

A single left-to-right scan splits a message into plain text runs and code
blocks. Every piece carries its source offsets, so the list of blocks and the
interleaved text can never disagree about how many blocks there are or where
they sit.
"""

from __future__ import annotations

import logging
import re
from typing import List

from core.models import CodeBlock, Piece, TextRun

LOGGER = logging.getLogger(__name__)

FENCE = "```"
PLAINTEXT = "plaintext"

# Language tag (possibly empty), optional horizontal padding, mandatory
# line break (LF or CRLF).
_FENCE_HEADER = re.compile(r"(\w*)[ \t]*\r?\n")
_TRAILING_WHITESPACE = " \t\r\n"


def _find_line_fence(text: str, pos: int) -> int:
    """Return the offset of the next line-initial fence at or after ``pos``."""

    index = text.find(FENCE, pos)
    while index > 0 and text[index - 1] != "\n":
        index = text.find(FENCE, index + 1)
    return index


def _bounds_line(text: str, index: int) -> bool:
    """True when the fence at ``index`` starts or ends its line."""

    if index == 0 or text[index - 1] == "\n":
        return True
    rest = index + len(FENCE)
    return rest == len(text) or text.startswith(("\n", "\r\n"), rest)


def _find_closing_fence(text: str, body_start: int) -> int:
    """Prefer a fence bounding its line; otherwise take the next fence at all.

    Models often close a block on the last code line (``print(1)```), which
    has to count as a close, while a fence in the middle of a code line does
    not end the block unless nothing else can.
    """

    index = text.find(FENCE, body_start)
    while index >= 0 and not _bounds_line(text, index):
        index = text.find(FENCE, index + 1)
    if index < 0:
        index = text.find(FENCE, body_start)
    return index


def _append_run(pieces: List[Piece], text: str, start: int, end: int, next_to_fence: bool) -> None:
    run = text[start:end]
    if not run:
        return
    # A lone newline next to a fence would only render as a blank line.
    if next_to_fence and run == "\n":
        return
    pieces.append(TextRun(text=run, start=start, end=end))


def extract(markdown: str) -> List[Piece]:
    """Split ``markdown`` into text runs and code blocks in document order.

    Matching rules:
    - An opening fence starts a line, carries an optional word-character tag
      and ends with a line break.
    - The block closes at the next fence that starts or ends a line, or
      failing that at the next fence anywhere; an opening fence without any
      close stays part of the plain text.
    - Code is right-trimmed of spaces, tabs and line breaks.
    """

    pieces: List[Piece] = []
    text_start = 0
    pos = 0

    while True:
        opening = _find_line_fence(markdown, pos)
        if opening < 0:
            break

        header = _FENCE_HEADER.match(markdown, opening + len(FENCE))
        if header is None:
            pos = opening + len(FENCE)
            continue

        body_start = header.end()
        closing = _find_closing_fence(markdown, body_start)
        if closing < 0:
            LOGGER.debug("Unterminated fence at offset %s left as text", opening)
            break

        _append_run(pieces, markdown, text_start, opening, next_to_fence=True)
        tag = header.group(1).lower()
        pieces.append(
            CodeBlock(
                language=tag or PLAINTEXT,
                code=markdown[body_start:closing].rstrip(_TRAILING_WHITESPACE),
                start=opening,
                end=closing + len(FENCE),
            )
        )
        text_start = pos = closing + len(FENCE)

    # text_start only moves once a block has been emitted.
    _append_run(pieces, markdown, text_start, len(markdown), next_to_fence=text_start > 0)
    return pieces


def extract_code_blocks(markdown: str) -> List[CodeBlock]:
    """Return only the code blocks of ``markdown``, in document order."""

    return [piece for piece in extract(markdown) if isinstance(piece, CodeBlock)]
