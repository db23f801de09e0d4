"""Rich rendering helpers shared by the TUI and the ``render`` command.

Keeping formatting here prevents drift between the two surfaces and keeps the
core free of any terminal styling concerns.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from core.extractor import extract
from core.highlighter import highlighted_segments
from core.models import CodeBlock, Color, Message, Role, Segment, TextRun

ROLE_LABELS: Dict[Role, Tuple[str, Color]] = {
    Role.USER: ("> YOU", Color(0.5, 0.8, 1.0, 1.0)),
    Role.ASSISTANT: ("> BOT", Color(0.6, 1.0, 0.6, 1.0)),
    Role.SYSTEM: ("> SYSTEM", Color(1.0, 0.4, 0.4, 1.0)),
}

CODE_BACKGROUND = Color(0.12, 0.12, 0.15, 1.0)
LANGUAGE_LABEL = Color(0.6, 0.6, 0.6, 1.0)


def segments_to_text(segments: Iterable[Segment]) -> Text:
    """Turn one line of segments into a styled ``Text``."""

    text = Text()
    for segment in segments:
        if segment.color is None:
            text.append(segment.text)
        else:
            text.append(segment.text, style=segment.color.to_hex())
    return text


def code_text(lines: Sequence[List[Segment]]) -> Text:
    """Join highlighted lines; empty segment lists become blank lines."""

    return Text("\n").join(segments_to_text(line) for line in lines)


def code_block_panel(block: CodeBlock) -> Panel:
    title = Text(f"[{block.language}]", style=LANGUAGE_LABEL.to_hex())
    return Panel(
        code_text(highlighted_segments(block.code, block.language)),
        title=title,
        title_align="left",
        style=f"on {CODE_BACKGROUND.to_hex()}",
    )


def role_header(role: Role) -> Text:
    label, color = ROLE_LABELS[role]
    return Text(label, style=f"bold {color.to_hex()}")


def render_body(content: str) -> List[RenderableType]:
    """Render message content as text runs and highlighted code panels."""

    renderables: List[RenderableType] = []
    for piece in extract(content):
        if isinstance(piece, TextRun):
            renderables.append(Text(piece.text))
        else:
            renderables.append(code_block_panel(piece))
    return renderables


def render_message(message: Message) -> Group:
    """Return the full renderable for one chat message."""

    return Group(role_header(message.role), *render_body(message.content))
