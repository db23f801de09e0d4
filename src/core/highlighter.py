"""Per-line lexical highlighting (core domain).

Conflict resolution is deliberately simple: every rule proposes spans over the
whole line, candidates are ordered by start offset (rule order breaks ties) and
a left-to-right sweep keeps the first candidate that does not overlap what was
already accepted. Rejected candidates are dropped, never split.
"""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Iterable, List, Sequence, Tuple

from core.languages import RULES, canonical_language
from core.models import Highlight, HighlightRule, Segment

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def rules_for(language: str) -> Tuple[HighlightRule, ...]:
    """Return the ordered rules for a language tag; unknown tags get none."""

    canonical = canonical_language(language)
    if canonical is None:
        LOGGER.debug("No highlight rules for language %r", language)
        return ()
    return RULES[canonical]


def _candidates(line: str, rules: Iterable[HighlightRule]) -> List[Highlight]:
    candidates: List[Highlight] = []
    for rule in rules:
        for match in rule.pattern.finditer(line):
            if match.end() == match.start():
                continue
            candidates.append(Highlight(start=match.start(), end=match.end(), color=rule.color))
    return candidates


def resolve_overlaps(candidates: Iterable[Highlight]) -> List[Highlight]:
    """Greedy sweep over candidates; earlier start wins, then earlier rule."""

    # sorted() is stable, so ties keep rule evaluation order.
    ordered = sorted(candidates, key=lambda highlight: highlight.start)
    accepted: List[Highlight] = []
    last_end = 0
    for highlight in ordered:
        if highlight.start >= last_end:
            accepted.append(highlight)
            last_end = highlight.end
    return accepted


def highlight_line(line: str, rules: Sequence[HighlightRule]) -> List[Segment]:
    """Split one line into contiguous plain and colored segments."""

    if not line:
        return []

    segments: List[Segment] = []
    pos = 0
    for highlight in resolve_overlaps(_candidates(line, rules)):
        if highlight.start > pos:
            segments.append(Segment(line[pos : highlight.start], None, pos, highlight.start))
        segments.append(
            Segment(line[highlight.start : highlight.end], highlight.color, highlight.start, highlight.end)
        )
        pos = highlight.end

    if pos < len(line):
        segments.append(Segment(line[pos:], None, pos, len(line)))
    return segments


def highlighted_segments(code: str, language: str) -> List[List[Segment]]:
    """Highlight every line of ``code``; one segment list per line."""

    if not code:
        return []
    rules = rules_for(language)
    return [highlight_line(line, rules) for line in code.split("\n")]
