"""Static highlight rule tables keyed by canonical language.

Patterns are compiled at import time; a broken built-in pattern is a bug and
fails on import rather than at render time.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

from core.models import Color, HighlightRule

KEYWORD = "keyword"
PREPROCESSOR = "preprocessor"
STRING = "string"
COMMENT = "comment"
NUMBER = "number"
CALL = "call"
DEFINITION = "definition"

C_FAMILY = "c-family"
PYTHON = "python"
WEB_SCRIPT = "web-script"
JAVA = "java"
RUST = "rust"

PALETTE: Dict[str, Color] = {
    KEYWORD: Color(0.86, 0.47, 0.86, 1.0),
    PREPROCESSOR: Color(0.7, 0.7, 0.4, 1.0),
    STRING: Color(0.9, 0.7, 0.4, 1.0),
    COMMENT: Color(0.5, 0.5, 0.5, 1.0),
    NUMBER: Color(0.6, 0.85, 0.6, 1.0),
    CALL: Color(0.8, 0.8, 0.5, 1.0),
    DEFINITION: Color(0.8, 0.8, 0.5, 1.0),
}

ALIASES: Dict[str, str] = {
    "c": C_FAMILY,
    "cpp": C_FAMILY,
    "c++": C_FAMILY,
    "cc": C_FAMILY,
    "cxx": C_FAMILY,
    "python": PYTHON,
    "py": PYTHON,
    "javascript": WEB_SCRIPT,
    "js": WEB_SCRIPT,
    "typescript": WEB_SCRIPT,
    "ts": WEB_SCRIPT,
    "java": JAVA,
    "rust": RUST,
    "rs": RUST,
}


def _keywords(words: str) -> str:
    return r"\b(" + "|".join(words.split()) + r")\b"


_C_KEYWORDS = _keywords(
    """
    alignas alignof and and_eq asm auto bitand bitor bool break case catch char
    char8_t char16_t char32_t class compl concept const consteval constexpr
    constinit const_cast continue co_await co_return co_yield decltype default
    delete do double dynamic_cast else enum explicit export extern false float
    for friend goto if inline int long mutable namespace new noexcept not not_eq
    nullptr operator or or_eq private protected public register reinterpret_cast
    requires return short signed sizeof static static_assert static_cast struct
    switch template this thread_local throw true try typedef typeid typename
    union unsigned using virtual void volatile wchar_t while xor xor_eq
    """
)
_PYTHON_KEYWORDS = _keywords(
    """
    False None True and as assert async await break class continue def del elif
    else except finally for from global if import in is lambda nonlocal not or
    pass raise return try while with yield
    """
)
_WEB_SCRIPT_KEYWORDS = _keywords(
    """
    async await break case catch class const continue debugger default delete do
    else enum export extends false finally for function if import in instanceof
    let new null return super switch this throw true try typeof var void while
    with yield
    """
)
_JAVA_KEYWORDS = _keywords(
    """
    abstract assert boolean break byte case catch char class const continue
    default do double else enum extends final finally float for goto if
    implements import instanceof int interface long native new package private
    protected public return short static strictfp super switch synchronized this
    throw throws transient try void volatile while
    """
)
_RUST_KEYWORDS = _keywords(
    """
    as async await break const continue crate dyn else enum extern false fn for
    if impl in let loop match mod move mut pub ref return self Self static
    struct super trait true type unsafe use where while
    """
)

_DOUBLE_QUOTED = r'"(?:[^"\\]|\\.)*"'
_SINGLE_QUOTED = r"'(?:[^'\\]|\\.)*'"
_BACKTICK_QUOTED = r"`(?:[^`\\]|\\.)*`"
_SLASH_COMMENT = r"//.*"
_HASH_COMMENT = r"#.*"
_NUMBER = r"\b\d+\.?\d*\b"

_TABLE = {
    C_FAMILY: [
        (KEYWORD, _C_KEYWORDS),
        (PREPROCESSOR, r"^\s*#\s*\w+"),
        (STRING, _DOUBLE_QUOTED),
        (COMMENT, _SLASH_COMMENT),
        (NUMBER, r"\b\d+\.?\d*f?\b"),
        (CALL, r"\b\w+(?=\s*\()"),
    ],
    PYTHON: [
        (KEYWORD, _PYTHON_KEYWORDS),
        (STRING, f"(?:{_DOUBLE_QUOTED}|{_SINGLE_QUOTED})"),
        (COMMENT, _HASH_COMMENT),
        (NUMBER, _NUMBER),
        (DEFINITION, r"(?<=def\s)\w+"),
    ],
    WEB_SCRIPT: [
        (KEYWORD, _WEB_SCRIPT_KEYWORDS),
        (STRING, f"(?:{_DOUBLE_QUOTED}|{_SINGLE_QUOTED}|{_BACKTICK_QUOTED})"),
        (COMMENT, _SLASH_COMMENT),
        (NUMBER, _NUMBER),
    ],
    JAVA: [
        (KEYWORD, _JAVA_KEYWORDS),
        (STRING, _DOUBLE_QUOTED),
        (COMMENT, _SLASH_COMMENT),
        (NUMBER, r"\b\d+\.?\d*[fFdDlL]?\b"),
    ],
    RUST: [
        (KEYWORD, _RUST_KEYWORDS),
        (STRING, _DOUBLE_QUOTED),
        (COMMENT, _SLASH_COMMENT),
        (NUMBER, _NUMBER),
    ],
}

RULES: Dict[str, Tuple[HighlightRule, ...]] = {
    language: tuple(
        HighlightRule(category=category, pattern=re.compile(pattern), color=PALETTE[category])
        for category, pattern in entries
    )
    for language, entries in _TABLE.items()
}


def canonical_language(language: str) -> Optional[str]:
    """Map a user-facing tag (``cpp``, ``ts``...) to its canonical bucket."""

    return ALIASES.get(language.strip().lower())
