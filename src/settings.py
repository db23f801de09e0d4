"""Static configuration for schoolbot.

All user-editable settings (completion API, UI, logging) live in a single
JSON file for quick edits without touching Python.
"""

import json
import os

from core.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_MODEL,
    DEFAULT_SYSTEM_PROMPT,
    CompletionConfig,
)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Completion API settings. The window bounds how many history entries are
# sent along with the system prompt on every request.
_completion = _CONFIG.get("completion", {})
COMPLETION = CompletionConfig(
    endpoint=_completion.get("endpoint", DEFAULT_ENDPOINT),
    model=_completion.get("model", DEFAULT_MODEL),
    system_prompt=_completion.get("system_prompt", DEFAULT_SYSTEM_PROMPT),
    history_window=int(_completion.get("history_window", 4)),
    timeout=float(_completion.get("timeout_seconds", 60)),
    referer=_completion.get("referer", "http://localhost:8000"),
)

# UI tweaks for the Textual chat window.
_ui = _CONFIG.get("ui", {})
TITLE = _ui.get("title", "OpenRouter Python Client (Textual + Rich)")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
