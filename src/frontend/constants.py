"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT_BLUE = "#80ccff"
WINDOW_BACKGROUND = "#141419"
CANCELLED_NOTICE = "Request cancelled."
