"""Validation helpers for the chat composer."""

from __future__ import annotations

from dataclasses import dataclass

MISSING_API_KEY = "Please enter API Key first."


@dataclass
class SendCheck:
    ok: bool
    error: str | None = None


def check_send(message: str, api_key: str) -> SendCheck:
    """Decide whether a composed message may be sent.

    An empty message is silently ignored; a missing key is reported back to
    the transcript as a system message.
    """

    if not message:
        return SendCheck(False)
    if not api_key.strip():
        return SendCheck(False, MISSING_API_KEY)
    return SendCheck(True)
