from __future__ import annotations

from frontend.validators import MISSING_API_KEY, check_send


def test_empty_message_is_ignored() -> None:
    check = check_send("", "key")

    assert not check.ok
    assert check.error is None


def test_missing_key_is_reported() -> None:
    check = check_send("hello", "   ")

    assert not check.ok
    assert check.error == MISSING_API_KEY


def test_message_with_key_is_sent() -> None:
    assert check_send("hello", "key").ok
