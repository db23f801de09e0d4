"""OpenRouter chat completion adapter.

Posts the request window to an OpenAI-compatible endpoint and returns the
assistant reply text.
"""

from __future__ import annotations

import http.client
import json
import logging
from typing import Any, Sequence
import urllib.error
import urllib.request

from core.config import CompletionConfig
from core.models import Message

LOGGER = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """Raised when the completion API cannot produce a reply."""


def build_payload(messages: Sequence[Message], model: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": message.role.value, "content": message.content} for message in messages],
    }


def parse_reply(body: str) -> str:
    """Extract ``choices[0].message.content`` from a response body."""

    try:
        content = json.loads(body)["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise CompletionError("Error parsing JSON response") from e
    if not isinstance(content, str):
        raise CompletionError("Error parsing JSON response")
    return content


class OpenRouterClient:
    """Completion adapter that talks to the OpenRouter HTTP API."""

    def __init__(self, api_key: str, config: CompletionConfig) -> None:
        self._api_key = api_key
        self._config = config

    def _request(self, data: bytes) -> urllib.request.Request:
        request = urllib.request.Request(self._config.endpoint, data=data, method="POST")
        request.add_header("Content-Type", "application/json")
        request.add_header("Authorization", f"Bearer {self._api_key}")
        request.add_header("HTTP-Referer", self._config.referer)
        return request

    def complete(self, messages: Sequence[Message]) -> str:
        """Send ``messages`` and return the reply; blocks until the API answers."""

        payload = build_payload(messages, self._config.model)
        data = json.dumps(payload).encode("utf-8")
        LOGGER.info("Requesting completion (%s messages, model=%s)", len(messages), self._config.model)
        # Blocking by design; callers run this inside a worker thread.
        try:
            with urllib.request.urlopen(self._request(data), timeout=self._config.timeout) as response:
                body = response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")
            raise CompletionError(f"Completion API error {e.code}: {detail}") from e
        except (urllib.error.URLError, OSError) as e:
            raise CompletionError(f"Network error: {e}") from e
        except http.client.HTTPException as e:
            raise CompletionError(f"Network error: {e!r}") from e
        except ValueError as e:
            # Header values (the API key) must be latin-1 encodable.
            raise CompletionError(f"Invalid request: {e}") from e
        return parse_reply(body)
