"""Completion client factory for schoolbot.

The API key normally comes from the UI, but OPENROUTER_API_KEY in the
environment (or a .env file) pre-fills it so the key never lives in the repo.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from adapters.openrouter_client import OpenRouterClient
from core.config import CompletionConfig

API_KEY_ENV = "OPENROUTER_API_KEY"


def default_api_key() -> str:
    """Return the API key from the environment, or an empty string."""

    load_dotenv()
    return os.getenv(API_KEY_ENV, "")


def build_completion_client(config: CompletionConfig, api_key: Optional[str] = None) -> OpenRouterClient:
    """Create a completion client, falling back to the environment key."""

    key = api_key or default_api_key()
    # Fail fast on a missing key to avoid an opaque 401 from the API.
    if not key:
        raise RuntimeError(f"Missing API key (set {API_KEY_ENV} or enter it in the UI)")

    logging.getLogger(__name__).info("Initializing completion client for %s", config.endpoint)

    return OpenRouterClient(key, config)
