"""Application entry point for the schoolbot chat client."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from rich.console import Console

import settings
from adapters.rich_rendering import render_message
from client import API_KEY_ENV, default_api_key
from core.models import Message, Role

NAME = "SCHOOLBOT"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", [API_KEY_ENV]):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


DEFAULT_LOG_PATH = "logs/schoolbot.log"


def _file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", DEFAULT_LOG_PATH)
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _build_handlers(config: dict, interactive: bool) -> list[logging.Handler]:
    """Pick log handlers for the current command.

    While the Textual app owns the terminal, stream output would tear the
    screen, so ``chat`` never gets a console handler and always logs to a file
    (the configured one, or the default path when file logging is off).
    ``render`` writes to stdout itself and honours both switches as given.
    """

    handlers: list[logging.Handler] = []
    if config.get("console", False) and not interactive:
        handlers.append(logging.StreamHandler())

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg))
    elif interactive:
        handlers.append(_file_handler({}))
    return handlers


def _configure_logging(interactive: bool) -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers = _build_handlers(config, interactive)
    if not handlers:
        return

    formatter = _RedactingFormatter(
        _collect_redaction_values(config),
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _chat() -> None:
    _print_banner()
    _configure_logging(interactive=True)
    logger = logging.getLogger(__name__)
    logger.info("Starting chat window (model=%s)", settings.COMPLETION.model)

    from frontend.app import ChatApp

    ChatApp(
        config=settings.COMPLETION,
        api_key=default_api_key(),
        title=settings.TITLE,
    ).run()


def _render(path: str, role: str) -> None:
    _configure_logging(interactive=False)
    content = Path(path).read_text(encoding="utf-8")
    console = Console()
    console.print(render_message(Message(role=Role(role), content=content)))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="schoolbot")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("chat", help="Launch the chat TUI")
    render_parser = subparsers.add_parser(
        "render",
        help="Print a markdown file with highlighted code blocks.",
    )
    render_parser.add_argument("path", help="Markdown file to render")
    render_parser.add_argument(
        "--role",
        choices=[role.value for role in Role],
        default=Role.ASSISTANT.value,
        help="Role header to print above the content",
    )

    args = parser.parse_args(argv)
    if args.command == "render":
        _render(args.path, args.role)
        return
    _chat()


if __name__ == "__main__":
    main()
