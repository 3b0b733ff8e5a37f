from __future__ import annotations

import json
import logging
import os
import re
from typing import Any

_REPLACEMENTS = [
    (re.compile(r"sk-proj-[A-Za-z0-9_-]{20,}"), "sk-proj-REDACTED"),
    (re.compile(r"sk-(?!proj-)[A-Za-z0-9-]{10,}"), "sk-REDACTED"),
    (re.compile(r"Bearer\s+[A-Za-z0-9._-]+"), "Bearer REDACTED"),
]

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def apply_redaction(text: str) -> str:
    sanitized = text
    for pattern, repl in _REPLACEMENTS:
        sanitized = pattern.sub(repl, sanitized)
    return sanitized


class RedactionFilter(logging.Filter):
    """Rewrites each record's message with secrets masked before any handler formats it."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = apply_redaction(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redaction_enabled() -> bool:
    return os.getenv("DISABLE_LOG_REDACTION", "0") != "1"


def configure_logging(level: str = "INFO") -> None:
    global _CONFIGURED
    logger = logging.getLogger("hello_api")
    logger.setLevel(level)
    if _CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    if redaction_enabled():
        handler.addFilter(RedactionFilter())
    logger.addHandler(handler)
    _CONFIGURED = True


def format_event(event: str, **fields: Any) -> str:
    payload: dict[str, Any] = {"event": event, **fields}
    return json.dumps(payload, ensure_ascii=False, default=str)


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    logger.log(level, format_event(event, **fields))
