"""Structured JSON logging for askline.

askline never decides where its records go. The ``askline`` logger only
carries a NullHandler until the host program calls setup_logging(), or a
config file asks for output through ``log_dir`` / ``log_level``.

Each prompt attempt and each resolution is one record whose structured
payload travels in ``extra={"data": {...}}``; JSONFormatter flattens it into
a single JSON object per line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LOGGER_NAME = "askline"
LOG_FILE = "askline.jsonl"

# Set on handlers installed by setup_logging(); host handlers never carry it.
_OWNED = "_askline_owned"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """One flat JSON object per record.

    Keys from the record's ``data`` payload sit next to ``ts``/``level``/
    ``logger``/``event`` but never replace them.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key, value in (getattr(record, "data", None) or {}).items():
            entry.setdefault(key, value)
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["error"] = {"type": type(exc).__name__, "message": str(exc)}
        return json.dumps(entry, ensure_ascii=False, default=str)


def resolve_level(level: int | str | None, fallback: int) -> int:
    """Turn "debug"/"INFO"/20/None into a logging level number."""
    if level is None:
        return fallback
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else fallback


def setup_logging(
    log_dir: Path | None = None,
    level: int | str | None = None,
) -> logging.Logger:
    """Route askline's records to a JSON lines file or to stderr.

    Args:
        log_dir: Write ``askline.jsonl`` there (level defaults to DEBUG).
            Without it, records go to stderr (level defaults to WARNING).
        level: Logging level, as a number or a name such as "info".

    Calling again replaces the handler installed by the previous call.

    Returns:
        The 'askline' logger.
    """
    resolved = resolve_level(level, logging.DEBUG if log_dir else logging.WARNING)
    logger = logging.getLogger(LOGGER_NAME)

    for old in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(old)
        old.close()

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(
            log_dir / LOG_FILE, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    handler.setLevel(resolved)
    setattr(handler, _OWNED, True)

    logger.addHandler(handler)
    logger.setLevel(resolved)
    return logger


def log_attempt(
    prompt_text: str,
    attempt: int,
    outcome: str,
    *,
    raw: str | None = None,
    reason: str | None = None,
):
    """Log one prompt/read/validate cycle.

    ``raw`` is omitted by callers for silent prompts.
    """
    data: dict[str, Any] = {
        "prompt": prompt_text,
        "attempt": attempt,
        "outcome": outcome,
    }
    if raw is not None:
        data["raw"] = raw
    if reason:
        data["reason"] = reason
    logging.getLogger("askline.attempt").debug("prompt_attempt", extra={"data": data})


def log_resolution(prompt_text: str, attempts: int, outcome: str):
    """Log how an interaction ended (accepted, rejected, cancelled)."""
    logger = logging.getLogger("askline.controller")
    logger.info(
        "prompt_resolved",
        extra={"data": {
            "prompt": prompt_text,
            "attempts": attempts,
            "outcome": outcome,
        }},
    )
