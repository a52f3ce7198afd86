"""Structured JSON logging utilities for intake turn tracing."""
from __future__ import annotations

import contextvars
import hashlib
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

LOGGER_NAME = "intake_agent.structured"

_session_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "intake_session_id",
    default=None,
)
_turn_id_ctx: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "intake_turn_id",
    default=None,
)

_level_map: dict[LogLevelName, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def set_session_id(session_id: str | None) -> None:
    """Store the active intake session id for the current context."""
    _session_id_ctx.set(session_id)


def get_session_id() -> str | None:
    """Return the active intake session id."""
    return _session_id_ctx.get()


def set_turn_id(turn_id: int | None) -> None:
    """Store the active turn id for the current context."""
    _turn_id_ctx.set(turn_id)


def get_turn_id() -> int | None:
    """Return the active turn id."""
    return _turn_id_ctx.get()


def clear_log_context() -> None:
    """Reset session and turn tracing metadata for the current context."""
    set_session_id(None)
    set_turn_id(None)


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_event(
    *,
    component: str,
    event: str,
    level: LogLevelName = "INFO",
    session_id: str | None = None,
    turn_id: int | None = None,
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit a structured JSON log line to stdout."""
    resolved_session_id = session_id if session_id is not None else get_session_id()
    resolved_turn_id = turn_id if turn_id is not None else get_turn_id()
    payload: dict[str, Any] = {
        "ts": _iso_timestamp(),
        "level": level,
        "component": component,
        "event": event,
        "session_id": resolved_session_id,
        "turn_id": resolved_turn_id,
        "details": dict(details or {}),
    }
    _get_logger().log(_level_map[level], json.dumps(payload, ensure_ascii=True, separators=(",", ":")))


def describe_text(text: str | None) -> dict[str, Any]:
    """Summarize patient free text for logs without recording its content."""
    value = text or ""
    return {
        "chars": len(value),
        "sha256_12": hashlib.sha256(value.encode("utf-8")).hexdigest()[:12],
    }
