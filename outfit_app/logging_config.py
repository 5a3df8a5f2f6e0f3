"""Structured JSON logging for the wardrobe outfit engine.

Every record is rendered as one JSON object carrying the request
correlation id. Extra fields are scrubbed before they reach the handler:
contact details and URLs are masked and wardrobe items are reduced to their
ids so full wardrobes never land in the logs.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from typing import Any, Dict, Iterator

SERVICE_NAME = "wardrobe-outfit-engine"
MAX_LOGGED_LIST_ITEMS = 20

CORRELATION_ID = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord already has; extras may not reuse them.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_REDACT_KEYS = frozenset({"user_id", "email", "image_url", "image_urls", "notes", "purchase_url"})
_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    """Render a record and its extras as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": os.getenv("SERVICE_NAME", SERVICE_NAME),
            "message": message,
            "event": getattr(record, "event", record.getMessage()),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or key in payload:
                continue
            payload[key] = redact_for_log(value)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Route root logging through a single JSON stream handler."""

    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    if isinstance(desired_level, str):
        desired_level = desired_level.upper()
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=desired_level, handlers=[handler])


def _redact_string(value: str) -> str:
    if _EMAIL_PATTERN.search(value):
        return _EMAIL_PATTERN.sub("[redacted-email]", value)
    if value.lower().startswith("http"):
        return "[redacted-url]"
    return value


def _item_reference(value: Any) -> str | None:
    """``item:<id>`` for wardrobe items and item-shaped dicts."""

    item_id = getattr(value, "item_id", None)
    if item_id is None and isinstance(value, dict) and "name" in value and "category" in value:
        item_id = value.get("item_id", value.get("id"))
    return f"item:{item_id}" if item_id is not None else None


def redact_for_log(payload: Any) -> Any:
    """Recursively scrub a log payload.

    Emails and URLs are masked, sensitive keys are replaced outright, wardrobe
    items collapse to ``item:<id>`` and long lists are cut to their first
    entries plus a count of what was dropped.
    """

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _redact_string(payload)
    reference = _item_reference(payload)
    if reference is not None:
        return reference
    if isinstance(payload, (list, tuple, set, frozenset)):
        entries = list(payload)
        scrubbed = [redact_for_log(entry) for entry in entries[:MAX_LOGGED_LIST_ITEMS]]
        if len(entries) > MAX_LOGGED_LIST_ITEMS:
            scrubbed.append(f"... {len(entries) - MAX_LOGGED_LIST_ITEMS} more")
        return scrubbed
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _REDACT_KEYS else redact_for_log(value) for key, value in payload.items()
        }
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    """Module logger; configures JSON logging on first use if nothing else has."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Return the active correlation id, adopting ``correlation_id`` or minting one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    new_id = uuid.uuid4().hex
    CORRELATION_ID.set(new_id)
    return new_id


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    token = CORRELATION_ID.set(correlation_id or ensure_correlation_id())
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit ``event`` with ``fields`` as structured extras.

    Field names that clash with LogRecord attributes (``name``, ``module``...)
    are logged with a ``field_`` prefix.
    """

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    extra: Dict[str, Any] = {"event": event, "correlation_id": correlation_id}
    for key, value in redact_for_log(fields).items():
        extra[f"field_{key}" if key in _RECORD_ATTRIBUTES else key] = value
    logger.log(level, event, exc_info=exc_info, extra=extra)


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Scope a correlation id around ``name`` and log its duration.

    Failures are logged as ``operation_failed`` and re-raised.
    """

    logger = logging.getLogger("outfit_app.operations")
    correlation_id = ensure_correlation_id(attributes.pop("correlation_id", None))
    start = time.perf_counter()
    with correlation_context(correlation_id) as scoped_id:
        log_event(logger, logging.DEBUG, "operation_started", operation=name, correlation_id=scoped_id, **attributes)
        try:
            yield scoped_id
        except Exception:
            log_event(
                logger,
                logging.WARNING,
                "operation_failed",
                operation=name,
                correlation_id=scoped_id,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        log_event(
            logger,
            logging.DEBUG,
            "operation_finished",
            operation=name,
            correlation_id=scoped_id,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )


__all__ = [
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
    "JsonFormatter",
    "CORRELATION_ID",
]
