"""Instrumentation for collaborator calls (compatibility checks and the like)."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sized
from functools import wraps
from typing import Any, Callable, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from outfit_app.logging_config import ensure_correlation_id, get_logger, log_event, redact_for_log

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

MAX_PREVIEW_ARGS = 6


def _preview_call(args: tuple, kwargs: dict) -> dict:
    """Scrubbed view of the first few arguments; items show up as ``item:<id>``."""

    preview: dict = {}
    entries = [(f"arg{index}", value) for index, value in enumerate(args)] + list(kwargs.items())
    for idx, (key, value) in enumerate(entries):
        if idx >= MAX_PREVIEW_ARGS:
            preview["truncated"] = True
            break
        if isinstance(value, Sized) and not isinstance(value, (str, Mapping)) and len(value) > 3:
            preview[key] = f"{type(value).__name__}[{len(value)}]"
        else:
            preview[key] = value
    return redact_for_log(preview)


def summarize_result(result: Any) -> Any:
    """Counts per key for mappings, a length for sequences, ``None`` otherwise."""

    if isinstance(result, Mapping):
        return {str(key): len(value) if isinstance(value, Sized) else 1 for key, value in result.items()}
    if isinstance(result, Sized) and not isinstance(result, str):
        return len(result)
    return None


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log start, completion (with a result summary) and failure of a call.

    With ``input_model`` the keyword arguments are validated and replaced by
    the model's dump; a validation failure is logged and either handed to
    ``on_validation_error`` or re-raised.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()

            if input_model:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "tool_validation_failed",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        errors=exc.errors(include_url=False, include_context=False),
                    )
                    if on_validation_error:
                        return on_validation_error(exc)
                    raise

            log_event(
                LOGGER,
                logging.DEBUG,
                "tool_call_started",
                tool=tool_name,
                correlation_id=correlation_id,
                call=_preview_call(args, kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "tool_call_failed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_completed",
                tool=tool_name,
                correlation_id=correlation_id,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                result=summarize_result(result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool", "summarize_result"]
