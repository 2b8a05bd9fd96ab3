"""Structured logging helpers carrying load and stage correlation context."""

from __future__ import annotations

import contextvars
import logging
import time
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

_LOAD_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "load_id", default="-"
)
_STAGE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "stage", default="-"
)
_TIMINGS_VAR: contextvars.ContextVar[Optional[dict[str, float]]] = contextvars.ContextVar(
    "stage_timings", default=None
)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | load_id=%(load_id)s | stage=%(stage)s | "
    "%(name)s | %(message)s"
)

logger = logging.getLogger(__name__)


class _LoadContextFilter(logging.Filter):
    """Stamp every record with the active load id and stage."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.load_id = _LOAD_ID_VAR.get("-")
        record.stage = _STAGE_VAR.get("-")
        return True


def _attach_filter(handlers: list[logging.Handler]) -> None:
    for handler in handlers:
        if not any(isinstance(f, _LoadContextFilter) for f in handler.filters):
            handler.addFilter(_LoadContextFilter())


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Configure root logging with load/stage context in every line."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    _attach_filter(root_logger.handlers)


def set_load_id(load_id: str | None = None) -> str:
    """Set (or generate) the correlation id for the current load."""
    value = load_id or uuid.uuid4().hex[:12]
    _LOAD_ID_VAR.set(value)
    return value


def get_load_id() -> str:
    return _LOAD_ID_VAR.get("-")


def get_stage() -> str:
    return _STAGE_VAR.get("-")


@contextmanager
def collect_stage_timings() -> Iterator[dict[str, float]]:
    """Record the duration of every ``stage_scope`` run inside the block.

    Yields a dict mapping stage name to accumulated seconds. Tasks started
    inside the block (e.g. via ``asyncio.run``) share the same dict.
    """
    timings: dict[str, float] = {}
    token = _TIMINGS_VAR.set(timings)
    try:
        yield timings
    finally:
        _TIMINGS_VAR.reset(token)


@contextmanager
def stage_scope(stage: str) -> Iterator[None]:
    """Tag logs emitted inside the block with ``stage`` and time the block."""
    token = _STAGE_VAR.set(stage)
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - started
        timings = _TIMINGS_VAR.get()
        if timings is not None:
            timings[stage] = round(timings.get(stage, 0.0) + elapsed, 6)
        logger.debug("Stage %s finished in %.3fs", stage, elapsed)
        _STAGE_VAR.reset(token)
