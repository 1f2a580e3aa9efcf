"""Logging helpers for sqlengines: namespaced loggers tagged with the engine name being looked up."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

ROOT_LOGGER_NAME = "sqlengines"

_lookup_name: ContextVar[Optional[str]] = ContextVar("sqlengines_lookup_name", default=None)


class LookupNameFilter(logging.Filter):
    """Stamp records with the engine name of the lookup in progress, or ``-``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.lookup = _lookup_name.get() or "-"
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(lookup)s | %(name)s | %(message)s")
    handler.setFormatter(formatter)
    handler.addFilter(LookupNameFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def current_lookup() -> Optional[str]:
    return _lookup_name.get()


@contextmanager
def lookup_context(name: str) -> Iterator[str]:
    """
    Tag log records emitted inside the block with the engine name ``name``.

    Nested blocks restore the outer name on exit.
    """
    token = _lookup_name.set(name)
    try:
        yield name
    finally:
        _lookup_name.reset(token)


@contextmanager
def time_call(name: str, logger: logging.Logger, *, threshold_ms: int = 50, **fields: Any) -> Iterator[None]:
    """
    Log how long the block took.

    Durations at or above ``threshold_ms`` are logged at WARNING, others at DEBUG.
    """
    start = time.monotonic()
    failed = False
    try:
        yield
    except BaseException:
        failed = True
        raise
    finally:
        elapsed_ms = (time.monotonic() - start) * 1000
        level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
        extra = dict(fields, elapsed_ms=elapsed_ms, failed=failed)
        logger.log(level, "%s took %.2fms", name, elapsed_ms, extra=extra)
