"""Logging for the generator pipeline.

A single ``zodgen`` logger with a compact terminal formatter, and a
context manager that times each pipeline stage.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


class _StageFormatter(logging.Formatter):
    """Prefix messages with a timestamp and the current stage, if any."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = time.strftime("%H:%M:%S", time.localtime(record.created))
        stage = getattr(record, "stage", None)
        stage_tag = f" [{stage}]" if stage else ""
        return f"{timestamp} {record.levelname.lower():<7}{stage_tag} {record.getMessage()}"


_logger = logging.getLogger("zodgen")


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure and return the pipeline logger."""
    _logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not _logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_StageFormatter())
        _logger.addHandler(handler)

    _logger.propagate = False
    return _logger


def get_logger() -> logging.Logger:
    return _logger


@contextmanager
def log_stage(stage_name: str) -> Generator[logging.Logger, None, None]:
    """Log entry and exit of a pipeline stage with its duration."""
    logger = get_logger()
    start = time.perf_counter()
    extra = {"stage": stage_name}
    logger.debug("%s ...", stage_name, extra=extra)
    try:
        yield logger
    except Exception:
        logger.error("%s failed (%.3fs)", stage_name, time.perf_counter() - start, extra=extra)
        raise
    else:
        logger.debug("%s done (%.3fs)", stage_name, time.perf_counter() - start, extra=extra)
