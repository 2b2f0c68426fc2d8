"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from loguru import logger

from ..config.settings import Settings, get_settings

DEFAULT_LEVEL = "WARNING"

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[step]}</cyan> | "
    "{name}:{line} | {message}"
)


def _write_stderr(message: str) -> None:
    # sys.stderr is resolved per record; callers may swap it after configuration.
    sys.stderr.write(message)


def configure_logging(settings: Settings | None = None, level: str = DEFAULT_LEVEL) -> None:
    """Replace every loguru sink with a stderr sink, plus a rotating file sink.

    The file sink is attached only when ``create_dirs`` is enabled, so a
    read-only checkout still logs to the console.
    """

    cfg = settings or get_settings()
    level = level.upper()

    logger.remove()
    logger.configure(extra={"step": "-"})
    logger.add(_write_stderr, level=level, format=_LOG_FORMAT, backtrace=False, diagnose=False)
    if not cfg.create_dirs:
        return
    cfg.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(cfg.log_file, level=level, format=_LOG_FORMAT, rotation="10 MB", retention="14 days")


def get_logger(**context: Any):
    """Return a logger with ``context`` bound to every record."""

    return logger.bind(**context)


@contextmanager
def logging_context(**context: Any):
    with logger.contextualize(**context):
        yield logger


@contextmanager
def log_timing(step: str, *, logger_=logger):
    """Log how long the wrapped block took, even when it raises."""

    started = perf_counter()
    try:
        yield
    finally:
        logger_.info("Step timing", step=step, seconds=round(perf_counter() - started, 6))


__all__ = ["DEFAULT_LEVEL", "configure_logging", "get_logger", "logging_context", "log_timing"]
