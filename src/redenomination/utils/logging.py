"""Structured logging for the redenomination library.

Library modules obtain loggers with ``get_logger(__name__)`` and never
configure structlog themselves; an embedding application calls
``setup_logging`` once, usually with its ``Settings``.
"""

from __future__ import annotations

import logging
import sys

import structlog

from ..config import Settings


def setup_logging(settings: Settings | None = None, *, log_level: str | None = None, json: bool | None = None):
    """Configure structlog output to stdout from *settings*.

    ``log_level`` and ``json`` override ``settings.log_level`` and
    ``settings.log_json``. JSON lines are the default; ``json=False`` selects
    the console renderer for interactive use.
    """
    if settings is None:
        settings = Settings()
    level_name = (log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    use_json = settings.log_json if json is None else json

    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
    )


def get_logger(name: str):
    """Return a lazy logger whose events carry ``logger=name``.

    Binding stays lazy, so configuration applied after import (including
    ``structlog.testing.capture_logs``) still takes effect.
    """
    return structlog.get_logger(name, logger=name)
