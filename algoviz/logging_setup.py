"""
logging_setup.py - Structured Logging Setup
============================================
Call configure_logging() once at process start (the Flask app factory
does).  Modules grab a logger with ``structlog.get_logger()``.

Narrations carry non-ASCII symbols (→, ∞, ≤), so log lines are rendered
as UTF-8 JSON through orjson.
"""

import logging
import sys
from typing import Any, List

import orjson
import structlog


def _render_json(obj: Any, default: Any) -> str:
    return orjson.dumps(obj, default=default).decode("utf-8")


def configure_logging(*, level: str = "INFO") -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(serializer=_render_json),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    # werkzeug / flask log through stdlib; keep them on the same stream
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def bind_context(**values: Any) -> None:
    """Attach key/value pairs to every log line until clear_context()."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
