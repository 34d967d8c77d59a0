"""Observability – JsonLoggerFactory: route comas log events through stdlib logging."""
from __future__ import annotations

import logging
from typing import Any, TextIO

import structlog

from comas.observability.logging.processors import identifier_processor


class JsonLoggerFactory:
    """Configure structlog so dispatcher events reach the stdlib root logger.

    Events are JSON lines by default; ``json_output=False`` switches to
    structlog's console renderer for local development. *level* may be a
    number or a level name such as ``"DEBUG"``.
    """

    @staticmethod
    def configure(
        level: int | str = logging.INFO,
        *,
        stream: TextIO | None = None,
        json_output: bool = True,
    ) -> None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping()[level.upper()]

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                identifier_processor,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
        )
        handler = logging.StreamHandler(stream)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            )
        )
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
