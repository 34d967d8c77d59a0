"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


def identifier_processor(
    logger: Any,           # noqa: ARG001
    method_name: str,      # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render non-string command identifiers with ``repr`` so JSON output
    stays readable for enum, tuple or class identifiers."""
    identifier = event_dict.get("identifier")
    if identifier is not None and not isinstance(identifier, (str, int, float, bool)):
        event_dict["identifier"] = repr(identifier)
    return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["get_logger", "identifier_processor"]
