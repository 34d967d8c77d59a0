"""Observability – structured logging for the dispatch engine."""
from comas.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
