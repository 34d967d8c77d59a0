"""Observability – structlog configuration and logger helper."""
from comas.observability.logging.factory import JsonLoggerFactory
from comas.observability.logging.processors import get_logger, identifier_processor

__all__ = ["JsonLoggerFactory", "get_logger", "identifier_processor"]
