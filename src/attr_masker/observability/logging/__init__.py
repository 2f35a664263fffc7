"""Observability – structured logging helpers."""
from attr_masker.observability.logging.factory import LoggerFactory
from attr_masker.observability.logging.processors import get_logger

__all__ = [
    "LoggerFactory",
    "get_logger",
]
