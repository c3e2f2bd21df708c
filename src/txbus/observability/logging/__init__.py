"""Observability – structured logging helpers."""
from txbus.observability.logging.factory import JsonLoggerFactory
from txbus.observability.logging.processors import UnitOfWorkStateProcessor, get_logger

__all__ = [
    "JsonLoggerFactory",
    "UnitOfWorkStateProcessor",
    "get_logger",
]
