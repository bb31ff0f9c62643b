"""Observability – structured logging helpers."""
from starflight.observability.logging.factory import JsonLoggerFactory, configure_logging
from starflight.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from starflight.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
]
