"""
Utility helpers shared across sqlengines packages.
"""

from .logging import configure_logging, get_logger, lookup_context, time_call
from .naming import camel_to_snake, normalize_field_name

__all__ = [
    "camel_to_snake",
    "configure_logging",
    "get_logger",
    "lookup_context",
    "normalize_field_name",
    "time_call",
]
