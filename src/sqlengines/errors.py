"""
Error hierarchy for sqlengines.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base error for engine registry failures."""


class ConfigurationError(EngineError):
    """
    Raised when an override, version string or configuration value is invalid.

    ``field`` names the offending field when one can be identified.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class DuplicateTransformerError(ConfigurationError):
    """Raised when a value transformer is already registered for a type."""
