"""
PostgreSQL engine.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class PostgresEngine(EngineDescriptor):
    """
    PostgreSQL using percent positional parameters.

    Quoted identifiers are case sensitive.
    """

    default_invariant_name: Final[str] = "Npgsql"
    default_case_sensitive_names: Final[bool] = True
    default_parameter_prefix: Final[str] = "%s"
    default_positional_parameters: Final[bool] = True
    default_supports_native_skip_take: Final[bool] = True
