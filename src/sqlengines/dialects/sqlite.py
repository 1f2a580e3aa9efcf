"""
SQLite engine.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class SQLiteEngine(EngineDescriptor):
    """
    SQLite using qmark parameters and native ``LIMIT``/``OFFSET`` paging.
    """

    default_invariant_name: Final[str] = "System.Data.SQLite"
    default_case_sensitive_names: Final[bool] = False
    default_parameter_prefix: Final[str] = "?"
    default_positional_parameters: Final[bool] = True
    default_supports_native_skip_take: Final[bool] = True
