"""
ODBC and OLE DB bridge engines.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class OdbcEngine(EngineDescriptor):
    """
    ODBC bridge using ``?`` markers bound by position.
    """

    default_invariant_name: Final[str] = "System.Data.Odbc"
    default_case_sensitive_names: Final[bool] = False
    default_parameter_prefix: Final[str] = "?"
    default_positional_parameters: Final[bool] = True
    default_supports_native_skip_take: Final[bool] = False


class OleDbEngine(EngineDescriptor):
    """
    OLE DB bridge; same parameter rules as ODBC.
    """

    default_invariant_name: Final[str] = "System.Data.OleDb"
    default_case_sensitive_names: Final[bool] = False
    default_parameter_prefix: Final[str] = "?"
    default_positional_parameters: Final[bool] = True
    default_supports_native_skip_take: Final[bool] = False
