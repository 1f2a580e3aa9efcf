"""
Microsoft SQL Server engine.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class SqlServerEngine(EngineDescriptor):
    """
    SQL Server using ``@name`` parameters.

    Paging is emulated: ``OFFSET ... FETCH`` is not available on every server
    version this engine is registered for.
    """

    default_invariant_name: Final[str] = "System.Data.SqlClient"
    default_case_sensitive_names: Final[bool] = False
    default_parameter_prefix: Final[str] = "@"
    default_positional_parameters: Final[bool] = False
    default_supports_native_skip_take: Final[bool] = False
