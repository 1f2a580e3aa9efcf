"""
Oracle engine.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class OracleEngine(EngineDescriptor):
    """
    Oracle using ``:name`` bind variables and case-sensitive quoted identifiers.
    """

    default_invariant_name: Final[str] = "System.Data.OracleClient"
    default_case_sensitive_names: Final[bool] = True
    default_parameter_prefix: Final[str] = ":"
    default_positional_parameters: Final[bool] = False
    default_supports_native_skip_take: Final[bool] = False
