"""
MySQL engine.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class MySQLEngine(EngineDescriptor):
    """
    MySQL using percent-style placeholders.
    """

    default_invariant_name: Final[str] = "MySql.Data.MySqlClient"
    default_case_sensitive_names: Final[bool] = False
    default_parameter_prefix: Final[str] = "%s"
    default_positional_parameters: Final[bool] = True
    default_supports_native_skip_take: Final[bool] = True
