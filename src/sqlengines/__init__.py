"""
sqlengines public package initialization.

Engine descriptors describe how a database dialect names and binds
parameters, compares identifiers and pages results; the registry and
locator select the right descriptor for a connection.
"""

from .config import ConnectionEntry, CustomEngineEntry, EngineConfiguration  # noqa: F401
from .dialects import (
    BUILTIN_ENGINES,
    EngineDescriptor,
    EngineOverrides,
    GenericEngine,
    MySQLEngine,
    OdbcEngine,
    OleDbEngine,
    OracleEngine,
    PostgresEngine,
    SQLiteEngine,
    SqlServerEngine,
)  # noqa: F401
from .errors import ConfigurationError, DuplicateTransformerError, EngineError  # noqa: F401
from .locator import Locator  # noqa: F401
from .parameters import Parameter, ParameterCollection  # noqa: F401
from .registry import EngineRegistry  # noqa: F401
from .versions import Version, VersionRange  # noqa: F401

__all__ = [
    "BUILTIN_ENGINES",
    "ConfigurationError",
    "ConnectionEntry",
    "CustomEngineEntry",
    "DuplicateTransformerError",
    "EngineConfiguration",
    "EngineDescriptor",
    "EngineError",
    "EngineOverrides",
    "EngineRegistry",
    "GenericEngine",
    "Locator",
    "MySQLEngine",
    "OdbcEngine",
    "OleDbEngine",
    "OracleEngine",
    "Parameter",
    "ParameterCollection",
    "PostgresEngine",
    "SQLiteEngine",
    "SqlServerEngine",
    "Version",
    "VersionRange",
]
