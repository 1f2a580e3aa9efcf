"""
Engine descriptors, one class per well-known dialect.
"""

from .base import EngineDescriptor
from .generic import GenericEngine
from .mysql import MySQLEngine
from .odbc import OdbcEngine, OleDbEngine
from .oracle import OracleEngine
from .overrides import RECOGNIZED_FIELDS, UNSET, EngineOverrides
from .postgres import PostgresEngine
from .sqlite import SQLiteEngine
from .sqlserver import SqlServerEngine

# Registration order used by EngineRegistry.initialize().
BUILTIN_ENGINES = (
    GenericEngine,
    OdbcEngine,
    OleDbEngine,
    OracleEngine,
    SqlServerEngine,
    SQLiteEngine,
    PostgresEngine,
    MySQLEngine,
)

__all__ = [
    "BUILTIN_ENGINES",
    "EngineDescriptor",
    "EngineOverrides",
    "GenericEngine",
    "MySQLEngine",
    "OdbcEngine",
    "OleDbEngine",
    "OracleEngine",
    "PostgresEngine",
    "RECOGNIZED_FIELDS",
    "SQLiteEngine",
    "SqlServerEngine",
    "UNSET",
]
