"""
Configuration consumed by the engine registry and locator.

Parsing configuration files is left to the host application; these types
accept data that has already been loaded (mappings, DSN strings or
environment variables) and normalize it.
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Type

from .dialects.base import EngineDescriptor
from .dialects.overrides import FIELD_VALIDATORS, EngineOverrides
from .errors import ConfigurationError
from .security.dsns import DSNConfig, parse_dsn
from .utils.naming import normalize_field_name

DEFAULT_ENV_PREFIX = "SQLENGINES"

# DSN schemes mapped to the invariant names of the built-in engines.
SCHEME_ALIASES: Dict[str, str] = {
    "sqlite": "System.Data.SQLite",
    "postgres": "Npgsql",
    "postgresql": "Npgsql",
    "mysql": "MySql.Data.MySqlClient",
    "mariadb": "MySql.Data.MySqlClient",
    "mssql": "System.Data.SqlClient",
    "sqlserver": "System.Data.SqlClient",
    "oracle": "System.Data.OracleClient",
    "odbc": "System.Data.Odbc",
    "oledb": "System.Data.OleDb",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_BOOL_FIELDS = {"case_sensitive_names", "positional_parameters", "supports_native_skip_take"}


def _parse_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for '{key}': {value!r}", field=key)


def _field_key(raw_key: Any) -> str:
    if not isinstance(raw_key, str):
        raise ConfigurationError(f"Configuration keys must be strings, got {raw_key!r}")
    return normalize_field_name(raw_key)


def _normalized_keys(data: Mapping[Any, Any]) -> Dict[str, Any]:
    return {_field_key(key): value for key, value in data.items()}


def _split_overrides(values: Mapping[str, Any], *, coerce_strings: bool) -> tuple[EngineOverrides, Dict[str, Any]]:
    """
    Separate recognized engine fields from the remaining keys of ``values``.
    """
    recognized: Dict[str, Any] = {}
    rest: Dict[str, Any] = {}
    for raw_key, value in values.items():
        key = _field_key(raw_key)
        if key not in FIELD_VALIDATORS:
            rest[key] = value
            continue
        if key in recognized:
            raise ConfigurationError(f"Engine field '{key}' is given more than once", field=key)
        if coerce_strings and key in _BOOL_FIELDS:
            value = _parse_bool(value, key=key)
        recognized[key] = value
    overrides = EngineOverrides(**recognized)
    overrides.validated()
    return overrides, rest


def _explicit_overrides(values: Any) -> EngineOverrides:
    if not isinstance(values, Mapping):
        raise ConfigurationError("'overrides' must be a mapping of engine field to value")
    overrides = EngineOverrides.from_mapping(values)
    overrides.validated()
    return overrides


@dataclass
class ConnectionEntry:
    """
    Named connection mapping a short name to an engine invariant name.
    """

    name: str
    invariant_name: str
    dsn: DSNConfig | None = None
    overrides: EngineOverrides = field(default_factory=EngineOverrides)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ConfigurationError("Connection entry name cannot be empty")
        if not isinstance(self.invariant_name, str) or not self.invariant_name.strip():
            raise ConfigurationError(
                f"Connection entry '{self.name}' has no invariant name", field="invariant_name"
            )
        self.name = self.name.strip()
        self.invariant_name = self.invariant_name.strip()

    @classmethod
    def from_dsn(cls, name: str, dsn: str) -> "ConnectionEntry":
        """
        Build an entry from a DSN such as ``postgresql://u:p@host/db?serverVersion=15``.

        The invariant name comes from a ``provider`` query parameter, then from
        the scheme alias table, then from the scheme itself. Query parameters
        naming engine fields become overrides.
        """

        parsed = parse_dsn(dsn)
        query = dict(parsed.query)
        provider = query.pop("provider", None)
        overrides, _ = _split_overrides(query, coerce_strings=True)
        invariant_name = provider or SCHEME_ALIASES.get(parsed.scheme, parsed.scheme)
        return cls(name=name, invariant_name=invariant_name, dsn=parsed, overrides=overrides)

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any] | str) -> "ConnectionEntry":
        if isinstance(data, str):
            if "://" in data:
                return cls.from_dsn(name, data)
            return cls(name=name, invariant_name=data)
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Connection entry '{name}' must be a mapping or a string")

        values = _normalized_keys(data)
        explicit = values.pop("overrides", None) or {}
        inline, rest = _split_overrides(values, coerce_strings=False)
        # Inline invariant_name names the target engine rather than overriding it.
        fields_ = inline.items()
        invariant_name = fields_.pop("invariant_name", None)
        invariant_name = invariant_name or rest.pop("provider_name", None) or rest.pop("provider", None)
        overrides = EngineOverrides(**fields_).merged(_explicit_overrides(explicit))

        dsn_text = rest.pop("dsn", None) or rest.pop("connection_string", None)
        if rest:
            raise ConfigurationError(
                f"Connection entry '{name}' has unknown keys: {', '.join(sorted(rest))}"
            )
        if dsn_text:
            entry = cls.from_dsn(name, dsn_text)
            return cls(
                name=entry.name,
                invariant_name=invariant_name or entry.invariant_name,
                dsn=entry.dsn,
                overrides=entry.overrides.merged(overrides),
            )
        if invariant_name is None:
            raise ConfigurationError(
                f"Connection entry '{name}' needs an invariant name or a DSN", field="invariant_name"
            )
        return cls(name=name, invariant_name=invariant_name, overrides=overrides)

    def redacted_dsn(self) -> str | None:
        return self.dsn.redacted() if self.dsn else None


@dataclass
class CustomEngineEntry:
    """
    Engine class loaded by import path and registered at initialize time.
    """

    id: str
    type_path: str
    overrides: EngineOverrides = field(default_factory=EngineOverrides)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CustomEngineEntry":
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Custom engine entries must be mappings, got {data!r}")
        values = _normalized_keys(data)
        explicit = values.pop("overrides", None) or {}
        type_path = values.pop("type", None) or values.pop("type_path", None)
        engine_id = values.pop("id", None) or type_path
        if not type_path:
            raise ConfigurationError(f"Custom engine '{engine_id}' has no type", field="type")
        overrides, rest = _split_overrides(values, coerce_strings=False)
        if rest:
            raise ConfigurationError(
                f"Custom engine '{engine_id}' has unknown keys: {', '.join(sorted(rest))}"
            )
        return cls(
            id=str(engine_id),
            type_path=str(type_path),
            overrides=overrides.merged(_explicit_overrides(explicit)),
        )

    def load_type(self) -> Type[EngineDescriptor]:
        module_name, sep, attr = self.type_path.partition(":")
        if not sep:
            module_name, _, attr = self.type_path.rpartition(".")
        if not module_name or not attr:
            raise ConfigurationError(
                f"Custom engine '{self.id}': invalid type path '{self.type_path}'", field="type"
            )
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ConfigurationError(
                f"Custom engine '{self.id}': cannot import module '{module_name}'", field="type"
            ) from exc
        engine_type = getattr(module, attr, None)
        if not isinstance(engine_type, type) or not issubclass(engine_type, EngineDescriptor):
            raise ConfigurationError(
                f"Custom engine '{self.id}': '{self.type_path}' is not an EngineDescriptor subclass",
                field="type",
            )
        return engine_type

    def build(self, *, relax_transformers: bool = True) -> EngineDescriptor:
        engine_type = self.load_type()
        engine = engine_type(relax_transformers=relax_transformers)
        if self.overrides:
            engine = engine.clone(self.overrides)
        return engine


@dataclass
class EngineConfiguration:
    """
    Already-parsed configuration: default entry, connection entries and custom engines.
    """

    default_entry: Optional[str] = None
    connections: Dict[str, ConnectionEntry] = field(default_factory=dict)
    custom_engines: List[CustomEngineEntry] = field(default_factory=list)
    relax_transformers: bool = True

    def add_connection(self, entry: ConnectionEntry) -> None:
        self.connections[entry.name] = entry

    def find_entry(self, name: Optional[str] = None) -> Optional[ConnectionEntry]:
        """
        Find a connection entry by key; ``None`` looks up the default entry.

        Exact keys win over case-insensitive ones.
        """

        if name is None or not name.strip():
            name = self.default_entry
            if name is None:
                return None
        name = name.strip()
        entry = self.connections.get(name)
        if entry is not None:
            return entry
        folded = name.casefold()
        for key, candidate in self.connections.items():
            if key.casefold() == folded:
                return candidate
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfiguration":
        values = _normalized_keys(data)

        connections: Dict[str, ConnectionEntry] = {}
        raw_connections = values.get("connections") or {}
        if not isinstance(raw_connections, Mapping):
            raise ConfigurationError("'connections' must be a mapping of entry name to entry")
        for name, raw in raw_connections.items():
            if not isinstance(name, str):
                raise ConfigurationError(f"Connection entry names must be strings, got {name!r}")
            connections[name] = ConnectionEntry.from_mapping(name, raw)

        raw_engines = values.get("custom_engines") or []
        if isinstance(raw_engines, Mapping) or isinstance(raw_engines, str):
            raise ConfigurationError("'custom_engines' must be a list of engine entries")
        custom_engines = [CustomEngineEntry.from_mapping(item) for item in raw_engines]

        relax = values.get("relax_transformers")
        default_entry = values.get("default_entry")
        if default_entry is not None and not isinstance(default_entry, str):
            raise ConfigurationError("'default_entry' must be a string")
        return cls(
            default_entry=(default_entry or "").strip() or None,
            connections=connections,
            custom_engines=custom_engines,
            relax_transformers=True if relax is None else _parse_bool(relax, key="relax_transformers"),
        )

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_ENV_PREFIX, environ: Mapping[str, str] | None = None
    ) -> "EngineConfiguration":
        """
        Build a configuration from environment variables.

        ``<PREFIX>_DEFAULT_ENTRY`` names the default entry and every
        ``<PREFIX>_CONNECTION_<NAME>`` holds the DSN of entry ``<name>``
        (lower-cased).
        """

        env = os.environ if environ is None else environ
        connection_prefix = f"{prefix}_CONNECTION_"
        config = cls()
        for key, value in sorted(env.items()):
            if key.startswith(connection_prefix) and len(key) > len(connection_prefix):
                name = key[len(connection_prefix):].lower()
                config.add_connection(ConnectionEntry.from_dsn(name, value))
        default_entry = env.get(f"{prefix}_DEFAULT_ENTRY")
        if default_entry and default_entry.strip():
            config.default_entry = default_entry.strip()
        relax = env.get(f"{prefix}_RELAX_TRANSFORMERS")
        if relax is not None:
            config.relax_transformers = _parse_bool(relax, key=f"{prefix}_RELAX_TRANSFORMERS")
        return config
