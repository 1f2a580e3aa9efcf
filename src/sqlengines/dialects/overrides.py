"""
Field overrides applied when cloning an engine descriptor.

Overrides arrive either as a typed :class:`EngineOverrides` builder or as a
string-keyed mapping (the shape configuration sources produce). Both are
reduced to a validated ``{field_name: value}`` dict before any descriptor is
built, so a bad entry never leaves a half-applied clone behind.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Final, Mapping, Optional, Union

from ..errors import ConfigurationError
from ..utils.naming import normalize_field_name
from ..versions import Version


class _Unset:
    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


def _validate_required_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Field '{name}' expects a string, got {type(value).__name__}", field=name
        )
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"Field '{name}' cannot be empty", field=name)
    return stripped


def _validate_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"Field '{name}' expects a boolean, got {type(value).__name__}", field=name
        )
    return value


def _validate_version(name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Field '{name}' expects a version string or None, got {type(value).__name__}",
            field=name,
        )
    stripped = value.strip()
    if not stripped:
        return None
    try:
        Version.parse(stripped)
    except ConfigurationError as exc:
        raise ConfigurationError(f"Field '{name}': {exc}", field=name) from exc
    return stripped


Validator = Callable[[str, Any], Any]

# Recognized descriptor fields, in declaration order.
FIELD_VALIDATORS: Final[Dict[str, Validator]] = {
    "invariant_name": _validate_required_text,
    "server_version": _validate_version,
    "case_sensitive_names": _validate_bool,
    "parameter_prefix": _validate_required_text,
    "positional_parameters": _validate_bool,
    "supports_native_skip_take": _validate_bool,
}

RECOGNIZED_FIELDS: Final = tuple(FIELD_VALIDATORS)


def validate_field(name: str, value: Any) -> Any:
    """
    Validate ``value`` for the descriptor field ``name`` and return the normalized value.
    """
    try:
        validator = FIELD_VALIDATORS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown engine field '{name}'", field=name) from None
    return validator(name, value)


@dataclass(frozen=True)
class EngineOverrides:
    """
    Typed set of field replacements; fields left as ``UNSET`` are not touched.
    """

    invariant_name: Union[str, _Unset] = UNSET
    server_version: Union[str, None, _Unset] = UNSET
    case_sensitive_names: Union[bool, _Unset] = UNSET
    parameter_prefix: Union[str, _Unset] = UNSET
    positional_parameters: Union[bool, _Unset] = UNSET
    supports_native_skip_take: Union[bool, _Unset] = UNSET

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any]) -> "EngineOverrides":
        values: Dict[str, Any] = {}
        for raw_name, value in overrides.items():
            if not isinstance(raw_name, str):
                raise ConfigurationError(f"Override names must be strings, got {raw_name!r}")
            name = normalize_field_name(raw_name)
            if name not in FIELD_VALIDATORS:
                raise ConfigurationError(f"Unknown engine field '{raw_name}'", field=raw_name)
            if name in values:
                raise ConfigurationError(
                    f"Engine field '{name}' is overridden more than once", field=name
                )
            values[name] = value
        return cls(**values)

    def items(self) -> Dict[str, Any]:
        """Return the fields that carry a value, in declaration order."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not UNSET
        }

    def merged(self, other: Optional["EngineOverrides"]) -> "EngineOverrides":
        if other is None:
            return self
        values = self.items()
        values.update(other.items())
        return EngineOverrides(**values)

    def validated(self) -> Dict[str, Any]:
        """
        Validate every set field, raising on the first bad one.
        """
        return {name: validate_field(name, value) for name, value in self.items().items()}

    def __bool__(self) -> bool:
        return bool(self.items())


OverridesLike = Union[EngineOverrides, Mapping[str, Any], None]


def coerce_overrides(overrides: OverridesLike) -> Optional[EngineOverrides]:
    if overrides is None or isinstance(overrides, EngineOverrides):
        return overrides
    if isinstance(overrides, Mapping):
        return EngineOverrides.from_mapping(overrides)
    raise ConfigurationError(
        f"Overrides must be a mapping or EngineOverrides, got {type(overrides).__name__}"
    )


def resolve_overrides(overrides: OverridesLike) -> Dict[str, Any]:
    """
    Normalize and validate ``overrides`` into a ``{field_name: value}`` dict.
    """
    typed = coerce_overrides(overrides)
    if typed is None:
        return {}
    return typed.validated()
