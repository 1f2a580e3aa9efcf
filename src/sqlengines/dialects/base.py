"""
Engine descriptors describing the syntactic rules of a database dialect.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Optional, Type

from ..errors import ConfigurationError, DuplicateTransformerError
from ..utils import get_logger
from .overrides import RECOGNIZED_FIELDS, OverridesLike, resolve_overrides, validate_field

if TYPE_CHECKING:
    from ..parameters import ParameterCollection

DEFAULT_CASE_SENSITIVE_NAMES = False
DEFAULT_PARAMETER_PREFIX = "#"
DEFAULT_POSITIONAL_PARAMETERS = False
DEFAULT_SUPPORTS_NATIVE_SKIP_TAKE = False
DEFAULT_RELAX_TRANSFORMERS = True

Transformer = Callable[[Any], Any]

logger = get_logger("dialects")


class EngineDescriptor:
    """
    Capabilities of one database dialect, as consumed by command builders.

    Descriptors are treated as immutable once built: the capability fields are
    read-only and changes are made through :meth:`clone`. Registries compare
    descriptors by identity, so two descriptors with equal fields are still
    distinct entries.

    Subclasses describe concrete vendors by redefining the ``default_*`` class
    attributes; they are not expected to override ``__init__``.
    """

    default_invariant_name: ClassVar[Optional[str]] = None
    default_case_sensitive_names: ClassVar[bool] = DEFAULT_CASE_SENSITIVE_NAMES
    default_parameter_prefix: ClassVar[str] = DEFAULT_PARAMETER_PREFIX
    default_positional_parameters: ClassVar[bool] = DEFAULT_POSITIONAL_PARAMETERS
    default_supports_native_skip_take: ClassVar[bool] = DEFAULT_SUPPORTS_NATIVE_SKIP_TAKE

    def __init__(
        self,
        invariant_name: Optional[str] = None,
        server_version: Optional[str] = None,
        *,
        case_sensitive_names: Optional[bool] = None,
        parameter_prefix: Optional[str] = None,
        positional_parameters: Optional[bool] = None,
        supports_native_skip_take: Optional[bool] = None,
        relax_transformers: Optional[bool] = None,
    ) -> None:
        cls = type(self)
        if invariant_name is None:
            invariant_name = cls.default_invariant_name
        if invariant_name is None:
            raise ConfigurationError(
                f"{cls.__name__} requires an invariant name", field="invariant_name"
            )
        self._invariant_name: str = validate_field("invariant_name", invariant_name)
        self._server_version: Optional[str] = validate_field("server_version", server_version)
        self._case_sensitive_names: bool = validate_field(
            "case_sensitive_names",
            cls.default_case_sensitive_names if case_sensitive_names is None else case_sensitive_names,
        )
        self._parameter_prefix: str = validate_field(
            "parameter_prefix",
            cls.default_parameter_prefix if parameter_prefix is None else parameter_prefix,
        )
        self._positional_parameters: bool = validate_field(
            "positional_parameters",
            cls.default_positional_parameters if positional_parameters is None else positional_parameters,
        )
        self._supports_native_skip_take: bool = validate_field(
            "supports_native_skip_take",
            cls.default_supports_native_skip_take
            if supports_native_skip_take is None
            else supports_native_skip_take,
        )
        self.relax_transformers: bool = (
            DEFAULT_RELAX_TRANSFORMERS if relax_transformers is None else bool(relax_transformers)
        )
        self._transformers: Dict[type, Transformer] = {}
        self.add_transformer(datetime.time, lambda value: value.isoformat())

    # ------------------------------------------------------------------ #
    # Capability fields
    # ------------------------------------------------------------------ #
    @property
    def invariant_name(self) -> str:
        return self._invariant_name

    @property
    def server_version(self) -> Optional[str]:
        return self._server_version

    @property
    def case_sensitive_names(self) -> bool:
        return self._case_sensitive_names

    @property
    def parameter_prefix(self) -> str:
        return self._parameter_prefix

    @property
    def positional_parameters(self) -> bool:
        return self._positional_parameters

    @property
    def supports_native_skip_take(self) -> bool:
        return self._supports_native_skip_take

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in RECOGNIZED_FIELDS}

    def __repr__(self) -> str:
        text = f"{type(self).__name__}({self._invariant_name}"
        if self._server_version is not None:
            text += f", v:{self._server_version}"
        return text + ")"

    # ------------------------------------------------------------------ #
    # Cloning
    # ------------------------------------------------------------------ #
    def clone(self, overrides: OverridesLike = None) -> "EngineDescriptor":
        """
        Return an independent copy of this descriptor with ``overrides`` applied.

        Every override is validated before the copy is built; a bad field name
        or value raises :class:`ConfigurationError` and nothing is created.
        """
        values = self.as_dict()
        values.update(resolve_overrides(overrides))
        cloned = type(self)(
            values.pop("invariant_name"),
            values.pop("server_version"),
            relax_transformers=self.relax_transformers,
            **values,
        )
        cloned._transformers = dict(self._transformers)
        return cloned

    # ------------------------------------------------------------------ #
    # Name and parameter helpers
    # ------------------------------------------------------------------ #
    def names_equal(self, left: str, right: str) -> bool:
        """Compare two identifiers using this dialect's case sensitivity."""
        if self._case_sensitive_names:
            return left == right
        return left.casefold() == right.casefold()

    def parameter_placeholder(self, name: Optional[str] = None) -> str:
        """
        Text emitted in a command for a bound parameter.

        Positional dialects always emit the bare prefix; named dialects emit
        the parameter name, which must carry the prefix.
        """
        if self._positional_parameters:
            return self._parameter_prefix
        if not name:
            raise ConfigurationError(
                f"{self!r} uses named parameters; a parameter name is required"
            )
        return name

    def create_parameter_collection(self) -> "ParameterCollection":
        from ..parameters import ParameterCollection

        return ParameterCollection(self)

    # ------------------------------------------------------------------ #
    # Value transformers
    # ------------------------------------------------------------------ #
    def add_transformer(self, type_: type, func: Transformer) -> None:
        if not isinstance(type_, type):
            raise TypeError("Transformer key must be a type.")
        if not callable(func):
            raise TypeError("Transformer must be callable.")
        if type_ in self._transformers:
            raise DuplicateTransformerError(
                f"A transformer for type '{type_.__name__}' is already registered on {self!r}"
            )
        self._transformers[type_] = func

    def remove_transformer(self, type_: type) -> bool:
        return self._transformers.pop(type_, None) is not None

    def clear_transformers(self) -> None:
        self._transformers.clear()

    def transformer_types(self) -> List[type]:
        return list(self._transformers)

    def has_transformer(self, type_: Type[Any]) -> bool:
        return type_ in self._transformers

    def try_transform(self, value: Any) -> Any:
        """
        Convert ``value`` with the transformer registered for its type.

        With ``relax_transformers`` enabled, transformers registered for base
        classes apply as well. Values without a transformer, and values whose
        transformer fails, are returned unchanged.
        """
        if value is None:
            return None
        candidates = type(value).__mro__ if self.relax_transformers else (type(value),)
        for candidate in candidates:
            func = self._transformers.get(candidate)
            if func is None:
                continue
            try:
                return func(value)
            except Exception:
                logger.debug(
                    "Transformer for %s failed on %s; using raw value",
                    candidate.__name__,
                    self,
                    exc_info=True,
                )
                return value
        return value
