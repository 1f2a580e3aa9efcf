"""
Engine lookup by name, version range and predicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from .config import EngineConfiguration
from .dialects.base import EngineDescriptor
from .dialects.overrides import EngineOverrides, OverridesLike, coerce_overrides
from .utils import get_logger, lookup_context
from .versions import VersionRange

if TYPE_CHECKING:
    from .registry import EngineRegistry

EngineValidator = Callable[[EngineDescriptor], bool]

NAME_SEPARATOR = "."


@dataclass(frozen=True)
class ResolvedName:
    """
    Outcome of name resolution: the name to match and any entry overrides.
    """

    name: str
    overrides: Optional[EngineOverrides] = None
    entry: Optional[str] = None


def matches_name(engine: EngineDescriptor, name: str) -> bool:
    """
    Whether ``name`` is the engine's invariant name or the segment after its last dot.

    Both comparisons ignore case.
    """
    folded = name.casefold()
    invariant = engine.invariant_name
    if invariant.casefold() == folded:
        return True
    _, sep, tail = invariant.rpartition(NAME_SEPARATOR)
    return bool(sep) and tail.casefold() == folded


class Locator:
    """
    Selects one engine from a registry, newest registration first.
    """

    def __init__(self, registry: "EngineRegistry", config: EngineConfiguration | None = None) -> None:
        self.registry = registry
        self._config = config
        self.logger = get_logger("locator")

    @property
    def config(self) -> EngineConfiguration:
        return self._config if self._config is not None else self.registry.config

    def resolve_name(self, name: Optional[str]) -> Optional[ResolvedName]:
        """
        Turn the caller's name into the name engines are matched against.

        A missing name falls back to the configured default entry; names of
        connection entries map to the entry's invariant name. Returns ``None``
        when there is nothing to match.
        """
        config = self.config
        if name is None or not name.strip():
            if config.default_entry is None:
                return None
            name = config.default_entry
        name = name.strip()
        entry = config.find_entry(name)
        if entry is None:
            return ResolvedName(name)
        self.logger.debug(
            "Connection entry '%s' (%s) resolves to '%s'",
            entry.name,
            entry.redacted_dsn() or "no dsn",
            entry.invariant_name,
        )
        return ResolvedName(entry.invariant_name, entry.overrides or None, entry.name)

    def locate(
        self,
        name: Optional[str] = None,
        min_version: Optional[str] = None,
        max_version: Optional[str] = None,
        validator: Optional[EngineValidator] = None,
        overrides: OverridesLike = None,
    ) -> Optional[EngineDescriptor]:
        """
        Find the most recently registered engine matching every criterion.

        Engines without a server version match any version range. When
        overrides are given (directly or through the connection entry) the
        match is returned as a clone; otherwise the registered instance itself
        is returned and must not be modified. Returns ``None`` when nothing
        matches.
        """
        versions = VersionRange.between(min_version, max_version)
        caller_overrides = coerce_overrides(overrides)
        resolved = self.resolve_name(name)
        if resolved is None:
            self.logger.debug("No engine name given and no default entry configured")
            return None

        if resolved.overrides is not None:
            effective = resolved.overrides.merged(caller_overrides)
        else:
            effective = caller_overrides

        with lookup_context(resolved.name):
            for engine in reversed(self.registry.list_all()):
                if not matches_name(engine, resolved.name):
                    continue
                if not versions.contains(engine.server_version):
                    continue
                if validator is not None and not validator(engine):
                    continue
                self.logger.debug("Located %r within %s", engine, versions)
                if effective is not None:
                    return engine.clone(effective)
                return engine

            self.logger.debug("No engine matches within %s", versions)
            return None
