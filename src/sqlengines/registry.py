"""
Thread-safe registry of engine descriptors.
"""

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Tuple

from .config import EngineConfiguration
from .dialects import BUILTIN_ENGINES
from .dialects.base import EngineDescriptor
from .dialects.overrides import OverridesLike
from .utils import get_logger, time_call

if TYPE_CHECKING:
    from .locator import Locator


class EngineRegistry:
    """
    Ordered collection of engine descriptors shared by the host application.

    Entries are compared by identity and kept in registration order; the last
    registered entry is the preferred match when several share a name. Every
    operation takes the registry lock, and readers work on snapshots returned
    by :meth:`list_all`.
    """

    def __init__(self, config: EngineConfiguration | None = None) -> None:
        self.config = config if config is not None else EngineConfiguration()
        self._engines: List[EngineDescriptor] = []
        self._lock = RLock()
        self.logger = get_logger("registry")

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def initialize(self, config: EngineConfiguration | None = None) -> bool:
        """
        Populate an empty registry with the built-in and configured engines.

        Does nothing when the registry already holds entries. Returns whether
        the registry was populated.
        """

        with self._lock:
            if self._engines:
                self.logger.debug("Registry already initialized with %s engines", len(self._engines))
                return False
            if config is not None:
                self.config = config
            with time_call("registry.initialize", self.logger):
                relax = self.config.relax_transformers
                engines: List[EngineDescriptor] = [
                    engine_type(relax_transformers=relax) for engine_type in BUILTIN_ENGINES
                ]
                # Built fully before appending so a bad entry leaves the registry empty.
                for entry in self.config.custom_engines:
                    engines.append(entry.build(relax_transformers=relax))
                    self.logger.debug("Loaded custom engine '%s' from %s", entry.id, entry.type_path)
                self._engines.extend(engines)
            self.logger.info(
                "Engine registry initialized with %s engines (%s custom)",
                len(engines),
                len(self.config.custom_engines),
            )
            return True

    def register(self, engine: EngineDescriptor) -> None:
        if engine is None:
            raise TypeError("Engine cannot be None.")
        with self._lock:
            if self._index_of(engine) is not None:
                return
            self._engines.append(engine)
        self.logger.debug("Registered %r", engine)

    register_engine = register

    def remove(self, engine: EngineDescriptor) -> bool:
        if engine is None:
            raise TypeError("Engine cannot be None.")
        with self._lock:
            index = self._index_of(engine)
            if index is None:
                return False
            del self._engines[index]
        self.logger.debug("Removed %r", engine)
        return True

    remove_engine = remove

    def clear(self) -> None:
        with self._lock:
            count = len(self._engines)
            self._engines.clear()
        self.logger.debug("Cleared %s engines", count)

    clear_engines = clear

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def list_all(self) -> Tuple[EngineDescriptor, ...]:
        """Return a point-in-time snapshot, oldest registration first."""
        with self._lock:
            return tuple(self._engines)

    @property
    def engines(self) -> Tuple[EngineDescriptor, ...]:
        return self.list_all()

    def __len__(self) -> int:
        with self._lock:
            return len(self._engines)

    def __contains__(self, engine: object) -> bool:
        with self._lock:
            return self._index_of(engine) is not None

    def __iter__(self) -> Iterator[EngineDescriptor]:
        return iter(self.list_all())

    def locator(self) -> "Locator":
        from .locator import Locator

        return Locator(self)

    def locate(
        self,
        name: Optional[str] = None,
        min_version: Optional[str] = None,
        max_version: Optional[str] = None,
        validator: Optional[Callable[[EngineDescriptor], bool]] = None,
        overrides: OverridesLike = None,
    ) -> Optional[EngineDescriptor]:
        return self.locator().locate(
            name,
            min_version=min_version,
            max_version=max_version,
            validator=validator,
            overrides=overrides,
        )

    def _index_of(self, engine: object) -> Optional[int]:
        for index, item in enumerate(self._engines):
            if item is engine:
                return index
        return None
