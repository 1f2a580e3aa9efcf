"""
Command parameters named and bound according to an engine's rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .dialects.base import EngineDescriptor


@dataclass
class Parameter:
    name: str
    value: Any


class ParameterCollection:
    """
    Ordered parameters of one command.

    Generated names are the engine's prefix followed by a counter; lookups by
    name follow the engine's case sensitivity.
    """

    def __init__(self, engine: "EngineDescriptor") -> None:
        self.engine = engine
        self._members: List[Parameter] = []

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._members)

    def __getitem__(self, index: int) -> Parameter:
        return self._members[index]

    @property
    def prefix(self) -> str:
        return self.engine.parameter_prefix

    def find(self, name: str) -> Optional[Parameter]:
        for member in self._members:
            if self.engine.names_equal(member.name, name):
                return member
        return None

    def add(self, value: Any) -> Parameter:
        """Add ``value`` under the first free generated name."""
        count = len(self._members)
        while self.find(f"{self.prefix}{count}") is not None:
            count += 1
        return self.add_named(f"{self.prefix}{count}", value)

    def add_named(self, name: str, value: Any) -> Parameter:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("Parameter name cannot be empty")
        name = name.strip()
        if self.find(name) is not None:
            raise ConfigurationError(f"Parameter '{name}' is already defined")
        member = Parameter(name, value)
        self._members.append(member)
        return member

    def placeholder(self, parameter: Parameter) -> str:
        """Text to emit in the command for ``parameter``."""
        return self.engine.parameter_placeholder(parameter.name)

    def bind(self) -> Union[List[Any], Dict[str, Any]]:
        """
        Values ready for the driver: a list for positional engines, a dict otherwise.

        Values pass through the engine's transformers.
        """
        if self.engine.positional_parameters:
            return [self.engine.try_transform(member.value) for member in self._members]
        return {member.name: self.engine.try_transform(member.value) for member in self._members}
