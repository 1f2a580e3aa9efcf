"""
Dotted-numeric server versions and inclusive version ranges.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import ConfigurationError

_VERSION_RE = re.compile(r"^\s*(\d+(?:\.\d+)*)")


@dataclass(frozen=True, order=True)
class Version:
    """
    A parsed server version compared component-wise as integers.

    Trailing zero components are not significant, so ``2.5`` equals ``2.5.0``.
    Anything after the numeric prefix (``8.0.33-log``) is ignored.
    """

    key: tuple[int, ...]
    text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, value: str) -> "Version":
        if not isinstance(value, str):
            raise ConfigurationError(f"Version must be a string, got {type(value).__name__}")
        match = _VERSION_RE.match(value)
        if match is None:
            raise ConfigurationError(f"Invalid version string: {value!r}")
        parts = [int(part) for part in match.group(1).split(".")]
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return cls(tuple(parts), value.strip())

    def __str__(self) -> str:
        return self.text or ".".join(str(part) for part in self.key)


VersionLike = Union[str, Version, None]


def coerce_version(value: VersionLike) -> Optional[Version]:
    """Return a :class:`Version` for ``value``; ``None`` and blank strings map to ``None``."""
    if value is None or isinstance(value, Version):
        return value
    if isinstance(value, str) and not value.strip():
        return None
    return Version.parse(value)


@dataclass(frozen=True)
class VersionRange:
    """
    Inclusive range between two optional bounds; a missing bound is unbounded.
    """

    min: Optional[Version] = None
    max: Optional[Version] = None

    @classmethod
    def between(cls, min_version: VersionLike = None, max_version: VersionLike = None) -> "VersionRange":
        return cls(coerce_version(min_version), coerce_version(max_version))

    @property
    def unbounded(self) -> bool:
        return self.min is None and self.max is None

    def contains(self, version: VersionLike) -> bool:
        """
        Whether ``version`` falls within the range.

        A missing version is a wildcard and is always contained.
        """
        candidate = coerce_version(version)
        if candidate is None or self.unbounded:
            return True
        if self.min is not None and candidate < self.min:
            return False
        if self.max is not None and candidate > self.max:
            return False
        return True

    def __contains__(self, version: VersionLike) -> bool:
        return self.contains(version)

    def __str__(self) -> str:
        low = str(self.min) if self.min is not None else "*"
        high = str(self.max) if self.max is not None else "*"
        return f"[{low}, {high}]"
