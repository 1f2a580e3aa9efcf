"""
Generic engine used when nothing more specific is registered.
"""

from __future__ import annotations

from typing import Final

from .base import EngineDescriptor


class GenericEngine(EngineDescriptor):
    """
    Vendor-neutral engine carrying the library-wide defaults.
    """

    default_invariant_name: Final[str] = "Generic"
