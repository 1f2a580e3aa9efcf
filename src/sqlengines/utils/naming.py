"""
Naming utilities for engine field names.
"""

import re


_WORD_BOUNDARY_RE = re.compile("([a-z0-9])([A-Z])")
_ACRONYM_RE = re.compile("([A-Z]+)([A-Z][a-z])")


def camel_to_snake(name: str) -> str:
    """
    Convert ``caseSensitiveNames`` or ``CaseSensitiveNames`` to ``case_sensitive_names``.
    """
    step1 = _ACRONYM_RE.sub(r"\1_\2", name)
    return _WORD_BOUNDARY_RE.sub(r"\1_\2", step1).lower()


def normalize_field_name(name: str) -> str:
    """
    Normalize a field name coming from code or from a configuration source.
    """
    return camel_to_snake(name.strip().replace("-", "_"))
